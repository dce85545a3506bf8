class CaseStudyServiceError(Exception):
    """Raised when the backing case-study service cannot be reached or
    returns a response that cannot be used."""

    def __init__(self, message: str, case_study_id: str | None = None):
        self.message = message
        self.case_study_id = case_study_id
        super().__init__(message)


class CaseStudyNotFoundError(CaseStudyServiceError):
    """Raised when the backing service has no case study with the given ID."""

    def __init__(self, case_study_id: str):
        super().__init__(f"Case study {case_study_id} not found", case_study_id)
