import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional
from utils.case_studies.models import CaseStudyDetail
from exceptions.exceptions import CaseStudyServiceError

logger = logging.getLogger("uvicorn.error")

DetailFetcher = Callable[[str], Awaitable[CaseStudyDetail]]


class SelectionStatus(Enum):
    NONE = "none"
    LOADING = "loading"
    LOADED = "loaded"


class HydrationResult(Enum):
    APPLIED = "applied"
    STALE = "stale"
    FAILED = "failed"


@dataclass(frozen=True)
class SelectionState:
    status: SelectionStatus
    case_study_id: Optional[str] = None
    detail: Optional[CaseStudyDetail] = None

    @classmethod
    def none(cls) -> "SelectionState":
        return cls(status=SelectionStatus.NONE)

    @classmethod
    def loading(cls, case_study_id: str) -> "SelectionState":
        return cls(status=SelectionStatus.LOADING, case_study_id=case_study_id)

    @classmethod
    def loaded(cls, detail: CaseStudyDetail) -> "SelectionState":
        return cls(
            status=SelectionStatus.LOADED, case_study_id=detail.id, detail=detail
        )


class DetailHydrator:
    """
    Fetches full case-study records on demand and tracks which one is shown.

    Every select() and clear() issues a new request token. A fetch result is
    applied only if its token is still the latest, so responses are applied in
    request order rather than completion order, and anything arriving after a
    clear() is dropped.
    """

    def __init__(self, fetch_detail: DetailFetcher):
        self._fetch_detail = fetch_detail
        self._latest_token = 0
        # Last state that was not LOADING; restored when a fetch fails
        self._settled = SelectionState.none()
        self.state = self._settled

    @property
    def detail(self) -> Optional[CaseStudyDetail]:
        return self.state.detail

    async def select(self, case_study_id: str) -> HydrationResult:
        self._latest_token += 1
        token = self._latest_token
        self.state = SelectionState.loading(case_study_id)

        try:
            detail = await self._fetch_detail(case_study_id)
        except CaseStudyServiceError as e:
            logger.error(f"Failed to load case study {case_study_id}: {e.message}")
            if token != self._latest_token:
                return HydrationResult.STALE
            self.state = self._settled
            return HydrationResult.FAILED
        except BaseException:
            # Unexpected errors and cancellation must not leave the selection loading
            if token == self._latest_token:
                self.state = self._settled
            raise

        if token != self._latest_token:
            logger.debug(f"Discarding stale response for case study {case_study_id}")
            return HydrationResult.STALE

        self._settled = SelectionState.loaded(detail)
        self.state = self._settled
        return HydrationResult.APPLIED

    def clear(self) -> None:
        self._latest_token += 1
        self._settled = SelectionState.none()
        self.state = self._settled
