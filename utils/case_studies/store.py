import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
from utils.core.enums import DataQuality, PolicyType
from utils.case_studies.client import CaseStudyClient
from utils.case_studies.models import CaseStudySummary
from utils.case_studies.regions import REGION_MAP
from exceptions.exceptions import CaseStudyServiceError

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class CaseStudyStats:
    total: int
    regions: int
    comprehensive: int
    high_quality: int


class RecordStore:
    """
    Raw, unfiltered collection of case-study summaries. Populated once from
    the backing service and read-only afterwards.
    """

    def __init__(self, records: Optional[Iterable[CaseStudySummary]] = None):
        self._records: Tuple[CaseStudySummary, ...] = tuple(records or ())
        self._populated = records is not None

    @property
    def records(self) -> Tuple[CaseStudySummary, ...]:
        return self._records

    @property
    def populated(self) -> bool:
        return self._populated

    async def populate(self, client: CaseStudyClient) -> None:
        """
        Fetches the summary list once. A failed fetch leaves the store empty;
        the failure is logged and not surfaced to browsing sessions.
        """
        if self._populated:
            return
        try:
            records = await client.list_case_study_summaries()
        except CaseStudyServiceError as e:
            logger.error(f"Failed to load case studies: {e.message}")
            records = []
        self._records = tuple(records)
        self._populated = True
        logger.info(f"Loaded {len(self._records)} case studies")

    def stats(self) -> CaseStudyStats:
        return CaseStudyStats(
            total=len(self._records),
            regions=len(REGION_MAP),
            comprehensive=sum(
                1 for r in self._records if r.policy_type == PolicyType.COMPREHENSIVE.value
            ),
            high_quality=sum(
                1 for r in self._records if r.data_quality == DataQuality.HIGH.value
            ),
        )
