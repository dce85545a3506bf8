from dataclasses import dataclass
from typing import List, Sequence
from utils.core.enums import SortKey
from utils.case_studies.models import CaseStudySummary
from utils.case_studies.filters import FilterCriteria, filter_case_studies
from utils.case_studies.sorting import sort_case_studies
from utils.case_studies.pagination import (
    PAGE_SIZE,
    clamp_page,
    next_page,
    paginate,
    prev_page,
    total_pages_for,
)
from utils.case_studies.hydrator import DetailHydrator, HydrationResult, SelectionState
from utils.case_studies.store import RecordStore


@dataclass(frozen=True)
class BrowseView:
    items: List[CaseStudySummary]
    page: int
    total_pages: int
    total_matches: int

    @property
    def is_empty(self) -> bool:
        return self.total_matches == 0


def recompute(
    records: Sequence[CaseStudySummary],
    criteria: FilterCriteria,
    page_size: int = PAGE_SIZE,
) -> BrowseView:
    """
    Derives the visible page from the raw records and the current criteria:
    filter, then sort, then paginate.
    """
    matches = sort_case_studies(
        filter_case_studies(records, criteria), criteria.sort_key
    )
    items, total_pages = paginate(matches, criteria.page, page_size)
    return BrowseView(
        items=items,
        page=clamp_page(criteria.page, total_pages),
        total_pages=total_pages,
        total_matches=len(matches),
    )


class BrowsingSession:
    """
    Criteria and detail selection for one user browsing the case-study
    library. The visible page is always recomputed from the store and the
    criteria; nothing else mutates it.
    """

    def __init__(self, store: RecordStore, hydrator: DetailHydrator):
        self.store = store
        self.hydrator = hydrator
        self.criteria = FilterCriteria()

    @property
    def view(self) -> BrowseView:
        return recompute(self.store.records, self.criteria)

    @property
    def selection(self) -> SelectionState:
        return self.hydrator.state

    # --- Criteria ---

    def set_keyword(self, keyword: str) -> BrowseView:
        self.criteria = self.criteria.with_keyword(keyword)
        return self.view

    def toggle_region(self, region: str) -> BrowseView:
        self.criteria = self.criteria.with_region_toggled(region)
        return self.view

    def toggle_quality(self, quality: str) -> BrowseView:
        self.criteria = self.criteria.with_quality_toggled(quality)
        return self.view

    def set_sort(self, sort_key: SortKey) -> BrowseView:
        self.criteria = self.criteria.with_sort_key(sort_key)
        return self.view

    def reset_filters(self) -> BrowseView:
        self.criteria = FilterCriteria()
        return self.view

    # --- Paging ---

    def _total_pages(self) -> int:
        return total_pages_for(
            len(filter_case_studies(self.store.records, self.criteria))
        )

    def set_page(self, page: int) -> BrowseView:
        self.criteria = self.criteria.with_page(clamp_page(page, self._total_pages()))
        return self.view

    def next_page(self) -> BrowseView:
        self.criteria = self.criteria.with_page(
            next_page(self.criteria.page, self._total_pages())
        )
        return self.view

    def prev_page(self) -> BrowseView:
        self.criteria = self.criteria.with_page(
            prev_page(self.criteria.page, self._total_pages())
        )
        return self.view

    # --- Detail selection ---

    async def select(self, case_study_id: str) -> HydrationResult:
        return await self.hydrator.select(case_study_id)

    def clear(self) -> None:
        self.hydrator.clear()
