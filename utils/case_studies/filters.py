from dataclasses import dataclass, field, replace
from typing import FrozenSet, List, Sequence
from utils.core.enums import SortKey
from utils.case_studies.models import CaseStudySummary
from utils.case_studies.regions import resolve


# --- Criteria ---


@dataclass(frozen=True)
class FilterCriteria:
    """
    Current filter, sort and page selections for a browsing session.

    Criteria are immutable; every change produces a new value. Changing any
    criterion other than the page resets the page to 1.
    """
    keyword: str = ""
    selected_regions: FrozenSet[str] = field(default_factory=frozenset)
    selected_qualities: FrozenSet[str] = field(default_factory=frozenset)
    sort_key: SortKey = SortKey.BY_DATE
    page: int = 1

    def with_keyword(self, keyword: str) -> "FilterCriteria":
        return replace(self, keyword=keyword, page=1)

    def with_region_toggled(self, region: str) -> "FilterCriteria":
        return replace(
            self,
            selected_regions=_toggle(self.selected_regions, region),
            page=1,
        )

    def with_quality_toggled(self, quality: str) -> "FilterCriteria":
        return replace(
            self,
            selected_qualities=_toggle(self.selected_qualities, quality),
            page=1,
        )

    def with_sort_key(self, sort_key: SortKey) -> "FilterCriteria":
        return replace(self, sort_key=sort_key, page=1)

    def with_page(self, page: int) -> "FilterCriteria":
        return replace(self, page=page)


def _toggle(values: FrozenSet[str], value: str) -> FrozenSet[str]:
    if value in values:
        return values - {value}
    return values | {value}


# --- Filter pipeline ---


def _matches_term(record: CaseStudySummary, term: str) -> bool:
    return (
        term in record.policy_name.lower()
        or term in record.country.lower()
        or any(term in tag.lower() for tag in record.tags)
    )


def matches_keyword(record: CaseStudySummary, keyword: str) -> bool:
    """
    Case-insensitive match of every whitespace-separated term of the keyword
    against the policy name, the country or any tag. A keyword that is a
    plain substring of one of those fields always matches.
    """
    terms = keyword.lower().split()
    return all(_matches_term(record, term) for term in terms)


def filter_case_studies(
    records: Sequence[CaseStudySummary],
    criteria: FilterCriteria,
) -> List[CaseStudySummary]:
    """
    Narrows records by keyword, region and data quality, in that order.

    Each stage passes everything when its criterion is at its default. The
    result preserves the relative order of the input.
    """
    result = list(records)

    if criteria.keyword.strip():
        result = [r for r in result if matches_keyword(r, criteria.keyword)]

    if criteria.selected_regions:
        allowed = resolve(criteria.selected_regions)
        result = [r for r in result if r.country in allowed]

    if criteria.selected_qualities:
        result = [
            r for r in result if r.data_quality in criteria.selected_qualities
        ]

    return result
