from typing import Dict, List, Optional
from pydantic import BaseModel
from utils.core.enums import DataQuality, SortKey
from utils.case_studies.models import CaseStudySummary, CaseStudyDetail
from utils.case_studies.filters import FilterCriteria
from utils.case_studies.browsing import BrowseView
from utils.case_studies.hydrator import SelectionState
from utils.case_studies.regions import available_regions
from utils.case_studies.store import CaseStudyStats

MAX_CARD_TAGS = 3

COUNTRY_FLAGS: Dict[str, str] = {
    "EU": "\U0001F1EA\U0001F1FA",
    "Canada": "\U0001F1E8\U0001F1E6",
    "Singapore": "\U0001F1F8\U0001F1EC",
    "Rwanda": "\U0001F1F7\U0001F1FC",
    "Brazil": "\U0001F1E7\U0001F1F7",
    "UK": "\U0001F1EC\U0001F1E7",
    "Tunisia": "\U0001F1F9\U0001F1F3",
    "South Korea": "\U0001F1F0\U0001F1F7",
}

QUALITY_LABELS: Dict[str, str] = {
    DataQuality.HIGH.value: "High Quality",
    DataQuality.MEDIUM.value: "Standardized",
    DataQuality.PROJECTED.value: "Projected",
}

SORT_LABELS: Dict[str, str] = {
    SortKey.BY_DATE.value: "Recent",
    SortKey.BY_COUNTRY.value: "Country",
    SortKey.BY_NAME.value: "Name",
}


def quality_label(data_quality: Optional[str]) -> str:
    return QUALITY_LABELS.get(data_quality or "", QUALITY_LABELS[DataQuality.MEDIUM.value])


def policy_type_label(policy_type: Optional[str]) -> str:
    # Only the first underscore is replaced ("national_strategy" -> "national strategy")
    return (policy_type or "").replace("_", " ", 1)


def as_percent(value: Optional[float]) -> Optional[int]:
    if value is None:
        return None
    return round(value * 100)


# --- Response models ---


class CaseStudyCard(BaseModel):
    id: str
    country: str
    flag: str
    policy_name: str
    policy_type: Optional[str]
    policy_type_label: str
    data_quality: Optional[str]
    quality_label: str
    enacted_date: Optional[str]
    tags: List[str]

    @classmethod
    def from_summary(cls, summary: CaseStudySummary) -> "CaseStudyCard":
        return cls(
            id=summary.id,
            country=summary.country,
            flag=COUNTRY_FLAGS.get(summary.country, ""),
            policy_name=summary.policy_name,
            policy_type=summary.policy_type,
            policy_type_label=policy_type_label(summary.policy_type),
            data_quality=summary.data_quality,
            quality_label=quality_label(summary.data_quality),
            enacted_date=summary.enacted_date,
            tags=summary.tags[:MAX_CARD_TAGS],
        )


class CriteriaOut(BaseModel):
    keyword: str
    regions: List[str]
    qualities: List[str]
    sort: str
    page: int

    @classmethod
    def from_criteria(cls, criteria: FilterCriteria) -> "CriteriaOut":
        return cls(
            keyword=criteria.keyword,
            regions=[r for r in available_regions() if r in criteria.selected_regions],
            qualities=sorted(criteria.selected_qualities),
            sort=criteria.sort_key.value,
            page=criteria.page,
        )


class BrowsePage(BaseModel):
    items: List[CaseStudyCard]
    page: int
    total_pages: int
    total_matches: int
    page_numbers: List[int]
    show_pager: bool
    is_empty: bool
    criteria: CriteriaOut

    @classmethod
    def from_view(cls, view: BrowseView, criteria: FilterCriteria) -> "BrowsePage":
        return cls(
            items=[CaseStudyCard.from_summary(s) for s in view.items],
            page=view.page,
            total_pages=view.total_pages,
            total_matches=view.total_matches,
            page_numbers=list(range(1, view.total_pages + 1)),
            # An empty result still reports one page; the pager stays hidden
            show_pager=view.total_pages > 1,
            is_empty=view.is_empty,
            criteria=CriteriaOut.from_criteria(criteria),
        )


class StatsOut(BaseModel):
    total_studies: int
    global_regions: int
    comprehensive_acts: int
    high_quality_data: int

    @classmethod
    def from_stats(cls, stats: CaseStudyStats) -> "StatsOut":
        return cls(
            total_studies=stats.total,
            global_regions=stats.regions,
            comprehensive_acts=stats.comprehensive,
            high_quality_data=stats.high_quality,
        )


class FilterOption(BaseModel):
    value: str
    label: str


class FilterOptionsOut(BaseModel):
    regions: List[FilterOption]
    qualities: List[FilterOption]
    sort_keys: List[FilterOption]


def filter_options() -> FilterOptionsOut:
    return FilterOptionsOut(
        regions=[FilterOption(value=r, label=r) for r in available_regions()],
        qualities=[FilterOption(value=k, label=v) for k, v in QUALITY_LABELS.items()],
        sort_keys=[FilterOption(value=k, label=v) for k, v in SORT_LABELS.items()],
    )


class CaseStudyDetailOut(BaseModel):
    case_study: CaseStudyDetail
    flag: str
    quality_label: str
    legal_similarity_pct: Optional[int]
    tech_maturity_gap_pct: Optional[int]

    @classmethod
    def from_detail(cls, detail: CaseStudyDetail) -> "CaseStudyDetailOut":
        return cls(
            case_study=detail,
            flag=COUNTRY_FLAGS.get(detail.country, ""),
            quality_label=quality_label(detail.data_quality),
            legal_similarity_pct=as_percent(detail.metadata.legal_similarity),
            tech_maturity_gap_pct=as_percent(detail.metadata.tech_maturity_gap),
        )


class SelectionOut(BaseModel):
    status: str
    case_study_id: Optional[str] = None
    detail: Optional[CaseStudyDetailOut] = None
    error: Optional[str] = None

    @classmethod
    def from_state(cls, state: SelectionState, error: Optional[str] = None) -> "SelectionOut":
        return cls(
            status=state.status.value,
            case_study_id=state.case_study_id,
            detail=CaseStudyDetailOut.from_detail(state.detail) if state.detail else None,
            error=error,
        )
