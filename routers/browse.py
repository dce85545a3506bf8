from logging import getLogger
from fastapi import APIRouter, Depends, Form
from utils.core.enums import DataQuality, RegionLabel, SortKey
from utils.dependencies import get_browsing_session, get_record_store
from utils.case_studies.browsing import BrowsingSession
from utils.case_studies.hydrator import HydrationResult
from utils.case_studies.store import RecordStore
from utils.case_studies.display import (
    BrowsePage,
    FilterOptionsOut,
    SelectionOut,
    StatsOut,
    filter_options,
)
from exceptions.http_exceptions import InvalidQualityError, InvalidRegionError


logger = getLogger("uvicorn.error")

router: APIRouter = APIRouter(prefix="/case-studies", tags=["case-studies"])

DETAIL_LOAD_FAILED = "Case study could not be loaded"


def _page(browsing_session: BrowsingSession) -> BrowsePage:
    return BrowsePage.from_view(browsing_session.view, browsing_session.criteria)


# --- Library overview ---


@router.get("/", response_model=BrowsePage)
async def read_case_studies(
    browsing_session: BrowsingSession = Depends(get_browsing_session),
) -> BrowsePage:
    return _page(browsing_session)


@router.get("/stats", response_model=StatsOut)
async def read_case_study_stats(
    store: RecordStore = Depends(get_record_store),
) -> StatsOut:
    return StatsOut.from_stats(store.stats())


@router.get("/filters", response_model=FilterOptionsOut)
async def read_filter_options() -> FilterOptionsOut:
    return filter_options()


# --- Criteria ---


@router.post("/keyword", response_model=BrowsePage)
async def update_keyword(
    keyword: str = Form(""),
    browsing_session: BrowsingSession = Depends(get_browsing_session),
) -> BrowsePage:
    browsing_session.set_keyword(keyword)
    return _page(browsing_session)


@router.post("/regions/{region}/toggle", response_model=BrowsePage)
async def toggle_region(
    region: str,
    browsing_session: BrowsingSession = Depends(get_browsing_session),
) -> BrowsePage:
    if region not in {r.value for r in RegionLabel}:
        raise InvalidRegionError(region)
    browsing_session.toggle_region(region)
    return _page(browsing_session)


@router.post("/qualities/{quality}/toggle", response_model=BrowsePage)
async def toggle_quality(
    quality: str,
    browsing_session: BrowsingSession = Depends(get_browsing_session),
) -> BrowsePage:
    if quality not in {q.value for q in DataQuality}:
        raise InvalidQualityError(quality)
    browsing_session.toggle_quality(quality)
    return _page(browsing_session)


@router.post("/sort", response_model=BrowsePage)
async def update_sort(
    sort: SortKey = Form(...),
    browsing_session: BrowsingSession = Depends(get_browsing_session),
) -> BrowsePage:
    browsing_session.set_sort(sort)
    return _page(browsing_session)


@router.post("/reset", response_model=BrowsePage)
async def reset_filters(
    browsing_session: BrowsingSession = Depends(get_browsing_session),
) -> BrowsePage:
    browsing_session.reset_filters()
    return _page(browsing_session)


# --- Paging ---


@router.post("/page", response_model=BrowsePage)
async def update_page(
    page: int = Form(...),
    browsing_session: BrowsingSession = Depends(get_browsing_session),
) -> BrowsePage:
    browsing_session.set_page(page)
    return _page(browsing_session)


@router.post("/page/next", response_model=BrowsePage)
async def go_to_next_page(
    browsing_session: BrowsingSession = Depends(get_browsing_session),
) -> BrowsePage:
    browsing_session.next_page()
    return _page(browsing_session)


@router.post("/page/prev", response_model=BrowsePage)
async def go_to_prev_page(
    browsing_session: BrowsingSession = Depends(get_browsing_session),
) -> BrowsePage:
    browsing_session.prev_page()
    return _page(browsing_session)


# --- Detail selection ---


@router.get("/selection", response_model=SelectionOut)
async def read_selection(
    browsing_session: BrowsingSession = Depends(get_browsing_session),
) -> SelectionOut:
    return SelectionOut.from_state(browsing_session.selection)


@router.delete("/selection", response_model=SelectionOut)
async def clear_selection(
    browsing_session: BrowsingSession = Depends(get_browsing_session),
) -> SelectionOut:
    browsing_session.clear()
    return SelectionOut.from_state(browsing_session.selection)


@router.post("/{case_study_id}/select", response_model=SelectionOut)
async def select_case_study(
    case_study_id: str,
    browsing_session: BrowsingSession = Depends(get_browsing_session),
) -> SelectionOut:
    """
    Loads the full record for a case study. A failed load leaves the
    selection as it was and reports a transient error alongside it.
    """
    result = await browsing_session.select(case_study_id)
    if result == HydrationResult.FAILED:
        return SelectionOut.from_state(browsing_session.selection, error=DETAIL_LOAD_FAILED)
    if result == HydrationResult.STALE:
        logger.debug(f"Selection of case study {case_study_id} was superseded")
    return SelectionOut.from_state(browsing_session.selection)
