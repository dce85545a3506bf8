import locale
from datetime import date
from typing import List, Sequence
from utils.core.enums import SortKey
from utils.case_studies.models import CaseStudySummary


def _collation_key(value: str) -> str:
    return locale.strxfrm(value.casefold())


def _date_key(record: CaseStudySummary) -> date:
    # Missing or unparseable dates sort as earliest
    return record.enacted_on or date.min


def sort_case_studies(
    records: Sequence[CaseStudySummary],
    sort_key: SortKey,
) -> List[CaseStudySummary]:
    """
    Orders records by a single key. Python's sort is stable, so records with
    equal keys keep their relative order from the filter stage.
    """
    if sort_key == SortKey.BY_DATE:
        return sorted(records, key=_date_key, reverse=True)
    if sort_key == SortKey.BY_COUNTRY:
        return sorted(records, key=lambda r: _collation_key(r.country))
    if sort_key == SortKey.BY_NAME:
        return sorted(records, key=lambda r: _collation_key(r.policy_name))
    raise ValueError(f"Unknown sort key: {sort_key}")
