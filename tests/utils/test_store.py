from unittest.mock import AsyncMock, MagicMock
from utils.case_studies.store import RecordStore
from exceptions.exceptions import CaseStudyServiceError
from conftest import SUMMARY_PAYLOAD, make_mock_client, run


def test_populate_loads_records():
    store = RecordStore()
    assert not store.populated

    run(store.populate(make_mock_client()))

    assert store.populated
    assert len(store.records) == 14


def test_populate_keeps_records_around_a_bad_one():
    payload = [dict(SUMMARY_PAYLOAD[0], tags=None), {"id": 7}] + SUMMARY_PAYLOAD[1:3]
    store = RecordStore()

    run(store.populate(make_mock_client(summaries=payload)))

    assert [r.id for r in store.records] == ["eu-ai-act", "uk-framework", "canada-aida"]
    assert store.records[0].tags == []


def test_populate_only_fetches_once():
    client = MagicMock()
    client.list_case_study_summaries = AsyncMock(return_value=[])
    store = RecordStore()

    run(store.populate(client))
    run(store.populate(client))

    client.list_case_study_summaries.assert_awaited_once()


def test_failed_list_fetch_yields_empty_store():
    store = RecordStore()
    run(store.populate(make_mock_client(fail_list=True)))
    assert store.populated
    assert store.records == ()


def test_failed_list_fetch_is_not_raised():
    client = MagicMock()
    client.list_case_study_summaries = AsyncMock(side_effect=CaseStudyServiceError("down"))
    store = RecordStore()
    run(store.populate(client))
    assert store.records == ()


def test_stats_cover_whole_store(record_store):
    stats = record_store.stats()
    assert stats.total == 14
    assert stats.regions == 5
    assert stats.comprehensive == 2
    assert stats.high_quality == 5


def test_stats_on_empty_store():
    stats = RecordStore([]).stats()
    assert stats.total == 0
    assert stats.comprehensive == 0
    assert stats.high_quality == 0
    assert stats.regions == 5
