import asyncio
import pytest
import httpx
from typing import Awaitable, Callable, Dict, Generator, List
from unittest.mock import patch
from fastapi.testclient import TestClient
from utils.case_studies.client import CaseStudyClient
from utils.case_studies.models import CaseStudySummary, CaseStudyDetail
from utils.case_studies.store import RecordStore
from main import app


# --- Sample data ---


SUMMARY_PAYLOAD: List[dict] = [
    {"id": "eu-ai-act", "country": "EU", "policy_name": "EU AI Act",
     "policy_type": "comprehensive", "data_quality": "high",
     "enacted_date": "2024-03-13", "tags": ["risk-based", "foundation models"]},
    {"id": "uk-framework", "country": "UK", "policy_name": "UK Pro-Innovation Framework",
     "policy_type": "national_strategy", "data_quality": "medium",
     "enacted_date": "2023-03-29", "tags": ["principles"]},
    {"id": "canada-aida", "country": "Canada",
     "policy_name": "Artificial Intelligence and Data Act (AIDA)",
     "policy_type": "bill", "data_quality": "projected",
     "enacted_date": "2022-06-16", "tags": ["high-impact systems"]},
    {"id": "singapore-verify", "country": "Singapore", "policy_name": "AI Verify",
     "policy_type": "voluntary", "data_quality": "high",
     "enacted_date": "2022-05-25", "tags": ["testing", "governance"]},
    {"id": "korea-basic-act", "country": "South Korea", "policy_name": "AI Basic Act",
     "policy_type": "comprehensive", "data_quality": "medium",
     "enacted_date": "2024-12-26", "tags": ["trust"]},
    {"id": "rwanda-policy", "country": "Rwanda", "policy_name": "National AI Policy",
     "policy_type": "national_strategy", "data_quality": "projected",
     "enacted_date": "2023-04-20", "tags": ["capacity building"]},
    {"id": "tunisia-strategy", "country": "Tunisia", "policy_name": "National AI Strategy",
     "policy_type": "national_strategy", "data_quality": "projected",
     "enacted_date": "2021-11-01", "tags": []},
    {"id": "brazil-bill", "country": "Brazil", "policy_name": "Brazil AI Bill 2338/2023",
     "policy_type": "bill", "data_quality": "medium",
     "enacted_date": "2023-05-03", "tags": ["rights-based"]},
    {"id": "eu-gdpr-adm", "country": "EU", "policy_name": "GDPR Automated Decision Rules",
     "policy_type": "sectoral", "data_quality": "high",
     "enacted_date": "2018-05-25", "tags": ["data protection"]},
    {"id": "singapore-sandbox", "country": "Singapore", "policy_name": "Generative AI Sandbox",
     "policy_type": "sandbox", "data_quality": "medium",
     "enacted_date": "2023-10-31", "tags": ["sandbox"]},
    {"id": "uk-ico-sandbox", "country": "UK", "policy_name": "ICO Regulatory Sandbox",
     "policy_type": "sandbox", "data_quality": "high",
     "enacted_date": "2019-03-01", "tags": ["privacy"]},
    {"id": "canada-directive", "country": "Canada",
     "policy_name": "Directive on Automated Decision-Making",
     "policy_type": "sectoral", "data_quality": "high",
     "enacted_date": "2019-04-01", "tags": ["public sector"]},
    {"id": "korea-ethics", "country": "South Korea", "policy_name": "AI Ethics Standards",
     "policy_type": "voluntary", "data_quality": "medium",
     "enacted_date": "2020-12-23", "tags": ["ethics"]},
    {"id": "brazil-ebia", "country": "Brazil", "policy_name": "Brazilian AI Strategy (EBIA)",
     "policy_type": "national_strategy", "data_quality": "projected",
     "enacted_date": "not yet published", "tags": ["strategy"]},
]


def make_detail_payload(case_study_id: str, country: str = "EU") -> dict:
    return {
        "id": case_study_id,
        "country": country,
        "policy_name": f"Policy {case_study_id}",
        "data_quality": "high",
        "policy": {
            "name": f"Policy {case_study_id}",
            "description": "A risk-based framework.",
            "enacted_date": "2024-03-13",
            "key_provisions": ["Prohibited practices", "Conformity assessment"],
        },
        "outcomes": {
            "social_impact": {"trust_change_pct": 12.5, "bias_reduction_pct": 8},
            "economic_impact": {"compliance_costs_usd": 250000, "startup_growth_pct": -3.1},
            "implementation_reality": {"timeline_months": 24, "compliance_rate_pct": 67},
            "qualitative_insights": ["Phased rollout reduced friction."],
        },
        "metadata": {
            "gdp_ratio_to_morocco": 120.4,
            "legal_similarity": 0.724,
            "tech_maturity_gap": 0.35,
        },
    }


def make_summary(
    case_study_id: str,
    country: str = "EU",
    policy_name: str = "Policy",
    policy_type: str = "comprehensive",
    data_quality: str = "high",
    enacted_date: str | None = "2024-01-01",
    tags: List[str] | None = None,
) -> CaseStudySummary:
    return CaseStudySummary(
        id=case_study_id,
        country=country,
        policy_name=policy_name,
        policy_type=policy_type,
        data_quality=data_quality,
        enacted_date=enacted_date,
        tags=tags or [],
    )


# --- Engine fixtures ---


@pytest.fixture
def summaries() -> List[CaseStudySummary]:
    """The fourteen sample case-study summaries, in service order."""
    return [CaseStudySummary.model_validate(p) for p in SUMMARY_PAYLOAD]


@pytest.fixture
def record_store(summaries: List[CaseStudySummary]) -> RecordStore:
    """A record store already populated with the sample summaries."""
    return RecordStore(summaries)


class ControlledFetcher:
    """
    Detail fetcher whose responses are released by the test, so the order in
    which requests resolve can be chosen independently of issue order.
    """

    def __init__(self):
        self.pending: Dict[str, asyncio.Future] = {}
        self.calls: List[str] = []

    async def __call__(self, case_study_id: str) -> CaseStudyDetail:
        self.calls.append(case_study_id)
        future = asyncio.get_running_loop().create_future()
        self.pending[case_study_id] = future
        return await future

    def resolve(self, case_study_id: str, country: str = "EU") -> None:
        self.pending.pop(case_study_id).set_result(
            CaseStudyDetail.model_validate(make_detail_payload(case_study_id, country))
        )

    def fail(self, case_study_id: str, exc: Exception) -> None:
        self.pending.pop(case_study_id).set_exception(exc)


@pytest.fixture
def controlled_fetcher() -> ControlledFetcher:
    return ControlledFetcher()


def run(coro: Awaitable):
    """Runs a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


# --- HTTP fixtures ---


def make_service_handler(
    summaries: List[dict] | None = None,
    fail_list: bool = False,
) -> Callable[[httpx.Request], httpx.Response]:
    """
    Builds a MockTransport handler standing in for the backing case-study
    service. Detail IDs beginning with "missing" return 404 and IDs beginning
    with "broken" return 500.
    """
    payload = SUMMARY_PAYLOAD if summaries is None else summaries

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/case-studies"):
            if fail_list:
                return httpx.Response(503, json={"detail": "unavailable"})
            return httpx.Response(200, json=payload)
        case_study_id = path.rsplit("/", 1)[-1]
        if case_study_id.startswith("missing"):
            return httpx.Response(404, json={"detail": "not found"})
        if case_study_id.startswith("broken"):
            return httpx.Response(500, json={"detail": "boom"})
        return httpx.Response(200, json=make_detail_payload(case_study_id))

    return handler


def make_mock_client(**handler_kwargs) -> CaseStudyClient:
    return CaseStudyClient(
        base_url="http://case-study-service.test/api",
        transport=httpx.MockTransport(make_service_handler(**handler_kwargs)),
    )


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """
    Provides a TestClient whose app loaded the sample summaries from a mocked
    backing service at startup.
    """
    with patch("main.create_case_study_client", return_value=make_mock_client()):
        with TestClient(app) as test_client:
            yield test_client


@pytest.fixture()
def unavailable_service_client() -> Generator[TestClient, None, None]:
    """
    Provides a TestClient whose backing service failed the summary list fetch.
    """
    with patch(
        "main.create_case_study_client",
        return_value=make_mock_client(fail_list=True),
    ):
        with TestClient(app) as test_client:
            yield test_client
