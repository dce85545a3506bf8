import os
import logging
from typing import List, Optional
from urllib.parse import quote
import httpx
from dotenv import load_dotenv
from pydantic import ValidationError
from utils.case_studies.models import CaseStudySummary, CaseStudyDetail
from exceptions.exceptions import CaseStudyServiceError, CaseStudyNotFoundError

load_dotenv()

logger = logging.getLogger("uvicorn.error")

DEFAULT_API_URL = "http://localhost:8001/api"
DEFAULT_TIMEOUT_SECONDS = 10.0


# --- Configuration ---


def get_api_url() -> str:
    return (os.getenv("CASE_STUDY_API_URL") or DEFAULT_API_URL).rstrip("/")


def get_api_timeout() -> float:
    raw = os.getenv("CASE_STUDY_API_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        logger.warning(
            f"Invalid CASE_STUDY_API_TIMEOUT {raw!r}; using {DEFAULT_TIMEOUT_SECONDS}s"
        )
        return DEFAULT_TIMEOUT_SECONDS


# --- Client ---


class CaseStudyClient:
    """
    Thin async client for the backing case-study service.

    All failures (transport errors, non-2xx responses, malformed payloads)
    are raised as CaseStudyServiceError so callers handle a single type.
    Individual malformed records in the list are skipped, not raised.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or get_api_url(),
            timeout=timeout if timeout is not None else get_api_timeout(),
            transport=transport,
        )

    async def list_case_study_summaries(self) -> List[CaseStudySummary]:
        payload = await self._get_json("/case-studies")
        if not isinstance(payload, list):
            raise CaseStudyServiceError(
                f"Malformed case study list: expected a list, got {type(payload).__name__}"
            )

        # One bad record is skipped rather than emptying the whole library
        summaries = []
        for index, item in enumerate(payload):
            try:
                summaries.append(CaseStudySummary.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping malformed case study at index {index}: {e}")
        return summaries

    async def get_case_study_detail(self, case_study_id: str) -> CaseStudyDetail:
        payload = await self._get_json(
            f"/case-studies/{quote(case_study_id, safe='')}",
            case_study_id=case_study_id,
        )
        try:
            return CaseStudyDetail.model_validate(payload)
        except ValidationError as e:
            raise CaseStudyServiceError(
                f"Malformed case study {case_study_id}: {e}", case_study_id
            ) from e

    async def _get_json(self, path: str, case_study_id: Optional[str] = None):
        try:
            response = await self._client.get(path)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise CaseStudyServiceError(
                f"Request to {path} failed: {e}", case_study_id
            ) from e

        if response.status_code == 404 and case_study_id is not None:
            raise CaseStudyNotFoundError(case_study_id)
        try:
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise CaseStudyServiceError(
                f"Request to {path} returned {response.status_code}", case_study_id
            ) from e
        except ValueError as e:
            raise CaseStudyServiceError(
                f"Response from {path} is not valid JSON", case_study_id
            ) from e

    async def aclose(self) -> None:
        await self._client.aclose()


def create_case_study_client() -> CaseStudyClient:
    return CaseStudyClient()
