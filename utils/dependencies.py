from collections import OrderedDict
from uuid import uuid4
from typing import Optional
from fastapi import Cookie, Request, Response
from utils.case_studies.client import CaseStudyClient
from utils.case_studies.store import RecordStore
from utils.case_studies.hydrator import DetailHydrator
from utils.case_studies.browsing import BrowsingSession

BROWSE_SESSION_COOKIE = "browse_session"
MAX_BROWSE_SESSIONS = 1000


class SessionRegistry:
    """
    In-memory browsing sessions keyed by the browse_session cookie.
    Sessions are not persisted and do not survive a restart. At most
    max_sessions are kept; the least recently used one is dropped first.
    """

    def __init__(self, max_sessions: int = MAX_BROWSE_SESSIONS):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, BrowsingSession]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: Optional[str]) -> Optional[BrowsingSession]:
        if not session_id:
            return None
        browsing_session = self._sessions.get(session_id)
        if browsing_session is not None:
            self._sessions.move_to_end(session_id)
        return browsing_session

    def create(
        self, store: RecordStore, client: CaseStudyClient
    ) -> tuple[str, BrowsingSession]:
        session_id = str(uuid4())
        browsing_session = BrowsingSession(
            store, DetailHydrator(client.get_case_study_detail)
        )
        self._sessions[session_id] = browsing_session
        while len(self._sessions) > self.max_sessions:
            self._sessions.popitem(last=False)
        return session_id, browsing_session


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_case_study_client(request: Request) -> CaseStudyClient:
    return request.app.state.case_study_client


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.browse_sessions


def get_browsing_session(
    request: Request,
    response: Response,
    browse_session: Optional[str] = Cookie(None),
) -> BrowsingSession:
    """
    Returns the caller's browsing session, starting a new one (and setting
    the cookie) when the cookie is missing or unknown.
    """
    registry = get_session_registry(request)
    browsing_session = registry.get(browse_session)
    if browsing_session:
        return browsing_session

    session_id, browsing_session = registry.create(
        get_record_store(request), get_case_study_client(request)
    )
    response.set_cookie(
        key=BROWSE_SESSION_COOKIE,
        value=session_id,
        httponly=True,
        samesite="strict",
    )
    return browsing_session
