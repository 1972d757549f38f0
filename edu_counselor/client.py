"""
Typed HTTP bindings for the Education Counselor API.

Every method returns the same Row schemas the server validates against,
and error responses come back as the shared exception types, so UI code
handles ``NotFound`` / ``AuthorizationDenied`` the same way server code does.

    client = EduCounselorClient("http://localhost:8000", token=access_token)
    for s in client.list_scholarships(category="merit"):
        print(s.title, s.deadline)
"""
from __future__ import annotations

import uuid
from typing import Any, Optional

import httpx
from pydantic_core import to_jsonable_python

from .career_service.schemas import CareerPathRow
from .chat_service.schemas import ChatOut, ConversationRow, MessageRow
from .college_service.schemas import CollegeRow
from .profile_service.schemas import ProfileRow
from .quest_service.schemas import ProgressRow, QuestSummary
from .saved_item_service.schemas import SavedItemRow
from .scholarship_service.schemas import ScholarshipRow
from .shared.errors import (
    AuthorizationDenied,
    CounselorError,
    NotAuthenticated,
    NotFound,
    UniquenessViolation,
    ValidationError,
)

ERRORS_BY_STATUS: dict[int, type[CounselorError]] = {
    403: AuthorizationDenied,
    404: NotFound,
    409: UniquenessViolation,
    422: ValidationError,
}


def _detail(resp: httpx.Response) -> tuple[str, dict[str, Any]]:
    try:
        data = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase, {}
    if not isinstance(data, dict):
        return str(data), {}
    detail = data.get("detail")
    if not isinstance(detail, str):
        # FastAPI request validation returns a list of problems
        detail = str(detail) if detail is not None else resp.reason_phrase
    return detail, data


def raise_for_error(resp: httpx.Response) -> None:
    if resp.is_success:
        return
    detail, data = _detail(resp)
    if resp.status_code == 401:
        raise NotAuthenticated(detail, data.get("login_url"))
    cls = ERRORS_BY_STATUS.get(resp.status_code)
    if cls is not None:
        raise cls(detail)
    resp.raise_for_status()


def _clean(params: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None}


class EduCounselorClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        self._http = http or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)
        self.token = token

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "EduCounselorClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # -------------------------
    # Plumbing
    # -------------------------

    def _request(self, method: str, path: str, *, json: Any = None, params: dict | None = None) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        resp = self._http.request(method, path, json=json, params=_clean(params or {}), headers=headers)
        raise_for_error(resp)
        return resp.json() if resp.content else None

    @staticmethod
    def _body(payload: dict[str, Any]) -> dict[str, Any]:
        # uuids and datetimes must be plain JSON
        return to_jsonable_python(payload)

    # -------------------------
    # Auth
    # -------------------------

    def register(self, email: str, password: str, full_name: str = "") -> Any:
        return self._request("POST", "/auth/register", json={"email": email, "password": password, "full_name": full_name})

    def login(self, email: str, password: str) -> Any:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        if isinstance(data, dict) and data.get("access_token"):
            self.token = data["access_token"]
        return data

    def me(self) -> dict[str, Any]:
        return self._request("GET", "/auth/me")

    # -------------------------
    # Profile
    # -------------------------

    def get_profile(self) -> ProfileRow:
        return ProfileRow.model_validate(self._request("GET", "/profile/me"))

    def create_profile(self, **fields: Any) -> ProfileRow:
        return ProfileRow.model_validate(self._request("POST", "/profile/me", json=self._body(fields)))

    def update_profile(self, **fields: Any) -> ProfileRow:
        return ProfileRow.model_validate(self._request("PATCH", "/profile/me", json=self._body(fields)))

    # -------------------------
    # Reference data
    # -------------------------

    def list_colleges(self, type: str | None = None, state: str | None = None) -> list[CollegeRow]:
        rows = self._request("GET", "/colleges/", params={"type": type, "state": state})
        return [CollegeRow.model_validate(r) for r in rows]

    def get_college(self, college_id: uuid.UUID | str) -> CollegeRow:
        return CollegeRow.model_validate(self._request("GET", f"/colleges/{college_id}"))

    def list_scholarships(self, category: str | None = None, upcoming_only: bool = False) -> list[ScholarshipRow]:
        params = {"category": category, "upcoming_only": "true" if upcoming_only else None}
        rows = self._request("GET", "/scholarships/", params=params)
        return [ScholarshipRow.model_validate(r) for r in rows]

    def get_scholarship(self, scholarship_id: uuid.UUID | str) -> ScholarshipRow:
        return ScholarshipRow.model_validate(self._request("GET", f"/scholarships/{scholarship_id}"))

    def list_career_paths(self, q: str | None = None) -> list[CareerPathRow]:
        rows = self._request("GET", "/careers/", params={"q": q})
        return [CareerPathRow.model_validate(r) for r in rows]

    def get_career_path(self, career_id: uuid.UUID | str) -> CareerPathRow:
        return CareerPathRow.model_validate(self._request("GET", f"/careers/{career_id}"))

    # -------------------------
    # Chat
    # -------------------------

    def list_conversations(self) -> list[ConversationRow]:
        return [ConversationRow.model_validate(r) for r in self._request("GET", "/chat/conversations")]

    def create_conversation(self, title: str | None = None, language: str = "en") -> ConversationRow:
        data = self._request("POST", "/chat/conversations", json={"title": title, "language": language})
        return ConversationRow.model_validate(data)

    def get_conversation(self, conversation_id: uuid.UUID | str) -> ConversationRow:
        return ConversationRow.model_validate(self._request("GET", f"/chat/conversations/{conversation_id}"))

    def update_conversation(self, conversation_id: uuid.UUID | str, **fields: Any) -> ConversationRow:
        data = self._request("PATCH", f"/chat/conversations/{conversation_id}", json=self._body(fields))
        return ConversationRow.model_validate(data)

    def delete_conversation(self, conversation_id: uuid.UUID | str) -> None:
        self._request("DELETE", f"/chat/conversations/{conversation_id}")

    def list_messages(self, conversation_id: uuid.UUID | str) -> list[MessageRow]:
        rows = self._request("GET", f"/chat/conversations/{conversation_id}/messages")
        return [MessageRow.model_validate(r) for r in rows]

    def add_message(self, conversation_id: uuid.UUID | str, content: str, is_user: bool = True) -> MessageRow:
        data = self._request(
            "POST", f"/chat/conversations/{conversation_id}/messages", json={"content": content, "is_user": is_user}
        )
        return MessageRow.model_validate(data)

    def ask(self, conversation_id: uuid.UUID | str, message: str) -> ChatOut:
        data = self._request("POST", f"/chat/conversations/{conversation_id}/reply", json={"message": message})
        return ChatOut.model_validate(data)

    # -------------------------
    # Quests
    # -------------------------

    def list_quests(self) -> list[ProgressRow]:
        return [ProgressRow.model_validate(r) for r in self._request("GET", "/quests/")]

    def quest_summary(self) -> QuestSummary:
        return QuestSummary.model_validate(self._request("GET", "/quests/summary"))

    def get_quest(self, quest_type: str) -> ProgressRow:
        return ProgressRow.model_validate(self._request("GET", f"/quests/{quest_type}"))

    def start_quest(self, quest_type: str, **fields: Any) -> ProgressRow:
        body = self._body({"quest_type": quest_type, **fields})
        return ProgressRow.model_validate(self._request("POST", "/quests/", json=body))

    def update_quest(self, quest_type: str, **fields: Any) -> ProgressRow:
        return ProgressRow.model_validate(self._request("PATCH", f"/quests/{quest_type}", json=self._body(fields)))

    # -------------------------
    # Saved items
    # -------------------------

    def list_saved(self, item_type: str | None = None) -> list[SavedItemRow]:
        rows = self._request("GET", "/saved/", params={"item_type": item_type})
        return [SavedItemRow.model_validate(r) for r in rows]

    def save_item(self, item_type: str, item_id: uuid.UUID | str, notes: str | None = None) -> SavedItemRow:
        body = {"item_type": item_type, "item_id": str(item_id), "notes": notes}
        return SavedItemRow.model_validate(self._request("POST", "/saved/", json=body))

    def delete_saved(self, saved_id: uuid.UUID | str) -> None:
        self._request("DELETE", f"/saved/{saved_id}")
