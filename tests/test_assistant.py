from types import SimpleNamespace

import httpx
import pytest
from fastapi import HTTPException
from openai import RateLimitError

from edu_counselor.chat_service import assistant
from edu_counselor.models import ChatMessage


def _rate_limit_error():
    request = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")
    return RateLimitError("slow down", response=httpx.Response(429, request=request), body=None)


def _completion(text):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


class FakeClient:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self.create))

    def create(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(assistant.time, "sleep", lambda s: None)


def test_build_messages_maps_roles_and_language():
    history = [
        ChatMessage(content="Which stream after 10th?", is_user=True),
        ChatMessage(content="Tell me what you enjoy.", is_user=False),
        ChatMessage(content="Biology", is_user=True),
    ]

    msgs = assistant.build_messages(history, "hi")

    assert msgs[0]["role"] == "system"
    assert msgs[0]["content"].endswith("Always answer in Hindi.")
    assert [m["role"] for m in msgs[1:]] == ["user", "assistant", "user"]
    assert "Always answer" not in assistant.build_messages(history, "en")[0]["content"]


def test_generate_reply_retries_rate_limits(monkeypatch):
    fake = FakeClient([_rate_limit_error(), _completion("  Try NEET preparation.  ")])
    monkeypatch.setattr(assistant, "get_or_client", lambda: fake)

    reply = assistant.generate_reply([ChatMessage(content="Doctor?", is_user=True)])

    assert reply == "Try NEET preparation."
    assert len(fake.calls) == 2


def test_generate_reply_gives_up_with_429(monkeypatch):
    fake = FakeClient([_rate_limit_error() for _ in range(5)])
    monkeypatch.setattr(assistant, "get_or_client", lambda: fake)

    with pytest.raises(HTTPException) as exc:
        assistant.generate_reply([ChatMessage(content="hi", is_user=True)])
    assert exc.value.status_code == 429


def test_empty_completion_falls_back(monkeypatch):
    monkeypatch.setattr(assistant, "get_or_client", lambda: FakeClient([_completion("")]))
    assert assistant.generate_reply([ChatMessage(content="hi", is_user=True)]) == assistant.FALLBACK_REPLY


def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    with pytest.raises(HTTPException) as exc:
        assistant.get_or_client()
    assert exc.value.status_code == 500
