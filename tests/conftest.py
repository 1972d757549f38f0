"""
Pytest configuration and fixtures

Every test gets its own SQLite file, so nothing leaks between tests.
Token verification never leaves the process: the gateway's verifier is
replaced by a lookup in TOKENS.
"""
import os
import uuid

os.environ.setdefault("AUTH_SERVICE_URL", "http://auth-service.test")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from edu_counselor.api_gateway import middleware
from edu_counselor.api_gateway.main import create_app
from edu_counselor.shared.database import init_db, make_engine, make_session_factory

ALICE = uuid.UUID("11111111-1111-4111-8111-111111111111")
BOB = uuid.UUID("22222222-2222-4222-8222-222222222222")

TOKENS = {
    "alice-token": {"sub": str(ALICE), "email": "alice@example.com"},
    "bob-token": {"sub": str(BOB), "email": "bob@example.com"},
}


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def engine(tmp_path):
    e = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(e)
    yield e
    e.dispose()


@pytest.fixture
def SessionLocal(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(SessionLocal):
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def fake_auth(monkeypatch):
    async def verify(token: str):
        if token not in TOKENS:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        return dict(TOKENS[token])

    monkeypatch.setattr(middleware, "_verify_token", verify)


@pytest.fixture
def app(SessionLocal, fake_auth):
    return create_app(SessionLocal)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
