"""
Shared test fixtures and utilities for MacroLog test suite.

This module contains the fake completion service, token helpers, meal
factories and the TestClient setup reused across test files.
"""

import json
import time
import uuid
from datetime import datetime, timezone
from typing import Generator

import httpx
import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.config import settings
from api.dependencies import get_macro_estimator_factory
from domain.models import Meal, SessionLocal, engine, init_database
from services.macro_estimator import MacroEstimator
from main import app


# Realistic completion used across tests (two eggs and black coffee)
EGGS_AND_COFFEE = {"calories": 220, "protein": 14, "fat": 15, "fibre": 0, "sugar": 1}


def make_token(user_id=None, expires_in: int = 3600, secret=None, audience="authenticated", **claims) -> str:
    """
    Mint an access token the way the identity provider does.

    Args:
        user_id: ``sub`` claim. Generates a UUID string if not provided.
        expires_in: Seconds until expiry; negative values give an expired token.
        secret: Signing secret. Defaults to the configured test secret.
        audience: ``aud`` claim; pass None to omit it.
    """
    now = int(time.time())
    payload = {
        "sub": str(user_id or uuid.uuid4()),
        "iat": now,
        "exp": now + expires_in,
        "role": "authenticated",
        **claims,
    }
    if audience is not None:
        payload["aud"] = audience
    return jwt.encode(payload, secret or settings.auth_jwt_secret, algorithm="HS256")


def auth_headers(user_id=None, **kwargs) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, **kwargs)}"}


def completion_envelope(content: str) -> dict:
    """Chat completion response body carrying ``content`` as the first choice."""
    return {
        "id": "cmpl-test",
        "object": "chat.completion",
        "model": settings.estimator_model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


class FakeCompletionService:
    """
    Stand-in for the completion API, served through httpx.MockTransport.

    Queue responses with ``reply`` / ``fail``; every request is recorded in
    ``requests`` so tests can assert whether (and how) the upstream was called.
    """

    def __init__(self):
        self.requests = []
        self._responses = []
        self.transport = httpx.MockTransport(self._handle)

    def reply(self, content):
        if not isinstance(content, str):
            content = json.dumps(content)
        self._responses.append(httpx.Response(200, json=completion_envelope(content)))
        return self

    def fail(self, status_code: int = 503, body: str = "upstream overloaded"):
        self._responses.append(httpx.Response(status_code, text=body))
        return self

    def respond_with(self, response: httpx.Response):
        self._responses.append(response)
        return self

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError("unexpected call to the completion service")
        return self._responses.pop(0)


def make_meal(user_id="user-1", meal_type="Lunch", text_entry="chicken salad", created_at=None, **macros) -> Meal:
    """
    Create an unsaved Meal row with realistic macros.

    Example:
        >>> meal = make_meal(calories=650, created_at=datetime(2025, 3, 1, 12, tzinfo=timezone.utc))
    """
    values = {"calories": 450, "protein": 35, "fat": 18, "fibre": 6, "sugar": 4}
    values.update(macros)
    return Meal(
        user_id=user_id,
        meal_type=meal_type,
        text_entry=text_entry,
        created_at=created_at or datetime.now(timezone.utc),
        **values,
    )


def count_meals() -> int:
    session = SessionLocal()
    try:
        return session.query(Meal).count()
    finally:
        session.close()


def _clear_meals():
    with engine.begin() as conn:
        conn.execute(Meal.__table__.delete())


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def completion() -> Generator[FakeCompletionService, None, None]:
    """Route the app's macro estimator to a fake completion service."""
    fake = FakeCompletionService()
    estimator = MacroEstimator.from_settings(settings, transport=fake.transport)
    app.dependency_overrides[get_macro_estimator_factory] = lambda: (lambda: estimator)
    try:
        yield fake
    finally:
        app.dependency_overrides.pop(get_macro_estimator_factory, None)


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """TestClient running the app lifespan against the in-memory database."""
    with TestClient(app) as test_client:
        yield test_client
    _clear_meals()


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Database session for repository and service tests.

    Tables are created on the shared in-memory database and emptied
    after each test.
    """
    init_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        _clear_meals()
