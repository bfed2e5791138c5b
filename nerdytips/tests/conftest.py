"""
@file: conftest.py
@description:
This module provides pytest fixtures and configuration for the NerdyTips API test suite.

Fixtures include:
- Per-test settings pointing at a temporary SQLite file
- Application and TestClient built from those settings
- A direct database session for service-level tests
- A fake prediction model standing in for the external AI service
- Registered user and bearer headers

@notes:
- Fixtures are automatically available to all test modules in the package
- The TestClient is used as a context manager so the app lifespan runs
  (schema creation, optional seeding, engine disposal)
"""

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from nerdytips.api.deps import get_prediction_model
from nerdytips.core.config import Settings
from nerdytips.db.session import Database
from nerdytips.llm.base_model import (
    BasePredictionModel,
    DailyPickPayload,
    MatchFixture,
    PredictionPayload
)
from nerdytips.main import create_app


class FakePredictionModel(BasePredictionModel):
    """Prediction model returning canned payloads, or raising a configured error."""

    def __init__(self):
        self.payload = PredictionPayload(
            prediction="Home Win",
            odds=1.9,
            confidence=77,
            analysis="Chelsea are unbeaten at home in their last eight league games.",
            isElite=False
        )
        self.daily = [
            DailyPickPayload(homeTeam="Inter", awayTeam="Lazio", league="Serie A", prediction="Home Win",
                             odds=1.5, confidence=88, analysis="Inter strong at San Siro.", isElite=True),
            DailyPickPayload(homeTeam="PSG", awayTeam="Lyon", league="Ligue 1", prediction="Over 2.5",
                             odds=1.6, confidence=84, analysis="Both sides score freely.", isElite=False),
            DailyPickPayload(homeTeam="Napoli", awayTeam="Roma", league="Serie A", prediction="BTTS - Yes",
                             odds=1.8, confidence=80, analysis="Open game expected.", isElite=False),
        ]
        self.error: Optional[Exception] = None
        self.fixtures: List[MatchFixture] = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    async def predict(self, fixture: MatchFixture) -> PredictionPayload:
        self.fixtures.append(fixture)
        if self.error is not None:
            raise self.error
        return self.payload

    async def daily_picks(self, limit: int = 3) -> List[DailyPickPayload]:
        if self.error is not None:
            raise self.error
        return self.daily[:limit]


@pytest.fixture
def test_settings(tmp_path):
    """Settings for an isolated app instance backed by a temp database."""
    return Settings(
        APP_ENV="test",
        DEBUG=False,
        DATABASE_URL=f"sqlite:///{tmp_path / 'nerdytips-test.db'}",
        SEED_ON_STARTUP=False,
        JWT_SECRET="test-secret",
        GEMINI_API_KEY=None,
        STRIPE_SECRET_KEY=None,
        STATIC_DIR=str(tmp_path / "dist"),
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def fake_model():
    return FakePredictionModel()


@pytest.fixture
def test_app(test_settings, fake_model):
    app = create_app(test_settings)
    app.dependency_overrides[get_prediction_model] = lambda: fake_model
    return app


@pytest.fixture
def test_client(test_app):
    """
    Fixture that returns a TestClient instance for the FastAPI app.
    """
    with TestClient(test_app) as client:
        yield client


@pytest.fixture
def db_session(test_settings):
    """A session on a freshly created schema, for service-level tests."""
    database = Database(test_settings.DATABASE_URL)
    database.create_all()
    session = database.session()
    try:
        yield session
    finally:
        session.close()
        database.dispose()


@pytest.fixture
def registered_user(test_client):
    """Register a user through the API and return the response body."""
    response = test_client.post(
        "/api/auth/register",
        json={"email": "fan@nerdytips.ai", "password": "correct-horse"}
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def auth_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['token']}"}

