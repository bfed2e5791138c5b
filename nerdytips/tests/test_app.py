"""
@file: test_app.py
@description:
Tests for application-level behaviour: health check, subscription plans and
the error envelope for unexpected failures.
"""

from unittest import mock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from nerdytips.main import create_app


def test_health_check(test_client):
    response = test_client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "OK", "database": "ok"}


def test_health_check_reports_database_failure(test_client, test_app):
    failure = OperationalError("SELECT 1", {}, Exception("disk I/O error"))
    with mock.patch.object(test_app.state.database, "ping", side_effect=failure):
        response = test_client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "DEGRADED", "database": "unavailable"}


def test_subscription_plans(test_client):
    response = test_client.get("/api/subscriptions/plans")
    assert response.status_code == 200

    body = response.json()
    assert body["paymentsEnabled"] is False
    assert [(p["tier"], p["price"]) for p in body["plans"]] == [
        ("basic", 9.99),
        ("pro", 24.99),
        ("elite", 49.99),
    ]
    assert [p["name"] for p in body["plans"] if p["highlighted"]] == ["Pro"]
    assert all(p["features"] for p in body["plans"])


def test_subscription_plans_with_payments_configured(test_settings):
    settings = test_settings.model_copy(update={"STRIPE_SECRET_KEY": "sk_test_123"})
    with TestClient(create_app(settings)) as client:
        body = client.get("/api/subscriptions/plans").json()
    assert body["paymentsEnabled"] is True


def test_openapi_lists_api_routes(test_client):
    paths = test_client.get("/openapi.json").json()["paths"]
    for path in (
        "/api/auth/register",
        "/api/auth/login",
        "/api/auth/me",
        "/api/predictions",
        "/api/predictions/elites",
        "/api/predictions/generate",
        "/api/predictions/daily-slip",
        "/api/admin/seed-predictions",
        "/api/subscriptions/plans",
        "/api/health",
    ):
        assert path in paths


def test_unexpected_error_uses_error_envelope(test_app):
    with TestClient(test_app, raise_server_exceptions=False) as client:
        with mock.patch(
            "nerdytips.services.prediction_service.list_elite",
            side_effect=RuntimeError("boom")
        ):
            response = client.get("/api/predictions/elites")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
