from __future__ import annotations

from fastapi.testclient import TestClient

from adtrack.api.deps import get_current_user, get_get_me_use_case
from adtrack.application.use_cases.get_me import GetMeUseCase
from adtrack.main import app


def test_get_me_returns_user_role_and_plan(store):
    output = GetMeUseCase(subscription_port=store).execute(user=store.users["user-1"])

    assert output.user_id == "user-1"
    assert output.role == "user"
    assert output.is_admin is False
    assert output.plan_name == "Basic"


def test_get_me_without_subscription_has_no_plan(store):
    output = GetMeUseCase(subscription_port=store).execute(user=store.users["admin-1"])

    assert output.is_admin is True
    assert output.plan_name is None


def test_me_router_returns_camel_case(store):
    app.dependency_overrides[get_current_user] = lambda: store.users["admin-1"]
    app.dependency_overrides[get_get_me_use_case] = lambda: GetMeUseCase(subscription_port=store)

    client = TestClient(app)
    response = client.get("/api/me")

    assert response.status_code == 200
    payload = response.json()
    assert payload["user"]["id"] == "admin-1"
    assert payload["isAdmin"] is True
    assert payload["planName"] is None

    app.dependency_overrides.clear()
