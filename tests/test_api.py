"""Tests for HTTP endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from calorie_tracker.api.app import create_app
from calorie_tracker.containers import AppContainer
from tests.conftest import FakeAnalyzer, InMemoryEntryRepository


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def headers() -> dict[str, str]:
    return {"X-User-Id": str(uuid4())}


PROFILE = {
    "gender": "male",
    "age": 25,
    "weight": 70,
    "height": 175,
    "activity_level": 1.375,
}


def test_health_does_not_require_auth(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.parametrize("value", [None, "", "not-a-uuid"])
def test_requests_without_valid_user_are_unauthorized(
    client: TestClient, value: str | None
) -> None:
    headers = {} if value is None else {"X-User-Id": value}

    response = client.get("/entries/today", headers=headers)

    assert response.status_code == 401


def test_profile_is_null_before_first_save(
    client: TestClient, headers: dict[str, str]
) -> None:
    response = client.get("/user", headers=headers)

    assert response.status_code == 200
    assert response.json() is None


def test_save_profile_returns_bmr_and_goal(
    client: TestClient, headers: dict[str, str]
) -> None:
    response = client.post("/user", json=PROFILE, headers=headers)
    fetched = client.get("/user", headers=headers).json()

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["bmr"] == pytest.approx(1673.75)
    assert body["goal_calories"] == 2301
    assert fetched["gender"] == "male"
    assert fetched["ai_provider"] == "gemini"


def test_save_profile_with_unknown_gender_is_bad_request(
    client: TestClient, headers: dict[str, str]
) -> None:
    response = client.post("/user", json={**PROFILE, "gender": "x"}, headers=headers)

    assert response.status_code == 400
    assert "error" in response.json()


def test_save_profile_with_unknown_activity_level_is_rejected(
    client: TestClient, headers: dict[str, str]
) -> None:
    response = client.post(
        "/user", json={**PROFILE, "activity_level": 1.6}, headers=headers
    )

    assert response.status_code == 422


def test_add_entry_and_read_day(client: TestClient, headers: dict[str, str]) -> None:
    client.post(
        "/entries",
        json={
            "type": "food",
            "name": "Pasta",
            "calories": 600,
            "protein": 20,
            "date": "2024-05-01T12:00:00",
        },
        headers=headers,
    )
    client.post(
        "/entries",
        json={"type": "sport", "name": "Run", "calories": 250, "date": "2024-05-01"},
        headers=headers,
    )

    response = client.get("/entries/today?date=2024-05-01", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["calories_in"] == 600
    assert body["calories_out"] == 250
    assert body["protein"] == 20
    assert [entry["name"] for entry in body["entries"]] == ["Pasta", "Run"]


def test_add_entry_from_calories_per_100g(
    client: TestClient,
    headers: dict[str, str],
    entry_repository: InMemoryEntryRepository,
) -> None:
    response = client.post(
        "/entries",
        json={"type": "food", "name": "Cheese", "calories_per_100g": 250, "weight": 40},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert entry_repository.entries[0].calories == pytest.approx(100)


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "food", "name": "Cheese"},
        {"type": "meal", "name": "Cheese", "calories": 10},
        {"type": "food", "calories": 10},
        {"type": "food", "name": "Cheese", "calories_per_100g": 250},
        {"type": "food", "name": "Cheese", "calories": 1, "calories_per_100g": 2},
    ],
)
def test_add_invalid_entry_is_bad_request(
    client: TestClient,
    headers: dict[str, str],
    entry_repository: InMemoryEntryRepository,
    payload: dict[str, object],
) -> None:
    response = client.post("/entries", json=payload, headers=headers)

    assert response.status_code == 400
    assert entry_repository.entries == []


def test_update_and_delete_entry(client: TestClient, headers: dict[str, str]) -> None:
    created = client.post(
        "/entries",
        json={"type": "food", "name": "Tea", "calories": 5, "date": "2024-05-01"},
        headers=headers,
    ).json()

    updated = client.put(
        f"/entries/{created['id']}", json={"calories": 40}, headers=headers
    )
    day = client.get("/entries/today?date=2024-05-01", headers=headers).json()
    deleted = client.delete(f"/entries/{created['id']}", headers=headers)
    deleted_again = client.delete(f"/entries/{created['id']}", headers=headers)

    assert updated.status_code == 200
    assert day["calories_in"] == 40
    assert deleted.json() == {"success": True}
    assert deleted_again.status_code == 404


def test_entries_of_other_users_are_not_found(
    client: TestClient,
    headers: dict[str, str],
    entry_repository: InMemoryEntryRepository,
) -> None:
    created = client.post(
        "/entries",
        json={"type": "food", "name": "Tea", "calories": 5},
        headers=headers,
    ).json()
    intruder = {"X-User-Id": str(uuid4())}

    updated = client.put(
        f"/entries/{created['id']}", json={"name": "Coffee"}, headers=intruder
    )
    deleted = client.delete(f"/entries/{created['id']}", headers=intruder)

    assert updated.status_code == 404
    assert deleted.status_code == 404
    assert entry_repository.entries[0].name == "Tea"


def test_daily_summary_without_profile_uses_fallback_goal(
    client: TestClient, headers: dict[str, str]
) -> None:
    client.post(
        "/entries",
        json={"type": "food", "name": "Bowl", "calories": 400, "date": "2024-05-01"},
        headers=headers,
    )

    body = client.get("/entries/summary?date=2024-05-01", headers=headers).json()

    assert body["targets"] == {
        "calories": 2400,
        "protein": 180,
        "carbs": 300,
        "fat": 53,
    }
    assert body["remaining_calories"] == 2000
    assert body["eaten"] == 400


def test_history_week(client: TestClient, headers: dict[str, str]) -> None:
    client.post(
        "/entries",
        json={"type": "food", "name": "Soup", "calories": 300, "date": "2024-05-07"},
        headers=headers,
    )

    response = client.get(
        "/entries/history?range=week&date=2024-05-07", headers=headers
    )

    points = response.json()
    assert len(points) == 7
    assert points[-1] == {
        "date": "2024-05-07",
        "calories_in": 300,
        "calories_out": 0,
    }


@pytest.mark.parametrize(
    "query",
    [
        "range=decade",
        "range=week&date=tomorrow",
        "date=2024-13-01",
        "date=20240310",
        "range=month&date=2024-W10-7",
    ],
)
def test_history_rejects_bad_parameters(
    client: TestClient, headers: dict[str, str], query: str
) -> None:
    response = client.get(f"/entries/history?{query}", headers=headers)

    assert response.status_code == 400


def test_favorite_duplicate_returns_conflict_with_id(
    client: TestClient, headers: dict[str, str]
) -> None:
    payload = {"type": "food", "name": "Oats", "calories": 380}
    created = client.post("/favorites", json=payload, headers=headers).json()

    response = client.post("/favorites", json=payload, headers=headers)
    listed = client.get("/favorites", headers=headers).json()

    assert response.status_code == 409
    assert response.json()["id"] == created["id"]
    assert len(listed) == 1
    assert listed[0]["weight"] == 100


def test_favorite_scaling_and_logging(
    client: TestClient,
    headers: dict[str, str],
    entry_repository: InMemoryEntryRepository,
) -> None:
    favorite = client.post(
        "/favorites",
        json={"type": "food", "name": "Oats", "calories": 200, "fat": 5},
        headers=headers,
    ).json()

    scaled = client.get(
        f"/favorites/{favorite['id']}/scaled?weight=150", headers=headers
    )
    invalid = client.get(
        f"/favorites/{favorite['id']}/scaled?weight=abc", headers=headers
    )
    logged = client.post(
        f"/favorites/{favorite['id']}/entries",
        json={"weight": 50, "date": "2024-05-01"},
        headers=headers,
    )

    assert scaled.json() == {
        "calories": 300,
        "protein": 0,
        "carbs": 0,
        "fat": 8,
        "weight": 150,
    }
    assert invalid.status_code == 400
    assert logged.status_code == 200
    assert entry_repository.entries[0].calories == 100


def test_save_entry_as_favorite(client: TestClient, headers: dict[str, str]) -> None:
    entry = client.post(
        "/entries",
        json={"type": "food", "name": "Bread", "calories": 160, "weight": 60},
        headers=headers,
    ).json()

    response = client.post(f"/entries/{entry['id']}/favorite", headers=headers)
    listed = client.get("/favorites", headers=headers).json()

    assert response.status_code == 200
    assert listed[0]["weight"] == 60


def test_delete_unknown_favorite_is_not_found(
    client: TestClient, headers: dict[str, str]
) -> None:
    response = client.delete(f"/favorites/{uuid4()}", headers=headers)

    assert response.status_code == 404


def test_analyze_food_text_returns_estimate(
    client: TestClient,
    headers: dict[str, str],
    entry_repository: InMemoryEntryRepository,
) -> None:
    response = client.post(
        "/analyze/food-text", json={"text": "a bowl of rice"}, headers=headers
    )

    assert response.status_code == 200
    assert response.json()["foods"][0]["name"] == "rice"
    assert entry_repository.entries == []


def test_analyze_without_text_is_bad_request(
    client: TestClient, headers: dict[str, str]
) -> None:
    response = client.post("/analyze/sport", json={}, headers=headers)

    assert response.status_code == 400


def test_analysis_failure_is_bad_gateway_without_debug(
    client: TestClient, headers: dict[str, str], analyzer: FakeAnalyzer
) -> None:
    analyzer.error = RuntimeError("quota exceeded")

    response = client.post("/analyze/food", json={"image": "ZmFrZQ=="}, headers=headers)

    assert response.status_code == 502
    assert "debug" not in response.json()


def test_analysis_failure_includes_debug_locally(
    container: AppContainer, headers: dict[str, str], analyzer: FakeAnalyzer
) -> None:
    container.settings = container.settings.model_copy(
        update={"environment": "local"}
    )
    analyzer.error = RuntimeError("quota exceeded")
    client = TestClient(create_app(container))

    response = client.post(
        "/analyze/food-text", json={"text": "toast"}, headers=headers
    )

    assert response.status_code == 502
    assert "RuntimeError: quota exceeded" in response.json()["debug"]


@pytest.mark.parametrize("day", ["20240310", "2024-W10-7"])
def test_daily_stats_rejects_non_calendar_dates(
    client: TestClient, headers: dict[str, str], day: str
) -> None:
    response = client.get(f"/entries/today?date={day}", headers=headers)

    assert response.status_code == 400


def test_favorite_with_zero_weight_is_bad_request(
    client: TestClient, headers: dict[str, str]
) -> None:
    response = client.post(
        "/favorites",
        json={"type": "food", "name": "Oats", "calories": 380, "weight": 0},
        headers=headers,
    )

    assert response.status_code == 400
    assert client.get("/favorites", headers=headers).json() == []
