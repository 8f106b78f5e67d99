"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field

import pytest
from postgrest import APIError

from feastfit.adapters.supabase_meal_log_repository import SupabaseMealLogRepository
from feastfit.domain.meals import LogMealRequest
from feastfit.errors import PersistenceError


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    last_limit: int | None = None
    error: Exception | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _log_request() -> LogMealRequest:
    return LogMealRequest(
        user_id="user-1",
        restaurant_id="biz-1",
        restaurant_name="Green Bowl",
        fit_score=92,
        fit_label="Perfect fit",
        dish_name="Chicken bowl",
        calories=600,
        protein=40,
        meal_type="lunch",
        location_text="SF",
    )


def test_supabase_meal_log_repository_inserts_row() -> None:
    client = FakeSupabaseClient()
    logs_table = client.table("meal_logs")
    logs_table.queue("insert", [{"id": "log-1"}])

    repository = SupabaseMealLogRepository(client)  # type: ignore[arg-type]
    repository.insert_meal_log(_log_request())

    assert isinstance(logs_table.last_payload, dict)
    assert logs_table.last_payload["user_id"] == "user-1"
    assert logs_table.last_payload["fit_label"] == "Perfect fit"
    assert logs_table.last_payload["carbs"] is None


def test_supabase_meal_log_repository_empty_insert_fails() -> None:
    client = FakeSupabaseClient()

    repository = SupabaseMealLogRepository(client)  # type: ignore[arg-type]

    with pytest.raises(PersistenceError):
        repository.insert_meal_log(_log_request())


def test_supabase_meal_log_repository_lists_rows() -> None:
    client = FakeSupabaseClient()
    logs_table = client.table("meal_logs")
    logs_table.queue(
        "select",
        [
            {
                "id": "log-1",
                "user_id": "user-1",
                "restaurant_id": "biz-1",
                "restaurant_name": "Green Bowl",
                "fit_score": 92,
                "fit_label": "Perfect fit",
                "dish_name": "Chicken bowl",
                "calories": 600,
                "protein": 40,
                "carbs": None,
                "fat": 12,
                "meal_type": "lunch",
                "location_text": "SF",
                "created_at": "2026-10-19T12:00:00+00:00",
            }
        ],
    )

    repository = SupabaseMealLogRepository(client)  # type: ignore[arg-type]
    logs = repository.list_meal_logs("user-1", limit=5)

    assert len(logs) == 1
    entry = logs[0]
    assert entry.calories == 600.0
    assert entry.fat == 12.0
    assert entry.carbs is None
    assert entry.created_at is not None
    assert entry.created_at.year == 2026
    assert logs_table.last_filters == [("user_id", "user-1")]
    assert logs_table.last_order == ("created_at", True)
    assert logs_table.last_limit == 5


def test_supabase_meal_log_repository_maps_api_errors() -> None:
    client = FakeSupabaseClient()
    client.table("meal_logs").error = APIError(
        {"message": "permission denied", "code": "42501"}
    )

    repository = SupabaseMealLogRepository(client)  # type: ignore[arg-type]

    with pytest.raises(PersistenceError) as insert_error:
        repository.insert_meal_log(_log_request())
    with pytest.raises(PersistenceError) as fetch_error:
        repository.list_meal_logs("user-1", limit=5)

    assert insert_error.value.message == "Failed to log meal"
    assert fetch_error.value.message == "Failed to fetch logs"
