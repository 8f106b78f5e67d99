"""Supabase repository for meal logs."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from postgrest import APIError
from supabase import Client

from feastfit.domain.meals import LogMealRequest, MealLogEntry
from feastfit.errors import PersistenceError
from feastfit.services.meal_logs import MealLogRepository

INSERT_FAILED = "Failed to log meal"
FETCH_FAILED = "Failed to fetch logs"

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation for meal logs."""

    client: Client

    def insert_meal_log(self, request: LogMealRequest) -> None:
        """Insert a meal log row."""
        query = self.client.table("meal_logs").insert(
            {
                "user_id": request.user_id,
                "restaurant_id": request.restaurant_id,
                "restaurant_name": request.restaurant_name,
                "restaurant_url": request.restaurant_url,
                "restaurant_address": request.restaurant_address,
                "fit_score": request.fit_score,
                "fit_label": request.fit_label,
                "dish_name": request.dish_name,
                "calories": request.calories,
                "protein": request.protein,
                "carbs": request.carbs,
                "fat": request.fat,
                "meal_type": request.meal_type,
                "location_text": request.location_text,
            }
        )
        response = _execute(query, INSERT_FAILED)
        if not response.data:
            raise PersistenceError(INSERT_FAILED)

    def list_meal_logs(self, user_id: str, limit: int) -> list[MealLogEntry]:
        """Return a user's meal logs, newest first."""
        query = (
            self.client.table("meal_logs")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit)
        )
        response = _execute(query, FETCH_FAILED)
        return [_parse_row(row) for row in response.data or []]


def _execute(query: Any, failure_message: str) -> Any:
    try:
        return query.execute()
    except APIError as exc:
        _logger.error("%s: %s", failure_message, exc)
        raise PersistenceError(failure_message) from exc


def _parse_row(row: dict[str, object]) -> MealLogEntry:
    created_at_raw = row.get("created_at")
    return MealLogEntry(
        id=_optional_str(row.get("id")),
        user_id=str(row.get("user_id", "")),
        restaurant_id=_optional_str(row.get("restaurant_id")),
        restaurant_name=_optional_str(row.get("restaurant_name")),
        restaurant_url=_optional_str(row.get("restaurant_url")),
        restaurant_address=_optional_str(row.get("restaurant_address")),
        fit_score=_optional_int(row.get("fit_score")),
        fit_label=_optional_str(row.get("fit_label")),
        dish_name=_optional_str(row.get("dish_name")),
        calories=_optional_float(row.get("calories")),
        protein=_optional_float(row.get("protein")),
        carbs=_optional_float(row.get("carbs")),
        fat=_optional_float(row.get("fat")),
        meal_type=_optional_str(row.get("meal_type")),
        location_text=_optional_str(row.get("location_text")),
        created_at=(
            datetime.fromisoformat(created_at_raw)
            if isinstance(created_at_raw, str) and created_at_raw
            else None
        ),
    )


def _optional_str(value: object) -> str | None:
    return str(value) if value is not None else None


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None


def _optional_int(value: object) -> int | None:
    return int(value) if value is not None else None
