"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LogMealRequest:
    """A request to log a recommended dish as eaten."""

    user_id: str
    restaurant_id: str
    restaurant_name: str
    fit_score: int | None
    fit_label: str | None
    dish_name: str
    calories: float
    protein: float
    carbs: float | None = None
    fat: float | None = None
    meal_type: str = "lunch"
    restaurant_url: str | None = None
    restaurant_address: str | None = None
    location_text: str | None = None


@dataclass(frozen=True)
class MealLogEntry:
    """A persisted meal log row."""

    id: str | None
    user_id: str
    restaurant_id: str | None
    restaurant_name: str | None
    fit_score: int | None
    fit_label: str | None
    dish_name: str | None
    calories: float | None
    protein: float | None
    carbs: float | None
    fat: float | None
    meal_type: str | None
    location_text: str | None
    created_at: datetime | None
    restaurant_url: str | None = None
    restaurant_address: str | None = None
