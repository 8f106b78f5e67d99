"""Compaction of prior results and logged meals into bounded prompt context."""

import logging
import math
from datetime import datetime

from feastfit.domain.coach import (
    CoachContext,
    CompactDish,
    CompactRestaurant,
    DaySummary,
    LoggedMeal,
    SearchSnapshot,
)
from feastfit.domain.recommendations import RestaurantResult, SearchRequest

SNAPSHOT_RESTAURANTS = 5
PROMPT_RESTAURANTS = 3
DISHES_PER_RESTAURANT = 2

_logger = logging.getLogger(__name__)


def compact_search_snapshot(
    request: SearchRequest,
    results: list[RestaurantResult],
    timestamp: datetime,
) -> SearchSnapshot:
    """Summarize a finished search for later coach conversations."""
    return SearchSnapshot(
        location=request.location,
        calories_target=request.calories_target,
        protein_min=request.protein_min,
        diet=request.diet,
        query=request.query,
        timestamp=timestamp.isoformat(),
        restaurants=[
            CompactRestaurant(
                name=result.name,
                rating=result.rating,
                fit_score=result.fit_score,
                fit_label=result.fit_label,
                dishes=[
                    CompactDish(
                        name=dish.name,
                        estimated_calories=dish.estimated_calories,
                        estimated_protein=dish.estimated_protein,
                        confidence=dish.confidence,
                    )
                    for dish in result.dishes[:DISHES_PER_RESTAURANT]
                ],
            )
            for result in results[:SNAPSHOT_RESTAURANTS]
        ],
    )


def parse_snapshot(raw: object) -> SearchSnapshot | None:
    """Rebuild a snapshot from caller-supplied JSON, capped to its size bounds."""
    if not isinstance(raw, dict):
        return None
    restaurants = raw.get("restaurants")
    return SearchSnapshot(
        location=_text(raw.get("location")),
        calories_target=_number(raw.get("caloriesTarget")),
        protein_min=_number(raw.get("proteinMin")),
        diet=_text(raw.get("diet")),
        query=_text(raw.get("query")),
        timestamp=_text(raw.get("timestamp")),
        restaurants=parse_restaurants(restaurants, SNAPSHOT_RESTAURANTS),
    )


def parse_restaurants(raw: object, limit: int) -> list[CompactRestaurant]:
    """Parse up to ``limit`` restaurants with at most two dishes each."""
    if not isinstance(raw, list):
        return []
    restaurants: list[CompactRestaurant] = []
    for item in raw:
        if len(restaurants) >= limit:
            break
        if not isinstance(item, dict):
            continue
        dishes = item.get("dishes") if isinstance(item.get("dishes"), list) else []
        score = _number(item.get("fitScore"))
        restaurants.append(
            CompactRestaurant(
                name=_text(item.get("name")) or "Unknown",
                rating=_number(item.get("rating")),
                fit_score=int(score) if score is not None else None,
                fit_label=_text(item.get("fitLabel")),
                dishes=[
                    CompactDish(
                        name=_text(dish.get("name")) or "Unknown",
                        estimated_calories=_number(dish.get("estimatedCalories")),
                        estimated_protein=_number(dish.get("estimatedProtein")),
                        confidence=_number(dish.get("confidence")),
                    )
                    for dish in dishes
                    if isinstance(dish, dict)
                ][:DISHES_PER_RESTAURANT],
            )
        )
    return restaurants


def parse_logged_meals(raw: object) -> list[LoggedMeal]:
    """Parse guest meal logs, skipping entries without a creation timestamp."""
    if not isinstance(raw, list):
        return []
    meals: list[LoggedMeal] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        created_at = _text(item.get("createdAt"))
        if not created_at:
            continue
        meals.append(
            LoggedMeal(
                created_at=created_at,
                calories=_number(item.get("calories")) or 0,
                protein=_number(item.get("protein")) or 0,
                restaurant_name=_text(item.get("restaurantName")),
                dish_name=_text(item.get("dishName")),
            )
        )
    if len(meals) < len(raw):
        _logger.info("Skipped %s malformed guest log(s)", len(raw) - len(meals))
    return meals


def summarize_day(
    logs: list[LoggedMeal], day: str
) -> tuple[list[LoggedMeal], DaySummary]:
    """Filter logs by an ISO date prefix and total their macros."""
    todays = [log for log in logs if log.created_at.startswith(day)]
    summary = DaySummary(
        meal_count=len(todays),
        calories=sum(log.calories for log in todays),
        protein=sum(log.protein for log in todays),
    )
    return todays, summary


def build_coach_context(
    snapshot: SearchSnapshot | None, logs: list[LoggedMeal], now: datetime
) -> CoachContext:
    """Combine the last search with today's logged meals."""
    todays, summary = summarize_day(logs, now.date().isoformat())
    return CoachContext(snapshot=snapshot, today_logs=todays, today=summary)


def compact_restaurants(
    restaurants: list[CompactRestaurant], limit: int = PROMPT_RESTAURANTS
) -> list[dict[str, object]]:
    """Return the JSON-ready restaurant list embedded into follow-up prompts."""
    return [
        {
            "name": restaurant.name,
            "fitScore": restaurant.fit_score,
            "dishes": [
                {
                    "name": dish.name,
                    "kcal": dish.estimated_calories,
                    "protein": dish.estimated_protein,
                }
                for dish in restaurant.dishes[:DISHES_PER_RESTAURANT]
            ],
        }
        for restaurant in restaurants[:limit]
    ]


def _text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _number(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number
