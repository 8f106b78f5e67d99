"""Pydantic models for the JSON API payloads."""

from pydantic import BaseModel, Field

from feastfit.domain.coach import RefineRequest, SearchSnapshot
from feastfit.domain.meals import LogMealRequest, MealLogEntry
from feastfit.domain.recommendations import RestaurantResult, SearchRequest
from feastfit.services.context import PROMPT_RESTAURANTS, parse_restaurants


class SearchRestaurantsPayload(BaseModel):
    """Search request body."""

    location: str | None = None
    calories_target: float | None = Field(default=None, alias="caloriesTarget")
    protein_min: float | None = Field(default=None, alias="proteinMin")
    diet: str | None = None
    query: str | None = None
    meal_type: str = Field(default="lunch", alias="mealType")
    radius_meters: int | None = Field(default=None, alias="radiusMeters")
    price_levels: list[int] | None = Field(default=None, alias="priceLevels")

    def to_domain(self) -> SearchRequest:
        """Convert to the domain request; validation happens in the service."""
        return SearchRequest(
            location=self.location or "",
            calories_target=self.calories_target or 0,
            protein_min=self.protein_min or 0,
            query=self.query or "",
            diet=self.diet or None,
            meal_type=self.meal_type,  # type: ignore[arg-type]
            radius_meters=self.radius_meters,
            price_levels=tuple(self.price_levels or ()),
        )


class RefineResultsPayload(BaseModel):
    """Refine request body."""

    location: str | None = None
    calories_target: float | None = Field(default=None, alias="caloriesTarget")
    protein_min: float | None = Field(default=None, alias="proteinMin")
    diet: str | None = None
    query: str | None = None
    refine_message: str | None = Field(default=None, alias="refineMessage")
    restaurants: list[dict[str, object]] = Field(default_factory=list)

    def to_domain(self) -> RefineRequest:
        """Convert to the domain request with a capped restaurant list."""
        return RefineRequest(
            location=self.location or "",
            calories_target=self.calories_target or 0,
            protein_min=self.protein_min or 0,
            query=self.query or "",
            refine_message=self.refine_message or "",
            diet=self.diet or None,
            restaurants=parse_restaurants(self.restaurants, PROMPT_RESTAURANTS),
        )


class CoachPayload(BaseModel):
    """Coach request body."""

    message: str | None = None


class LoggedRestaurant(BaseModel):
    """Restaurant fields kept with a logged meal."""

    id: str
    name: str
    url: str | None = None
    address: str | None = None
    fit_score: int | None = Field(default=None, alias="fitScore")
    fit_label: str | None = Field(default=None, alias="fitLabel")


class LoggedDish(BaseModel):
    """Dish fields kept with a logged meal."""

    name: str
    estimated_calories: float = Field(alias="estimatedCalories")
    estimated_protein: float = Field(alias="estimatedProtein")
    estimated_carbs: float | None = Field(default=None, alias="estimatedCarbs")
    estimated_fat: float | None = Field(default=None, alias="estimatedFat")


class LogMealPayload(BaseModel):
    """Log-meal request body."""

    user_id: str | None = Field(default=None, alias="userId")
    restaurant: LoggedRestaurant | None = None
    dish: LoggedDish | None = None
    meal_type: str | None = Field(default=None, alias="mealType")
    location_text: str | None = Field(default=None, alias="locationText")

    def to_domain(self) -> LogMealRequest | None:
        """Return the domain request, or None when required parts are missing."""
        if not self.user_id or self.restaurant is None or self.dish is None:
            return None
        return LogMealRequest(
            user_id=self.user_id,
            restaurant_id=self.restaurant.id,
            restaurant_name=self.restaurant.name,
            restaurant_url=self.restaurant.url,
            restaurant_address=self.restaurant.address,
            fit_score=self.restaurant.fit_score,
            fit_label=self.restaurant.fit_label,
            dish_name=self.dish.name,
            calories=self.dish.estimated_calories,
            protein=self.dish.estimated_protein,
            carbs=self.dish.estimated_carbs,
            fat=self.dish.estimated_fat,
            meal_type=self.meal_type or "lunch",
            location_text=self.location_text,
        )


def restaurant_to_json(result: RestaurantResult) -> dict[str, object]:
    """Serialize a result using the camelCase wire format."""
    breakdown = result.breakdown
    return _without_none(
        {
            "id": result.id,
            "name": result.name,
            "rating": result.rating,
            "price": result.price,
            "distanceMeters": result.distance_meters,
            "url": result.url,
            "imageUrl": result.image_url,
            "address": result.address,
            "dishes": [
                _without_none(
                    {
                        "name": dish.name,
                        "description": dish.description,
                        "estimatedCalories": dish.estimated_calories,
                        "estimatedProtein": dish.estimated_protein,
                        "estimatedCarbs": dish.estimated_carbs,
                        "estimatedFat": dish.estimated_fat,
                        "confidence": dish.confidence,
                    }
                )
                for dish in result.dishes
            ],
            "fitScore": breakdown.score,
            "fitLabel": breakdown.label,
            "reason": result.reason,
            "scoreBreakdown": {
                "macroFitScore": breakdown.macro_fit_score,
                "distanceScore": breakdown.distance_score,
                "aiConfidenceScore": breakdown.ai_confidence_score,
                "mealTypeScore": breakdown.meal_type_score,
            },
        }
    )


def meal_log_to_json(entry: MealLogEntry) -> dict[str, object]:
    """Serialize a meal log row."""
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "restaurant_id": entry.restaurant_id,
        "restaurant_name": entry.restaurant_name,
        "restaurant_url": entry.restaurant_url,
        "restaurant_address": entry.restaurant_address,
        "fit_score": entry.fit_score,
        "fit_label": entry.fit_label,
        "dish_name": entry.dish_name,
        "calories": entry.calories,
        "protein": entry.protein,
        "carbs": entry.carbs,
        "fat": entry.fat,
        "meal_type": entry.meal_type,
        "location_text": entry.location_text,
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
    }


def _without_none(payload: dict[str, object]) -> dict[str, object]:
    return {key: value for key, value in payload.items() if value is not None}


def snapshot_to_json(snapshot: SearchSnapshot) -> dict[str, object]:
    """Serialize a search snapshot in the shape the coach header accepts."""
    return _without_none(
        {
            "location": snapshot.location,
            "caloriesTarget": snapshot.calories_target,
            "proteinMin": snapshot.protein_min,
            "diet": snapshot.diet,
            "query": snapshot.query,
            "timestamp": snapshot.timestamp,
            "restaurants": [
                _without_none(
                    {
                        "name": restaurant.name,
                        "rating": restaurant.rating,
                        "fitScore": restaurant.fit_score,
                        "fitLabel": restaurant.fit_label,
                        "dishes": [
                            _without_none(
                                {
                                    "name": dish.name,
                                    "estimatedCalories": dish.estimated_calories,
                                    "estimatedProtein": dish.estimated_protein,
                                    "confidence": dish.confidence,
                                }
                            )
                            for dish in restaurant.dishes
                        ],
                    }
                )
                for restaurant in snapshot.restaurants
            ],
        }
    )
