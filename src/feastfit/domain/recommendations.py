"""Domain models for macro-fit restaurant recommendations."""

from dataclasses import dataclass, field
from typing import Literal

MealType = Literal["breakfast", "lunch", "dinner", "snack"]

MEAL_TYPES: tuple[str, ...] = ("breakfast", "lunch", "dinner", "snack")


@dataclass(frozen=True)
class FitTarget:
    """Per-meal calorie and protein target."""

    calories_target: float
    protein_min: float


@dataclass(frozen=True)
class SearchRequest:
    """A structured restaurant search."""

    location: str
    calories_target: float
    protein_min: float
    query: str
    diet: str | None = None
    meal_type: MealType = "lunch"
    radius_meters: int | None = None
    price_levels: tuple[int, ...] = ()

    @property
    def target(self) -> FitTarget:
        """Return the macro target for this search."""
        return FitTarget(
            calories_target=self.calories_target, protein_min=self.protein_min
        )


@dataclass(frozen=True)
class GeoContext:
    """Locale and coordinates sent alongside an upstream prompt."""

    locale: str
    latitude: float | None = None
    longitude: float | None = None

    def as_user_context(self) -> dict[str, object]:
        """Return the upstream `user_context` payload."""
        payload: dict[str, object] = {"locale": self.locale}
        if self.latitude is not None and self.longitude is not None:
            payload["latitude"] = self.latitude
            payload["longitude"] = self.longitude
        return payload


@dataclass(frozen=True)
class DishEstimate:
    """Estimated macros for a suggested dish."""

    name: str
    estimated_calories: float
    estimated_protein: float
    confidence: float
    description: str | None = None
    estimated_carbs: float | None = None
    estimated_fat: float | None = None


@dataclass(frozen=True)
class ScoreBreakdown:
    """Perfect Fit score with its four sub-scores (all 0-100)."""

    score: int
    label: str
    macro_fit_score: int
    distance_score: int
    ai_confidence_score: int
    meal_type_score: int


@dataclass(frozen=True)
class RestaurantResult:
    """A scored restaurant recommendation."""

    id: str
    name: str
    rating: float
    breakdown: ScoreBreakdown
    reason: str
    dishes: list[DishEstimate] = field(default_factory=list)
    price: str | None = None
    distance_meters: float | None = None
    url: str | None = None
    image_url: str | None = None
    address: str | None = None

    @property
    def fit_score(self) -> int:
        return self.breakdown.score

    @property
    def fit_label(self) -> str:
        return self.breakdown.label
