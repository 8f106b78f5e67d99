"""Domain models for the refine and coach conversational flows."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CompactDish:
    """Dish entry kept in a compacted search snapshot."""

    name: str
    estimated_calories: float | None
    estimated_protein: float | None
    confidence: float | None = None


@dataclass(frozen=True)
class CompactRestaurant:
    """Restaurant entry kept in a compacted search snapshot."""

    name: str
    fit_score: int | None
    dishes: list[CompactDish] = field(default_factory=list)
    rating: float | None = None
    fit_label: str | None = None


@dataclass(frozen=True)
class SearchSnapshot:
    """Size-bounded summary of the last search a user ran."""

    location: str | None
    calories_target: float | None
    protein_min: float | None
    diet: str | None
    query: str | None
    timestamp: str | None
    restaurants: list[CompactRestaurant] = field(default_factory=list)


@dataclass(frozen=True)
class LoggedMeal:
    """A meal logged in a guest session."""

    created_at: str
    calories: float
    protein: float
    restaurant_name: str | None = None
    dish_name: str | None = None


@dataclass(frozen=True)
class DaySummary:
    """Totals for the meals logged on a single day."""

    meal_count: int
    calories: float
    protein: float


@dataclass(frozen=True)
class CoachContext:
    """Everything the coach prompt is allowed to know about the user."""

    snapshot: SearchSnapshot | None
    today_logs: list[LoggedMeal]
    today: DaySummary


@dataclass(frozen=True)
class RefineRequest:
    """A follow-up message that re-explains prior results."""

    location: str
    calories_target: float
    protein_min: float
    query: str
    refine_message: str
    restaurants: list[CompactRestaurant] = field(default_factory=list)
    diet: str | None = None
