"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from feastfit.config import Settings
from feastfit.containers import AppContainer
from feastfit.domain.meals import LogMealRequest, MealLogEntry
from feastfit.services.meal_logs import MealLogRepository, MealLogService
from feastfit.services.rate_limit import RateLimiter
from feastfit.services.recommendations import ChatClient, RecommendationService
from feastfit.services.scoring import FitScorer

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)

MACRO_SUMMARY = (
    "Grilled chicken bowl with extra veggies, light sauce: "
    "roughly 550–650 kcal, 35–45g protein."
)


def make_business(  # noqa: PLR0913
    business_id: str,
    name: str,
    distance: float | None = None,
    summary: str = MACRO_SUMMARY,
    rating: float = 4.4,
) -> dict[str, object]:
    """Build a business shaped like a Yelp AI chat entity."""
    business: dict[str, object] = {
        "id": business_id,
        "name": name,
        "rating": rating,
        "price": "$$",
        "url": f"https://www.yelp.com/biz/{business_id}",
        "image_url": f"https://img.example/{business_id}.jpg",
        "location": {"address1": "1 Market St", "city": "San Francisco"},
        "summaries": {"short": summary},
    }
    if distance is not None:
        business["distance"] = distance
    return business


@dataclass
class FakeChatClient(ChatClient):
    """Fake chat client that records prompts and returns a fixed payload."""

    payload: dict[str, object] = field(default_factory=dict)
    error: Exception | None = None
    calls: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    async def chat(
        self, query: str, user_context: dict[str, object]
    ) -> dict[str, object]:
        self.calls.append((query, user_context))
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class InMemoryMealLogRepository(MealLogRepository):
    """In-memory meal log repository for tests."""

    entries: list[MealLogEntry] = field(default_factory=list)

    def insert_meal_log(self, request: LogMealRequest) -> None:
        self.entries.append(
            MealLogEntry(
                id=str(len(self.entries) + 1),
                user_id=request.user_id,
                restaurant_id=request.restaurant_id,
                restaurant_name=request.restaurant_name,
                restaurant_url=request.restaurant_url,
                restaurant_address=request.restaurant_address,
                fit_score=request.fit_score,
                fit_label=request.fit_label,
                dish_name=request.dish_name,
                calories=request.calories,
                protein=request.protein,
                carbs=request.carbs,
                fat=request.fat,
                meal_type=request.meal_type,
                location_text=request.location_text,
                created_at=datetime.now(tz=UTC),
            )
        )

    def list_meal_logs(self, user_id: str, limit: int) -> list[MealLogEntry]:
        logs = [entry for entry in self.entries if entry.user_id == user_id]
        return sorted(logs, key=lambda entry: entry.created_at, reverse=True)[:limit]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings() -> Settings:
    return Settings(yelp_api_key="yelp-key")


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def meal_log_repository() -> InMemoryMealLogRepository:
    return InMemoryMealLogRepository()


@pytest.fixture
def recommendation_service(chat_client: FakeChatClient) -> RecommendationService:
    return RecommendationService(
        client=chat_client,
        rate_limiter=RateLimiter(),
        scorer=FitScorer(),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def container(
    settings: Settings,
    recommendation_service: RecommendationService,
    meal_log_repository: InMemoryMealLogRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        recommendation_service=recommendation_service,
        meal_log_service=MealLogService(meal_log_repository),
        close_resources=close_resources,
    )
