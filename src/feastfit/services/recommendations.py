"""Macro-fit recommendation pipeline and its follow-up conversations."""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from feastfit.domain.coach import LoggedMeal, RefineRequest, SearchSnapshot
from feastfit.domain.recommendations import (
    MEAL_TYPES,
    DishEstimate,
    RestaurantResult,
    SearchRequest,
)
from feastfit.errors import RateLimitError, ValidationError
from feastfit.services.context import build_coach_context
from feastfit.services.fallback import synthesize_fallback
from feastfit.services.macros import extract_macros
from feastfit.services.normalizer import extract_businesses
from feastfit.services.prompts import (
    build_coach_prompt,
    build_refine_prompt,
    build_search_prompt,
)
from feastfit.services.rate_limit import RateLimiter
from feastfit.services.scoring import FitScorer

MAX_CANDIDATES = 5
PRICE_LEVELS = range(1, 5)
MAX_RADIUS_METERS = 40_000
DEFAULT_DISH_NAME = "Suggested macro-friendly option"
DEFAULT_DESCRIPTION = "Macro-friendly option inferred from Yelp AI."
DEFAULT_REFINE_REPLY = "I adjusted your options based on your request."
DEFAULT_COACH_REPLY = "I'm sorry, I couldn't generate a response right now."

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class ChatClient(Protocol):
    """Interface for the conversational business-search provider."""

    async def chat(
        self, query: str, user_context: dict[str, object]
    ) -> dict[str, object]:
        """Send a prompt and return the raw JSON payload."""


@dataclass
class RecommendationService:
    """Runs searches and the refine/coach follow-ups against the provider."""

    client: ChatClient
    rate_limiter: RateLimiter
    scorer: FitScorer = field(default_factory=FitScorer)
    max_candidates: int = MAX_CANDIDATES
    clock: Callable[[], datetime] = _utcnow

    async def search(
        self, request: SearchRequest, client_id: str
    ) -> list[RestaurantResult]:
        """Return scored restaurants for a search, best fit first."""
        validate_search_request(request)
        if not self.rate_limiter.admit(client_id):
            raise RateLimitError
        prompt, geo = build_search_prompt(request)
        payload = await self.client.chat(prompt, geo.as_user_context())
        businesses = extract_businesses(payload)
        _logger.info(
            "Search returned %s business(es) for query=%r",
            len(businesses),
            request.query,
        )
        results = [
            self._to_result(business, index, request)
            for index, business in enumerate(businesses[: self.max_candidates])
        ]
        if not results:
            _logger.info("No usable businesses; returning fallback result")
            results = synthesize_fallback(
                self.scorer, request.target, request.location, request.meal_type
            )
        return sorted(results, key=lambda result: result.fit_score, reverse=True)

    async def refine(self, request: RefineRequest) -> str:
        """Ask the provider to re-explain prior results under a new constraint."""
        validate_refine_request(request)
        prompt, geo = build_refine_prompt(request)
        payload = await self.client.chat(prompt, geo.as_user_context())
        return _reply_text(payload, DEFAULT_REFINE_REPLY)

    async def coach(
        self,
        message: str,
        snapshot: SearchSnapshot | None = None,
        logs: list[LoggedMeal] | None = None,
    ) -> str:
        """Answer a coaching question using the last search and today's meals."""
        if not isinstance(message, str) or not message.strip():
            raise ValidationError("Invalid message")
        context = build_coach_context(snapshot, logs or [], self.clock())
        prompt, geo = build_coach_prompt(message, context)
        payload = await self.client.chat(prompt, geo.as_user_context())
        return _reply_text(payload, DEFAULT_COACH_REPLY)

    def _to_result(
        self, business: dict[str, object], index: int, request: SearchRequest
    ) -> RestaurantResult:
        contextual = _as_dict(business.get("contextual_info"))
        summaries = _as_dict(business.get("summaries"))
        description = (
            _as_text(summaries.get("short"))
            or _as_text(summaries.get("medium"))
            or _as_text(contextual.get("summary"))
            or DEFAULT_DESCRIPTION
        )
        calories, protein = extract_macros(
            description, request.calories_target, request.protein_min
        )
        name = _as_text(business.get("name")) or "Unknown"
        distance = _as_number(business.get("distance"))
        confidence = self.scorer.config.default_confidence
        breakdown = self.scorer.score(
            calories=calories,
            protein=protein,
            distance_meters=distance,
            ai_confidence=confidence,
            business_name=name,
            meal_type=request.meal_type,
            target=request.target,
        )
        return RestaurantResult(
            id=_as_text(business.get("id")) or f"biz-{index}",
            name=name,
            rating=_as_number(business.get("rating")) or 0,
            price=_as_text(business.get("price")),
            distance_meters=distance,
            url=_as_text(business.get("url")),
            image_url=_first_photo_url(contextual)
            or _as_text(business.get("image_url")),
            address=_address(business.get("location")),
            dishes=[
                DishEstimate(
                    name=DEFAULT_DISH_NAME,
                    description=description,
                    estimated_calories=calories,
                    estimated_protein=protein,
                    confidence=confidence,
                )
            ],
            breakdown=breakdown,
            reason=_as_text(contextual.get("summary"))
            or _as_text(summaries.get("short"))
            or (
                f"Matches your ~{_plain(request.calories_target)} kcal / "
                "high-protein request."
            ),
        )


def validate_search_request(request: SearchRequest) -> None:
    """Raise ValidationError unless the required search fields are usable."""
    if not _as_text(request.location) or not _as_text(request.query):
        raise ValidationError
    if not _is_positive(request.calories_target) or not _is_positive(
        request.protein_min
    ):
        raise ValidationError
    if request.meal_type not in MEAL_TYPES:
        raise ValidationError(f"Unknown meal type: {request.meal_type}")
    if request.radius_meters is not None and not (
        0 < request.radius_meters <= MAX_RADIUS_METERS
    ):
        raise ValidationError(f"radiusMeters must be 1..{MAX_RADIUS_METERS}")
    if any(level not in PRICE_LEVELS for level in request.price_levels):
        raise ValidationError("priceLevels must be between 1 and 4")


def validate_refine_request(request: RefineRequest) -> None:
    """Raise ValidationError unless the refine fields are usable."""
    required = (request.location, request.query, request.refine_message)
    if not all(_as_text(value) for value in required):
        raise ValidationError
    if not _is_positive(request.calories_target) or not _is_positive(
        request.protein_min
    ):
        raise ValidationError


def _reply_text(payload: object, default: str) -> str:
    body = _as_dict(payload)
    for text in (_as_dict(body.get("response")).get("text"), body.get("text")):
        if isinstance(text, str):
            return text
    return default


def _first_photo_url(contextual: dict[str, object]) -> str | None:
    photos = contextual.get("photos")
    if isinstance(photos, list) and photos:
        return _as_text(_as_dict(photos[0]).get("original_url"))
    return None


def _address(location: object) -> str | None:
    parts = [
        _as_text(_as_dict(location).get(key)) for key in ("address1", "city")
    ]
    present = [part for part in parts if part]
    return ", ".join(present) if present else None


def _as_dict(value: object) -> dict[str, object]:
    return value if isinstance(value, dict) else {}


def _as_text(value: object) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _as_number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value if math.isfinite(value) else None


def _is_positive(value: object) -> bool:
    number = _as_number(value)
    return number is not None and number > 0


def _plain(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
