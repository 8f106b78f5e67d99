"""Placeholder result used when the provider returns no usable businesses."""

from feastfit.domain.recommendations import DishEstimate, FitTarget, RestaurantResult
from feastfit.services.scoring import FitScorer

FALLBACK_ID = "fallback-mock-1"
FALLBACK_NAME = "FeastFit Demo Kitchen"
FALLBACK_DISH = "High-Protein Demo Bowl"
FALLBACK_DISTANCE_METERS = 800
FALLBACK_CONFIDENCE = 0.3


def synthesize_fallback(
    scorer: FitScorer, target: FitTarget, location: str, meal_type: str
) -> list[RestaurantResult]:
    """Return a single demo result whose dish matches the target exactly."""
    breakdown = scorer.score(
        calories=target.calories_target,
        protein=target.protein_min,
        distance_meters=FALLBACK_DISTANCE_METERS,
        ai_confidence=FALLBACK_CONFIDENCE,
        business_name=FALLBACK_NAME,
        meal_type=meal_type,
        target=target,
    )
    dish = DishEstimate(
        name=FALLBACK_DISH,
        description=(
            "Sample macro-friendly bowl used when Yelp AI returns no structured "
            "businesses."
        ),
        estimated_calories=target.calories_target,
        estimated_protein=target.protein_min,
        confidence=FALLBACK_CONFIDENCE,
    )
    return [
        RestaurantResult(
            id=FALLBACK_ID,
            name=FALLBACK_NAME,
            rating=4.5,
            price="$$",
            distance_meters=FALLBACK_DISTANCE_METERS,
            address=location,
            dishes=[dish],
            breakdown=breakdown,
            reason=(
                "Fallback result shown because Yelp AI did not return structured "
                "businesses."
            ),
        )
    ]
