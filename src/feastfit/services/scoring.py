"""Perfect Fit scoring for restaurant candidates."""

import math
from dataclasses import dataclass, field

from feastfit.domain.recommendations import FitTarget, ScoreBreakdown
from feastfit.services.macros import round_half_up

DEFAULT_MEAL_KEYWORDS: dict[str, tuple[str, ...]] = {
    "breakfast": (
        "breakfast",
        "brunch",
        "cafe",
        "coffee",
        "bagel",
        "pancake",
        "waffle",
    ),
    "lunch": ("lunch", "sandwich", "salad", "bowl", "deli", "cafe", "bistro"),
    "dinner": (
        "dinner",
        "steakhouse",
        "fine dining",
        "restaurant",
        "tavern",
        "grill",
    ),
    "snack": ("snack", "smoothie", "juice", "cafe", "bar", "lounge"),
}

DEFAULT_LABELS: tuple[tuple[int, str], ...] = (
    (90, "Perfect fit"),
    (80, "Excellent fit"),
    (70, "Great fit"),
    (60, "Good fit"),
)


@dataclass(frozen=True)
class FitScoreConfig:
    """Weights, distance bands, keywords and label cutoffs for scoring."""

    macro_weight: float = 0.4
    distance_weight: float = 0.2
    confidence_weight: float = 0.2
    meal_type_weight: float = 0.2
    calorie_share: float = 0.7
    protein_share: float = 0.3
    near_km: float = 2.0
    mid_km: float = 5.0
    far_km: float = 10.0
    mid_distance_score: float = 0.7
    keyword_hit_score: float = 1.0
    keyword_miss_score: float = 0.5
    default_confidence: float = 0.6
    default_meal_type: str = "lunch"
    fallback_label: str = "Decent fit"
    labels: tuple[tuple[int, str], ...] = DEFAULT_LABELS
    meal_keywords: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_MEAL_KEYWORDS)
    )


@dataclass(frozen=True)
class FitScorer:
    """Pure four-factor scorer: macro fit, distance, AI confidence, meal type."""

    config: FitScoreConfig = field(default_factory=FitScoreConfig)

    def score(  # noqa: PLR0913
        self,
        calories: float,
        protein: float,
        distance_meters: float | None,
        ai_confidence: float,
        business_name: str,
        meal_type: str,
        target: FitTarget,
    ) -> ScoreBreakdown:
        """Score a candidate against the target and return its breakdown."""
        cfg = self.config
        macro = self.macro_fit(calories, protein, target)
        distance = self.distance_fit(distance_meters)
        confidence = _clamp_unit(ai_confidence)
        meal = self.meal_type_fit(business_name, meal_type)
        total = round_half_up(
            100
            * (
                macro * cfg.macro_weight
                + distance * cfg.distance_weight
                + confidence * cfg.confidence_weight
                + meal * cfg.meal_type_weight
            )
        )
        total = min(max(total, 0), 100)
        return ScoreBreakdown(
            score=total,
            label=self.label_for(total),
            macro_fit_score=round_half_up(macro * 100),
            distance_score=round_half_up(distance * 100),
            ai_confidence_score=round_half_up(confidence * 100),
            meal_type_score=round_half_up(meal * 100),
        )

    def macro_fit(self, calories: float, protein: float, target: FitTarget) -> float:
        """Return the combined calorie/protein fit in [0, 1]."""
        calorie_gap = abs(target.calories_target - calories)
        calorie_fit = 1 - min(calorie_gap / max(target.calories_target, 1), 1)
        protein_delta = protein - target.protein_min
        if protein_delta >= 0:
            protein_fit = 1.0
        else:
            protein_fit = max(1 + protein_delta / max(target.protein_min, 1), 0.0)
        return (
            calorie_fit * self.config.calorie_share
            + protein_fit * self.config.protein_share
        )

    def distance_fit(self, distance_meters: float | None) -> float:
        """Return the distance fit in [0, 1]; unknown distance scores 1."""
        cfg = self.config
        if distance_meters is None:
            return 1.0
        km = distance_meters / 1000
        if km <= cfg.near_km:
            return 1.0
        if km <= cfg.mid_km:
            band = (km - cfg.near_km) / (cfg.mid_km - cfg.near_km)
            return 1 - band * (1 - cfg.mid_distance_score)
        if km <= cfg.far_km:
            band = (km - cfg.mid_km) / (cfg.far_km - cfg.mid_km)
            return max(cfg.mid_distance_score - band * cfg.mid_distance_score, 0.0)
        return 0.0

    def meal_type_fit(self, business_name: str, meal_type: str) -> float:
        """Return 1.0 on a meal-type keyword hit in the name, else 0.5."""
        keywords = self.config.meal_keywords.get(meal_type) or (
            self.config.meal_keywords.get(self.config.default_meal_type, ())
        )
        name = (business_name or "").lower()
        if any(keyword in name for keyword in keywords):
            return self.config.keyword_hit_score
        return self.config.keyword_miss_score

    def label_for(self, score: int) -> str:
        """Return the qualitative label for a final score."""
        for threshold, label in self.config.labels:
            if score >= threshold:
                return label
        return self.config.fallback_label


def _clamp_unit(value: float) -> float:
    if not isinstance(value, int | float) or math.isnan(value):
        return 0.0
    return min(max(float(value), 0.0), 1.0)
