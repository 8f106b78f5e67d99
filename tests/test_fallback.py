"""Tests for the fallback result."""

from feastfit.domain.recommendations import FitTarget
from feastfit.services.fallback import FALLBACK_ID, synthesize_fallback
from feastfit.services.scoring import FitScorer


def test_fallback_matches_target_and_is_scored() -> None:
    target = FitTarget(calories_target=600, protein_min=35)

    results = synthesize_fallback(FitScorer(), target, "SF", "lunch")

    assert len(results) == 1
    result = results[0]
    assert result.id == FALLBACK_ID
    assert result.address == "SF"
    assert result.dishes[0].estimated_calories == 600
    assert result.dishes[0].estimated_protein == 35
    assert result.breakdown.macro_fit_score == 100
    assert result.breakdown.distance_score == 100
    assert result.breakdown.ai_confidence_score == 30
    assert result.fit_score == 76
    assert result.fit_label == "Great fit"


def test_fallback_is_deterministic() -> None:
    target = FitTarget(calories_target=450, protein_min=30)

    first = synthesize_fallback(FitScorer(), target, "Oakland", "dinner")
    second = synthesize_fallback(FitScorer(), target, "Oakland", "dinner")

    assert first == second
