"""Oracle payload schema tests."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from synoptic_edge.data.schemas import AnalyzedBetLeg, QuantitativeAnalysis
from synoptic_edge.kernel.types import ParlayLeg
from synoptic_edge.kernel.valuation import calculate_parlay_confidence, calculate_parlay_ev


def _payload(confidence: float = 0.72) -> dict:
    return {
        "player": "Patrick Mahomes",
        "propType": "Passing Yards",
        "line": 275.5,
        "position": "Over",
        "marketOdds": -115,
        "analysis": {
            "summary": "Favourable matchup against a weak secondary.",
            "reasoning": [{"step": 1, "description": "Vig removal", "activatedModules": ["KM_01"]}],
            "quantitative": {
                "expectedValue": 4.1,
                "vigRemovedOdds": -105,
                "kellyCriterionStake": 1.25,
                "confidenceScore": confidence,
                "projectedMean": 288.5,
                "projectedStdDev": 41.0,
            },
        },
    }


def test_analyzed_leg_maps_to_parlay_leg() -> None:
    analyzed = AnalyzedBetLeg.model_validate(_payload())
    leg = ParlayLeg.from_analyzed(analyzed)
    assert leg.market_odds == -115
    assert leg.prop_type == "Passing Yards"
    assert leg.vig_removed_odds == -105
    assert leg.confidence_score == pytest.approx(0.72)
    assert analyzed.analysis.reasoning[0].activated_modules == ["KM_01"]


def test_analyzed_legs_feed_parlay_math() -> None:
    legs = [ParlayLeg.from_analyzed(AnalyzedBetLeg.model_validate(_payload())) for _ in range(2)]
    assert calculate_parlay_ev(legs).ok
    assert calculate_parlay_confidence(legs).value == pytest.approx(0.72)


def test_confidence_outside_unit_interval_rejected() -> None:
    with pytest.raises(ValidationError):
        AnalyzedBetLeg.model_validate(_payload(confidence=1.4))


def test_quantitative_accepts_field_names() -> None:
    quant = QuantitativeAnalysis(
        expected_value=2.0,
        vig_removed_odds=110,
        kelly_criterion_stake=0.5,
        confidence_score=0.6,
    )
    assert quant.projected_mean is None
