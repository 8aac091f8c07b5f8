"""Expected value, parlay aggregation and staking math."""

from __future__ import annotations

import math
from collections.abc import Sequence

from synoptic_edge.config import get_settings
from synoptic_edge.kernel.odds import (
    american_to_decimal,
    decimal_to_american,
    round_half_up,
)
from synoptic_edge.kernel.types import (
    ParlayAnalysis,
    ParlayLeg,
    RiskLevel,
    Valuation,
    ValuationStatus,
)

FULL_LOSS_EV = -100.0
TARGET_PARLAY_PROBABILITY = 0.2
MIN_BETTABLE_PROBABILITY = 0.15


def _ev_percent(win_probability: float, decimal_odds: float) -> float:
    return (win_probability * (decimal_odds - 1) - (1 - win_probability)) * 100


def _required(leg: ParlayLeg, attr: str) -> float:
    value = getattr(leg, attr)
    if value is None:
        raise ValueError(f"Leg {leg.player or leg.market_odds!r} is missing '{attr}'.")
    return value


def combine_decimal_odds(legs: Sequence[ParlayLeg]) -> float:
    decimal = 1.0
    for leg in legs:
        decimal *= american_to_decimal(leg.market_odds)
    return decimal


def calculate_single_leg_ev(true_probability: float, market_odds: float) -> Valuation:
    """EV of a single bet as a percentage of stake."""

    if true_probability < 0 or true_probability > 1:
        return Valuation(FULL_LOSS_EV, ValuationStatus.INVALID)
    return Valuation(_ev_percent(true_probability, american_to_decimal(market_odds)))


def calculate_parlay_odds(legs: Sequence[ParlayLeg]) -> Valuation:
    """Combined American odds of a parlay, rounded to the nearest integer."""

    if not legs:
        return Valuation.empty()
    decimal = combine_decimal_odds(legs)
    if decimal == 1:
        return Valuation(0, ValuationStatus.DEGENERATE)
    return Valuation(round_half_up(decimal_to_american(decimal)))


def calculate_parlay_ev(legs: Sequence[ParlayLeg]) -> Valuation:
    """Parlay EV priced against the vig-removed (fair) odds of each leg.

    A leg whose fair odds imply certainty or better makes the whole parlay
    degenerate and it is valued as a full loss.
    """

    if not legs:
        return Valuation.empty()
    market_decimal = combine_decimal_odds(legs)

    true_probability = 1.0
    for leg in legs:
        fair_odds = _required(leg, "vig_removed_odds")
        if fair_odds == 0 or american_to_decimal(fair_odds) <= 1:
            true_probability = 0.0
            break
        true_probability *= 1 / american_to_decimal(fair_odds)

    if true_probability == 0:
        return Valuation(FULL_LOSS_EV, ValuationStatus.DEGENERATE)
    return Valuation(_ev_percent(true_probability, market_decimal))


def calculate_parlay_confidence(legs: Sequence[ParlayLeg]) -> Valuation:
    """Geometric mean of leg confidence scores; one non-positive leg zeroes it."""

    if not legs:
        return Valuation.empty()
    scores = [_required(leg, "confidence_score") for leg in legs]
    if any(score <= 0 for score in scores):
        return Valuation(0, ValuationStatus.DEGENERATE)
    return Valuation(math.prod(scores) ** (1 / len(scores)))


def calculate_compounded_win_probability(legs: Sequence[ParlayLeg]) -> Valuation:
    """Probability (in percent) that every leg wins, assuming independence."""

    if not legs:
        return Valuation.empty()
    return Valuation(math.prod(_required(leg, "true_probability") for leg in legs) * 100)


def calculate_parlay_ev_from_true_probs(legs: Sequence[ParlayLeg]) -> Valuation:
    if not legs:
        return Valuation.empty()
    win_probability = math.prod(_required(leg, "true_probability") for leg in legs)
    return Valuation(_ev_percent(win_probability, combine_decimal_odds(legs)))


def kelly_stake(
    win_probability: float,
    odds: float,
    bankroll: float,
    fractional_kelly: float | None = None,
) -> float:
    """Fractional Kelly stake in bankroll units, capped at ``max_bet_fraction``."""

    settings = get_settings()
    if fractional_kelly is None:
        fractional_kelly = settings.kelly_fraction
    if win_probability <= 0 or win_probability >= 1:
        return 0.0
    b = american_to_decimal(odds) - 1
    if b <= 0:
        return 0.0
    kelly = (b * win_probability - (1 - win_probability)) / b
    fraction = min(kelly * fractional_kelly, settings.max_bet_fraction)
    if fraction <= 0:
        return 0.0
    return bankroll * fraction


def kelly_for_parlay(
    combined_probability: float,
    parlay_odds: float,
    bankroll: float,
    num_legs: int,
) -> float:
    """Kelly stake for a parlay, shrinking with the square root of its length."""

    if num_legs <= 0:
        return 0.0
    fraction = get_settings().parlay_kelly_base / math.sqrt(num_legs)
    return kelly_stake(combined_probability, parlay_odds, bankroll, fraction)


def _risk_level(combined_probability: float) -> RiskLevel:
    if combined_probability > 0.5:
        return "low"
    if combined_probability > 0.3:
        return "medium"
    if combined_probability > 0.15:
        return "high"
    return "extreme"


def analyze_parlay_value(legs: Sequence[ParlayLeg]) -> ParlayAnalysis:
    """Summarise a parlay's hit chance, price, EV and a bet/no-bet call."""

    probabilities = [_required(leg, "true_probability") for leg in legs]
    combined = math.prod(probabilities)
    ev = calculate_parlay_ev_from_true_probs(legs)

    average = sum(probabilities) / len(probabilities) if probabilities else 0.0
    if 0 < average < 1:
        # Legs at the average hit rate until the ticket drops to ~20%.
        max_legs = max(3, math.floor(math.log(TARGET_PARLAY_PROBABILITY) / math.log(average)))
    else:
        max_legs = 3

    return ParlayAnalysis(
        combined_probability=combined,
        parlay_odds=calculate_parlay_odds(legs),
        expected_value=ev,
        recommended_max_legs=max_legs,
        risk_level=_risk_level(combined),
        should_bet=ev.value > 0 and combined > MIN_BETTABLE_PROBABILITY,
    )
