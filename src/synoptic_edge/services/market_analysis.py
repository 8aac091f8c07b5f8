"""Expected-value sweep across a prop's alternate lines."""

from __future__ import annotations

from synoptic_edge.config import get_settings
from synoptic_edge.data.schemas import (
    MarketAnalysis,
    MarketLineAnalysis,
    OptimalBet,
    PropSelection,
)
from synoptic_edge.kernel.odds import InvalidOddsError
from synoptic_edge.kernel.probability import over_under_probabilities
from synoptic_edge.kernel.valuation import FULL_LOSS_EV, calculate_single_leg_ev
from synoptic_edge.services.api_client import ServiceResponse, fetch_with_cache
from synoptic_edge.services.cache import TTLCache


def default_projection(selection: PropSelection) -> tuple[float, float]:
    """Placeholder projection: a slight lean over the selected line."""

    settings = get_settings()
    mean = selection.selected_line.line * settings.projection_bias
    return mean, mean * settings.projection_std_ratio


def _side_ev(probability: float, odds: int) -> float:
    # Ladders can step a price onto 0, which is unpriceable.
    try:
        return calculate_single_leg_ev(probability, odds).value
    except InvalidOddsError:
        return FULL_LOSS_EV


def analyze_market(
    selection: PropSelection,
    projected_mean: float | None = None,
    projected_std_dev: float | None = None,
) -> MarketAnalysis:
    """Price both sides of every line against a normal projection.

    The optimal bet is the single side with the highest EV. Sides quoted at
    odds of 0 are valued as a full loss. If nothing beats a full loss the
    optimal bet falls back to the selected line.
    """

    if projected_mean is None or projected_std_dev is None:
        projected_mean, projected_std_dev = default_projection(selection)

    lines: list[MarketLineAnalysis] = []
    optimal = OptimalBet(line=selection.selected_line.line, position="Over", ev=FULL_LOSS_EV)
    for line in selection.prop.lines:
        p_over, p_under = over_under_probabilities(line.line, projected_mean, projected_std_dev)
        over_ev = _side_ev(p_over, line.over_odds)
        under_ev = _side_ev(p_under, line.under_odds)
        lines.append(
            MarketLineAnalysis(
                line=line.line,
                over_odds=line.over_odds,
                under_odds=line.under_odds,
                over_ev=over_ev,
                under_ev=under_ev,
            )
        )
        if over_ev > optimal.ev:
            optimal = OptimalBet(line=line.line, position="Over", ev=over_ev, odds=line.over_odds)
        if under_ev > optimal.ev:
            optimal = OptimalBet(line=line.line, position="Under", ev=under_ev, odds=line.under_odds)

    return MarketAnalysis(
        projected_mean=projected_mean,
        projected_std_dev=projected_std_dev,
        lines=lines,
        optimal_bet=optimal,
    )


def market_analysis_key(
    selection: PropSelection,
    projected_mean: float | None = None,
    projected_std_dev: float | None = None,
) -> str:
    """Cache key for one analysis; the projection it was priced against is part of it."""

    key = (
        f"market-analysis:{selection.player.name}:{selection.prop.prop_type}"
        f":{selection.selected_line.line!r}"
    )
    if projected_mean is None or projected_std_dev is None:
        return key
    return f"{key}:{projected_mean!r}:{projected_std_dev!r}"


def get_market_analysis(
    selection: PropSelection,
    *,
    cache: TTLCache,
    projected_mean: float | None = None,
    projected_std_dev: float | None = None,
) -> ServiceResponse[MarketAnalysis]:
    return fetch_with_cache(
        market_analysis_key(selection, projected_mean, projected_std_dev),
        lambda: analyze_market(selection, projected_mean, projected_std_dev),
        get_settings().analysis_ttl_seconds,
        cache=cache,
    )
