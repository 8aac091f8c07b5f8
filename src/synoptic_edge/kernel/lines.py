"""Alternate-line ladders and synthetic odds history for player props."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from synoptic_edge.kernel.types import LineOdds, PropTypeConfig

if TYPE_CHECKING:
    from synoptic_edge.data.schemas import PlayerProp

DEFAULT_PROP_TYPE = "default"

PROP_TYPE_CONFIG: dict[str, PropTypeConfig] = {
    "Passing Yards": PropTypeConfig(step=10, odds_shift=20, num_lines=4),
    "Rushing Yards": PropTypeConfig(step=5, odds_shift=25, num_lines=4),
    "Receiving Yards": PropTypeConfig(step=5, odds_shift=25, num_lines=4),
    "Passing Touchdowns": PropTypeConfig(step=1, odds_shift=150, num_lines=2),
    "Receptions": PropTypeConfig(step=1, odds_shift=40, num_lines=2),
    "Sacks": PropTypeConfig(step=1, odds_shift=200, num_lines=1),
    "Tackles + Assists": PropTypeConfig(step=1, odds_shift=30, num_lines=2),
    DEFAULT_PROP_TYPE: PropTypeConfig(step=5, odds_shift=20, num_lines=3),
}


def get_prop_type_config(prop_type: str) -> PropTypeConfig:
    """Ladder parameters for ``prop_type``, falling back to the default entry."""

    return PROP_TYPE_CONFIG.get(prop_type, PROP_TYPE_CONFIG[DEFAULT_PROP_TYPE])


def generate_alternate_lines(prop: "PlayerProp") -> list[LineOdds]:
    """Build a ladder of lines around the prop's primary (first) line.

    Moving the threshold down makes the Over cheaper and the Under pricier by
    ``odds_shift`` per ``step``; moving it up does the opposite. The result is
    ascending by line with the primary line in the middle.
    """

    if not prop.lines:
        return []
    primary = prop.lines[0]
    config = get_prop_type_config(prop.prop_type)

    lower: list[LineOdds] = []
    current = primary
    for _ in range(config.num_lines):
        current = LineOdds(
            line=current.line - config.step,
            over_odds=current.over_odds - config.odds_shift,
            under_odds=current.under_odds + config.odds_shift,
        )
        lower.append(current)

    higher: list[LineOdds] = []
    current = primary
    for _ in range(config.num_lines):
        current = LineOdds(
            line=current.line + config.step,
            over_odds=current.over_odds + config.odds_shift,
            under_odds=current.under_odds - config.odds_shift,
        )
        higher.append(current)

    return [*reversed(lower), primary, *higher]


def generate_historical_odds(
    current_odds: int,
    *,
    days: int = 7,
    rng: random.Random | None = None,
) -> list[int]:
    """Plausible-looking daily odds history ending with ``current_odds``."""

    rng = rng or random.Random()
    history = [current_odds]
    last = current_odds
    for _ in range(days - 1):
        next_odds = last + rng.choice((-5, 0, 5))
        if rng.random() > 0.7:
            next_odds += rng.choice((-5, 0, 5))
        history.insert(0, next_odds)
        last = next_odds
    return history
