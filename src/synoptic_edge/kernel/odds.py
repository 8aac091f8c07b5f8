"""American / decimal odds conversion and display formatting.

Every function here is pure. Illegal quotations (American odds of zero,
decimal odds at or below 1.0) raise :class:`InvalidOddsError` instead of
leaking ``inf``/``nan`` into downstream arithmetic.
"""

from __future__ import annotations

import math


class InvalidOddsError(ValueError):
    """Raised for odds values that have no meaningful conversion."""


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""

    return math.floor(value + 0.5)


def american_to_decimal(odds: float) -> float:
    """Convert American odds to decimal odds.

    ``-110`` becomes ``1.909...`` (risk 110 to win 100) and ``+150`` becomes
    ``2.5`` (risk 100 to win 150).
    """

    if odds == 0:
        raise InvalidOddsError("American odds of 0 are not a valid quotation.")
    if odds > 0:
        return odds / 100 + 1
    return 100 / abs(odds) + 1


def decimal_to_american(decimal: float) -> float:
    """Convert decimal odds back to (unrounded) American odds."""

    if decimal <= 1:
        raise InvalidOddsError(
            f"Decimal odds {decimal!r} carry no profit and cannot be quoted in American odds."
        )
    if decimal >= 2:
        return (decimal - 1) * 100
    return -100 / (decimal - 1)


def implied_probability(odds: float) -> float:
    """Break-even probability implied by American odds, vig included."""

    return 1 / american_to_decimal(odds)


def format_american_odds(odds: float) -> str:
    """Signed display string, e.g. ``+150``, ``-110``; zero formats as ``+0``."""

    rounded = round_half_up(odds)
    return f"+{rounded}" if rounded >= 0 else f"{rounded}"
