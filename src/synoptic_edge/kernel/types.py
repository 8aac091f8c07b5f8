"""Dataclasses for odds, legs and valuation results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from synoptic_edge.data.schemas import AnalyzedBetLeg

Position = Literal["Over", "Under"]
RiskLevel = Literal["low", "medium", "high", "extreme"]


class ValuationStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    INVALID = "invalid"
    DEGENERATE = "degenerate"


@dataclass(frozen=True)
class Valuation:
    """A computed figure tagged with whether it is a genuine result.

    ``value`` always holds something displayable: for non-OK statuses it is
    the neutral (``0``) or full-loss (``-100``) figure shown in the UI.
    """

    value: float
    status: ValuationStatus = ValuationStatus.OK

    @property
    def ok(self) -> bool:
        return self.status is ValuationStatus.OK

    @classmethod
    def empty(cls) -> "Valuation":
        return cls(0, ValuationStatus.EMPTY)


@dataclass(frozen=True)
class LineOdds:
    line: float
    over_odds: int
    under_odds: int


@dataclass(frozen=True)
class PropTypeConfig:
    step: float
    odds_shift: int
    num_lines: int


@dataclass(frozen=True)
class ParlayLeg:
    market_odds: int
    player: str = ""
    prop_type: str = ""
    line: float | None = None
    position: Position = "Over"
    true_probability: float | None = None
    vig_removed_odds: float | None = None
    confidence_score: float | None = None

    @classmethod
    def from_analyzed(cls, leg: "AnalyzedBetLeg") -> "ParlayLeg":
        """Build a kernel leg from an oracle-analysed bet-slip leg."""

        quant = leg.analysis.quantitative
        return cls(
            market_odds=leg.market_odds,
            player=leg.player,
            prop_type=leg.prop_type,
            line=leg.line,
            position=leg.position,
            vig_removed_odds=quant.vig_removed_odds,
            confidence_score=quant.confidence_score,
        )


@dataclass(frozen=True)
class ParlayAnalysis:
    combined_probability: float
    parlay_odds: Valuation
    expected_value: Valuation
    recommended_max_legs: int
    risk_level: RiskLevel
    should_bet: bool
