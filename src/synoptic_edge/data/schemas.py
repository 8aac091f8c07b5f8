"""Pydantic schemas for market data and analysis-oracle payloads."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from synoptic_edge.kernel.odds import implied_probability as break_even_probability
from synoptic_edge.kernel.types import LineOdds, Position


class OraclePayload(BaseModel):
    """Base for payloads produced by the analysis oracle (camelCase JSON)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReasoningStep(OraclePayload):
    step: int
    description: str
    activated_modules: list[str] = Field(default_factory=list)


class QuantitativeAnalysis(OraclePayload):
    expected_value: float
    vig_removed_odds: float
    kelly_criterion_stake: float
    confidence_score: float = Field(ge=0.0, le=1.0)
    projected_mean: float | None = None
    projected_std_dev: float | None = None


class AnalysisResponse(OraclePayload):
    summary: str
    reasoning: list[ReasoningStep] = Field(default_factory=list)
    quantitative: QuantitativeAnalysis


class ExtractedBetLeg(OraclePayload):
    player: str
    prop_type: str
    line: float
    position: Position
    market_odds: int
    game_log: list[float] | None = None


class AnalyzedBetLeg(ExtractedBetLeg):
    analysis: AnalysisResponse


class HistoricalContext(BaseModel):
    last5_avg: float
    season_avg: float
    game_log: list[float] | None = None


class PlayerProp(BaseModel):
    prop_type: str
    lines: list[LineOdds] = Field(default_factory=list)
    historical_context: HistoricalContext | None = None


class Player(BaseModel):
    name: str
    position: str
    team: str
    props: list[PlayerProp] = Field(default_factory=list)


class Team(BaseModel):
    id: str
    full_name: str


class Game(BaseModel):
    id: str
    name: str
    date: date
    players: list[Player] = Field(default_factory=list)
    home_team: Team | None = None
    away_team: Team | None = None
    venue: str | None = None


class PropSelection(BaseModel):
    """A single prop side picked in the comparator."""

    game: Game
    player: Player
    prop: PlayerProp
    selected_line: LineOdds
    selected_position: Position = "Over"


class MarketLineAnalysis(BaseModel):
    line: float
    over_odds: int
    under_odds: int
    over_ev: float
    under_ev: float


class OptimalBet(BaseModel):
    line: float
    position: Position
    ev: float
    odds: int | None = None


class MarketAnalysis(BaseModel):
    projected_mean: float
    projected_std_dev: float
    lines: list[MarketLineAnalysis]
    optimal_bet: OptimalBet


class RankedPlayerProp(BaseModel):
    player: Player
    opponent: Team
    prop_type: str
    threshold: float
    position: Position
    market_line: float
    market_odds: int
    true_probability: float = Field(ge=0.0, le=1.0)
    implied_probability: float | None = Field(default=None, ge=0.0, le=1.0)
    ev: float
    confidence: float = Field(ge=0.0, le=1.0)
    rank_score: float

    @model_validator(mode="after")
    def _default_implied_probability(self) -> "RankedPlayerProp":
        """Fall back to the market price's break-even probability."""

        if self.implied_probability is None:
            self.implied_probability = break_even_probability(self.market_odds)
        return self
