"""Market data with full alternate-line ladders for every prop."""

from __future__ import annotations

import logging
from collections.abc import Callable

from synoptic_edge.config import get_settings
from synoptic_edge.data.schemas import Game
from synoptic_edge.kernel.lines import generate_alternate_lines
from synoptic_edge.services.api_client import ServiceResponse, fetch_with_cache
from synoptic_edge.services.cache import TTLCache

logger = logging.getLogger(__name__)

MARKET_DATA_KEY = "market-data:all"

GameSource = Callable[[], list[Game]]


def expand_game_lines(games: list[Game]) -> list[Game]:
    """Return copies of ``games`` with each prop's lines replaced by its ladder."""

    expanded: list[Game] = []
    for game in games:
        players = []
        for player in game.players:
            props = [
                prop.model_copy(update={"lines": generate_alternate_lines(prop)})
                for prop in player.props
            ]
            players.append(player.model_copy(update={"props": props}))
        expanded.append(game.model_copy(update={"players": players}))
    return expanded


class MarketDataService:
    """Serves processed game data from a source through a TTL cache."""

    def __init__(
        self,
        source: GameSource,
        cache: TTLCache | None = None,
        ttl: float | None = None,
    ) -> None:
        self.source = source
        self.cache = cache or TTLCache()
        self.ttl = get_settings().market_data_ttl_seconds if ttl is None else ttl

    def fetch(self) -> ServiceResponse[list[Game]]:
        return fetch_with_cache(
            MARKET_DATA_KEY,
            lambda: expand_game_lines(self.source()),
            self.ttl,
            cache=self.cache,
        )

    def get_market_data(self) -> list[Game]:
        """Return processed games, or an empty list when nothing is available.

        The cached value is never handed out directly; callers get deep copies.
        """

        response = self.fetch()
        if response.data is None:
            logger.warning("Market data unavailable: %s", response.error)
            return []
        return [game.model_copy(deep=True) for game in response.data]

    def refresh(self) -> list[Game]:
        self.cache.invalidate(MARKET_DATA_KEY)
        return self.get_market_data()
