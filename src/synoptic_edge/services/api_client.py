"""Cached, retrying data access with stale-data fallback."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, Literal, TypeVar

from tenacity import RetryCallState, Retrying, stop_after_attempt, wait_exponential

from synoptic_edge.config import get_settings
from synoptic_edge.services.cache import TTLCache

logger = logging.getLogger(__name__)

T = TypeVar("T")
DataFreshness = Literal["live", "cached", "stale", "unavailable"]

STALE_MESSAGE = "Live data unavailable; showing last known good data."
UNAVAILABLE_MESSAGE = "Data is currently unavailable. Please try again later."


@dataclass
class ServiceResponse(Generic[T]):
    data: T | None
    status: DataFreshness
    last_updated: str | None = None
    error: str | None = None


def _iso(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


def _retry_log(retry_state: RetryCallState) -> None:
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning("Fetch attempt %s failed: %s", retry_state.attempt_number, exception)


def fetch_with_cache(
    key: str,
    fetcher: Callable[[], T],
    ttl: float,
    *,
    cache: TTLCache,
    max_attempts: int | None = None,
    backoff_seconds: float | None = None,
    sleep_fn: Callable[[float], None] | None = None,
) -> ServiceResponse[T]:
    """Serve ``key`` from ``cache`` or refresh it through ``fetcher``.

    A fresh cache entry is returned as ``cached``. Otherwise the fetcher is
    retried with exponential backoff; on success the result is stored and
    returned as ``live``. When every attempt fails the previous entry, if
    any, is returned as ``stale``; without one the response is
    ``unavailable``.
    """

    settings = get_settings()
    entry = cache.get_entry(key)
    if entry is not None and not cache.is_expired(entry):
        logger.debug("Cache hit for %s", key)
        return ServiceResponse(data=entry.data, status="cached", last_updated=_iso(entry.timestamp))

    logger.debug("Cache miss for %s; fetching", key)
    retrying = Retrying(
        stop=stop_after_attempt(max_attempts or settings.fetch_max_attempts),
        wait=wait_exponential(
            multiplier=settings.fetch_backoff_seconds if backoff_seconds is None else backoff_seconds
        ),
        after=_retry_log,
        sleep=sleep_fn or time.sleep,
        reraise=True,
    )
    try:
        data = retrying(fetcher)
    except Exception as exc:
        if entry is not None:
            logger.warning("All fetch attempts failed for %s; serving stale data: %s", key, exc)
            return ServiceResponse(
                data=entry.data,
                status="stale",
                last_updated=_iso(entry.timestamp),
                error=STALE_MESSAGE,
            )
        logger.error("Could not fetch %s and nothing is cached: %s", key, exc)
        return ServiceResponse(data=None, status="unavailable", error=UNAVAILABLE_MESSAGE)

    stored = cache.set(key, data, ttl)
    return ServiceResponse(data=data, status="live", last_updated=_iso(stored.timestamp))
