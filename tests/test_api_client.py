"""Cache and cached-fetch tests."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from synoptic_edge.services import api_client
from synoptic_edge.services.cache import TTLCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1_700_000_000.0
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.now

    def sleep(self, duration: float) -> None:
        self.sleeps.append(duration)


class FlakyFetcher:
    def __init__(self, failures: int, value: object = "payload") -> None:
        self.failures = failures
        self.value = value
        self.calls = 0

    def __call__(self) -> object:
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError(f"attempt {self.calls} failed")
        return self.value


def _fetch(cache: TTLCache, clock: FakeClock, fetcher, ttl: float = 60.0):
    return api_client.fetch_with_cache(
        "games",
        fetcher,
        ttl,
        cache=cache,
        backoff_seconds=1.0,
        sleep_fn=clock.sleep,
    )


def test_ttl_cache_expiry() -> None:
    clock = FakeClock()
    cache = TTLCache(time_fn=clock.time)
    cache.set("k", 42, ttl=10)
    assert cache.get("k") == 42
    clock.now += 10
    assert cache.get("k") is None
    assert cache.get_entry("k").data == 42
    cache.invalidate("k")
    assert "k" not in cache


def test_ttl_cache_custom_policy() -> None:
    cache = TTLCache(is_expired=lambda entry, now: True)
    cache.set("k", 1, ttl=3600)
    assert cache.get("k") is None
    assert len(cache) == 1


def test_miss_then_hit() -> None:
    clock = FakeClock()
    cache = TTLCache(time_fn=clock.time)
    fetcher = FlakyFetcher(failures=0)
    first = _fetch(cache, clock, fetcher)
    second = _fetch(cache, clock, fetcher)
    assert first.status == "live"
    assert second.status == "cached"
    assert second.data == "payload"
    assert fetcher.calls == 1
    assert second.last_updated == first.last_updated


def test_retry_then_success_backs_off_exponentially() -> None:
    clock = FakeClock()
    fetcher = FlakyFetcher(failures=2)
    response = _fetch(TTLCache(time_fn=clock.time), clock, fetcher)
    assert response.status == "live"
    assert fetcher.calls == 3
    assert clock.sleeps == [pytest.approx(1.0), pytest.approx(2.0)]


def test_stale_fallback_after_expiry() -> None:
    clock = FakeClock()
    cache = TTLCache(time_fn=clock.time)
    _fetch(cache, clock, FlakyFetcher(failures=0, value="old"))
    clock.now += 120
    response = _fetch(cache, clock, FlakyFetcher(failures=10))
    assert response.status == "stale"
    assert response.data == "old"
    assert response.error == api_client.STALE_MESSAGE


def test_unavailable_without_cache(monkeypatch) -> None:
    settings = SimpleNamespace(fetch_max_attempts=2, fetch_backoff_seconds=0.0)
    monkeypatch.setattr(api_client, "get_settings", lambda: settings)
    clock = FakeClock()
    fetcher = FlakyFetcher(failures=10)
    response = api_client.fetch_with_cache(
        "games", fetcher, 60.0, cache=TTLCache(time_fn=clock.time), sleep_fn=clock.sleep
    )
    assert response.status == "unavailable"
    assert response.data is None
    assert fetcher.calls == 2
