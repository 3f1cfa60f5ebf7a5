"""Tests for the single-slot TTL cache."""

from cache import CacheEntry, LawyerCache
from models import LawyerRecord


def _payload(n=2):
    return [LawyerRecord(id=i) for i in range(n)]


class TestLawyerCache:
    def test_empty_cache_returns_none(self, clock):
        assert LawyerCache(1000, clock=clock).get() is None

    def test_put_then_get(self, clock):
        cache = LawyerCache(1000, clock=clock)
        cache.put(_payload())
        entry = cache.get()
        assert entry is not None
        assert len(entry.payload) == 2
        assert entry.fetched_at_ms == clock.now

    def test_live_just_before_duration(self, clock):
        cache = LawyerCache(1000, clock=clock)
        cache.put(_payload())
        clock.advance(999)
        assert cache.get() is not None

    def test_expires_at_duration(self, clock):
        cache = LawyerCache(1000, clock=clock)
        cache.put(_payload())
        clock.advance(1000)
        assert cache.get() is None

    def test_put_replaces_wholesale(self, clock):
        cache = LawyerCache(1000, clock=clock)
        cache.put(_payload(3))
        clock.advance(10)
        cache.put(_payload(1))
        entry = cache.get()
        assert len(entry.payload) == 1
        assert entry.fetched_at_ms == clock.now

    def test_payload_is_a_snapshot(self, clock):
        cache = LawyerCache(1000, clock=clock)
        rows = _payload()
        cache.put(rows)
        rows.append(LawyerRecord(id=99))
        assert len(cache.get().payload) == 2

    def test_clear(self, clock):
        cache = LawyerCache(1000, clock=clock)
        cache.put(_payload())
        cache.clear()
        assert cache.get() is None

    def test_stats(self, clock):
        cache = LawyerCache(60_000, clock=clock)
        assert cache.stats()["has_cache"] is False
        assert cache.stats()["last_fetch"] == "Never"
        cache.put(_payload(4))
        clock.advance(5_500)
        stats = cache.stats()
        assert stats["has_cache"] is True
        assert stats["cache_size"] == 4
        assert stats["cache_age_seconds"] == 5


class TestCovers:
    def test_unfiltered_complete_covers_any_filter(self):
        entry = CacheEntry(payload=(), fetched_at_ms=0, complete=True)
        assert entry.covers({"Family Law"}, 0, 50)

    def test_unfiltered_partial_covers_window_inside_payload(self):
        entry = CacheEntry(payload=tuple(_payload(10)), fetched_at_ms=0)
        assert entry.covers((), 0, 10)
        assert entry.covers((), 5, 5)
        assert not entry.covers((), 5, 10)

    def test_unfiltered_partial_does_not_cover_filtered_request(self):
        entry = CacheEntry(payload=tuple(_payload(10)), fetched_at_ms=0)
        assert not entry.covers({"Family Law"}, 0, 5)

    def test_filtered_entry_does_not_cover_unfiltered_request(self):
        entry = CacheEntry(payload=(), fetched_at_ms=0,
                           categories=frozenset({"Family Law"}), complete=True)
        assert not entry.covers((), 0, 5)

    def test_filtered_complete_covers_narrower_filter(self):
        entry = CacheEntry(payload=(), fetched_at_ms=0,
                           categories=frozenset({"Family Law", "Real Estate"}),
                           complete=True)
        assert entry.covers({"Real Estate"}, 0, 5)
        assert not entry.covers({"Tax Law"}, 0, 5)
