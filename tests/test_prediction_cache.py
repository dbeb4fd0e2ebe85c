"""
Prediction cache expiry and read-through behaviour.
"""

from datetime import datetime, timedelta
from types import SimpleNamespace

from seatledger.seat_predictions.services.prediction_cache import PredictionCache, is_expired

NOW = datetime(2024, 10, 1, 12, 0, 0)


class CountingStore:
    def __init__(self, row=None):
        self.row = row
        self.recomputes = 0

    def load(self, key):
        return self.row

    def recompute(self, key):
        self.recomputes += 1
        self.row = SimpleNamespace(key=key, valid_until=NOW + timedelta(days=7))


class TestIsExpired:

    def test_missing_expiry_is_expired(self):
        assert is_expired(None, NOW)

    def test_future_expiry_is_fresh(self):
        assert not is_expired(NOW + timedelta(seconds=1), NOW)

    def test_past_expiry_is_expired(self):
        assert is_expired(NOW - timedelta(seconds=1), NOW)


class TestPredictionCache:

    def test_fresh_row_returned_without_recompute(self):
        store = CountingStore(SimpleNamespace(valid_until=NOW + timedelta(days=1)))
        cache = PredictionCache(store.load, store.recompute, ttl=timedelta(days=7))

        assert cache.get_or_recompute(("ST1", "S1"), now=NOW) is store.row
        assert store.recomputes == 0

    def test_expired_row_recomputed_once(self):
        store = CountingStore(SimpleNamespace(valid_until=NOW - timedelta(days=1)))
        cache = PredictionCache(store.load, store.recompute, ttl=timedelta(days=7))

        row = cache.get_or_recompute(("ST1", "S1"), now=NOW)

        assert store.recomputes == 1
        assert row.key == ("ST1", "S1")

    def test_missing_row_recomputed(self):
        store = CountingStore()
        cache = PredictionCache(store.load, store.recompute, ttl=timedelta(days=7))

        assert cache.get_or_recompute(("ST1", "S1"), now=NOW) is not None
        assert store.recomputes == 1

    def test_valid_until_uses_ttl(self):
        cache = PredictionCache(lambda key: None, lambda key: None, ttl=timedelta(days=7))
        assert cache.valid_until(NOW) == datetime(2024, 10, 8, 12, 0, 0)
