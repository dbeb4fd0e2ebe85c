import logging
from datetime import datetime, timedelta
from seatledger.core.utils import utc_now, as_naive_utc

logger = logging.getLogger(__name__)


def is_expired(valid_until: datetime | None, now: datetime | None = None) -> bool:
    """A row without an expiry is treated as expired."""
    if valid_until is None:
        return True
    return as_naive_utc(valid_until) < as_naive_utc(now or utc_now())


class PredictionCache:
    """
    Cache-aside access to stored predictions.

    ``load(key)`` returns the stored row or None; ``recompute(key)`` rebuilds and
    persists it. Rows written through the cache expire ``ttl`` after they are computed.
    """

    def __init__(self, load, recompute, ttl: timedelta):
        self.load = load
        self.recompute = recompute
        self.ttl = ttl

    def valid_until(self, now: datetime | None = None) -> datetime:
        return (now or utc_now()) + self.ttl

    def get_or_recompute(self, key, now: datetime | None = None):
        cached = self.load(key)
        if cached is not None and not is_expired(cached.valid_until, now):
            return cached

        logger.info("Prediction %s %s, recomputing", key, "expired" if cached is not None else "missing")
        self.recompute(key)
        return self.load(key)
