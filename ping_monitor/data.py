import numpy as np

from . import constants
from .ping import Outcome


class HistoryRing:
    """Fixed-size circular buffer of Outcomes.

    Storage is three preallocated numpy arrays indexed by `w_idx % capacity`.
    `w_idx` only ever grows. No locking here; callers synchronize.
    """

    def __init__(self, capacity=constants.NUM_HISTORY_ENTRIES):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self.success = np.zeros(capacity, dtype=bool)
        self.rtt = np.zeros(capacity, dtype=np.uint32)
        self.ttl = np.zeros(capacity, dtype=np.uint32)
        self.w_idx = 0

    def __len__(self):
        return min(self.w_idx, self.capacity)

    def record(self, outcome):
        pos = self.w_idx % self.capacity
        self.success[pos] = outcome.success
        self.rtt[pos] = outcome.round_trip_millis
        self.ttl[pos] = outcome.time_to_live
        self.w_idx += 1

    def _order(self):
        if self.w_idx < self.capacity:
            return np.arange(self.w_idx)
        return (np.arange(self.capacity) + self.w_idx) % self.capacity

    def arrays(self):
        """Oldest-to-newest copies of (success, rtt, ttl)."""
        order = self._order()
        return self.success[order], self.rtt[order], self.ttl[order]

    def snapshot(self):
        success, rtt, ttl = self.arrays()
        return [
            Outcome(success=bool(s), round_trip_millis=int(r), time_to_live=int(t))
            for s, r, t in zip(success, rtt, ttl)
        ]


class Statistics:
    """Running totals since the session started. Counters only go up."""

    def __init__(self):
        self.num_sent = 0
        self.num_received = 0
        self.min_time = constants.MIN_TIME_SENTINEL
        self.max_time = 0
        # Python ints do not overflow, so this is as wide as it needs to be.
        self.avg_accumulator = 0

    def update(self, outcome):
        self.num_sent += 1
        if outcome.success:
            rtt = outcome.round_trip_millis
            self.num_received += 1
            self.min_time = min(self.min_time, rtt)
            self.max_time = max(self.max_time, rtt)
            self.avg_accumulator += rtt

    @property
    def pct_lost(self):
        if self.num_sent == 0:
            return 0.0
        return 100.0 * (self.num_sent - self.num_received) / self.num_sent

    @property
    def avg_time(self):
        if self.num_received == 0:
            return 0
        return self.avg_accumulator // self.num_received

    def snapshot(self):
        return {
            "num_sent": self.num_sent,
            "num_received": self.num_received,
            "pct_lost": self.pct_lost,
            "min_time": self.min_time,
            "max_time": self.max_time,
            "avg_time": self.avg_time,
        }


def generate_test_data(ring, stats, count, timeout_millis=constants.PING_TIMEOUT_MS, seed=None):
    """Push `count` synthetic outcomes into `ring` and `stats`.

    Mostly fast replies with a few slow spikes and some loss bursts, so the
    chart has something to show before the first real probe returns.
    """
    rng = np.random.default_rng(seed)

    base = rng.uniform(8, 40, count)
    spikes = rng.random(count) < 0.05
    base[spikes] *= rng.uniform(3, 20, int(np.sum(spikes)))
    rtts = np.clip(np.round(base), 0, timeout_millis).astype(int)

    failed = np.zeros(count, dtype=bool)
    if count > 20:
        for _ in range(rng.integers(1, 4)):
            start = int(rng.integers(0, count - 10))
            failed[start : start + int(rng.integers(2, 10))] = True

    ttls = rng.choice([52, 53, 57, 64], count)

    for rtt, fail, ttl in zip(rtts, failed, ttls):
        if fail:
            outcome = Outcome.failed(timeout_millis)
        else:
            outcome = Outcome(success=True, round_trip_millis=int(rtt), time_to_live=int(ttl))
        ring.record(outcome)
        stats.update(outcome)

    return count
