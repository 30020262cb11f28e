"""
Sources producing random, correctly ordered entries, for simulations and
tests.
"""
import numpy as np
import pandas as pd
from interface import implements

from logmerge.entry import EXHAUSTED, LogEntry
from logmerge.utils.pandas_utils import ensure_utc

from .iface import LogSource
from .memory import DelayedSource

DEFAULT_START = "2020-01-01"

_WORDS = (
    "request",
    "worker",
    "cache",
    "miss",
    "hit",
    "timeout",
    "retry",
    "connection",
    "opened",
    "closed",
    "flushed",
    "shard",
    "leader",
    "elected",
    "checkpoint",
    "written",
    "queue",
    "drained",
)


class SyntheticSource(implements(LogSource)):
    """A source of ``count`` random entries with non-decreasing timestamps.

    Parameters
    ----------
    count : int
        The number of entries to produce.
    start : timestamp-like, optional
        Lower bound of the first timestamp.
    seed : int, optional
        Seed for the random generator. Sources with the same arguments and
        seed produce the same entries.
    max_step : timedelta-like, optional
        Largest gap between consecutive timestamps. Gaps may be zero.
    name : str, optional
        Included in payloads.
    """

    def __init__(self, count, start=DEFAULT_START, seed=None, max_step="2 days", name=None):
        if count < 0:
            raise ValueError("count must be non-negative, got %r" % count)
        self.count = count
        self.name = name or "source"
        self._rng = np.random.RandomState(seed)
        self._max_step = int(pd.Timedelta(max_step).total_seconds())
        self._last = ensure_utc(start)
        self._produced = 0

    def __repr__(self):
        return "%s(count=%d, name=%r)" % (type(self).__name__, self.count, self.name)

    def pull(self):
        if self._produced >= self.count:
            return EXHAUSTED

        step = self._rng.randint(0, self._max_step + 1)
        self._last += pd.Timedelta(seconds=int(step))
        words = self._rng.choice(_WORDS, size=self._rng.randint(2, 6))
        payload = "%s #%d: %s" % (self.name, self._produced, " ".join(words))
        self._produced += 1
        return LogEntry(self._last, payload)


class AsyncSyntheticSource(DelayedSource):
    """A SyntheticSource whose pulls suspend for a random latency drawn
    uniformly from ``[0, max_latency)`` seconds.

    With equal arguments and seed it produces the same entries as the
    corresponding SyntheticSource.
    """

    def __init__(
        self,
        count,
        start=DEFAULT_START,
        seed=None,
        max_step="2 days",
        name=None,
        max_latency=0.008,
    ):
        latency_rng = np.random.RandomState(seed)
        super().__init__(
            SyntheticSource(count, start=start, seed=seed, max_step=max_step, name=name),
            latency=lambda: latency_rng.uniform(0.0, max_latency),
        )
        self.max_latency = max_latency


def synthetic_sources(n, count, seed=None, asynchronous=False, **kwargs):
    """Build ``n`` synthetic sources of ``count`` entries each.

    Source ``i`` is seeded with ``seed + i`` when a seed is given.
    """
    cls = AsyncSyntheticSource if asynchronous else SyntheticSource
    return [
        cls(
            count,
            seed=None if seed is None else seed + i,
            name="source-%d" % i,
            **kwargs
        )
        for i in range(n)
    ]
