"""
Sources backed by Python iterables.
"""
import asyncio

from interface import implements

from logmerge.entry import EXHAUSTED

from .iface import AsyncLogSource, LogSource


class IterableSource(implements(LogSource)):
    """A source that hands out the items of an iterable.

    Parameters
    ----------
    entries : iterable[LogEntry]
        The entries, in non-decreasing timestamp order.
    name : str, optional
        Name used in reprs.
    """

    def __init__(self, entries, name=None):
        self._it = iter(entries)
        self._done = False
        self.name = name

    def __repr__(self):
        return "%s(name=%r)" % (type(self).__name__, self.name)

    def pull(self):
        if self._done:
            return EXHAUSTED
        try:
            return next(self._it)
        except StopIteration:
            self._done = True
            return EXHAUSTED


class AsyncIterableSource(implements(AsyncLogSource)):
    """A source that hands out the items of an async iterator.

    Async generators can't be advanced by two callers at once, so concurrent
    pulls are serialized. ``asyncio.Lock`` wakes waiters in FIFO order, which
    keeps results in the order the pulls were made.

    Parameters
    ----------
    entries : async iterable[LogEntry]
        The entries, in non-decreasing timestamp order.
    name : str, optional
        Name used in reprs.
    """

    def __init__(self, entries, name=None):
        self._it = entries.__aiter__()
        self._lock = asyncio.Lock()
        self._done = False
        self.name = name

    def __repr__(self):
        return "%s(name=%r)" % (type(self).__name__, self.name)

    async def pull_async(self):
        async with self._lock:
            if self._done:
                return EXHAUSTED
            try:
                return await self._it.__anext__()
            except StopAsyncIteration:
                self._done = True
                return EXHAUSTED


class DelayedSource(implements(AsyncLogSource)):
    """Expose a synchronous source as a suspending one.

    The next entry is taken from the wrapped source as soon as
    ``pull_async`` is called; the call then suspends for ``latency``
    before handing it back. Concurrent pulls therefore resolve to entries in
    call order no matter how their latencies compare.

    Parameters
    ----------
    source : LogSource
        The source to wrap.
    latency : float or callable[[] -> float], optional
        Seconds each pull suspends for, or a function returning them.
    """

    def __init__(self, source, latency=0.0):
        self.source = source
        self._latency = latency if callable(latency) else (lambda: latency)

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.source)

    async def pull_async(self):
        result = self.source.pull()
        await asyncio.sleep(self._latency())
        return result
