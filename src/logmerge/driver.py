#
# Copyright 2015 Quantopian, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Drivers that merge individually ordered sources into one ordered stream.

Both drivers follow the same state machine::

    INIT -> RUNNING -> DONE

INIT pulls the first entry of every source into the frontier. RUNNING
repeatedly delivers the oldest entry in the frontier to the sink and
replenishes the frontier from the source that entry came from. Once the
frontier is empty every source is exhausted, the sink's ``done()`` is called
and the driver is DONE.

If a pull fails the run is aborted: the error propagates to the caller and
``done()`` is never called.
"""
import asyncio
import logging
from enum import Enum

from logmerge.entry import EXHAUSTED
from logmerge.errors import MergeAlreadyRun
from logmerge.frontier import OrderedFrontier
from logmerge.hooks import DelegatingHooks
from logmerge.refill import DEFAULT_BATCH_SIZE, RefillPolicy, gather_pulls
from logmerge.sources.adapter import AsyncSourceAdapter, SourceAdapter

log = logging.getLogger(__name__)


class MergeState(Enum):
    INIT = "init"
    RUNNING = "running"
    DONE = "done"


class MergeDriver:
    """Shared bookkeeping of the synchronous and asynchronous drivers.

    A driver performs exactly one merge; the frontier and the per-source
    adapters it holds live as long as that run.
    """

    mode = None
    adapter_type = None

    def __init__(self, sources, sink, hooks=()):
        self.sources = [
            self.adapter_type(source_id, source)
            for source_id, source in enumerate(sources)
        ]
        self.sink = sink
        self.hooks = DelegatingHooks(hooks)
        self.frontier = OrderedFrontier()
        self.state = None
        self.delivered = 0

    def __repr__(self):
        return "<%s: %d sources, state=%s>" % (
            type(self).__name__,
            len(self.sources),
            self.state,
        )

    def _start(self):
        if self.state is not None:
            raise MergeAlreadyRun(driver=type(self).__name__)
        self.state = MergeState.INIT
        log.info("starting %s merge of %d sources", self.mode, len(self.sources))

    def _accept(self, source, result):
        """Handle the outcome of a single pull."""
        if result is EXHAUSTED:
            self._record_exhausted(source)
        else:
            self.frontier.insert(source.source_id, result)

    def _record_exhausted(self, source):
        log.debug("source %d is exhausted", source.source_id)
        self.hooks.on_exhausted(source.source_id)

    def _deliver(self, source_id, entry):
        self.sink.print(entry)
        self.delivered += 1
        self.hooks.on_deliver(source_id, entry)

    def _finish(self):
        self.state = MergeState.DONE
        self.sink.done()
        log.info(
            "%s merge of %d sources finished, %d entries delivered",
            self.mode,
            len(self.sources),
            self.delivered,
        )


class SyncMergeDriver(MergeDriver):
    """Merge synchronous sources, one pull at a time.

    The frontier never holds more than one entry per source.

    Parameters
    ----------
    sources : list[LogSource]
        The sources to merge. A source's id is its position in this list.
    sink : LogSink
        Receives the merged entries.
    hooks : list[implements(MergeHooks)], optional
        Hooks to notify while running.
    """

    mode = "sync"
    adapter_type = SourceAdapter

    def run(self):
        """Perform the merge.

        Returns
        -------
        delivered : int
            The number of entries delivered to the sink.
        """
        self._start()
        with self.hooks.running_merge(self.mode, len(self.sources)):
            for source in self.sources:
                self._accept(source, source.pull())

            self.state = MergeState.RUNNING
            while not self.frontier.is_empty():
                source_id, entry = self.frontier.extract_min()
                self._deliver(source_id, entry)
                source = self.sources[source_id]
                self._accept(source, source.pull())

            self._finish()
        return self.delivered


class AsyncMergeDriver(MergeDriver):
    """Merge sources whose retrieval may suspend.

    The driver only ever waits in two places: once during INIT, for the
    first entry of every source at the same time, and during a refill, for
    a batch of entries from a single source. Entries already in the
    frontier are delivered without waiting.

    Parameters
    ----------
    sources : list[AsyncLogSource or LogSource]
        The sources to merge. A source's id is its position in this list.
    sink : LogSink
        Receives the merged entries.
    batch_size : int, optional
        Number of pulls issued per refill. Ignored when ``refill_policy`` is
        given.
    hooks : list[implements(MergeHooks)], optional
        Hooks to notify while running.
    refill_policy : RefillPolicy, optional
        Overrides the policy built from ``batch_size``.
    """

    mode = "async"
    adapter_type = AsyncSourceAdapter

    def __init__(
        self,
        sources,
        sink,
        batch_size=DEFAULT_BATCH_SIZE,
        hooks=(),
        refill_policy=None,
    ):
        super().__init__(sources, sink, hooks=hooks)
        if refill_policy is None:
            refill_policy = RefillPolicy(batch_size)
        self.refill_policy = refill_policy

    async def run(self):
        """Perform the merge.

        Returns
        -------
        delivered : int
            The number of entries delivered to the sink.
        """
        self._start()
        with self.hooks.running_merge(self.mode, len(self.sources)):
            if self.sources:
                with self.hooks.suspending([s.source_id for s in self.sources]):
                    results = await gather_pulls(
                        source.pull_async() for source in self.sources
                    )
                for source, result in zip(self.sources, results):
                    self._accept(source, result)

            self.state = MergeState.RUNNING
            policy = self.refill_policy
            while not self.frontier.is_empty():
                source_id, entry = self.frontier.extract_min()
                self._deliver(source_id, entry)

                source = self.sources[source_id]
                if policy.needs_refill(self.frontier, source):
                    log.debug(
                        "refilling source %d with %d pulls",
                        source_id,
                        policy.batch_size,
                    )
                    with self.hooks.suspending([source_id]):
                        _, exhausted = await policy.refill(self.frontier, source)
                    if exhausted:
                        self._record_exhausted(source)

            self._finish()
        return self.delivered


def merge_sorted(sources, sink, hooks=()):
    """Merge synchronous sources into ``sink`` in timestamp order.

    See Also
    --------
    SyncMergeDriver
    """
    return SyncMergeDriver(sources, sink, hooks=hooks).run()


async def merge_sorted_async(sources, sink, batch_size=DEFAULT_BATCH_SIZE, hooks=()):
    """Merge possibly suspending sources into ``sink`` in timestamp order.

    See Also
    --------
    AsyncMergeDriver
    """
    driver = AsyncMergeDriver(sources, sink, batch_size=batch_size, hooks=hooks)
    return await driver.run()


def run_merge(sources, sink, mode="async", batch_size=DEFAULT_BATCH_SIZE, hooks=()):
    """Run a merge to completion from synchronous code.

    Parameters
    ----------
    sources : list
        The sources to merge.
    sink : LogSink
        Receives the merged entries.
    mode : {'sync', 'async'}, optional
        Which driver to use. The async driver runs in a new event loop.
    batch_size : int, optional
        Refill batch size for the async driver.
    hooks : list[implements(MergeHooks)], optional
        Hooks to notify while running.

    Returns
    -------
    delivered : int
        The number of entries delivered to the sink.
    """
    if mode == "sync":
        return merge_sorted(sources, sink, hooks=hooks)
    elif mode == "async":
        return asyncio.run(
            merge_sorted_async(sources, sink, batch_size=batch_size, hooks=hooks)
        )
    raise ValueError("mode must be 'sync' or 'async', got %r" % (mode,))
