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
Batched prefetching for asynchronous merges.

Waiting on a suspending source once per delivered entry makes a merge pay the
source's latency for every line it prints. Instead, whenever the frontier runs
out of entries from a source, ``batch_size`` pulls are issued against it at
once, so the latency is paid once per batch. At most ``batch_size`` entries
per source are ever held, which bounds memory at
``O(active sources * batch_size)``.
"""
import asyncio
import logging
from numbers import Integral

from logmerge.entry import EXHAUSTED
from logmerge.errors import InvalidBatchSize

log = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 2


async def gather_pulls(pulls):
    """Await a group of pulls concurrently.

    Every pull is allowed to finish, even when some of them fail, so no
    retrieval is left running in the background once this returns.

    Parameters
    ----------
    pulls : iterable[awaitable]
        The pulls, in issue order.

    Returns
    -------
    results : list
        Results in issue order.

    Raises
    ------
    Exception
        The failure of the earliest issued pull that failed, if any did.
    """
    results = await asyncio.gather(*pulls, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


class RefillPolicy:
    """Decides when an asynchronous source is refilled and by how much.

    Parameters
    ----------
    batch_size : int, optional
        Number of pulls issued per refill. Must be a positive integer.
    """

    def __init__(self, batch_size=DEFAULT_BATCH_SIZE):
        if (
            isinstance(batch_size, bool)
            or not isinstance(batch_size, Integral)
            or batch_size < 1
        ):
            raise InvalidBatchSize(batch_size=batch_size)
        self.batch_size = int(batch_size)

    def __repr__(self):
        return "%s(batch_size=%d)" % (type(self).__name__, self.batch_size)

    def needs_refill(self, frontier, source):
        """Whether ``source`` must be pulled before the next extraction.

        A source is refilled only once every entry already pulled from it
        has been extracted, and never after it is exhausted.
        """
        return not source.exhausted and frontier.resident_count(source.source_id) == 0

    async def refill(self, frontier, source):
        """Issue ``batch_size`` concurrent pulls against ``source`` and insert
        the entries they produce into ``frontier``.

        Results are taken in issue order. The first exhaustion marker ends
        the batch: later results, which the source may still have been
        working on, are drained but not inserted.

        Parameters
        ----------
        frontier : logmerge.frontier.OrderedFrontier
            The frontier of the running merge.
        source : logmerge.sources.AsyncSourceAdapter
            The source to refill.

        Returns
        -------
        inserted : int
            The number of entries inserted.
        exhausted : bool
            Whether this refill observed the source's exhaustion.
        """
        results = await gather_pulls(
            source.pull_async() for _ in range(self.batch_size)
        )

        inserted = 0
        for position, result in enumerate(results):
            if result is EXHAUSTED:
                dropped = [
                    r for r in results[position + 1:] if r is not EXHAUSTED
                ]
                if dropped:
                    log.warning(
                        "source %d produced %d entries after signalling "
                        "exhaustion; they were discarded",
                        source.source_id,
                        len(dropped),
                    )
                return inserted, True
            frontier.insert(source.source_id, result)
            inserted += 1

        return inserted, False
