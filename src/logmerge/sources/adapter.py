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
Uniform, validating pull access to caller supplied sources.

A merge run wraps every source it is given in an adapter. The adapter is
where exhaustion is recorded, where malformed entries are rejected and where
arbitrary retrieval errors become RetrievalFailure.
"""
import logging

from interface import implements

from logmerge.entry import EXHAUSTED, ensure_entry
from logmerge.errors import LogMergeError, RetrievalFailure

from .iface import AsyncLogSource, LogSource

log = logging.getLogger(__name__)


def _describe(exc):
    return "%s: %s" % (type(exc).__name__, exc)


class SourceAdapter(implements(LogSource)):
    """Wrap a synchronous source for a single merge run.

    Parameters
    ----------
    source_id : int
        Position of the source in the merge's source list.
    source : LogSource
        Any object with a ``pull()`` method.

    Attributes
    ----------
    exhausted : bool
        Whether the source has signalled that it has no more entries.
    pulls : int
        The number of pulls forwarded to the wrapped source.
    """

    def __init__(self, source_id, source):
        if not callable(getattr(source, "pull", None)):
            raise TypeError(
                "source %d (%r) does not have a pull() method" % (source_id, source)
            )
        self.source_id = source_id
        self.source = source
        self.exhausted = False
        self.pulls = 0

    def __repr__(self):
        return "%s(source_id=%d, source=%r)" % (
            type(self).__name__,
            self.source_id,
            self.source,
        )

    def pull(self):
        if self.exhausted:
            return EXHAUSTED

        self.pulls += 1
        try:
            result = self.source.pull()
        except LogMergeError:
            raise
        except Exception as exc:
            raise RetrievalFailure(
                source_id=self.source_id,
                reason=_describe(exc),
            ) from exc

        result = ensure_entry(self.source_id, result)
        if result is EXHAUSTED:
            self.exhausted = True
            log.debug("source %d exhausted after %d pulls", self.source_id, self.pulls)
        return result


class AsyncSourceAdapter(implements(AsyncLogSource)):
    """Wrap a source for a single asynchronous merge run.

    Both asynchronous sources (with ``pull_async()``) and synchronous sources
    (with ``pull()``) are accepted; synchronous sources simply never suspend.

    Parameters
    ----------
    source_id : int
        Position of the source in the merge's source list.
    source : AsyncLogSource or LogSource
        The source to wrap.
    """

    def __init__(self, source_id, source):
        if callable(getattr(source, "pull_async", None)):
            self._suspends = True
        elif callable(getattr(source, "pull", None)):
            self._suspends = False
        else:
            raise TypeError(
                "source %d (%r) has neither a pull_async() nor a pull() method"
                % (source_id, source)
            )
        self.source_id = source_id
        self.source = source
        self.exhausted = False
        self.pulls = 0

    def __repr__(self):
        return "%s(source_id=%d, source=%r)" % (
            type(self).__name__,
            self.source_id,
            self.source,
        )

    async def pull_async(self):
        if self.exhausted:
            return EXHAUSTED

        self.pulls += 1
        try:
            if self._suspends:
                result = await self.source.pull_async()
            else:
                result = self.source.pull()
        except LogMergeError:
            raise
        except Exception as exc:
            raise RetrievalFailure(
                source_id=self.source_id,
                reason=_describe(exc),
            ) from exc

        result = ensure_entry(self.source_id, result)
        if result is EXHAUSTED and not self.exhausted:
            self.exhausted = True
            log.debug("source %d exhausted after %d pulls", self.source_id, self.pulls)
        return result
