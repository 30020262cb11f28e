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
The values that flow through a merge.
"""
from collections import namedtuple

from logmerge.errors import MalformedEntry
from logmerge.utils.sentinel import sentinel

EXHAUSTED = sentinel(
    "EXHAUSTED",
    "Marker returned by a source's pull once it has no more entries.",
)


class LogEntry(namedtuple("LogEntry", "timestamp payload")):
    """A single log entry.

    Parameters
    ----------
    timestamp : comparable
        The point in time the entry describes. Timestamps of entries that are
        merged together must be mutually comparable.
    payload : object
        Opaque data carried along with the timestamp. May be falsy.
    """

    __slots__ = ()

    def __repr__(self):
        return "LogEntry(timestamp=%r, payload=%r)" % self


def is_exhausted(result):
    """Check whether a pull result is the exhaustion marker."""
    return result is EXHAUSTED


def ensure_entry(source_id, result):
    """Validate a pulled value before it is allowed into a merge.

    Parameters
    ----------
    source_id : int
        Identifier of the source ``result`` came from, for error messages.
    result : LogEntry or EXHAUSTED
        The value returned by the source.

    Returns
    -------
    result : LogEntry or EXHAUSTED
        ``result``, unchanged.

    Raises
    ------
    MalformedEntry
        If ``result`` is neither a LogEntry nor the exhaustion marker, or if
        it carries no timestamp.
    """
    if result is EXHAUSTED:
        return result
    if not isinstance(result, LogEntry):
        raise MalformedEntry(
            source_id=source_id,
            entry=result,
            reason="expected a LogEntry or EXHAUSTED, got %s"
            % type(result).__name__,
        )
    if result.timestamp is None:
        raise MalformedEntry(
            source_id=source_id,
            entry=result,
            reason="entry has no timestamp",
        )
    return result
