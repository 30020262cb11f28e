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
import sys
import time

from interface import implements

from logmerge.errors import OutOfOrderEntry, SinkAlreadyDone
from logmerge.extensions import register

from .iface import LogSink


def format_entry(entry):
    """Render an entry as ``"<timestamp> <payload>"``."""
    timestamp, payload = entry
    isoformat = getattr(timestamp, "isoformat", None)
    stamp = isoformat() if isoformat is not None else str(timestamp)
    return "%s %s" % (stamp, payload)


def format_payload(entry):
    """Render only an entry's payload. Suits entries read from log files,
    whose payload is the original text including its timestamp.
    """
    return str(entry.payload)


@register(LogSink, "stream")
class StreamSink(implements(LogSink)):
    """Write each entry to a text stream, one per line.

    Parameters
    ----------
    stream : file-like, optional
        Where to write. Defaults to ``sys.stdout`` at print time.
    formatter : callable[LogEntry -> str], optional
        Renders an entry. Defaults to ``format_entry``.
    """

    def __init__(self, stream=None, formatter=format_entry):
        self._stream = stream
        self.formatter = formatter

    @property
    def stream(self):
        return self._stream if self._stream is not None else sys.stdout

    def print(self, entry):
        self.stream.write(self.formatter(entry))
        self.stream.write("\n")

    def done(self):
        self.stream.flush()


class NullSink(implements(LogSink)):
    """Discard every entry."""

    def print(self, entry):
        pass

    def done(self):
        pass


class CheckedSink(implements(LogSink)):
    """Wrap a sink, enforcing the delivery contract and keeping statistics.

    Parameters
    ----------
    sink : LogSink, optional
        The sink to forward to. Defaults to a NullSink.

    Raises
    ------
    OutOfOrderEntry
        From ``print`` when an entry is older than the one before it.
    SinkAlreadyDone
        From ``print`` or ``done`` after ``done`` has been called.
    """

    def __init__(self, sink=None):
        self.sink = sink if sink is not None else NullSink()
        self.printed = 0
        self.last = None
        self.is_done = False
        self.started_at = time.monotonic()
        self.finished_at = None

    def __repr__(self):
        return "CheckedSink(%r)" % (self.sink,)

    def print(self, entry):
        if self.is_done:
            raise SinkAlreadyDone(sink=self)
        if self.last is not None and entry.timestamp < self.last.timestamp:
            raise OutOfOrderEntry(entry=entry, previous=self.last.timestamp)
        self.sink.print(entry)
        self.last = entry
        self.printed += 1

    def done(self):
        if self.is_done:
            raise SinkAlreadyDone(sink=self)
        self.sink.done()
        self.is_done = True
        self.finished_at = time.monotonic()

    @property
    def elapsed(self):
        """Seconds from construction until ``done`` (or until now)."""
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return end - self.started_at

    def stats(self):
        elapsed = self.elapsed
        return {
            "printed": self.printed,
            "elapsed": elapsed,
            "rate": self.printed / elapsed if elapsed > 0 else float("inf"),
        }


# Sink factories are called with ``stream`` and ``formatter`` keywords.
register(LogSink, "null", lambda stream=None, formatter=None: NullSink())
