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
Sources that read timestamped log files.

Every entry starts on a line that begins with an ISO-8601 timestamp, e.g.::

    2024-01-15T12:00:00Z worker started
    2024-01-15 12:00:01,250 ERROR request failed
    Traceback (most recent call last):
      ...

Lines that don't start with a timestamp (such as the traceback above) are
continuation lines and belong to the entry before them.
"""
import asyncio
import logging
import re
from pathlib import Path

from interface import implements

from logmerge.entry import EXHAUSTED, LogEntry
from logmerge.utils.pandas_utils import ensure_utc

from .iface import AsyncLogSource, LogSource

log = logging.getLogger(__name__)

TIMESTAMP_PATTERN = re.compile(
    r"^(?P<ts>\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}"
    r"(?:[.,]\d+)?"
    r"(?:Z|[+-]\d{2}:?\d{2})?)"
    r"(?=\s|$)"
)


def parse_timestamp(text):
    """Parse the timestamp at the start of a log line into a UTC
    ``pd.Timestamp``. Naive timestamps are read as UTC.
    """
    # The stdlib logging formatter separates milliseconds with a comma.
    return ensure_utc(text.replace(",", "."))


class FileSource(implements(LogSource)):
    """A source reading entries from a timestamped log file.

    The file is opened on the first pull and closed once it is exhausted.

    Parameters
    ----------
    path : str or Path
        The log file.
    encoding : str, optional
        Encoding of the file. Undecodable bytes are replaced.
    """

    def __init__(self, path, encoding="utf-8"):
        self.path = Path(path)
        self.encoding = encoding
        self._file = None
        # (timestamp, lines) of the entry being assembled.
        self._pending = None
        self._done = False

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, str(self.path))

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None

    @staticmethod
    def _make_entry(pending):
        timestamp, lines = pending
        return LogEntry(timestamp, "\n".join(lines).rstrip("\n"))

    def pull(self):
        if self._done:
            return EXHAUSTED

        if self._file is None:
            self._file = self.path.open(
                "r", encoding=self.encoding, errors="replace"
            )

        for raw in self._file:
            line = raw.rstrip("\r\n")
            match = TIMESTAMP_PATTERN.match(line)

            if match is None:
                if self._pending is not None:
                    self._pending[1].append(line)
                elif line.strip():
                    log.warning(
                        "Skipping line without a timestamp at the start of %s: %r",
                        self.path,
                        line,
                    )
                continue

            pending = self._pending
            self._pending = (parse_timestamp(match.group("ts")), [line])
            if pending is not None:
                return self._make_entry(pending)

        # End of file: flush the entry being assembled, if any.
        pending, self._pending = self._pending, None
        if pending is not None:
            return self._make_entry(pending)

        self.close()
        self._done = True
        return EXHAUSTED


class AsyncFileSource(implements(AsyncLogSource)):
    """A FileSource whose reads happen in a worker thread.

    Reads are serialized with a FIFO lock, so concurrent pulls get entries in
    the order they were made.

    Parameters
    ----------
    path : str or Path
        The log file.
    encoding : str, optional
        Encoding of the file.
    """

    def __init__(self, path, encoding="utf-8"):
        self._source = FileSource(path, encoding=encoding)
        self._lock = asyncio.Lock()

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, str(self.path))

    @property
    def path(self):
        return self._source.path

    def close(self):
        self._source.close()

    async def pull_async(self):
        async with self._lock:
            return await asyncio.to_thread(self._source.pull)
