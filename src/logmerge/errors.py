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


class LogMergeError(Exception):
    msg = None

    def __init__(self, **kwargs):
        self.kwargs = kwargs

    @property
    def message(self):
        return str(self)

    def __str__(self):
        msg = self.msg.format(**self.kwargs)
        return msg

    __repr__ = __str__


class RetrievalFailure(LogMergeError):
    """Raised when pulling from a source fails for any reason other than
    exhaustion. The underlying exception is chained as ``__cause__``.
    """

    msg = "Pulling from source {source_id} failed: {reason}"

    @property
    def source_id(self):
        return self.kwargs["source_id"]


class MalformedEntry(LogMergeError):
    """Raised when a source hands back something that is not a well-formed
    LogEntry.
    """

    msg = "Source {source_id} produced a malformed entry {entry!r}: {reason}."


class InvalidBatchSize(LogMergeError):
    msg = "batch_size must be a positive integer, got {batch_size!r}."


class InvalidConfig(LogMergeError):
    msg = "Invalid value {value!r} for configuration key {key!r}: {reason}."


class UnknownConfigKey(InvalidConfig):
    msg = """
Unknown configuration key {key!r}. Valid keys are: {valid_keys}.
""".strip()


class MergeAlreadyRun(LogMergeError):
    # A driver owns the per-run state of a single merge.
    msg = """
This {driver} has already run. Create a new driver for every merge.
""".strip()


class EmptyFrontier(LogMergeError):
    msg = "Cannot extract an entry from an empty frontier."


class OutOfOrderEntry(LogMergeError):
    """Raised by CheckedSink when an entry is delivered with a timestamp
    earlier than the entry delivered before it.
    """

    msg = """
Entry {entry!r} was delivered after an entry stamped {previous}; \
entries must be delivered in non-decreasing timestamp order.
""".strip()


class SinkAlreadyDone(LogMergeError):
    msg = "{sink} was used after done() was called."
