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

# This is *not* a place to dump arbitrary classes/modules for convenience,
# it is a place to expose the public interfaces.
from . import errors
from . import hooks
from . import sinks
from . import sources
from .config import MergeConfig, load_config
from .driver import (
    AsyncMergeDriver,
    MergeState,
    SyncMergeDriver,
    merge_sorted,
    merge_sorted_async,
    run_merge,
)
from .entry import EXHAUSTED, LogEntry
from .frontier import OrderedFrontier
from .refill import DEFAULT_BATCH_SIZE, RefillPolicy
from ._version import version as __version__

__all__ = [
    "AsyncMergeDriver",
    "DEFAULT_BATCH_SIZE",
    "EXHAUSTED",
    "LogEntry",
    "MergeConfig",
    "MergeState",
    "OrderedFrontier",
    "RefillPolicy",
    "SyncMergeDriver",
    "errors",
    "hooks",
    "load_config",
    "merge_sorted",
    "merge_sorted_async",
    "run_merge",
    "sinks",
    "sources",
]
