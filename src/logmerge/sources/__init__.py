from .iface import AsyncLogSource, LogSource
from .adapter import AsyncSourceAdapter, SourceAdapter
from .memory import AsyncIterableSource, DelayedSource, IterableSource
from .files import AsyncFileSource, FileSource
from .synthetic import AsyncSyntheticSource, SyntheticSource, synthetic_sources

__all__ = [
    "AsyncFileSource",
    "AsyncIterableSource",
    "AsyncLogSource",
    "AsyncSourceAdapter",
    "AsyncSyntheticSource",
    "DelayedSource",
    "FileSource",
    "IterableSource",
    "LogSource",
    "SourceAdapter",
    "SyntheticSource",
    "synthetic_sources",
]
