from .iface import LogSink
from .core import CheckedSink, NullSink, StreamSink, format_entry, format_payload

__all__ = [
    "CheckedSink",
    "LogSink",
    "NullSink",
    "StreamSink",
    "format_entry",
    "format_payload",
]
