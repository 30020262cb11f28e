from .iface import MergeHooks
from .no import NoHooks
from .delegate import DelegatingHooks
from .summary import LoggingHooks
from .testing import TestingHooks


__all__ = [
    "MergeHooks",
    "NoHooks",
    "DelegatingHooks",
    "LoggingHooks",
    "TestingHooks",
]
