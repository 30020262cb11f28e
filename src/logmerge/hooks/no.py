from contextlib import contextmanager

from interface import implements

from .iface import MergeHooks


class NoHooks(implements(MergeHooks)):
    """A MergeHooks that defines no-op methods for all available hooks."""

    @contextmanager
    def running_merge(self, mode, source_count):
        yield

    @contextmanager
    def suspending(self, source_ids):
        yield

    def on_deliver(self, source_id, entry):
        pass

    def on_exhausted(self, source_id):
        pass
