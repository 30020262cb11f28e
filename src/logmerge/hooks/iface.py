from contextlib import contextmanager as _contextmanager

from interface import Interface


# Keep track of which methods of MergeHooks are contextmanagers. Used by
# DelegatingHooks and TestingHooks to properly delegate to sub-hooks.
MERGE_HOOKS_CONTEXT_MANAGERS = set()


def contextmanager(f):
    """
    Wrapper for contextlib.contextmanager that tracks which methods of
    MergeHooks are contextmanagers in MERGE_HOOKS_CONTEXT_MANAGERS.
    """
    MERGE_HOOKS_CONTEXT_MANAGERS.add(f.__name__)
    return _contextmanager(f)


class MergeHooks(Interface):
    """
    Interface for instrumenting merge driver runs.

    Methods with names like 'on_event()' should be normal methods. They will be
    called by the driver after the corresponding event.

    Methods with names like 'doing_thing()' should be context managers. They
    will be entered by the driver around the corresponding event.

    Methods
    -------
    running_merge(self, mode, source_count)
    suspending(self, source_ids)
    on_deliver(self, source_id, entry)
    on_exhausted(self, source_id)
    """

    @contextmanager
    def running_merge(self, mode, source_count):
        """
        Contextmanager entered for the whole of a driver's run.

        The context exits normally only if the sink's ``done()`` was called.

        Parameters
        ----------
        mode : {'sync', 'async'}
            Which driver is running.
        source_count : int
            Number of sources being merged.
        """

    @contextmanager
    def suspending(self, source_ids):
        """
        Contextmanager entered around each point where an asynchronous
        driver waits on pulls: once for the initial fan-out and once per
        refill.

        Parameters
        ----------
        source_ids : list[int]
            Sources with pulls outstanding.
        """

    def on_deliver(self, source_id, entry):
        """Called after an entry has been handed to the sink.

        Parameters
        ----------
        source_id : int
            Source the entry came from.
        entry : logmerge.entry.LogEntry
            The delivered entry.
        """

    def on_exhausted(self, source_id):
        """Called once per source, when its exhaustion is recorded.

        Parameters
        ----------
        source_id : int
            The exhausted source.
        """
