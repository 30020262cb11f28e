"""Merge hooks that keep run statistics and log a summary.
"""
import logging
import time
from contextlib import contextmanager

from interface import implements

from .iface import MergeHooks

log = logging.getLogger(__name__)


class LoggingHooks(implements(MergeHooks)):
    """
    Hooks implementation counting deliveries and suspensions.

    A summary of each run is logged when the run finishes, at INFO on
    success and at WARNING on failure. Counters describe the most recent
    run.

    Parameters
    ----------
    logger : logging.Logger, optional
        Where to log. Defaults to this module's logger.

    Attributes
    ----------
    delivered : int
        Entries handed to the sink.
    suspensions : int
        Times the driver waited on outstanding pulls.
    exhausted : int
        Sources whose exhaustion was recorded.
    elapsed : float
        Wall clock seconds spent in the run.
    """

    def __init__(self, logger=None):
        self.log = logger if logger is not None else log
        self._reset()

    def _reset(self):
        self.mode = None
        self.source_count = 0
        self.delivered = 0
        self.suspensions = 0
        self.exhausted = 0
        self.elapsed = 0.0

    @contextmanager
    def running_merge(self, mode, source_count):
        self._reset()
        self.mode = mode
        self.source_count = source_count
        start = time.monotonic()
        try:
            yield
        except BaseException:
            self.elapsed = time.monotonic() - start
            self.log.warning(
                "%s merge of %d sources failed after delivering %d entries",
                mode,
                source_count,
                self.delivered,
            )
            raise
        else:
            self.elapsed = time.monotonic() - start
            self.log.info(
                "%s merge of %d sources delivered %d entries in %.3fs "
                "with %d suspensions",
                mode,
                source_count,
                self.delivered,
                self.elapsed,
                self.suspensions,
            )

    @contextmanager
    def suspending(self, source_ids):
        self.suspensions += 1
        yield

    def on_deliver(self, source_id, entry):
        self.delivered += 1

    def on_exhausted(self, source_id):
        self.exhausted += 1
