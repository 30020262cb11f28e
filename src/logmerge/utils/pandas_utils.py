"""
Utilities for working with pandas objects.
"""
import pandas as pd


def ensure_utc(value):
    """Coerce a timestamp-like value into a UTC ``pd.Timestamp``.

    Naive values are assumed to already be in UTC. Aware values are
    converted.

    Examples
    --------
    >>> ensure_utc("2014-01-01 12:00")
    Timestamp('2014-01-01 12:00:00+0000', tz='UTC')
    >>> ensure_utc("2014-01-01T12:00:00+02:00")
    Timestamp('2014-01-01 10:00:00+0000', tz='UTC')
    """
    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")
