import click

from .pandas_utils import ensure_utc


class Timestamp(click.ParamType):
    """A click parameter that parses the value into a UTC pandas.Timestamp.

    Naive values are read as UTC; values with an offset are converted.
    """

    name = "timestamp"

    def convert(self, value, param, ctx):
        try:
            return ensure_utc(value)
        except (TypeError, ValueError):
            self.fail(
                "%s is not a valid %s" % (value, self.name),
                param,
                ctx,
            )
