from interface import Interface

from logmerge.extensions import extensible


@extensible
class LogSink(Interface):
    """
    Interface for the consumer of a merge's output.

    Methods
    -------
    print(self, entry)
    done(self)
    """

    def print(self, entry):
        """Called once per delivered entry, in delivery order.

        Parameters
        ----------
        entry : logmerge.entry.LogEntry
            The entry being delivered.
        """

    def done(self):
        """Called exactly once, after the last entry has been delivered.

        Not called when the merge fails.
        """
