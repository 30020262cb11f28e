from interface import Interface


class LogSource(Interface):
    """
    Interface for sources whose retrieval returns immediately.

    A source hands out its entries in non-decreasing timestamp order, one per
    call to ``pull``, and never hands out the same entry twice.

    Methods
    -------
    pull(self)
    """

    def pull(self):
        """Retrieve the next entry.

        Returns
        -------
        entry : logmerge.entry.LogEntry or logmerge.entry.EXHAUSTED
            The next entry, or ``EXHAUSTED`` once the source has no more
            entries. Once ``EXHAUSTED`` has been returned every later call
            returns it as well.
        """


class AsyncLogSource(Interface):
    """
    Interface for sources whose retrieval may suspend, e.g. sources backed by
    the network or a disk.

    The merge may await several ``pull_async`` calls against the same source
    at once. Implementations must hand out entries in the order the calls
    were made.

    Methods
    -------
    pull_async(self)
    """

    async def pull_async(self):
        """Retrieve the next entry, suspending until it is available.

        Returns
        -------
        entry : logmerge.entry.LogEntry or logmerge.entry.EXHAUSTED
            The next entry, or ``EXHAUSTED`` once the source has no more
            entries.
        """
