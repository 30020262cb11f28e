import pandas as pd
import pytest

from logmerge.entry import LogEntry
from logmerge.errors import EmptyFrontier, MalformedEntry
from logmerge.frontier import OrderedFrontier


def ts(day):
    return pd.Timestamp("2024-01-01", tz="UTC") + pd.Timedelta(days=day)


class TestOrderedFrontier:
    def test_empty(self):
        frontier = OrderedFrontier()
        assert frontier.is_empty()
        assert len(frontier) == 0
        assert frontier.resident_count(0) == 0
        with pytest.raises(EmptyFrontier):
            frontier.extract_min()

    def test_extracts_in_timestamp_order(self):
        frontier = OrderedFrontier()
        frontier.insert(0, LogEntry(ts(3), "c"))
        frontier.insert(1, LogEntry(ts(1), "a"))
        frontier.insert(2, LogEntry(ts(2), "b"))

        out = [frontier.extract_min() for _ in range(3)]
        assert [entry.payload for _, entry in out] == ["a", "b", "c"]
        assert [source_id for source_id, _ in out] == [1, 2, 0]
        assert frontier.is_empty()

    def test_ties_break_on_source_id(self):
        frontier = OrderedFrontier()
        frontier.insert(2, LogEntry(ts(0), "from-2"))
        frontier.insert(0, LogEntry(ts(0), "from-0"))
        frontier.insert(1, LogEntry(ts(0), "from-1"))

        out = [frontier.extract_min()[1].payload for _ in range(3)]
        assert out == ["from-0", "from-1", "from-2"]

    def test_ties_within_a_source_keep_insertion_order(self):
        frontier = OrderedFrontier()
        for payload in ["first", "second", "third"]:
            frontier.insert(0, LogEntry(ts(0), payload))

        out = [frontier.extract_min()[1].payload for _ in range(3)]
        assert out == ["first", "second", "third"]

    def test_payloads_are_never_compared(self):
        frontier = OrderedFrontier()
        frontier.insert(0, LogEntry(ts(0), {"a": 1}))
        frontier.insert(0, LogEntry(ts(0), {"b": 2}))
        assert frontier.extract_min()[1].payload == {"a": 1}

    def test_resident_count(self):
        frontier = OrderedFrontier()
        frontier.insert(0, LogEntry(ts(0), "a"))
        frontier.insert(0, LogEntry(ts(1), "b"))
        frontier.insert(1, LogEntry(ts(2), "c"))
        assert frontier.resident_count(0) == 2
        assert frontier.resident_count(1) == 1
        assert len(frontier) == 3

        frontier.extract_min()
        assert frontier.resident_count(0) == 1
        frontier.extract_min()
        assert frontier.resident_count(0) == 0
        assert frontier.resident_count(1) == 1

    def test_incomparable_timestamp(self):
        frontier = OrderedFrontier()
        frontier.insert(0, LogEntry(1, "a"))
        with pytest.raises(MalformedEntry):
            frontier.insert(1, LogEntry("noon", "b"))

        # The rejected entry leaves no trace.
        assert len(frontier) == 1
        assert frontier.resident_count(1) == 0
        assert frontier.extract_min() == (0, LogEntry(1, "a"))

    def test_repr(self):
        frontier = OrderedFrontier()
        frontier.insert(0, LogEntry(1, "a"))
        frontier.insert(3, LogEntry(2, "b"))
        frontier.extract_min()
        assert repr(frontier) == (
            "<OrderedFrontier: 1 resident entries from 1 sources>"
        )
