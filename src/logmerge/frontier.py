#
# Copyright 2015 Quantopian, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
import heapq
from collections import Counter
from itertools import count

from logmerge.errors import EmptyFrontier, MalformedEntry


class OrderedFrontier:
    """The set of entries that have been pulled from their sources but not
    yet delivered, ordered by timestamp.

    Entries are kept in a binary heap keyed on
    ``(timestamp, source_id, sequence)``. Entries with equal timestamps come
    out in source id order, and entries from the same source come out in the
    order they were inserted. The resulting order depends only on the input,
    never on when a pull happened to resolve.

    A frontier belongs to a single merge run.
    """

    def __init__(self):
        self._heap = []
        self._resident = Counter()
        self._sequence = count()

    def __len__(self):
        return len(self._heap)

    def __repr__(self):
        return "<%s: %d resident entries from %d sources>" % (
            type(self).__name__,
            len(self._heap),
            len(+self._resident),
        )

    def is_empty(self):
        return not self._heap

    def resident_count(self, source_id):
        """The number of entries from ``source_id`` waiting to be
        extracted.
        """
        return self._resident[source_id]

    def insert(self, source_id, entry):
        """Add an entry pulled from ``source_id``.

        Raises
        ------
        MalformedEntry
            If the entry's timestamp can't be compared with the timestamps
            already resident.
        """
        item = (entry.timestamp, source_id, next(self._sequence), entry)
        try:
            heapq.heappush(self._heap, item)
        except TypeError as exc:
            # heappush appends before sifting, so a failed comparison leaves
            # the item in the list.
            self._heap.remove(item)
            heapq.heapify(self._heap)
            raise MalformedEntry(
                source_id=source_id,
                entry=entry,
                reason="timestamp is not comparable with resident entries",
            ) from exc
        self._resident[source_id] += 1

    def extract_min(self):
        """Remove and return the resident entry with the smallest timestamp.

        Returns
        -------
        source_id : int
            The source the entry was pulled from.
        entry : LogEntry
            The entry.
        """
        if not self._heap:
            raise EmptyFrontier()
        _, source_id, _, entry = heapq.heappop(self._heap)
        self._resident[source_id] -= 1
        return source_id, entry
