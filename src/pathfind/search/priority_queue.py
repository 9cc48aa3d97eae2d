# search/priority_queue.py
from collections.abc import Callable
from typing import Any

Comparator = Callable[[Any, Any], int]


class PriorityQueue:
    """
    Array-backed binary heap ordered by an injected three-way comparator.

    compare(a, b) returns:
         0: a and b have equal priority
        >0: a has greater priority
        <0: b has greater priority
    The greatest-priority item sits at index 0. The comparator is not validated;
    an inconsistent one gives an unspecified (but non-crashing) order.
    """

    def __init__(self, comparator: Comparator):
        self.compare = comparator
        self._storage: list[Any] = []

    def __len__(self) -> int:
        return len(self._storage)

    def __bool__(self) -> bool:
        return bool(self._storage)

    def __contains__(self, item) -> bool:
        return item in self._storage

    @property
    def length(self) -> int:
        return len(self._storage)

    def contains(self, item) -> bool:
        return item in self._storage

    def peek(self):
        return self._storage[0] if self._storage else None

    def push(self, item) -> None:
        s = self._storage
        s.append(item)
        i = len(s) - 1
        # bubble up until the parent outranks (or ties) the item
        while i > 0:
            parent = (i - 1) // 2
            if self.compare(s[parent], s[i]) >= 0:
                break
            s[parent], s[i] = s[i], s[parent]
            i = parent

    def pop(self):
        s = self._storage
        if len(s) <= 2:
            return s.pop(0) if s else None

        top = s[0]
        s[0] = s.pop()
        last = len(s) - 1
        i = 0
        first = 1
        while first <= last:
            nxt = first
            second = first + 1
            if second <= last and self.compare(s[first], s[second]) < 0:
                nxt = second
            if self.compare(s[nxt], s[i]) < 0:
                break
            s[nxt], s[i] = s[i], s[nxt]
            i = nxt
            first = 2 * i + 1
        return top
