# heapsearch/core/frontiers.py
from __future__ import annotations
from typing import Callable, Generic, List, TypeVar

from .errors import EmptyQueueError, SparseQueueError

T = TypeVar("T")

# Marks a slot that has been vacated by extract_best().
_HOLE = object()


class PriorityQueue(Generic[T]):
    """
    Array-backed binary min-heap ordered by a caller-supplied preference.

    prefer(a, b) answers "is a preferable to b?". It may be strict (a < b) or
    lenient on ties; a is *strictly* preferable to b only when prefer(a, b)
    holds and prefer(b, a) does not. Heap property: no occupied child is
    strictly preferable to its parent, so slot 0 is always a best element.

    There is no decrease-key and no de-duplication: inserting the same item
    twice makes it extractable twice.
    """

    def __init__(self, prefer: Callable[[T, T], bool]):
        self.prefer = prefer
        self.storage: List[object] = []
        self.insert_position = 0

    @classmethod
    def by_key(cls, key: Callable[[T], float]) -> "PriorityQueue[T]":
        """Min-heap by key(x); equal keys count as equally preferable."""
        return cls(lambda a, b: key(a) <= key(b))

    @staticmethod
    def parent_of(position: int) -> int:
        return (position - 1) // 2

    @staticmethod
    def children_of(position: int) -> tuple[int, int]:
        return position * 2 + 1, position * 2 + 2

    def _strictly_preferable(self, a: T, b: T) -> bool:
        return self.prefer(a, b) and not self.prefer(b, a)

    def _safe_get(self, position: int) -> T:
        if position < 0 or position >= self.insert_position:
            raise SparseQueueError(
                f"read at position {position} outside occupied region [0, {self.insert_position})"
            )
        item = self.storage[position]
        if item is _HOLE:
            raise SparseQueueError(f"hole detected at position {position} in priority queue")
        return item  # type: ignore[return-value]

    def _put(self, position: int, item: object) -> None:
        if position == len(self.storage):
            self.storage.append(item)
        else:
            self.storage[position] = item

    # -- public API --------------------------------------------------------

    def insert(self, item: T) -> None:
        self._put(self.insert_position, item)
        self.insert_position += 1
        self._sift_up(self.insert_position - 1)

    def extract_best(self) -> T:
        if self.insert_position == 0:
            raise EmptyQueueError("extract_best on empty priority queue")

        best = self._safe_get(0)
        last = self._safe_get(self.insert_position - 1)
        self.insert_position -= 1
        self.storage[self.insert_position] = _HOLE

        if self.insert_position != 0:
            self.storage[0] = last
            self._sift_down(0)

        return best

    def peek(self) -> T:
        if self.insert_position == 0:
            raise EmptyQueueError("peek on empty priority queue")
        return self._safe_get(0)

    def is_empty(self) -> bool:
        return self.insert_position == 0

    def __len__(self) -> int:
        return self.insert_position

    def snapshot(self) -> List[T]:
        """Occupied entries in heap (storage) order."""
        return [self._safe_get(p) for p in range(self.insert_position)]

    # -- heap repair ---------------------------------------------------------

    def _sift_up(self, position: int) -> None:
        target = self._safe_get(position)
        while position > 0:
            parent_position = self.parent_of(position)
            parent = self._safe_get(parent_position)
            if not self._strictly_preferable(target, parent):
                return  # parent is preferable or equal
            self.storage[position] = parent
            self.storage[parent_position] = target
            position = parent_position

    def _best_child(self, position: int) -> tuple[int, T] | None:
        left_position, right_position = self.children_of(position)
        if left_position >= self.insert_position:
            return None

        left = self._safe_get(left_position)
        if right_position >= self.insert_position:
            return left_position, left

        right = self._safe_get(right_position)
        if self._strictly_preferable(right, left):
            return right_position, right
        return left_position, left

    def _sift_down(self, position: int) -> None:
        target = self._safe_get(position)
        while True:
            best = self._best_child(position)
            if best is None:
                return
            child_position, child = best
            if not self._strictly_preferable(child, target):
                return
            self.storage[child_position] = target
            self.storage[position] = child
            position = child_position
