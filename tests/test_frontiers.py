"""
Tests for the array-backed binary heap frontier.
"""

import random

import pytest

from heapsearch.core.errors import EmptyQueueError, SparseQueueError
from heapsearch.core.frontiers import PriorityQueue


def lt(a, b):
    return a < b


def assert_heap_property(queue):
    items = queue.snapshot()
    for p in range(1, len(items)):
        parent = items[PriorityQueue.parent_of(p)]
        child = items[p]
        assert not (queue.prefer(child, parent) and not queue.prefer(parent, child)), (
            f"child {child!r} at {p} beats its parent {parent!r}"
        )


def drain(queue):
    out = []
    while not queue.is_empty():
        out.append(queue.extract_best())
    return out


def test_scenario_extracts_in_order():
    queue = PriorityQueue(lt)
    for key in [5, 3, 8, 1, 4]:
        queue.insert(key)
    assert drain(queue) == [1, 3, 4, 5, 8]


@pytest.mark.parametrize("seed", range(10))
def test_sorted_extraction_matches_sorted(seed):
    rng = random.Random(seed)
    items = [rng.randint(-50, 50) for _ in range(rng.randint(1, 200))]
    queue = PriorityQueue(lt)
    for x in items:
        queue.insert(x)
        assert_heap_property(queue)
    assert drain(queue) == sorted(items)


@pytest.mark.parametrize("seed", range(5))
def test_heap_property_and_count_under_mixed_operations(seed):
    rng = random.Random(seed)
    queue = PriorityQueue.by_key(lambda pair: pair[0])
    inserted = extracted = 0
    for _ in range(500):
        if queue.is_empty() or rng.random() < 0.6:
            queue.insert((rng.randint(0, 20), rng.random()))
            inserted += 1
        else:
            queue.extract_best()
            extracted += 1
        assert len(queue) == inserted - extracted
        assert_heap_property(queue)


def test_extracted_keys_never_decrease_with_lenient_preference():
    queue = PriorityQueue.by_key(lambda pair: pair[0])
    for pair in [(2, "a"), (1, "b"), (2, "c"), (1, "d"), (0, "e")]:
        queue.insert(pair)
    keys = [k for k, _ in drain(queue)]
    assert keys == [0, 1, 1, 2, 2]


def test_duplicates_are_extracted_twice():
    queue = PriorityQueue(lt)
    queue.insert(7)
    queue.insert(7)
    queue.insert(3)
    assert drain(queue) == [3, 7, 7]


def test_empty_queue_raises():
    queue = PriorityQueue(lt)
    with pytest.raises(EmptyQueueError):
        queue.extract_best()
    with pytest.raises(EmptyQueueError):
        queue.peek()


def test_drained_queue_raises_and_can_be_reused():
    queue = PriorityQueue(lt)
    queue.insert(1)
    assert queue.extract_best() == 1
    with pytest.raises(EmptyQueueError):
        queue.extract_best()
    queue.insert(9)
    queue.insert(4)
    assert queue.peek() == 4
    assert len(queue) == 2


def test_storage_is_not_shrunk_and_holes_are_not_readable():
    queue = PriorityQueue(lt)
    for x in [4, 2, 6]:
        queue.insert(x)
    queue.extract_best()
    assert len(queue.storage) == 3
    assert len(queue) == 2
    with pytest.raises(SparseQueueError):
        queue._safe_get(2)
    with pytest.raises(SparseQueueError):
        queue._safe_get(-1)


def test_hole_inside_occupied_region_is_detected():
    queue = PriorityQueue(lt)
    queue.insert(1)
    queue.insert(2)
    queue.extract_best()
    queue.extract_best()
    # corrupt the bookkeeping so a vacated slot counts as occupied again
    queue.insert_position = 1
    with pytest.raises(SparseQueueError):
        queue.extract_best()


def test_left_child_wins_ties():
    # all keys equal: the root is replaced by the last element and never sifted
    queue = PriorityQueue.by_key(lambda pair: pair[0])
    for tag in "abcd":
        queue.insert((0, tag))
    assert queue.snapshot() == [(0, "a"), (0, "b"), (0, "c"), (0, "d")]
    queue.extract_best()
    assert queue.snapshot() == [(0, "d"), (0, "b"), (0, "c")]


def test_strict_child_selection_prefers_better_right_child():
    queue = PriorityQueue(lt)
    for x in [1, 5, 3, 9]:
        queue.insert(x)
    # heap: [1, 5, 3, 9]; after removing 1, 9 moves to the root and swaps with 3
    assert queue.extract_best() == 1
    assert queue.snapshot() == [3, 5, 9]
