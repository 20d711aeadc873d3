# heapsearch/core/errors.py
# Failure kinds raised by the frontier, the search driver and the problem payloads.
from __future__ import annotations


class SearchError(Exception):
    """Base class for everything heapsearch raises on purpose."""


class EmptyQueueError(SearchError):
    """extract_best()/peek() on a queue with no occupied slots."""


class SparseQueueError(SearchError):
    """A read hit a hole or a position past the occupied region of the heap."""


class SearchExhaustedError(SearchError):
    """The frontier emptied before any state satisfied the goal test."""

    def __init__(self, message: str, nodes_expanded: int = 0):
        super().__init__(message)
        self.nodes_expanded = nodes_expanded


class InvalidTransitionError(SearchError, ValueError):
    """An expansion step referenced data the problem does not have (e.g. a missing leg)."""
