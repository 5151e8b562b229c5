"""
Filter adapter.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from ...domain._iterator import IIterator
from ..contracts._iterator import Iterator, item_type_of
from ..iterators._operations import iter_find

T = TypeVar("T")


class Filter(Iterator[T]):
    """
    Iterator adapter yielding only the upstream items matching `predicate`.

    Each `next` call resumes a search on the upstream from its current
    position, so non-matching items are drained as a side effect. The
    emitted sequence is an order-preserving subsequence of the upstream.

    Parameters
    ----------
    it : IIterator[T]
        Upstream iterator, held by reference.
    predicate : Callable[[T], bool]
        Held by reference for the adapter's lifetime.

    Raises
    ------
    TypeError
        If `predicate` is not callable.

    Warnings
    --------
    If no remaining upstream item matches, `next` scans to exhaustion; on an
    infinite upstream it never returns.
    """

    ItemType = T

    def __init__(self, it: IIterator[T], predicate: Callable[[T], bool]) -> None:
        if not callable(predicate):
            raise TypeError(
                f"predicate must be callable, got {type(predicate).__name__}"
            )
        self._it = it
        self.predicate = predicate

    @property
    def item_type(self) -> Any:
        return item_type_of(self._it)

    def next(self) -> Optional[T]:
        return iter_find(self._it, self.predicate)
