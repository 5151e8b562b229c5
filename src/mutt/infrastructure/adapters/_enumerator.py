"""
Enumerator adapter.

Wraps an upstream iterator and yields ``IndexedItem(idx, val)`` where `idx`
counts the successful `next` calls so far, starting at 0.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from ...domain._iterator import IIterator
from ..contracts._iterator import Iterator, item_type_of
from ._indexed_item import IndexedItem

T = TypeVar("T")


class Enumerator(Iterator[IndexedItem[T]]):
    """
    Iterator adapter pairing each upstream item with its index.

    Parameters
    ----------
    it : IIterator[T]
        Upstream iterator. Held by reference, never copied; the caller keeps
        it alive for the adapter's lifetime.

    Notes
    -----
    - The emitted index never decreases and equals the number of items
      emitted before it.
    - Once the upstream is exhausted the counter stops moving.
    """

    ItemType = IndexedItem[T]

    def __init__(self, it: IIterator[T]) -> None:
        self._it = it
        self._count = 0

    @property
    def emitted(self) -> int:
        """Number of items emitted so far."""
        return self._count

    @property
    def item_type(self) -> Any:
        return IndexedItem[item_type_of(self._it)]

    def next(self) -> Optional[IndexedItem[T]]:
        val = self._it.next()
        if val is None:
            return None
        self._count += 1
        return IndexedItem(idx=self._count - 1, val=val)
