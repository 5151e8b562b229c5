"""
Indexed item produced by the `Enumerator` adapter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator as PyIterator, TypeVar

from ..contracts._cloneable import Cloneable, is_cloneable

T = TypeVar("T")


@dataclass
class IndexedItem(Cloneable, Generic[T]):
    """
    A value paired with its zero-based iteration index.

    Attributes
    ----------
    idx : int
        Position of `val` in the enumerated stream.
    val : T
        The upstream item.

    Notes
    -----
    Unpacks like a pair: ``for idx, val in it.enumerate(): ...``.
    """

    idx: int
    val: T

    def __iter__(self) -> PyIterator[Any]:
        yield self.idx
        yield self.val

    def clone(self) -> IndexedItem[T]:
        """
        Return a copy of this item.

        `val` is cloned only if its type satisfies the Cloneable contract;
        otherwise the copy shares the same `val` object.
        """
        val = self.val
        if is_cloneable(type(val)):
            val = val.clone()
        return IndexedItem(self.idx, val)
