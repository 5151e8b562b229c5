"""
Cloned adapter.

Wraps an upstream iterator whose items are Cloneable and yields an
independent clone of every item.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from ...domain._iterator import IIterator
from ..contracts._cloneable import check_clone_impl
from ..contracts._iterator import Iterator, item_type_of

T = TypeVar("T")


class Cloned(Iterator[T]):
    """
    Iterator adapter yielding ``item.clone()`` for each upstream item.

    Parameters
    ----------
    it : IIterator[T]
        Upstream iterator, held by reference.

    Raises
    ------
    ConformanceError
        If the upstream item type does not satisfy the Cloneable contract.
    """

    ItemType = T

    def __init__(self, it: IIterator[T]) -> None:
        check_clone_impl(item_type_of(it), diagnostic=True)
        self._it = it

    @property
    def item_type(self) -> Any:
        return item_type_of(self._it)

    def next(self) -> Optional[T]:
        item = self._it.next()
        if item is None:
            return None
        return item.clone()
