"""
Default iterator operations as free functions.

Every function in this module is generic over *any* object exposing a
``next()`` method that returns the next item or `None` once exhausted. The
`Iterator` mixin methods and the adapters delegate here, so duck-typed
iterators that never inherit the mixin get the same semantics.

Warnings
--------
All operations run synchronously to completion. An infinite upstream, or a
predicate that never matches, makes `iter_all`, `iter_any`, `iter_find`,
`iter_find_pos`, `iter_count`, `iter_collect` (and the `Filter` adapter) scan
forever; there is no cancellation or timeout.

Notes
-----
- Every operation is destructive: it advances the iterator it is given.
- Exceptions raised by caller-supplied predicates propagate unchanged.
"""

from typing import Any, Callable, Optional, TypeVar

from ...domain._allocator import IAllocator
from ...domain._errors import AllocationError
from ...domain._iterator import IIterator
from ..allocators._list_allocator import ListAllocator

T = TypeVar("T")


def iter_all(it: IIterator[T], predicate: Callable[[T], bool]) -> bool:
    """
    Return True if every remaining item satisfies `predicate`.

    Short-circuits on the first failing item, leaving the iterator positioned
    right after it. Vacuously True on an exhausted iterator.
    """
    while (item := it.next()) is not None:
        if not predicate(item):
            return False
    return True


def iter_any(it: IIterator[T], predicate: Callable[[T], bool]) -> bool:
    """
    Return True if any remaining item satisfies `predicate`.

    Short-circuits on the first match. Vacuously False on an exhausted
    iterator.
    """
    while (item := it.next()) is not None:
        if predicate(item):
            return True
    return False


def iter_find(it: IIterator[T], predicate: Callable[[T], bool]) -> Optional[T]:
    """
    Return the first remaining item satisfying `predicate`, or None.

    Consumes every item up to and including the match.
    """
    while (item := it.next()) is not None:
        if predicate(item):
            return item
    return None


def iter_find_pos(it: IIterator[T], predicate: Callable[[T], bool]) -> Optional[int]:
    """
    Return the zero-based position of the first item satisfying `predicate`.

    Positions count from the iterator's current position, not from the start
    of the underlying container.
    """
    pos = 0
    while (item := it.next()) is not None:
        if predicate(item):
            return pos
        pos += 1
    return None


def iter_count(it: IIterator[T]) -> int:
    """
    Drain the iterator and return the number of items it yielded.
    """
    n = 0
    while it.next() is not None:
        n += 1
    return n


def iter_collect(it: IIterator[T], allocator: Optional[IAllocator] = None) -> Any:
    """
    Drain the iterator into a growable sequence, preserving yield order.

    Parameters
    ----------
    it : IIterator[T]
        Source iterator. Fully drained on success.
    allocator : Optional[IAllocator], optional
        Owner of the output sequence. Defaults to an unbounded `ListAllocator`.

    Returns
    -------
    Any
        Whatever `allocator.finish` returns (a `list` for `ListAllocator`).

    Raises
    ------
    AllocationError
        If the allocator cannot create or grow the sequence. Plain
        `MemoryError`s raised by the allocator are converted. Items drained
        before the failure are not returned.
    """
    if allocator is None:
        allocator = ListAllocator()

    try:
        seq = allocator.allocate()
    except AllocationError:
        raise
    except MemoryError as exc:
        raise AllocationError(0) from exc

    n = 0
    while (item := it.next()) is not None:
        try:
            allocator.grow(seq, item)
        except AllocationError:
            raise
        except MemoryError as exc:
            raise AllocationError(n) from exc
        n += 1
    return allocator.finish(seq)
