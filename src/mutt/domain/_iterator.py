"""
Iterator contracts for mutt.

This module defines duck-typed protocols for the two iteration roles:

- `IIterator`: anything exposing `next()` that returns the next item or
  `None` once exhausted
- `IIntoIterable`: anything exposing an `iter()` factory producing an
  `IIterator`

These protocols only describe the shape used by static type checkers and
`isinstance` checks. Exact signature validation (arity, parameter and return
annotations, the associated `ItemType`) is performed by the conformance
checker when a contract is bound.

Notes
-----
- Iterators report exhaustion by returning `None`. Once exhausted, an
  iterator must keep returning `None` on every further call.
- Iterators are single-threaded views; they are not safe for concurrent use.
"""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar, runtime_checkable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class IIterator(Protocol[T_co]):
    """
    Duck-typed iterator contract.

    Required members
    ----------------
    - `ItemType`: associated type of the yielded items (checked by the
      conformance checker, not by `isinstance`).
    - `next()`: returns the next item, or `None` once exhausted.
    """

    def next(self) -> Optional[T_co]:
        """
        Advance the iterator.

        Returns
        -------
        Optional[T_co]
            The next item, or `None` if the iterator is exhausted.
        """
        ...


@runtime_checkable
class IIntoIterable(Protocol[T_co]):
    """
    Duck-typed contract for containers that can produce an iterator.
    """

    def iter(self) -> IIterator[T_co]:
        """
        Create a fresh iterator over this container.

        Returns
        -------
        IIterator[T_co]
            A new iterator positioned at the first item.
        """
        ...
