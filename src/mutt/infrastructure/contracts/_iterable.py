"""
IntoIterable contract.

A container is IntoIterable when it exposes an ``iter(self)`` factory whose
return type satisfies the Iterator contract. Binding the contract
(subclassing `IntoIterable`) validates this when the class statement
executes and unlocks `reset_iter`, plus Python iteration over the container.

Typical usage pairs a destructive sequence of terminal operations with
`reset_iter` to restart the same iterator object without reallocating:

    it = container.iter()
    found = it.any(is_negative)
    container.reset_iter(it)
    total = it.count()
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator as PyIterator

from typing_extensions import Self

from ...domain._iterator import IIterator
from ...domain._requirements import MethodRequirement
from ...domain._verdict import FailureKind, Verdict
from ..checker._checker import check
from ..checker._config import strict_annotations_enabled
from ..checker._type_match import resolve_owner
from ._iterator import Iterator, check_iterator_impl, is_iterator
from ._state import overwrite_state

logger = logging.getLogger(__name__)


def _returns_iterator(actual: Any) -> bool:
    if isinstance(actual, str):
        # forward reference to a class defined later in its module
        return not strict_annotations_enabled()
    owner = resolve_owner(actual)
    if owner is None:
        return False
    # the contract itself (`-> Iterator[int]`, `-> IIterator[int]`) is accepted
    if owner is IIterator or issubclass(owner, Iterator):
        return True
    return is_iterator(owner)


INTO_ITER_REQUIREMENTS = (
    MethodRequirement(
        name="iter",
        num_args=1,
        arg_types=(Self,),
        accepts_return=_returns_iterator,
        ret_label="Iterator",
    ),
)
"""Ordered requirements of the IntoIterable contract."""

_VALID_ITERATOR_MESSAGES: Dict[FailureKind, str] = {
    kind: "`{owner}` must be a valid Iterator" for kind in FailureKind
}


def check_into_iter_impl(tp: Any, diagnostic: bool = False) -> Verdict:
    """
    Check `tp` against the IntoIterable contract.

    Parameters
    ----------
    tp : Any
        Candidate container type.
    diagnostic : bool, optional
        If True, raise `ConformanceError` on failure.

    Returns
    -------
    Verdict
        The check outcome.
    """
    return check(tp, INTO_ITER_REQUIREMENTS, diagnostic=diagnostic)


def is_into_iterable(tp: Any) -> bool:
    """Return True if `tp` satisfies the IntoIterable contract."""
    return check_into_iter_impl(tp).valid


class IntoIterable:
    """
    Mixin binding the IntoIterable contract.

    Subclasses must define ``iter(self) -> I`` where `I` is an Iterator.
    Intermediate bases opt out with ``class Base(IntoIterable, abstract=True)``.

    Raises
    ------
    ConformanceError
        At class creation, if the subclass does not satisfy the contract.
    """

    def __init_subclass__(cls, abstract: bool = False, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if abstract:
            return
        check_into_iter_impl(cls, diagnostic=True)
        logger.debug("Bound %s to IntoIterable", cls.__qualname__)

    def __iter__(self) -> PyIterator[Any]:
        it = self.iter()  # type: ignore[attr-defined]
        if isinstance(it, Iterator):
            return it
        # duck-typed iterators only expose `next`; None ends the iteration
        return iter(it.next, None)

    def reset_iter(self, existing: Iterator[Any]) -> None:
        """
        Restart `existing` in place by re-invoking the `iter` factory.

        The fresh iterator's state overwrites `existing`'s state, so every
        reference to `existing` (including adapters wrapping it) observes the
        restart.

        Parameters
        ----------
        existing : Iterator[Any]
            An iterator previously produced by this container's `iter`.

        Raises
        ------
        ConformanceError
            If the class of `existing` does not satisfy the Iterator contract.
        TypeError
            If `iter` produces an iterator of a different class than
            `existing`.
        """
        check_iterator_impl(
            type(existing), diagnostic=True, messages=_VALID_ITERATOR_MESSAGES
        )
        fresh = self.iter()  # type: ignore[attr-defined]
        if type(fresh) is not type(existing):
            raise TypeError(
                "reset_iter expected an iterator of type {}, got {}".format(
                    type(fresh).__name__, type(existing).__name__
                )
            )
        overwrite_state(existing, fresh)
