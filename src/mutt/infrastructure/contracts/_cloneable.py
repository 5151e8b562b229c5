"""
Cloneable contract.

A type is Cloneable when it exposes ``clone(self) -> Self`` returning an
owned, independent copy. Binding the contract (subclassing `Cloneable`)
validates the signature when the class statement executes and unlocks the
default `clone_from` operation.

Types that do not inherit the mixin can still be checked on demand with
`check_clone_impl` / `is_cloneable`, which is how dependent operations
(e.g. `Iterator.cloned`) decide whether an item type supports cloning.
"""

from __future__ import annotations

import logging
from typing import Any

from typing_extensions import Self

from ...domain._requirements import MethodRequirement
from ...domain._verdict import Verdict
from ..checker._checker import check
from ._state import overwrite_state

logger = logging.getLogger(__name__)

NoneType = type(None)

CLONE_REQUIREMENTS = (
    MethodRequirement(
        name="clone",
        num_args=1,
        arg_types=(Self,),
        ret_types=(Self,),
    ),
    MethodRequirement(
        name="clone_from",
        num_args=2,
        arg_types=(Self, Self),
        ret_types=(NoneType,),
        optional=True,
        arg_names=("self", "other"),
    ),
)
"""Ordered requirements of the Cloneable contract."""


def check_clone_impl(tp: Any, diagnostic: bool = False) -> Verdict:
    """
    Check `tp` against the Cloneable contract.

    Parameters
    ----------
    tp : Any
        Candidate type.
    diagnostic : bool, optional
        If True, raise `ConformanceError` on failure.

    Returns
    -------
    Verdict
        The check outcome.
    """
    return check(tp, CLONE_REQUIREMENTS, diagnostic=diagnostic)


def is_cloneable(tp: Any) -> bool:
    """Return True if `tp` satisfies the Cloneable contract."""
    return check_clone_impl(tp).valid


class Cloneable:
    """
    Mixin binding the Cloneable contract.

    Subclasses must define ``clone(self) -> Self``. Intermediate bases that
    leave `clone` to their own subclasses opt out of the binding check with
    ``class Base(Cloneable, abstract=True)``.

    Raises
    ------
    ConformanceError
        At class creation, if the subclass does not satisfy the contract.
    """

    def __init_subclass__(cls, abstract: bool = False, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if abstract:
            return
        check_clone_impl(cls, diagnostic=True)
        logger.debug("Bound %s to Cloneable", cls.__qualname__)

    def clone_from(self, other: Self) -> None:
        """
        Copy-assign from `other`.

        ``a.clone_from(b)`` is equivalent to ``a = b.clone()`` but mutates `a`
        in place, so every existing reference to `a` observes the new state.
        Override it to reuse resources already held by `self`.

        Parameters
        ----------
        other : Self
            The value to copy from. It is not modified.
        """
        overwrite_state(self, other.clone())
