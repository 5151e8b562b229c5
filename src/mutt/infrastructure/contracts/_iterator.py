"""
Iterator contract and its default operations.

A type is an Iterator over `T` when it declares an associated
``ItemType = T`` and exposes ``next(self) -> Optional[T]``. Binding the
contract (subclassing `Iterator`) validates this when the class statement
executes and unlocks a fixed library of default operations, all defined
purely in terms of `next`:

- quantifiers: `all`, `any`
- search: `find`, `find_pos`
- materialization: `count`, `collect`
- adapters: `enumerate`, `cloned`, `filter`, `step_by`

Subclasses also become Python iterators (`for item in it: ...`).

Notes
-----
- `None` is the "no value" marker, so items are never `None`.
- Once `next` has returned `None` it must keep doing so; adapters rely on it.
- Iterators are not safe for concurrent use.
"""

from __future__ import annotations

import inspect
import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Generic,
    Mapping,
    Optional,
    TypeVar,
    get_args,
)

from typing_extensions import Self

from ...domain._allocator import IAllocator
from ...domain._requirements import (
    AssociatedTypeRequirement,
    MethodRequirement,
    format_type,
    is_union,
)
from ...domain._verdict import FailureKind, Verdict
from ..checker._checker import InterfaceChecker
from ..checker._type_match import resolve_owner
from ..iterators._operations import (
    iter_all,
    iter_any,
    iter_collect,
    iter_count,
    iter_find,
    iter_find_pos,
)

if TYPE_CHECKING:
    from ..adapters._cloned import Cloned
    from ..adapters._enumerator import Enumerator
    from ..adapters._filter import Filter
    from ..adapters._step_by import StepBy

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()

ITEM_TYPE_REQUIREMENT = AssociatedTypeRequirement("ItemType")

NEXT_SHAPE_REQUIREMENT = MethodRequirement(
    name="next",
    num_args=1,
    arg_types=(Self,),
    ret_label="Optional[ItemType]",
)
"""`next` structure only; used while `ItemType` is still unknown."""


def _is_indexed_item(tp: Any) -> bool:
    from ..adapters._indexed_item import IndexedItem

    return resolve_owner(tp) is IndexedItem


def _accepts_indexed_return(item_type: Any, actual: Any) -> bool:
    """
    Alternate return shape for enumerator-style iterators.

    When `item_type` is itself an `IndexedItem[...]`, `next` may return any
    ``Optional[IndexedItem[...]]`` (including the bare ``Optional[IndexedItem]``).
    """
    if not _is_indexed_item(item_type) or not is_union(actual):
        return False
    args = get_args(actual)
    rest = [a for a in args if a is not type(None)]
    return len(args) == 2 and len(rest) == 1 and _is_indexed_item(rest[0])


def next_requirement(item_type: Any) -> MethodRequirement:
    """
    Build the full `next` requirement for a given associated item type.
    """
    return MethodRequirement(
        name="next",
        num_args=1,
        arg_types=(Self,),
        ret_types=(Optional[item_type],),
        accepts_return=lambda actual: _accepts_indexed_return(item_type, actual),
    )


def check_iterator_impl(
    tp: Any,
    diagnostic: bool = False,
    messages: Optional[Mapping[FailureKind, str]] = None,
) -> Verdict:
    """
    Check `tp` against the Iterator contract.

    Requirements are evaluated in a fixed order: the kind check, then the
    structure of `next` (existence, arity, receiver) if `ItemType` is
    missing, then `ItemType`, then the full `next` signature including its
    ``Optional[ItemType]`` return.

    Parameters
    ----------
    tp : Any
        Candidate type.
    diagnostic : bool, optional
        If True, raise `ConformanceError` on failure.
    messages : Optional[Mapping[FailureKind, str]], optional
        Message overrides forwarded to the checker.

    Returns
    -------
    Verdict
        The check outcome.
    """
    checker = InterfaceChecker(tp, diagnostic=diagnostic, messages=messages)
    checker.is_record_kind()
    if not checker.valid:
        return checker.verdict()

    item_type = inspect.getattr_static(checker.owner, "ItemType", _MISSING)
    if item_type is _MISSING:
        reqs = (NEXT_SHAPE_REQUIREMENT, ITEM_TYPE_REQUIREMENT)
    else:
        reqs = (ITEM_TYPE_REQUIREMENT, next_requirement(item_type))
    return checker.require(reqs).verdict()


def is_iterator(tp: Any) -> bool:
    """Return True if `tp` satisfies the Iterator contract."""
    return check_iterator_impl(tp).valid


def item_type_of(it: Any) -> Any:
    """
    Return the associated item type of an iterator instance.

    Prefers the instance-level `item_type` (refined by adapters from their
    upstream), then the class-level `ItemType`, then `Any`.
    """
    item_type = getattr(it, "item_type", _MISSING)
    if item_type is _MISSING:
        item_type = getattr(type(it), "ItemType", Any)
    return item_type


class Iterator(Generic[T]):
    """
    Mixin binding the Iterator contract and providing its default operations.

    Subclasses must declare ``ItemType`` and define
    ``next(self) -> Optional[ItemType]``. Intermediate bases opt out of the
    binding check with ``class Base(Iterator[T], abstract=True)``.

    Examples
    --------
    >>> class Countdown(Iterator[int]):
    ...     ItemType = int
    ...     def __init__(self, n: int) -> None:
    ...         self.n = n
    ...     def next(self) -> Optional[int]:
    ...         if self.n == 0:
    ...             return None
    ...         self.n -= 1
    ...         return self.n + 1
    >>> Countdown(3).collect()
    [3, 2, 1]

    Raises
    ------
    ConformanceError
        At class creation, if the subclass does not satisfy the contract.
    """

    ItemType: ClassVar[Any]

    def __init_subclass__(cls, abstract: bool = False, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if abstract:
            return
        check_iterator_impl(cls, diagnostic=True)
        logger.debug(
            "Bound %s to Iterator[%s]",
            cls.__qualname__,
            format_type(cls.ItemType, cls),
        )

    @property
    def item_type(self) -> Any:
        """The associated item type of this iterator."""
        return type(self).ItemType

    # ----------------------------
    # Python iteration protocol
    # ----------------------------

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> T:
        item = self.next()  # type: ignore[attr-defined]
        if item is None:
            raise StopIteration
        return item

    # ----------------------------
    # quantifiers
    # ----------------------------

    def all(self, predicate: Callable[[T], bool]) -> bool:
        """
        Return True if *every* remaining item matches `predicate`.

        Short-circuiting: returns as soon as `predicate` returns False.
        Vacuously True on an empty iterator.
        """
        return iter_all(self, predicate)

    def any(self, predicate: Callable[[T], bool]) -> bool:
        """
        Return True if *any* remaining item matches `predicate`.

        Short-circuiting: returns as soon as `predicate` returns True.
        Vacuously False on an empty iterator.
        """
        return iter_any(self, predicate)

    # ----------------------------
    # search
    # ----------------------------

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        """
        Return the first item matching `predicate`, or None.

        Consumes all items up to and including the match.
        """
        return iter_find(self, predicate)

    def find_pos(self, predicate: Callable[[T], bool]) -> Optional[int]:
        """
        Return the zero-based position of the first item matching `predicate`.
        """
        return iter_find_pos(self, predicate)

    # ----------------------------
    # materialization
    # ----------------------------

    def count(self) -> int:
        """Drain the iterator and return the number of yielded items."""
        return iter_count(self)

    def collect(self, allocator: Optional[IAllocator] = None) -> Any:
        """
        Drain the iterator into a sequence preserving yield order.

        Parameters
        ----------
        allocator : Optional[IAllocator], optional
            Owner of the output sequence. Defaults to a `ListAllocator`, in
            which case a `list` is returned.

        Raises
        ------
        AllocationError
            If the allocator cannot grow the sequence.
        """
        return iter_collect(self, allocator)

    # ----------------------------
    # adapters
    # ----------------------------

    def enumerate(self) -> "Enumerator[T]":
        """
        Return an adapter yielding ``IndexedItem(idx, val)`` pairs.

        Construction does not advance this iterator.
        """
        from ..adapters._enumerator import Enumerator

        return Enumerator(self)

    def cloned(self) -> "Cloned[T]":
        """
        Return an adapter yielding ``item.clone()`` for every item.

        Raises
        ------
        ConformanceError
            If the item type does not satisfy the Cloneable contract.
        """
        from ..adapters._cloned import Cloned

        return Cloned(self)

    def filter(self, predicate: Callable[[T], bool]) -> "Filter[T]":
        """
        Return an adapter yielding only the items matching `predicate`.

        The adapter keeps a reference to `predicate`.
        """
        from ..adapters._filter import Filter

        return Filter(self, predicate)

    def step_by(self, step: int) -> "StepBy[T]":
        """
        Return an adapter yielding the first item, then every `step`-th one.

        Raises
        ------
        TypeError
            If `step` is not an int.
        ValueError
            If `step` < 1.
        """
        from ..adapters._step_by import StepBy

        return StepBy(self, step)
