"""
mutt: structural capability contracts and a lazy iterator algebra.

Contracts are bound by subclassing a mixin; the conformance checker validates
the subclass when its class statement executes and the mixin then provides
default operations. Every contract also has introspection predicates usable
on arbitrary types.

Public API
----------
Contracts
    `Iterator`, `IntoIterable`, `Cloneable`, `Printable`
Predicates
    `is_iterator`, `is_into_iterable`, `is_cloneable`, `is_printable` and the
    matching `check_*_impl` functions returning a `Verdict`
Checker
    `check`, `InterfaceChecker`, `Verdict`, `FailureKind`, requirement
    descriptors
Adapters
    `Enumerator`, `Cloned`, `Filter`, `StepBy`, `IndexedItem`
Allocators
    `ListAllocator`, `ArrayAllocator`
Errors
    `ConformanceError`, `AllocationError`
"""

from .domain import (
    AllocationError,
    AssociatedTypeRequirement,
    ConformanceError,
    FailureKind,
    FieldRequirement,
    IAllocator,
    ICloneable,
    IIntoIterable,
    IIterator,
    IPrintable,
    MethodRequirement,
    Verdict,
)
from .infrastructure.checker import InterfaceChecker, check
from .infrastructure.allocators import ArrayAllocator, ListAllocator
from .infrastructure.iterators import (
    iter_all,
    iter_any,
    iter_collect,
    iter_count,
    iter_find,
    iter_find_pos,
)
from .infrastructure.contracts import (
    Cloneable,
    IntoIterable,
    Iterator,
    Printable,
    check_clone_impl,
    check_into_iter_impl,
    check_iterator_impl,
    check_printable_impl,
    is_cloneable,
    is_into_iterable,
    is_iterator,
    is_printable,
)
from .infrastructure.adapters import Cloned, Enumerator, Filter, IndexedItem, StepBy

__version__ = "0.1.0"

__all__ = [
    "AllocationError",
    "AssociatedTypeRequirement",
    "ConformanceError",
    "FailureKind",
    "FieldRequirement",
    "IAllocator",
    "ICloneable",
    "IIntoIterable",
    "IIterator",
    "IPrintable",
    "MethodRequirement",
    "Verdict",
    "InterfaceChecker",
    "check",
    "ArrayAllocator",
    "ListAllocator",
    "iter_all",
    "iter_any",
    "iter_collect",
    "iter_count",
    "iter_find",
    "iter_find_pos",
    "Cloneable",
    "IntoIterable",
    "Iterator",
    "Printable",
    "check_clone_impl",
    "check_into_iter_impl",
    "check_iterator_impl",
    "check_printable_impl",
    "is_cloneable",
    "is_into_iterable",
    "is_iterator",
    "is_printable",
    "Cloned",
    "Enumerator",
    "Filter",
    "IndexedItem",
    "StepBy",
]
