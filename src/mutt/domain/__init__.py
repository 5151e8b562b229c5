"""
Domain layer for mutt: verdicts, requirement descriptors, errors, and the
duck-typed protocols describing each capability.
"""

from ._verdict import FailureKind, Verdict
from ._requirements import (
    AssociatedTypeRequirement,
    FieldRequirement,
    MethodRequirement,
    Requirement,
    format_type,
)
from ._errors import AllocationError, ConformanceError
from ._iterator import IIntoIterable, IIterator
from ._cloneable import ICloneable
from ._printable import IPrintable
from ._allocator import IAllocator

__all__ = [
    FailureKind.__name__,
    Verdict.__name__,
    AssociatedTypeRequirement.__name__,
    FieldRequirement.__name__,
    MethodRequirement.__name__,
    "Requirement",
    format_type.__name__,
    AllocationError.__name__,
    ConformanceError.__name__,
    IIntoIterable.__name__,
    IIterator.__name__,
    ICloneable.__name__,
    IPrintable.__name__,
    IAllocator.__name__,
]
