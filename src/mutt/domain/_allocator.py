"""
Allocator contract used by `collect`.

An allocator owns the policy for the growable sequence that `collect`
drains an iterator into: how the sequence is created, how it grows, and what
is finally handed back to the caller.

Allocators signal that a sequence cannot grow by raising
`AllocationError` (or a plain `MemoryError`, which `collect` converts).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IAllocator(Protocol):
    """
    Growable-sequence allocator contract.
    """

    def allocate(self) -> Any:
        """Create a new, empty backing sequence."""
        ...

    def grow(self, seq: Any, item: Any) -> None:
        """
        Append `item` to `seq`.

        Raises
        ------
        AllocationError
            If the sequence cannot grow.
        """
        ...

    def finish(self, seq: Any) -> Any:
        """Return the caller-owned result for a fully collected `seq`."""
        ...
