"""
Clone contract for mutt.

A cloneable type exposes `clone()`, returning an owned, independent copy of
itself. Mutating a clone must never mutate the source.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from typing_extensions import Self


@runtime_checkable
class ICloneable(Protocol):
    """
    Duck-typed clone contract.

    Required methods
    ----------------
    - `clone()` returns an independent copy of `self`.

    Optional methods
    ----------------
    - `clone_from(other)` overwrites `self` with `other.clone()`. Implementations
      may override it to reuse resources already held by `self`.
    """

    def clone(self) -> Self: ...
