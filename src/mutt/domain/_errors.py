"""
Error types for mutt.

Two disjoint error classes exist:

- `ConformanceError`: raised at a contract binding point when a type does not
  satisfy the contract it is bound to. This signals a programming error and
  is never handled inside the library.
- `AllocationError`: raised by `collect` when the backing allocator cannot
  grow the output sequence. This is a recoverable runtime condition.

"No more items" is not an error: iterators report exhaustion by returning
`None` from `next`.
"""

from __future__ import annotations

from typing import Any, Optional

from ._verdict import FailureKind, Verdict


class ConformanceError(TypeError):
    """
    Raised when a type is bound to a contract it does not satisfy.

    Attributes
    ----------
    verdict : Verdict
        The failing verdict produced by the checker.
    candidate : Any
        The type (or object) that was checked.
    """

    def __init__(self, message: str, verdict: Verdict, candidate: Any = None) -> None:
        """
        Initialize the ConformanceError.

        Parameters
        ----------
        message : str
            Diagnostic naming the violated requirement and expected signature.
        verdict : Verdict
            The failing verdict.
        candidate : Any, optional
            The checked type.
        """
        super().__init__(message)
        self.verdict = verdict
        self.candidate = candidate

    @property
    def reason(self) -> Optional[FailureKind]:
        """Shortcut for `self.verdict.reason`."""
        return self.verdict.reason


class AllocationError(MemoryError):
    """
    Raised when an allocator cannot grow a collected sequence.

    Attributes
    ----------
    allocated : int
        Number of items successfully stored before the failure.
    limit : Optional[int]
        Configured capacity that was exceeded, if the failure came from a
        capacity limit rather than the runtime.
    """

    def __init__(self, allocated: int, limit: Optional[int] = None) -> None:
        if limit is None:
            msg = f"Allocation failed after {allocated} item(s)."
        else:
            msg = f"Allocation failed: capacity of {limit} item(s) exhausted."
        super().__init__(msg)
        self.allocated = allocated
        self.limit = limit
