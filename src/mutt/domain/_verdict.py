"""
Conformance verdicts for mutt.

This module defines the value types produced by the conformance checker:

- `FailureKind`: the closed set of reasons a candidate type can fail a
  contract requirement
- `Verdict`: the outcome of checking one candidate against one contract

A verdict carries at most one failure reason. The checker evaluates the
requirements of a contract in a fixed order and stops at the first violated
one, so a `Verdict` always describes the *first* problem, never an aggregate.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class FailureKind(Enum):
    """
    Enumeration of conformance failure reasons.

    Attributes
    ----------
    MISSING_METHOD : FailureKind
        The required method is not provided by the candidate.
    MISSING_ASSOCIATED_TYPE : FailureKind
        The required associated type (e.g. `ItemType`) is not declared.
    MISSING_FIELD : FailureKind
        The required field is not declared.
    WRONG_ARITY : FailureKind
        The required method has an incorrect number of parameters.
    WRONG_PARAM_TYPE : FailureKind
        A parameter of the required method has an incorrect type.
    WRONG_RETURN_TYPE : FailureKind
        The required method returns a type outside the accepted set.
    WRONG_KIND : FailureKind
        The candidate is not a class (record, tagged union or enum).
    WRONG_FIELD_TYPE : FailureKind
        The required field is declared with an incorrect type.
    """

    MISSING_METHOD = "missing_method"
    MISSING_ASSOCIATED_TYPE = "missing_associated_type"
    MISSING_FIELD = "missing_field"
    WRONG_ARITY = "wrong_arity"
    WRONG_PARAM_TYPE = "wrong_param_type"
    WRONG_RETURN_TYPE = "wrong_return_type"
    WRONG_KIND = "wrong_kind"
    WRONG_FIELD_TYPE = "wrong_field_type"


@dataclass(frozen=True)
class Verdict:
    """
    Outcome of a conformance check.

    Attributes
    ----------
    valid : bool
        True if the candidate satisfies every requirement.
    reason : Optional[FailureKind]
        The first violated requirement's failure kind. `None` iff `valid`.
    requirement : Optional[Any]
        The requirement descriptor that failed, if any. `None` for a valid
        verdict and for `WRONG_KIND` failures (which precede all
        requirements).
    detail : str
        Human-readable description of the failure. Empty for valid verdicts.

    Raises
    ------
    ValueError
        If `valid` and `reason` disagree (a valid verdict with a reason, or
        an invalid verdict without one).
    """

    valid: bool
    reason: Optional[FailureKind] = None
    requirement: Optional[Any] = None
    detail: str = ""

    def __post_init__(self) -> None:
        if self.valid and self.reason is not None:
            raise ValueError("A valid verdict cannot carry a failure reason.")
        if not self.valid and self.reason is None:
            raise ValueError("An invalid verdict must carry a failure reason.")

    @classmethod
    def ok(cls) -> "Verdict":
        """Return the (shared shape of a) passing verdict."""
        return cls(valid=True)

    @classmethod
    def fail(
        cls,
        reason: FailureKind,
        requirement: Optional[Any] = None,
        detail: str = "",
    ) -> "Verdict":
        """Build a failing verdict for `reason`."""
        return cls(valid=False, reason=reason, requirement=requirement, detail=detail)

    def __bool__(self) -> bool:
        return self.valid
