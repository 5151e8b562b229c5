"""
Conformance checker for mutt contracts.

This module validates that a candidate class exposes the structure a contract
requires: methods with an exact signature, associated types, and typed
fields. It is the single mechanism every contract (`Iterator`,
`IntoIterable`, `Cloneable`, `Printable`) is built on.

Pipeline
--------
Checks run as an ordered pipeline of steps. Each step may downgrade the
checker from valid to invalid and record a `FailureKind`; no step ever
upgrades it back. Once invalid, every remaining step is a no-op, so the
resulting `Verdict` always names the *first* violated requirement.

For a method requirement the steps are:

1. the candidate is a class                      -> `WRONG_KIND`
2. the named method exists                       -> `MISSING_METHOD`
3. its positional parameter count matches        -> `WRONG_ARITY`
4. each parameter type matches positionally      -> `WRONG_PARAM_TYPE`
5. its return type is in the accepted set        -> `WRONG_RETURN_TYPE`

Associated types and fields are single-step checks
(`MISSING_ASSOCIATED_TYPE`, `MISSING_FIELD`, `WRONG_FIELD_TYPE`).

Modes
-----
- Introspection mode (``diagnostic=False``): failures are recorded and
  returned to the caller. No side effects.
- Diagnostic mode (``diagnostic=True``): the first failure raises
  `ConformanceError` with a message naming the violated requirement and the
  expected signature. Used at contract binding points.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, ClassVar, Dict, Iterable, Mapping, Optional, get_origin

from ...domain._errors import ConformanceError
from ...domain._requirements import (
    AssociatedTypeRequirement,
    FieldRequirement,
    MethodRequirement,
    format_type,
)
from ...domain._verdict import FailureKind, Verdict
from ._config import strict_annotations_enabled
from ._type_match import (
    EMPTY,
    resolve_owner,
    resolved_field_annotations,
    resolved_function_annotations,
    type_matches,
)

logger = logging.getLogger(__name__)

_MISSING = object()

_DEFAULT_MESSAGES: Dict[FailureKind, str] = {
    FailureKind.WRONG_KIND: (
        "Invalid implementation type {owner}: must be a class "
        "(record, tagged union, or enum)"
    ),
    FailureKind.MISSING_METHOD: "`{signature}` must be implemented by {owner}",
    FailureKind.WRONG_ARITY: (
        "The `{name}` function must have exactly {num_args} parameter(s) "
        "(including the receiver): {detail}"
    ),
    FailureKind.WRONG_PARAM_TYPE: (
        "The `{name}` function has a parameter of the wrong type: {detail} "
        "(expected `{signature}`)"
    ),
    FailureKind.WRONG_RETURN_TYPE: (
        "The `{name}` function must return `{expected}` (returns `{actual}`)"
    ),
    FailureKind.MISSING_ASSOCIATED_TYPE: (
        "Associated type `{name}` must be declared by {owner}"
    ),
    FailureKind.MISSING_FIELD: "Field `{signature}` must be declared by {owner}",
    FailureKind.WRONG_FIELD_TYPE: (
        "Field `{name}` of {owner} must be of type `{expected}` (is `{actual}`)"
    ),
}


class InterfaceChecker:
    """
    Stateful, chainable conformance checker for one candidate.

    Parameters
    ----------
    candidate : Any
        The type to validate. Generic aliases resolve to their origin class.
    diagnostic : bool, optional
        If True, the first failing step raises `ConformanceError`.
    messages : Optional[Mapping[FailureKind, str]], optional
        Per-reason message templates overriding the defaults. Templates are
        formatted with ``owner``, ``name``, ``signature``, ``expected``,
        ``actual``, ``num_args`` and ``detail``.

    Examples
    --------
    >>> from typing_extensions import Self
    >>> size = MethodRequirement("size", 1, (Self,), (int,))
    >>> class Stack:
    ...     def size(self) -> int: ...
    >>> InterfaceChecker(Stack).is_record_kind().has_func(size).valid
    True
    >>> class Empty: ...
    >>> InterfaceChecker(Empty).has_func(size).reason
    <FailureKind.MISSING_METHOD: 'missing_method'>
    """

    def __init__(
        self,
        candidate: Any,
        diagnostic: bool = False,
        messages: Optional[Mapping[FailureKind, str]] = None,
    ) -> None:
        self.candidate = candidate
        self.diagnostic = diagnostic
        self.messages: Dict[FailureKind, str] = dict(_DEFAULT_MESSAGES)
        if messages:
            self.messages.update(messages)
        self.owner: Optional[type] = resolve_owner(candidate)
        self.strict = strict_annotations_enabled()
        self._verdict = Verdict.ok()

    @property
    def valid(self) -> bool:
        return self._verdict.valid

    @property
    def reason(self) -> Optional[FailureKind]:
        return self._verdict.reason

    def verdict(self) -> Verdict:
        """Return the verdict accumulated so far."""
        return self._verdict

    # ----------------------------
    # failure recording
    # ----------------------------

    def _owner_name(self) -> str:
        if self.owner is not None:
            return self.owner.__name__
        return repr(self.candidate)

    def _fail(
        self,
        reason: FailureKind,
        requirement: Any = None,
        *,
        actual: Any = EMPTY,
        detail: str = "",
    ) -> "InterfaceChecker":
        if not self.valid:
            return self

        ctx = {
            "owner": self._owner_name(),
            "name": getattr(requirement, "name", ""),
            "signature": (
                requirement.describe(self.owner) if requirement is not None else ""
            ),
            "expected": _expected_text(requirement, self.owner),
            "actual": format_type(actual, self.owner),
            "num_args": getattr(requirement, "num_args", ""),
            "detail": detail,
        }
        message = self.messages[reason].format(**ctx)
        self._verdict = Verdict.fail(reason, requirement, message)

        logger.debug(
            "Conformance check failed for %s: %s (%s)",
            ctx["owner"],
            reason.name,
            message,
        )
        if self.diagnostic:
            raise ConformanceError(message, self._verdict, self.candidate)
        return self

    # ----------------------------
    # pipeline steps
    # ----------------------------

    def is_record_kind(self) -> "InterfaceChecker":
        """
        Require the candidate to be a class (`WRONG_KIND` otherwise).
        """
        if not self.valid:
            return self
        if self.owner is None:
            return self._fail(FailureKind.WRONG_KIND)
        return self

    def has_func(self, req: MethodRequirement) -> "InterfaceChecker":
        """
        Require a method matching `req` (name, arity, parameter types, return).
        """
        if not self.valid:
            return self
        if self.owner is None:
            return self._fail(FailureKind.WRONG_KIND)
        owner = self.owner

        raw = inspect.getattr_static(owner, req.name, _MISSING)
        if raw is _MISSING:
            if req.optional:
                return self
            return self._fail(FailureKind.MISSING_METHOD, req)

        bound_to_instance = inspect.isfunction(raw)
        if isinstance(raw, (staticmethod, classmethod)):
            fn = raw.__func__
        else:
            fn = raw
        fn = inspect.unwrap(fn) if inspect.isfunction(fn) else fn
        if not inspect.isfunction(fn):
            return self._fail(
                FailureKind.MISSING_METHOD, req, detail=f"{req.name!r} is not a function"
            )

        # step 3: arity
        code = fn.__code__
        n_pos = code.co_argcount
        kwonly = code.co_varnames[n_pos : n_pos + code.co_kwonlyargcount]
        kwdefaults = fn.__kwdefaults__ or {}
        required_kwonly = [k for k in kwonly if k not in kwdefaults]
        has_varargs = bool(code.co_flags & inspect.CO_VARARGS)

        if n_pos != req.num_args or has_varargs or required_kwonly:
            parts = [f"has {n_pos} positional parameter(s)"]
            if has_varargs:
                parts.append("accepts *args")
            if required_kwonly:
                parts.append(
                    "requires keyword-only {}".format(", ".join(required_kwonly))
                )
            return self._fail(FailureKind.WRONG_ARITY, req, detail="; ".join(parts))

        # step 4: parameter types
        names = code.co_varnames[:n_pos]
        hints = resolved_function_annotations(fn, owner)
        for i, (pname, expected) in enumerate(zip(names, req.arg_types)):
            actual = hints.get(pname, EMPTY)
            if i == 0:
                if not bound_to_instance:
                    return self._fail(
                        FailureKind.WRONG_PARAM_TYPE,
                        req,
                        actual=actual,
                        detail=f"`{pname}` is not bound to an instance "
                        f"(static or class method)",
                    )
                # the receiver may stay unannotated even in strict mode
                if actual is EMPTY:
                    continue
            if not type_matches(actual, expected, owner, self.strict):
                return self._fail(
                    FailureKind.WRONG_PARAM_TYPE,
                    req,
                    actual=actual,
                    detail="parameter {} (`{}`) is `{}`, must be `{}`".format(
                        i,
                        pname,
                        format_type(actual, owner),
                        format_type(expected, owner),
                    ),
                )

        # step 5: return type
        if not req.ret_types and req.accepts_return is None:
            return self
        actual = hints.get("return", EMPTY)
        if actual is EMPTY and not self.strict:
            return self
        if actual is not EMPTY:
            if any(type_matches(actual, t, owner, self.strict) for t in req.ret_types):
                return self
            if req.accepts_return is not None and req.accepts_return(actual):
                return self
        return self._fail(FailureKind.WRONG_RETURN_TYPE, req, actual=actual)

    def has_type(self, req: AssociatedTypeRequirement) -> "InterfaceChecker":
        """
        Require an associated type declared on the candidate.
        """
        if not self.valid:
            return self
        if self.owner is None:
            return self._fail(FailureKind.WRONG_KIND)
        value = inspect.getattr_static(self.owner, req.name, _MISSING)
        if value is _MISSING or inspect.isfunction(value):
            return self._fail(FailureKind.MISSING_ASSOCIATED_TYPE, req)
        return self

    def has_field(self, req: FieldRequirement) -> "InterfaceChecker":
        """
        Require a field (annotated attribute or `__slots__` entry).
        """
        if not self.valid:
            return self
        if self.owner is None:
            return self._fail(FailureKind.WRONG_KIND)
        owner = self.owner

        fields = {
            name: ann
            for name, ann in resolved_field_annotations(owner).items()
            if not _is_classvar(ann)
        }
        if req.name not in fields:
            if req.name in _slot_names(owner):
                fields[req.name] = EMPTY
            else:
                return self._fail(FailureKind.MISSING_FIELD, req)

        actual = fields[req.name]
        if not type_matches(actual, req.type, owner, self.strict):
            return self._fail(FailureKind.WRONG_FIELD_TYPE, req, actual=actual)
        return self

    def require(self, requirements: Iterable[Any]) -> "InterfaceChecker":
        """
        Run each requirement in order, dispatching on its descriptor kind.
        """
        for req in requirements:
            if not self.valid:
                break
            if isinstance(req, MethodRequirement):
                self.has_func(req)
            elif isinstance(req, AssociatedTypeRequirement):
                self.has_type(req)
            elif isinstance(req, FieldRequirement):
                self.has_field(req)
            else:
                raise TypeError(f"Unsupported requirement descriptor: {req!r}")
        return self


def _expected_text(requirement: Any, owner: Optional[type]) -> str:
    if isinstance(requirement, MethodRequirement):
        return requirement.returns_text(owner)
    if isinstance(requirement, FieldRequirement):
        return format_type(requirement.type, owner)
    return ""


def _is_classvar(ann: Any) -> bool:
    if ann is ClassVar or get_origin(ann) is ClassVar:
        return True
    return isinstance(ann, str) and ann.replace("typing.", "").startswith("ClassVar")


def _slot_names(owner: type) -> set:
    names = set()
    for klass in owner.__mro__:
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.update(slots)
    return names


def check(
    candidate: Any,
    requirements: Iterable[Any],
    diagnostic: bool = False,
    messages: Optional[Mapping[FailureKind, str]] = None,
) -> Verdict:
    """
    Check `candidate` against an ordered list of requirements.

    Parameters
    ----------
    candidate : Any
        The type to validate.
    requirements : Iterable[Any]
        Requirement descriptors, evaluated in order after the kind check.
    diagnostic : bool, optional
        If True, raise `ConformanceError` on the first failure.
    messages : Optional[Mapping[FailureKind, str]], optional
        Message overrides (see `InterfaceChecker`).

    Returns
    -------
    Verdict
        The first violated requirement, or a valid verdict.

    Raises
    ------
    ConformanceError
        In diagnostic mode, if any requirement is violated.
    """
    checker = InterfaceChecker(candidate, diagnostic=diagnostic, messages=messages)
    return checker.is_record_kind().require(requirements).verdict()
