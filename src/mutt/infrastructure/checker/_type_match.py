"""
Annotation resolution and structural type matching.

The checker treats function and field annotations as the "static types" of a
candidate. This module turns raw annotations (objects or strings, including
those produced by ``from __future__ import annotations``) into comparable
values and compares them against requirement descriptors.

Matching rules
--------------
- `Any` in a requirement matches every annotation.
- The `Self` placeholder matches the candidate class, `Self`, a
  parametrisation of the candidate (`Box[int]` for `Box`), or a string naming
  the candidate.
- Unions compare as sets of members (`Optional[int]` == `int | None`).
- Generic aliases compare origin and arguments positionally.
- TypeVars and plain classes compare by identity / equality.
- Annotations that cannot be resolved stay strings and are compared against
  the rendered requirement type.
"""

from __future__ import annotations

import inspect
import logging
import sys
import types
import typing
from typing import Any, Dict, Mapping, Optional, get_args, get_origin

from ...domain._requirements import format_type, is_self_type, is_union

logger = logging.getLogger(__name__)

EMPTY = inspect.Parameter.empty
"""Marker for a missing annotation."""

NoneType = type(None)

_UNRESOLVED = (NameError, AttributeError, SyntaxError)


def resolve_owner(candidate: Any) -> Optional[type]:
    """
    Return the class a candidate stands for, or None if it is not class-like.

    Generic aliases such as ``IndexedItem[int]`` resolve to their origin.
    """
    if isinstance(candidate, type):
        return candidate
    origin = get_origin(candidate)
    if isinstance(origin, type) and not is_union(candidate):
        return origin
    return None


def class_namespace(owner: type) -> Dict[str, Any]:
    """
    Build the local namespace used to resolve annotations written in a class.

    Includes every name defined in the class bodies along the MRO (so nested
    classes such as ``Container.Iter`` resolve as ``Iter``) and the class's
    own name.
    """
    ns: Dict[str, Any] = {}
    for klass in reversed(owner.__mro__):
        if klass is object:
            continue
        ns.update(vars(klass))
    ns[owner.__name__] = owner
    return ns


def raw_annotations(obj: Any) -> Dict[str, Any]:
    """
    Return the annotations of a function or class without evaluating strings.
    """
    try:
        return dict(inspect.get_annotations(obj))
    except NameError:
        # lazily evaluated annotations that reference unbound names
        import annotationlib

        return dict(
            annotationlib.get_annotations(obj, format=annotationlib.Format.STRING)
        )


def _annotation_holder() -> None:
    """Carrier function for evaluating one annotation on its own."""


def resolve_annotation(
    ann: Any, globalns: Mapping[str, Any], localns: Mapping[str, Any]
) -> Any:
    """
    Evaluate a single annotation.

    Parameters
    ----------
    ann : Any
        The raw annotation. Non-strings are returned as-is (with `None`
        normalized to `NoneType`).
    globalns : Mapping[str, Any]
        Globals of the module defining the annotated object.
    localns : Mapping[str, Any]
        Extra names (typically the owner's class namespace).

    Returns
    -------
    Any
        The evaluated annotation, or the original string if it names
        something that does not exist (yet).

    Raises
    ------
    Exception
        Anything other than `NameError`, `AttributeError` or `SyntaxError`
        raised while evaluating the annotation propagates.
    """
    if ann is None:
        return NoneType
    if not isinstance(ann, str):
        return ann
    holder = types.FunctionType(_annotation_holder.__code__, dict(globalns))
    holder.__annotations__ = {"value": ann}
    try:
        value = inspect.get_annotations(
            holder, globals=dict(globalns), locals=dict(localns), eval_str=True
        )["value"]
    except _UNRESOLVED as exc:
        logger.debug("Could not resolve annotation %r: %s", ann, exc)
        return ann
    return NoneType if value is None else value


def _resolve_all(
    obj: Any, globalns: Mapping[str, Any], localns: Mapping[str, Any]
) -> Dict[str, Any]:
    try:
        hints = inspect.get_annotations(
            obj, globals=dict(globalns), locals=dict(localns), eval_str=True
        )
    except _UNRESOLVED:
        # resolve annotations one by one, keeping unresolved ones as strings
        return {
            name: resolve_annotation(ann, globalns, localns)
            for name, ann in raw_annotations(obj).items()
        }
    return {name: NoneType if ann is None else ann for name, ann in hints.items()}


def resolved_function_annotations(fn: Any, owner: type) -> Dict[str, Any]:
    """
    Resolve every annotation of `fn` (a function defined on `owner`).
    """
    globalns = getattr(fn, "__globals__", {})
    return _resolve_all(fn, globalns, class_namespace(owner))


def resolved_field_annotations(owner: type) -> Dict[str, Any]:
    """
    Resolve the annotated attributes declared along the MRO of `owner`.

    Later classes in the MRO (closer to `owner`) win.
    """
    localns = class_namespace(owner)
    fields: Dict[str, Any] = {}
    for klass in reversed(owner.__mro__):
        if klass is object:
            continue
        module = sys.modules.get(klass.__module__)
        globalns = vars(module) if module is not None else {}
        fields.update(_resolve_all(klass, globalns, localns))
    return fields


def _normalize_str(s: str) -> str:
    for prefix in ("typing_extensions.", "typing."):
        s = s.replace(prefix, "")
    return s.replace(" ", "").strip("'\"")


def _names_owner(actual: Any, owner: type) -> bool:
    if actual is owner or is_self_type(actual):
        return True
    if get_origin(actual) is owner:
        return True
    if isinstance(actual, typing.ForwardRef):
        actual = actual.__forward_arg__
    if isinstance(actual, str):
        s = _normalize_str(actual)
        return s in (owner.__name__, "Self") or s.startswith(owner.__name__ + "[")
    return False


def type_matches(actual: Any, expected: Any, owner: type, strict: bool = False) -> bool:
    """
    Compare a resolved annotation against a requirement type.

    Parameters
    ----------
    actual : Any
        The candidate's resolved annotation, or `EMPTY` if unannotated.
    expected : Any
        The type named by the requirement.
    owner : type
        The candidate class (substituted for `Self`).
    strict : bool
        If True, an unannotated `actual` does not match.

    Returns
    -------
    bool
        True if the annotation satisfies the requirement.
    """
    if actual is EMPTY:
        return not strict
    if actual is None:
        actual = NoneType
    if expected is None:
        expected = NoneType

    if expected is Any:
        return True
    if is_self_type(expected):
        return _names_owner(actual, owner)
    if is_self_type(actual):
        return expected is owner or get_origin(expected) is owner

    if isinstance(actual, typing.ForwardRef):
        actual = actual.__forward_arg__
    if isinstance(actual, str):
        return _normalize_str(actual) == _normalize_str(format_type(expected, owner))

    if is_union(expected) or is_union(actual):
        if not (is_union(expected) and is_union(actual)):
            return False
        a_args, e_args = get_args(actual), get_args(expected)
        return all(
            any(type_matches(a, e, owner, strict) for e in e_args) for a in a_args
        ) and all(
            any(type_matches(a, e, owner, strict) for a in a_args) for e in e_args
        )

    e_origin, a_origin = get_origin(expected), get_origin(actual)
    if e_origin is not None or a_origin is not None:
        if e_origin is not a_origin:
            return False
        e_args, a_args = get_args(expected), get_args(actual)
        return len(e_args) == len(a_args) and all(
            type_matches(a, e, owner, strict) for a, e in zip(a_args, e_args)
        )

    return actual is expected or actual == expected
