"""
Declarative requirement descriptors for mutt contracts.

Contract authors describe the structure a candidate type must expose with
immutable descriptor objects; the conformance checker is their only consumer.

Three descriptor kinds exist:

- `MethodRequirement`: a named method with an exact positional arity,
  positional parameter types, and a set of accepted return types
- `AssociatedTypeRequirement`: a named type declared on the candidate
  (e.g. `ItemType` on an iterator)
- `FieldRequirement`: a named, typed field (dataclass field, annotated
  attribute, or `__slots__` entry)

Notes
-----
- `typing_extensions.Self` is the placeholder for "the candidate type" in
  parameter and return positions, including nested ones such as
  `Optional[Self]`.
- `typing.Any` means "unconstrained".
- The receiver (`self`) counts towards `num_args` and is listed as the first
  entry of `arg_types`.
"""

from __future__ import annotations

import inspect
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, TypeVar, Union, get_args, get_origin

from typing_extensions import Self


def is_self_type(tp: Any) -> bool:
    """Return True if `tp` is the `Self` placeholder (typing or typing_extensions)."""
    return tp is Self or tp is getattr(typing, "Self", Self)


def is_union(tp: Any) -> bool:
    """Return True if `tp` is a `Union[...]`/`Optional[...]`/`X | Y` form."""
    origin = get_origin(tp)
    return origin is Union or origin is types.UnionType


def format_type(tp: Any, owner: Optional[type] = None) -> str:
    """
    Render a type (or annotation) for diagnostics.

    Parameters
    ----------
    tp : Any
        Type, typing construct, or unresolved string annotation.
    owner : Optional[type]
        Candidate class substituted for the `Self` placeholder.

    Returns
    -------
    str
        A compact, Python-like rendering (`Optional[int]`, `Counter`, ...).
    """
    if tp is inspect.Parameter.empty:
        return "<unannotated>"
    if is_self_type(tp):
        return owner.__name__ if owner is not None else "Self"
    if isinstance(tp, str):
        return tp
    if tp is None or tp is type(None):
        return "None"
    if tp is Any:
        return "Any"
    if isinstance(tp, TypeVar):
        return tp.__name__

    if is_union(tp):
        args = get_args(tp)
        rest = [a for a in args if a is not type(None)]
        if len(rest) == 1 and len(args) == 2:
            return f"Optional[{format_type(rest[0], owner)}]"
        return " | ".join(format_type(a, owner) for a in args)

    origin = get_origin(tp)
    args = get_args(tp)
    if origin is not None and args:
        return "{}[{}]".format(
            format_type(origin, owner), ", ".join(format_type(a, owner) for a in args)
        )

    if isinstance(tp, type):
        return tp.__name__
    return repr(tp)


@dataclass(frozen=True)
class MethodRequirement:
    """
    Requirement for a method with an exact signature.

    Attributes
    ----------
    name : str
        Method name looked up on the candidate class.
    num_args : int
        Exact positional parameter count, receiver included.
    arg_types : Tuple[Any, ...]
        Positional parameter types. Entry 0 is the receiver (normally `Self`).
    ret_types : Tuple[Any, ...]
        Accepted return types (covariant alternatives).
    accepts_return : Optional[Callable[[Any], bool]]
        Alternate acceptable return shape, tried after `ret_types` fails.
        Receives the resolved return annotation.
    optional : bool
        If True, the requirement passes when the method is absent, but is
        fully checked when it is present.
    arg_names : Tuple[str, ...]
        Parameter names used only when rendering the expected signature.
    ret_label : str
        Rendering of the return type when it is described by `accepts_return`
        rather than `ret_types`.
    """

    name: str
    num_args: int
    arg_types: Tuple[Any, ...]
    ret_types: Tuple[Any, ...] = ()
    accepts_return: Optional[Callable[[Any], bool]] = None
    optional: bool = False
    arg_names: Tuple[str, ...] = ()
    ret_label: str = ""

    def __post_init__(self) -> None:
        if self.num_args != len(self.arg_types):
            raise ValueError(
                f"Requirement {self.name!r}: num_args={self.num_args} but "
                f"{len(self.arg_types)} argument type(s) were given."
            )

    def describe(self, owner: Optional[type] = None) -> str:
        """
        Render the expected signature, e.g. ``next(self) -> Optional[int]``.
        """
        params = []
        for i, tp in enumerate(self.arg_types):
            if i < len(self.arg_names):
                pname = self.arg_names[i]
            else:
                pname = "self" if i == 0 else f"arg{i}"
            if i == 0 and is_self_type(tp):
                params.append(pname)
            else:
                params.append(f"{pname}: {format_type(tp, owner)}")
        return "{}({}) -> {}".format(
            self.name, ", ".join(params), self.returns_text(owner)
        )

    def returns_text(self, owner: Optional[type] = None) -> str:
        """Render the accepted return type(s)."""
        if self.ret_label:
            return self.ret_label
        if self.ret_types:
            return " | ".join(format_type(t, owner) for t in self.ret_types)
        return "..."


@dataclass(frozen=True)
class AssociatedTypeRequirement:
    """
    Requirement for an associated type declared on the candidate class.

    Attributes
    ----------
    name : str
        Attribute name of the associated type (e.g. ``"ItemType"``).
    """

    name: str

    def describe(self, owner: Optional[type] = None) -> str:
        return f"{self.name} = <type>"


@dataclass(frozen=True)
class FieldRequirement:
    """
    Requirement for a typed field.

    Attributes
    ----------
    name : str
        Field name.
    type : Any
        Expected field annotation. `typing.Any` accepts any annotation.
    """

    name: str
    type: Any = Any

    def describe(self, owner: Optional[type] = None) -> str:
        return f"{self.name}: {format_type(self.type, owner)}"


Requirement = Union[MethodRequirement, AssociatedTypeRequirement, FieldRequirement]
"""Any requirement descriptor accepted by the checker."""
