from __future__ import annotations

import os
import unittest
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Optional, TypeVar
from unittest import mock

from typing_extensions import Self

from src.mutt.domain._errors import ConformanceError
from src.mutt.domain._requirements import (
    AssociatedTypeRequirement,
    FieldRequirement,
    MethodRequirement,
)
from src.mutt.domain._verdict import FailureKind
from src.mutt.infrastructure.checker import (
    InterfaceChecker,
    check,
    strict_annotations_enabled,
)
from src.mutt.infrastructure.checker._type_match import (
    resolve_annotation,
    resolved_function_annotations,
)

T = TypeVar("T")

SIZE = MethodRequirement("size", 1, (Self,), (int,))
SCALE = MethodRequirement("scale", 2, (Self, float), (float,), arg_names=("self", "factor"))
MAYBE = MethodRequirement("peek", 1, (Self,), (Optional[int],))
MERGE = MethodRequirement("merge", 2, (Self, Self), (Self,), arg_names=("self", "other"))


class Stack:
    def size(self) -> int:
        return 0

    def scale(self, factor: float) -> float:
        return factor

    def peek(self) -> int | None:
        return None

    def merge(self, other: Stack) -> Stack:
        return self


class Empty:
    pass


class DataSize:
    size = 3


class ExtraParam:
    def size(self, extra) -> int:
        return 0


class VarArgs:
    def size(self, *args) -> int:
        return 0


class RequiredKwOnly:
    def size(self, *, flag: bool) -> int:
        return 0


class OptionalKwOnly:
    def size(self, *, flag: bool = False) -> int:
        return 0


class StaticSize:
    @staticmethod
    def size(x) -> int:
        return 0


class IntScale:
    def scale(self, factor: int) -> float:
        return 0.0


class StrSize:
    def size(self) -> str:
        return ""


class Unannotated:
    def size(self):
        return 0

    def scale(self, factor):
        return factor


class AnnotatedReceiver:
    def size(self: AnnotatedReceiver) -> int:
        return 0


class ForeignReceiver:
    def size(self: Stack) -> int:
        return 0


class Box(Generic[T]):
    def size(self) -> int:
        return 0


class Item:
    ItemType = int

    def size(self) -> int:
        return 0


class MethodItemType:
    def ItemType(self):
        return int


@dataclass
class Coord:
    x: int
    label: str
    DIM: ClassVar[int] = 2


class Slotted:
    __slots__ = ("x",)


class PartlyResolvable:
    def scale(self, factor: int) -> Missing:  # noqa: F821
        return 0


class BrokenAnnotation:
    def size(self) -> 1 / 0:
        return 0


class TestResolveAnnotation(unittest.TestCase):
    def test_strings_are_evaluated(self):
        self.assertEqual(resolve_annotation("Optional[int]", globals(), {}), Optional[int])
        self.assertEqual(resolve_annotation("int | None", globals(), {}), int | None)
        self.assertIs(resolve_annotation("Local", globals(), {"Local": Empty}), Empty)

    def test_none_is_normalized(self):
        self.assertIs(resolve_annotation(None, {}, {}), type(None))
        self.assertIs(resolve_annotation("None", {}, {}), type(None))

    def test_non_strings_pass_through(self):
        self.assertIs(resolve_annotation(int, {}, {}), int)

    def test_unresolvable_names_stay_strings(self):
        self.assertEqual(resolve_annotation("Missing", globals(), {}), "Missing")
        self.assertEqual(resolve_annotation("os.missing", globals(), {}), "os.missing")
        self.assertEqual(resolve_annotation("List[", globals(), {}), "List[")

    def test_other_errors_propagate(self):
        with self.assertRaises(ZeroDivisionError):
            resolve_annotation("1 / 0", globals(), {})

    def test_function_annotations_resolve_one_by_one(self):
        hints = resolved_function_annotations(PartlyResolvable.scale, PartlyResolvable)
        self.assertIs(hints["factor"], int)
        self.assertEqual(hints["return"], "Missing")

    def test_check_keeps_resolved_parameters(self):
        req = MethodRequirement("scale", 2, (Self, float), (Any,))
        v = check(PartlyResolvable, [req])
        self.assertIs(v.reason, FailureKind.WRONG_PARAM_TYPE)

    def test_check_does_not_hide_evaluation_errors(self):
        with self.assertRaises(ZeroDivisionError):
            check(BrokenAnnotation, [SIZE])


class TestKindCheck(unittest.TestCase):
    def test_non_classes_fail_with_wrong_kind(self):
        for candidate in (42, "Stack", lambda: 0, Stack(), Optional[int]):
            with self.subTest(candidate=candidate):
                v = check(candidate, [SIZE])
                self.assertFalse(v.valid)
                self.assertIs(v.reason, FailureKind.WRONG_KIND)
                self.assertIsNone(v.requirement)

    def test_generic_alias_resolves_to_origin(self):
        self.assertTrue(check(Box[int], [SIZE]).valid)

    def test_no_requirements_is_valid_for_a_class(self):
        self.assertTrue(check(Empty, []).valid)


class TestHasFunc(unittest.TestCase):
    def test_matching_methods_pass(self):
        v = check(Stack, [SIZE, SCALE, MAYBE, MERGE])
        self.assertTrue(v.valid, v.detail)

    def test_missing_method(self):
        v = check(Empty, [SIZE])
        self.assertIs(v.reason, FailureKind.MISSING_METHOD)
        self.assertIs(v.requirement, SIZE)
        self.assertIn("size(self) -> int", v.detail)
        self.assertIn("Empty", v.detail)

    def test_non_function_attribute_counts_as_missing(self):
        self.assertIs(check(DataSize, [SIZE]).reason, FailureKind.MISSING_METHOD)

    def test_wrong_arity(self):
        for candidate in (ExtraParam, VarArgs, RequiredKwOnly):
            with self.subTest(candidate=candidate.__name__):
                self.assertIs(check(candidate, [SIZE]).reason, FailureKind.WRONG_ARITY)

    def test_optional_keyword_only_parameter_is_allowed(self):
        self.assertTrue(check(OptionalKwOnly, [SIZE]).valid)

    def test_static_method_fails_receiver_check(self):
        self.assertIs(check(StaticSize, [SIZE]).reason, FailureKind.WRONG_PARAM_TYPE)

    def test_wrong_param_type(self):
        v = check(IntScale, [SCALE])
        self.assertIs(v.reason, FailureKind.WRONG_PARAM_TYPE)
        self.assertIn("factor", v.detail)

    def test_wrong_return_type(self):
        v = check(StrSize, [SIZE])
        self.assertIs(v.reason, FailureKind.WRONG_RETURN_TYPE)
        self.assertIn("must return `int`", v.detail)
        self.assertIn("returns `str`", v.detail)

    def test_union_spellings_are_equivalent(self):
        # Stack.peek is annotated `int | None`, the requirement says Optional[int]
        self.assertTrue(check(Stack, [MAYBE]).valid)

    def test_covariant_return_alternatives(self):
        req = MethodRequirement("size", 1, (Self,), (str, int))
        self.assertTrue(check(Stack, [req]).valid)
        self.assertTrue(check(StrSize, [req]).valid)

    def test_annotated_receiver(self):
        self.assertTrue(check(AnnotatedReceiver, [SIZE]).valid)
        self.assertIs(
            check(ForeignReceiver, [SIZE]).reason, FailureKind.WRONG_PARAM_TYPE
        )

    def test_self_in_parameter_and_return_positions(self):
        class Other:
            def merge(self, other: Stack) -> Stack:
                return other

        self.assertIs(check(Other, [MERGE]).reason, FailureKind.WRONG_PARAM_TYPE)

    def test_any_is_unconstrained(self):
        req = MethodRequirement("scale", 2, (Self, Any), (Any,))
        self.assertTrue(check(IntScale, [req]).valid)

    def test_optional_requirement(self):
        req = MethodRequirement("size", 1, (Self,), (int,), optional=True)
        self.assertTrue(check(Empty, [req]).valid)
        self.assertTrue(check(Stack, [req]).valid)
        self.assertIs(check(StrSize, [req]).reason, FailureKind.WRONG_RETURN_TYPE)


class TestStrictAnnotations(unittest.TestCase):
    def test_unannotated_accepted_by_default(self):
        with mock.patch.dict(os.environ, {"MUTT_STRICT_ANNOTATIONS": "0"}):
            self.assertFalse(strict_annotations_enabled())
            self.assertTrue(check(Unannotated, [SIZE, SCALE]).valid)

    def test_strict_mode_rejects_unannotated_return(self):
        with mock.patch.dict(os.environ, {"MUTT_STRICT_ANNOTATIONS": "1"}):
            self.assertTrue(strict_annotations_enabled())
            v = check(Unannotated, [SIZE])
        self.assertIs(v.reason, FailureKind.WRONG_RETURN_TYPE)

    def test_strict_mode_rejects_unannotated_parameter(self):
        with mock.patch.dict(os.environ, {"MUTT_STRICT_ANNOTATIONS": "true"}):
            v = check(Unannotated, [SCALE])
        self.assertIs(v.reason, FailureKind.WRONG_PARAM_TYPE)

    def test_strict_mode_keeps_unannotated_receiver(self):
        with mock.patch.dict(os.environ, {"MUTT_STRICT_ANNOTATIONS": "1"}):
            self.assertTrue(check(Stack, [SIZE]).valid)

    def test_falsy_values(self):
        for value in ("0", "", "false", "False", "FALSE"):
            with self.subTest(value=value):
                with mock.patch.dict(os.environ, {"MUTT_STRICT_ANNOTATIONS": value}):
                    self.assertFalse(strict_annotations_enabled())


class TestHasType(unittest.TestCase):
    def test_associated_type(self):
        req = AssociatedTypeRequirement("ItemType")
        self.assertTrue(check(Item, [req]).valid)
        self.assertIs(
            check(Empty, [req]).reason, FailureKind.MISSING_ASSOCIATED_TYPE
        )
        self.assertIs(
            check(MethodItemType, [req]).reason, FailureKind.MISSING_ASSOCIATED_TYPE
        )


class TestHasField(unittest.TestCase):
    def test_dataclass_fields(self):
        self.assertTrue(
            check(Coord, [FieldRequirement("x", int), FieldRequirement("label", str)]).valid
        )

    def test_missing_field(self):
        v = check(Coord, [FieldRequirement("y", int)])
        self.assertIs(v.reason, FailureKind.MISSING_FIELD)

    def test_class_variables_are_not_fields(self):
        self.assertIs(
            check(Coord, [FieldRequirement("DIM", int)]).reason,
            FailureKind.MISSING_FIELD,
        )

    def test_wrong_field_type(self):
        v = check(Coord, [FieldRequirement("x", str)])
        self.assertIs(v.reason, FailureKind.WRONG_FIELD_TYPE)
        self.assertIn("`str`", v.detail)

    def test_slots_are_fields(self):
        self.assertTrue(check(Slotted, [FieldRequirement("x")]).valid)


class TestPipeline(unittest.TestCase):
    def test_first_violation_wins(self):
        # both size and scale are missing; the verdict names size
        v = check(Empty, [SIZE, SCALE])
        self.assertIs(v.requirement, SIZE)

    def test_requirement_order_decides_the_reported_failure(self):
        v = check(StrSize, [SCALE, SIZE])
        self.assertIs(v.reason, FailureKind.MISSING_METHOD)
        self.assertIs(v.requirement, SCALE)

    def test_steps_never_upgrade_validity(self):
        checker = InterfaceChecker(Empty)
        checker.has_func(SIZE)
        self.assertFalse(checker.valid)
        checker.has_type(AssociatedTypeRequirement("ItemType"))
        checker.has_func(MethodRequirement("__init__", 1, (Self,)))
        self.assertFalse(checker.valid)
        self.assertIs(checker.reason, FailureKind.MISSING_METHOD)
        self.assertIs(checker.verdict().requirement, SIZE)

    def test_chaining(self):
        checker = InterfaceChecker(Stack).is_record_kind().has_func(SIZE).has_func(SCALE)
        self.assertTrue(checker.valid)
        self.assertIsNone(checker.reason)

    def test_unsupported_descriptor(self):
        with self.assertRaises(TypeError):
            check(Stack, ["size"])


class TestModes(unittest.TestCase):
    def test_introspection_mode_has_no_side_effects(self):
        v = check(Empty, [SIZE], diagnostic=False)
        self.assertFalse(v.valid)

    def test_diagnostic_mode_raises(self):
        with self.assertRaises(ConformanceError) as ctx:
            check(Empty, [SIZE], diagnostic=True)
        err = ctx.exception
        self.assertIs(err.reason, FailureKind.MISSING_METHOD)
        self.assertIs(err.candidate, Empty)
        self.assertIn("size(self) -> int", str(err))

    def test_diagnostic_mode_is_silent_on_success(self):
        self.assertTrue(check(Stack, [SIZE], diagnostic=True).valid)

    def test_message_overrides(self):
        messages = {FailureKind.MISSING_METHOD: "{owner} lacks {name}"}
        with self.assertRaises(ConformanceError) as ctx:
            check(Empty, [SIZE], diagnostic=True, messages=messages)
        self.assertEqual(str(ctx.exception), "Empty lacks size")
        # other kinds keep the default template
        v = check(StrSize, [SIZE], messages=messages)
        self.assertIn("must return", v.detail)

    def test_failures_are_logged_at_debug(self):
        with self.assertLogs("src.mutt.infrastructure.checker._checker", "DEBUG") as cm:
            check(Empty, [SIZE])
        self.assertTrue(any("MISSING_METHOD" in line for line in cm.output))


if __name__ == "__main__":
    unittest.main()
