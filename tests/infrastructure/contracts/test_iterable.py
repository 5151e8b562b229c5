from __future__ import annotations

import os
import unittest
from typing import Optional
from unittest import mock

from src.mutt.domain._errors import ConformanceError
from src.mutt.domain._iterator import IIterator
from src.mutt.domain._verdict import FailureKind
from src.mutt.infrastructure.contracts import (
    IntoIterable,
    Iterator,
    check_into_iter_impl,
    is_into_iterable,
)

from .._containers import CountingIter, Vec


class Range(IntoIterable):
    """Container whose iterator is a duck type."""

    def __init__(self, n: int) -> None:
        self.n = n

    def iter(self) -> CountingIter:
        return CountingIter(self.n)


class ReturnsInt:
    def iter(self) -> int:
        return 0


class Forward:
    def iter(self) -> Undefined:  # noqa: F821
        return None


class ContractReturn:
    def iter(self) -> Iterator[int]:
        return Vec([1, 2]).iter()


class ProtocolReturn:
    def iter(self) -> IIterator[int]:
        return CountingIter(2)


class NonIteratorReturn:
    def iter(self) -> Vec:
        return Vec([])


class SlottedIter(Iterator[int]):
    __slots__ = ("data", "idx")
    ItemType = int

    def __init__(self, data) -> None:
        self.data = data
        self.idx = 0

    def next(self) -> Optional[int]:
        if self.idx >= len(self.data):
            return None
        self.idx += 1
        return self.data[self.idx - 1]


class SlottedVec(IntoIterable):
    def __init__(self, data) -> None:
        self.data = list(data)

    def iter(self) -> SlottedIter:
        return SlottedIter(self.data)


class TestIntoIterableContract(unittest.TestCase):
    def test_valid_containers(self):
        for tp in (Vec, Range, SlottedVec):
            with self.subTest(tp=tp.__name__):
                self.assertTrue(is_into_iterable(tp))

    def test_return_type_must_be_an_iterator(self):
        v = check_into_iter_impl(ReturnsInt)
        self.assertIs(v.reason, FailureKind.WRONG_RETURN_TYPE)
        self.assertIn("Iterator", v.detail)

    def test_missing_iter(self):
        self.assertIs(check_into_iter_impl(CountingIter).reason, FailureKind.MISSING_METHOD)

    def test_unresolved_forward_reference(self):
        self.assertTrue(is_into_iterable(Forward))
        with mock.patch.dict(os.environ, {"MUTT_STRICT_ANNOTATIONS": "1"}):
            self.assertFalse(is_into_iterable(Forward))

    def test_contract_types_as_return_annotation(self):
        for tp in (ContractReturn, ProtocolReturn):
            with self.subTest(tp=tp.__name__):
                self.assertTrue(check_into_iter_impl(tp).valid)
        self.assertIs(
            check_into_iter_impl(NonIteratorReturn).reason,
            FailureKind.WRONG_RETURN_TYPE,
        )

    def test_binding_with_contract_return_annotation(self):
        class Pair(IntoIterable):
            def iter(self) -> Iterator[int]:
                return Vec([1, 2]).iter()

        self.assertEqual(list(Pair()), [1, 2])

    def test_binding_fails_at_class_creation(self):
        with self.assertRaises(ConformanceError) as ctx:

            class NoIter(IntoIterable):
                pass

        self.assertIs(ctx.exception.reason, FailureKind.MISSING_METHOD)
        self.assertIn("iter(self) -> Iterator", str(ctx.exception))

        with self.assertRaises(ConformanceError) as ctx:

            class BadIter(IntoIterable):
                def iter(self) -> int:
                    return 0

        self.assertIs(ctx.exception.reason, FailureKind.WRONG_RETURN_TYPE)


class TestIteration(unittest.TestCase):
    def test_for_loop_over_container(self):
        self.assertEqual(list(Vec([1, 2, 3])), [1, 2, 3])
        self.assertEqual(list(Range(3)), [0, 1, 2])

    def test_for_loop_over_duck_typed_iterator(self):
        seen = []
        for x in Range(4):
            seen.append(x)
        self.assertEqual(seen, [0, 1, 2, 3])
        self.assertEqual(list(Range(0)), [])

    def test_mixin_iterator_is_returned_as_is(self):
        it = iter(Vec([1]))
        self.assertIsInstance(it, Vec.Iter)
        self.assertEqual(it.collect(), [1])

    def test_iterator_yields_references(self):
        v = Vec([[1], [2]], item_type=list)
        it = v.iter()
        while (item := it.next()) is not None:
            item.append(0)
        self.assertEqual(v.data, [[1, 0], [2, 0]])


class TestResetIter(unittest.TestCase):
    def test_reset_restarts_in_place(self):
        v = Vec([1, 2, 3, 4, 5])
        it = v.iter()
        self.assertTrue(it.any(lambda x: x > 3))
        self.assertEqual(it.count(), 1)

        v.reset_iter(it)
        self.assertEqual(it.count(), 5)

    def test_adapters_observe_the_reset(self):
        v = Vec([10, 20, 30])
        it = v.iter()
        en = it.enumerate()
        self.assertEqual(it.count(), 3)
        self.assertIsNone(en.next())

        v.reset_iter(it)
        item = en.next()
        self.assertEqual(item.val, 10)

    def test_reset_with_slots(self):
        v = SlottedVec([1, 2])
        it = v.iter()
        it.count()
        v.reset_iter(it)
        self.assertEqual(it.collect(), [1, 2])

    def test_reset_duck_typed_iterator(self):
        r = Range(4)
        it = r.iter()
        it.next()
        it.next()
        r.reset_iter(it)
        self.assertEqual(it.next(), 0)

    def test_reset_rejects_non_iterators(self):
        v = Vec([1])
        with self.assertRaises(ConformanceError) as ctx:
            v.reset_iter([1, 2])
        self.assertIn("must be a valid Iterator", str(ctx.exception))

    def test_reset_rejects_foreign_iterator(self):
        v = Vec([1])
        with self.assertRaises(TypeError):
            v.reset_iter(CountingIter(3))


if __name__ == "__main__":
    unittest.main()
