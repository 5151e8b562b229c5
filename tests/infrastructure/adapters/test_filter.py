from __future__ import annotations

import unittest

from src.mutt.infrastructure.adapters import Filter

from .._containers import CountingIter, ints


class TestFilter(unittest.TestCase):
    def test_yields_matching_subsequence(self):
        data = [7, 2, 9, 4, 4, 1, 8]
        predicates = [
            lambda x: x > 3,
            lambda x: x % 2 == 0,
            lambda x: False,
            lambda x: True,
        ]
        for pred in predicates:
            with self.subTest(pred=pred):
                f = ints(*data).filter(pred)
                self.assertIsInstance(f, Filter)
                self.assertEqual(f.collect(), [x for x in data if pred(x)])

    def test_drains_non_matching_items(self):
        it = ints(1, 5, 2, 6)
        f = it.filter(lambda x: x > 4)
        self.assertEqual(f.next(), 5)
        self.assertEqual(it.next(), 2)
        self.assertEqual(f.next(), 6)
        self.assertIsNone(f.next())
        self.assertIsNone(f.next())

    def test_predicate_is_kept(self):
        pred = lambda x: x > 1  # noqa: E731
        f = ints(1, 2).filter(pred)
        self.assertIs(f.predicate, pred)

    def test_rejects_non_callable_predicate(self):
        with self.assertRaises(TypeError):
            ints(1).filter(3)

    def test_filter_of_filter(self):
        f = ints(*range(20)).filter(lambda x: x % 2 == 0).filter(lambda x: x % 3 == 0)
        self.assertEqual(f.collect(), [0, 6, 12, 18])

    def test_wraps_duck_typed_upstream(self):
        f = Filter(CountingIter(6), lambda x: x % 3 == 0)
        self.assertEqual(f.collect(), [0, 3])
        self.assertIs(f.item_type, int)


if __name__ == "__main__":
    unittest.main()
