"""
StepBy adapter.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from ...domain._iterator import IIterator
from ..contracts._iterator import Iterator, item_type_of

T = TypeVar("T")


class StepBy(Iterator[T]):
    """
    Iterator adapter yielding the first upstream item, then every `step`-th.

    On ``[s0, s1, s2, ...]`` it yields ``[s0, s_step, s_2step, ...]``;
    ``step == 1`` is the identity.

    Parameters
    ----------
    it : IIterator[T]
        Upstream iterator, held by reference.
    step : int
        Stride, >= 1.

    Raises
    ------
    TypeError
        If `step` is not an int (bools are rejected).
    ValueError
        If `step` < 1.
    """

    ItemType = T

    def __init__(self, it: IIterator[T], step: int) -> None:
        if isinstance(step, bool) or not isinstance(step, int):
            raise TypeError(f"step must be an int, got {type(step).__name__}")
        if step < 1:
            raise ValueError(f"step must be >= 1, got {step}")
        self._it = it
        self.step = step
        self.first = True

    @property
    def item_type(self) -> Any:
        return item_type_of(self._it)

    def next(self) -> Optional[T]:
        if self.first:
            self.first = False
            return self._it.next()
        # discard step - 1 items, exhausted or not
        for _ in range(self.step - 1):
            self._it.next()
        return self._it.next()
