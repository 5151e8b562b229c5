"""
NumPy-backed allocator.

`ArrayAllocator` collects numeric iterators into a contiguous NumPy buffer
that grows geometrically (capacity doubling), and hands the caller a trimmed
`np.ndarray` once the iterator is exhausted.

Notes
-----
- Growth copies the live prefix into a new buffer; amortized cost per item
  is O(1).
- Items are converted by NumPy on assignment. Conversion errors (e.g. a
  string into a float buffer) propagate unchanged; only allocation failures
  are reported as `AllocationError`.
"""

import logging
from typing import Any, Optional

import numpy as np

from ...domain._errors import AllocationError

logger = logging.getLogger(__name__)


class GrowableArray:
    """
    Append-only NumPy buffer with doubling growth.

    Parameters
    ----------
    dtype : Any
        NumPy dtype of the buffer.
    initial_capacity : int
        Number of slots allocated up front.
    max_items : Optional[int]
        Hard limit on the number of stored items.
    """

    __slots__ = ("_buf", "_size", "max_items")

    def __init__(
        self, dtype: Any, initial_capacity: int, max_items: Optional[int] = None
    ) -> None:
        self._buf = np.empty(initial_capacity, dtype=dtype)
        self._size = 0
        self.max_items = max_items

    def __len__(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        """Number of allocated slots."""
        return int(self._buf.shape[0])

    @property
    def dtype(self) -> np.dtype:
        return self._buf.dtype

    def _grow(self) -> None:
        new_cap = max(1, 2 * self.capacity)
        if self.max_items is not None:
            new_cap = min(new_cap, self.max_items)
        try:
            new_buf = np.empty(new_cap, dtype=self._buf.dtype)
        except (MemoryError, ValueError) as exc:
            logger.warning("GrowableArray could not grow to %d slot(s)", new_cap)
            raise AllocationError(self._size) from exc
        new_buf[: self._size] = self._buf[: self._size]
        logger.debug(
            "GrowableArray grown from %d to %d slot(s)", self.capacity, new_cap
        )
        self._buf = new_buf

    def append(self, item: Any) -> None:
        """
        Store `item` at the end of the buffer.

        Raises
        ------
        AllocationError
            If `max_items` is reached or the runtime cannot allocate a larger
            buffer.
        """
        if self.max_items is not None and self._size >= self.max_items:
            logger.warning(
                "GrowableArray capacity exhausted at %d item(s)", self.max_items
            )
            raise AllocationError(self._size, self.max_items)
        if self._size == self.capacity:
            self._grow()
        self._buf[self._size] = item
        self._size += 1

    def to_numpy(self) -> np.ndarray:
        """Return a trimmed copy of the stored items."""
        return self._buf[: self._size].copy()


class ArrayAllocator:
    """
    Allocator producing `np.ndarray` results.

    Parameters
    ----------
    dtype : Any, optional
        NumPy dtype of the collected array. Defaults to ``np.float64``.
    initial_capacity : int, optional
        Slots allocated before the first growth. Defaults to 8.
    max_items : Optional[int], optional
        Hard limit on collected items. `None` (default) means unbounded.

    Raises
    ------
    ValueError
        If `initial_capacity` < 1 or `max_items` < 0.
    """

    def __init__(
        self,
        dtype: Any = np.float64,
        initial_capacity: int = 8,
        max_items: Optional[int] = None,
    ) -> None:
        if initial_capacity < 1:
            raise ValueError(f"initial_capacity must be >= 1, got {initial_capacity}")
        if max_items is not None and max_items < 0:
            raise ValueError(f"max_items must be >= 0, got {max_items}")
        self.dtype = np.dtype(dtype)
        self.initial_capacity = int(initial_capacity)
        self.max_items = max_items

    def allocate(self) -> GrowableArray:
        cap = self.initial_capacity
        if self.max_items is not None:
            cap = max(1, min(cap, self.max_items))
        try:
            return GrowableArray(self.dtype, cap, self.max_items)
        except MemoryError as exc:
            raise AllocationError(0) from exc

    def grow(self, seq: GrowableArray, item: Any) -> None:
        seq.append(item)

    def finish(self, seq: GrowableArray) -> np.ndarray:
        return seq.to_numpy()
