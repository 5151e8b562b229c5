"""
List-backed allocator.

`ListAllocator` is the default allocator of `collect`: it drains an iterator
into a plain Python list, optionally bounded by a fixed capacity.
"""

import logging
from typing import Any, List, Optional

from ...domain._errors import AllocationError

logger = logging.getLogger(__name__)


class ListAllocator:
    """
    Allocator producing plain `list` results.

    Parameters
    ----------
    capacity : Optional[int], optional
        Maximum number of items the list may hold. `None` (default) means
        the list grows until the runtime runs out of memory.

    Raises
    ------
    TypeError
        If `capacity` is not an integer.
    ValueError
        If `capacity` is negative.
    """

    def __init__(self, capacity: Optional[int] = None) -> None:
        if capacity is not None:
            if isinstance(capacity, bool) or not isinstance(capacity, int):
                raise TypeError(f"capacity must be an int, got {type(capacity).__name__}")
            if capacity < 0:
                raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.capacity = capacity

    def allocate(self) -> List[Any]:
        return []

    def grow(self, seq: List[Any], item: Any) -> None:
        """
        Append `item`, failing once `capacity` items are stored.

        Raises
        ------
        AllocationError
            If the list already holds `capacity` items.
        """
        if self.capacity is not None and len(seq) >= self.capacity:
            logger.warning(
                "ListAllocator capacity exhausted at %d item(s)", self.capacity
            )
            raise AllocationError(len(seq), self.capacity)
        seq.append(item)

    def finish(self, seq: List[Any]) -> List[Any]:
        return seq
