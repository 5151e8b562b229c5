"""
Allocators for `collect`.

- `ListAllocator`: plain Python lists (default), optionally bounded
- `ArrayAllocator`: NumPy arrays with geometric growth
"""

from ._list_allocator import ListAllocator
from ._array_allocator import ArrayAllocator, GrowableArray

__all__ = [
    ListAllocator.__name__,
    ArrayAllocator.__name__,
    GrowableArray.__name__,
]
