"""
Iterator operations generic over anything exposing ``next()``.
"""

from ._operations import (
    iter_all,
    iter_any,
    iter_collect,
    iter_count,
    iter_find,
    iter_find_pos,
)

__all__ = [
    iter_all.__name__,
    iter_any.__name__,
    iter_collect.__name__,
    iter_count.__name__,
    iter_find.__name__,
    iter_find_pos.__name__,
]
