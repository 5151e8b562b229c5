"""
Iterator adapters.

Each adapter wraps an upstream iterator by reference and itself satisfies
the Iterator contract, so adapters compose without limit:

    container.iter().step_by(2).enumerate().filter(lambda p: p.val > 3)
"""

from ._indexed_item import IndexedItem
from ._enumerator import Enumerator
from ._cloned import Cloned
from ._filter import Filter
from ._step_by import StepBy

__all__ = [
    IndexedItem.__name__,
    Enumerator.__name__,
    Cloned.__name__,
    Filter.__name__,
    StepBy.__name__,
]
