"""
Conformance checker.

Public API
----------
- `InterfaceChecker`: chainable, stateful checker for one candidate
- `check`: run an ordered requirement list and return a `Verdict`
- `strict_annotations_enabled`: current value of `MUTT_STRICT_ANNOTATIONS`
"""

from ._checker import InterfaceChecker, check
from ._config import strict_annotations_enabled

__all__ = [
    InterfaceChecker.__name__,
    check.__name__,
    strict_annotations_enabled.__name__,
]
