"""
Capability contracts.

Each contract comes as a mixin (binding at class creation, unlocking default
operations) plus introspection predicates usable on any type:

- `Iterator`     / `check_iterator_impl`   / `is_iterator`
- `IntoIterable` / `check_into_iter_impl`  / `is_into_iterable`
- `Cloneable`    / `check_clone_impl`      / `is_cloneable`
- `Printable`    / `check_printable_impl`  / `is_printable`
"""

from ._cloneable import Cloneable, check_clone_impl, is_cloneable
from ._iterator import Iterator, check_iterator_impl, is_iterator, item_type_of
from ._iterable import IntoIterable, check_into_iter_impl, is_into_iterable
from ._printable import Printable, check_printable_impl, is_printable

__all__ = [
    Cloneable.__name__,
    check_clone_impl.__name__,
    is_cloneable.__name__,
    Iterator.__name__,
    check_iterator_impl.__name__,
    is_iterator.__name__,
    item_type_of.__name__,
    IntoIterable.__name__,
    check_into_iter_impl.__name__,
    is_into_iterable.__name__,
    Printable.__name__,
    check_printable_impl.__name__,
    is_printable.__name__,
]
