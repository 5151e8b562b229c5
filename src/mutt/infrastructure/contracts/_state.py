"""
In-place state transfer between two instances of the same class.

Used by `Cloneable.clone_from` and `IntoIterable.reset_iter`, which both
overwrite an existing object with freshly built state instead of rebinding
the caller's reference.
"""

from typing import Any, Iterator

_UNSET = object()


def _slot_names(klass: type) -> Iterator[str]:
    for base in klass.__mro__:
        slots = vars(base).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__"):
                yield name


def overwrite_state(dst: Any, src: Any) -> None:
    """
    Replace the instance state of `dst` with the state of `src`.

    Both `__dict__` entries and `__slots__` values are transferred. Slots that
    are unset on `src` are cleared on `dst`. Attribute values are shared, not
    copied: `src` is expected to be a throwaway object (a fresh clone or a
    fresh iterator).

    Parameters
    ----------
    dst : Any
        Object whose state is overwritten.
    src : Any
        Object providing the new state.
    """
    if hasattr(dst, "__dict__"):
        state = dict(vars(src)) if hasattr(src, "__dict__") else {}
        dst.__dict__.clear()
        dst.__dict__.update(state)

    for name in _slot_names(type(dst)):
        value = getattr(src, name, _UNSET)
        if value is _UNSET:
            if hasattr(dst, name):
                object.__delattr__(dst, name)
        else:
            object.__setattr__(dst, name, value)
