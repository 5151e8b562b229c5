"""
Printable contract.

A type is Printable when it exposes
``write_to_buf(self, buf: memoryview) -> memoryview | bytes``, rendering a
UTF-8 debug representation into a caller-provided buffer and returning the
written prefix. Binding the contract unlocks `debug`.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any, Optional, Union

from typing_extensions import Self

from ...domain._requirements import MethodRequirement
from ...domain._verdict import Verdict
from ..checker._checker import check

logger = logging.getLogger(__name__)

PRINTABLE_REQUIREMENTS = (
    MethodRequirement(
        name="write_to_buf",
        num_args=2,
        arg_types=(Self, memoryview),
        ret_types=(memoryview, bytes, Union[memoryview, bytes]),
        arg_names=("self", "buf"),
    ),
)
"""Ordered requirements of the Printable contract."""


def check_printable_impl(tp: Any, diagnostic: bool = False) -> Verdict:
    """Check `tp` against the Printable contract."""
    return check(tp, PRINTABLE_REQUIREMENTS, diagnostic=diagnostic)


def is_printable(tp: Any) -> bool:
    """Return True if `tp` satisfies the Printable contract."""
    return check_printable_impl(tp).valid


class Printable:
    """
    Mixin binding the Printable contract.

    Raises
    ------
    ConformanceError
        At class creation, if the subclass does not satisfy the contract.
    """

    def __init_subclass__(cls, abstract: bool = False, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if abstract:
            return
        check_printable_impl(cls, diagnostic=True)
        logger.debug("Bound %s to Printable", cls.__qualname__)

    def debug(self, stream: Optional[IO[str]] = None) -> None:
        """
        Write the debug representation of `self` to `stream`.

        A buffer of ``len(type name) + sys.getsizeof(self)`` bytes is
        allocated and handed to `write_to_buf`; the written prefix is decoded
        as UTF-8.

        Parameters
        ----------
        stream : Optional[IO[str]], optional
            Destination text stream. Defaults to `sys.stderr`.

        Raises
        ------
        RuntimeError
            If `write_to_buf` fails (chained to the original exception).
        """
        cap = len(type(self).__name__) + sys.getsizeof(self)
        buf = bytearray(cap)
        try:
            written = self.write_to_buf(memoryview(buf))  # type: ignore[attr-defined]
        except Exception as exc:
            raise RuntimeError("`write_to_buf` failed") from exc
        out = stream if stream is not None else sys.stderr
        out.write(bytes(written).decode("utf-8"))
