"""
Printable contract for mutt.

A printable type renders a debug representation of itself into a
caller-provided, pre-allocated buffer and returns the written prefix.
"""

from __future__ import annotations

from typing import Protocol, Union, runtime_checkable


@runtime_checkable
class IPrintable(Protocol):
    """
    Duck-typed debug-formatting contract.
    """

    def write_to_buf(self, buf: memoryview) -> Union[memoryview, bytes]:
        """
        Write a UTF-8 debug representation into `buf`.

        Parameters
        ----------
        buf : memoryview
            Writable buffer provided by the caller.

        Returns
        -------
        Union[memoryview, bytes]
            The written prefix of `buf`.
        """
        ...
