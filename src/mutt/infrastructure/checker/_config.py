"""
Environment-driven configuration for the conformance checker.

Settings are read from the process environment every time they are needed,
so they can be toggled (or patched in tests) without re-importing mutt.

Environment variables
---------------------
MUTT_STRICT_ANNOTATIONS
    When enabled, unannotated parameters, returns, and fields fail the
    corresponding type steps instead of being accepted. Disabled by default.
    Any value other than "0", "", "false", "False", "FALSE" enables it.
"""

import os

_FALSY = ("0", "", "false", "False", "FALSE")


def strict_annotations_enabled() -> bool:
    """Return True if strict annotation checking is switched on."""
    return os.environ.get("MUTT_STRICT_ANNOTATIONS", "0") not in _FALSY
