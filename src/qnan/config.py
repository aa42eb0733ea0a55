"""Global configuration for *qnan*.

Two process-wide defaults live here so they can be tweaked from a single
location:

``DEFAULT_WIDTH``
    Float width assumed when a call cannot infer it from its argument (raw
    integer bit patterns, payloads passed to :func:`qnan.encode`).

``STRICT_DECODE``
    Whether :func:`qnan.decode` rejects the two runtime-reserved quiet NaNs
    (payload magnitude 0) with :class:`~qnan.errors.ReservedPayloadError`.
    With ``False`` decoding them returns ``0``.

Every public function also takes an explicit ``width=`` / ``strict=`` keyword
which wins over these defaults.
"""

from __future__ import annotations

import logging

from .layout import LAYOUTS, NaNLayout, layout_for

__all__ = [
    "DEFAULT_WIDTH",
    "STRICT_DECODE",
    "set_default_width",
    "set_strict_decode",
    "resolve_width",
    "resolve_strict",
]

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Public constants
# -----------------------------------------------------------------------------

DEFAULT_WIDTH: int = 64  # Python floats are binary64
STRICT_DECODE: bool = True

# -----------------------------------------------------------------------------
# Helper functions
# -----------------------------------------------------------------------------


def resolve_width(width: object | None = None) -> NaNLayout:
    """Layout for *width*, falling back to :data:`DEFAULT_WIDTH`."""
    return layout_for(width if width is not None else DEFAULT_WIDTH)


def resolve_strict(strict: bool | None = None) -> bool:
    return STRICT_DECODE if strict is None else bool(strict)


def set_default_width(new_width: int):
    """Change the global default width *in-place*."""
    global DEFAULT_WIDTH
    if isinstance(new_width, bool) or new_width not in LAYOUTS:
        raise ValueError(f"Default width must be one of {sorted(LAYOUTS)}, got {new_width!r}.")
    DEFAULT_WIDTH = new_width
    logger.debug("qnan default width set to %d", new_width)


def set_strict_decode(flag: bool):
    """Toggle rejection of runtime-reserved NaNs in :func:`qnan.decode`."""
    global STRICT_DECODE
    STRICT_DECODE = bool(flag)
    logger.debug("qnan strict decode set to %s", STRICT_DECODE)
