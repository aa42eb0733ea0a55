"""Exceptions raised by the *qnan* codec.

Every error derives from :class:`ValueError` so callers that only care about
"bad input" can keep catching the builtin.  All of them are raised before any
bit pattern is produced or any payload is extracted.
"""

from __future__ import annotations

__all__ = [
    "QNaNError",
    "ReservedPayloadError",
    "PayloadTooLargeError",
    "NotAQuietNaNError",
    "UnsupportedWidthError",
]


class QNaNError(ValueError):
    """Base class for all codec failures."""


class ReservedPayloadError(QNaNError):
    """Payload magnitude 0, i.e. the runtime's own indeterminate NaN."""

    def __init__(self, width: int):
        self.width = width
        super().__init__(
            f"Payload magnitude 0 is reserved: float{width} uses that quiet NaN "
            "for its own indeterminate results."
        )


class PayloadTooLargeError(QNaNError):
    def __init__(self, magnitude: int, capacity: int, width: int):
        self.magnitude = magnitude
        self.capacity = capacity
        self.width = width
        super().__init__(
            f"Payload magnitude {magnitude} exceeds the float{width} quiet NaN "
            f"capacity of {capacity}."
        )


class NotAQuietNaNError(QNaNError):
    def __init__(self, value: object, bits: int, width: int):
        self.value = value
        self.bits = bits
        self.width = width
        digits = width // 4
        super().__init__(f"The value {value} (0x{bits:0{digits}x}) is not a quiet NaN.")


class UnsupportedWidthError(QNaNError):
    def __init__(self, key: object):
        self.key = key
        super().__init__(f"Unsupported floating-point width {key!r}; expected 16, 32 or 64.")
