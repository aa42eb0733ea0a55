# SPDX-License-Identifier: MIT
"""qnan – application payloads inside IEEE-754 quiet NaNs.

This package hides a non-zero signed integer in the bits of a quiet NaN of
16, 32 or 64 bits (:func:`encode`) and recovers it later (:func:`decode`).
The predicates in :mod:`qnan.classify` tell payload-bearing NaNs apart from
ordinary numbers and from the payload-less NaN the runtime itself produces
for ``0/0``, so tagged values never collide with computed ones.  Batched
variants work on PyTorch tensors and numpy arrays.
"""

from __future__ import annotations

from . import config
from .bits import bits_of, format_bits, from_bits, view_bits, view_float
from .classify import (
    NaNKind,
    classify,
    classify_tensor,
    is_negative_quiet_nan,
    is_positive_quiet_nan,
    is_quiet_nan,
    is_reserved_runtime_nan,
)
from .codec import decode, decode_bits, decode_tensor, encode, encode_bits, encode_tensor
from .errors import (
    NotAQuietNaNError,
    PayloadTooLargeError,
    QNaNError,
    ReservedPayloadError,
    UnsupportedWidthError,
)
from .layout import F16, F32, F64, LAYOUTS, NaNLayout, layout_for

__all__ = [
    "config",
    # codec
    "encode",
    "encode_bits",
    "encode_tensor",
    "decode",
    "decode_bits",
    "decode_tensor",
    # classifier
    "NaNKind",
    "classify",
    "classify_tensor",
    "is_quiet_nan",
    "is_reserved_runtime_nan",
    "is_positive_quiet_nan",
    "is_negative_quiet_nan",
    # layout & bits
    "NaNLayout",
    "F16",
    "F32",
    "F64",
    "LAYOUTS",
    "layout_for",
    "bits_of",
    "from_bits",
    "view_bits",
    "view_float",
    "format_bits",
    # errors
    "QNaNError",
    "ReservedPayloadError",
    "PayloadTooLargeError",
    "NotAQuietNaNError",
    "UnsupportedWidthError",
]
