"""Where the quiet-NaN fields live for each supported float width.

A quiet NaN has every exponent bit set and the top fraction bit (the *quiet
bit*) set; whatever sits below the quiet bit is free for an application
payload::

    float64  (positive) 0x7ff8000000000000 .. 0x7fffffffffffffff   2^51 - 1 payloads
             (negative) 0xfff8000000000000 .. 0xffffffffffffffff
    float32  (positive) 0x7fc00000 .. 0x7fffffff                   2^22 - 1 payloads
             (negative) 0xffc00000 .. 0xffffffff
    float16  (positive) 0x7e00 .. 0x7fff                           2^9 - 1 payloads
             (negative) 0xfe00 .. 0xffff

The two patterns with an all-zero payload (``pos_base`` / ``neg_base``) are
what the host runtime produces for indeterminate results such as ``0/0``.
They are never handed out for application payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np
import torch

from .errors import UnsupportedWidthError

__all__ = [
    "NaNLayout",
    "F16",
    "F32",
    "F64",
    "LAYOUTS",
    "layout_for",
]


def _ones(n: int) -> int:
    return (1 << n) - 1


# -----------------------------------------------------------------------------
# Width descriptor
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NaNLayout:
    """Constants describing the quiet NaNs of one IEEE-754 binary format.

    Only ``total_bits``, ``exponent_bits`` and the two torch dtypes are given;
    everything else is derived once in ``__post_init__`` so the codec never
    recomputes masks on the hot path.
    """

    total_bits: int
    exponent_bits: int
    float_dtype: torch.dtype
    int_dtype: torch.dtype  # same-width *signed* integer used for Tensor.view

    payload_bits: int = field(init=False)
    pos_base: int = field(init=False)
    neg_base: int = field(init=False)
    sign_bit: int = field(init=False)
    max_payload: int = field(init=False)

    def __post_init__(self):
        # quiet bit index == number of payload bits below it
        payload_bits = self.total_bits - self.exponent_bits - 2
        object.__setattr__(self, "payload_bits", payload_bits)
        object.__setattr__(self, "pos_base", _ones(self.exponent_bits + 1) << payload_bits)
        object.__setattr__(self, "neg_base", _ones(self.exponent_bits + 2) << payload_bits)
        object.__setattr__(self, "sign_bit", 1 << (self.total_bits - 1))
        object.__setattr__(self, "max_payload", _ones(payload_bits))

    # ------------------------------------------------------------------
    # Two's complement helpers – torch only has signed 16/32/64-bit ints
    # ------------------------------------------------------------------

    def to_signed(self, pattern: int) -> int:
        """Unsigned bit pattern → value of the same-width signed integer."""
        return pattern - (1 << self.total_bits) if pattern & self.sign_bit else pattern

    def to_unsigned(self, value: int) -> int:
        return value & _ones(self.total_bits)

    @property
    def pos_base_signed(self) -> int:
        return self.to_signed(self.pos_base)

    @property
    def neg_base_signed(self) -> int:
        return self.to_signed(self.neg_base)

    @property
    def hex_digits(self) -> int:
        return self.total_bits // 4

    def __str__(self) -> str:
        return f"float{self.total_bits}"


F16 = NaNLayout(16, 5, torch.float16, torch.int16)
F32 = NaNLayout(32, 8, torch.float32, torch.int32)
F64 = NaNLayout(64, 11, torch.float64, torch.int64)

LAYOUTS: Dict[int, NaNLayout] = {layout.total_bits: layout for layout in (F16, F32, F64)}

_BY_TORCH_DTYPE: Dict[torch.dtype, NaNLayout] = {layout.float_dtype: layout for layout in LAYOUTS.values()}
_BY_NUMPY_DTYPE: Dict[np.dtype, NaNLayout] = {
    np.dtype(np.float16): F16,
    np.dtype(np.float32): F32,
    np.dtype(np.float64): F64,
}


def layout_for(key: Any) -> NaNLayout:
    """Resolve a width (``16``/``32``/``64``), torch dtype or numpy dtype.

    Raises
    ------
    UnsupportedWidthError
        For anything else, including ``torch.bfloat16`` and extended precision.
    """
    if isinstance(key, NaNLayout):
        return key
    if key is None or isinstance(key, bool):
        raise UnsupportedWidthError(key)
    if isinstance(key, (int, np.integer)):
        layout = LAYOUTS.get(int(key))
    elif isinstance(key, torch.dtype):
        layout = _BY_TORCH_DTYPE.get(key)
    else:
        try:
            layout = _BY_NUMPY_DTYPE.get(np.dtype(key))
        except TypeError:
            raise UnsupportedWidthError(key) from None
    if layout is None:
        raise UnsupportedWidthError(key)
    return layout
