"""Bit-exact reinterpretation between floats and their raw patterns.

Everything goes through ``Tensor.view(dtype)`` which reinterprets storage and
never converts values, so a deliberately crafted NaN payload survives
untouched.  torch has no unsigned 32/64-bit integers with full operator
support, hence batched bit views use the same-width *signed* dtype (two's
complement of the unsigned pattern) while scalar helpers hand out plain,
non-negative Python ``int`` patterns.
"""

from __future__ import annotations

from typing import Tuple, Union

import numpy as np
import torch
from torch import Tensor

from . import config
from .layout import F16, F32, F64, NaNLayout, layout_for

__all__ = [
    "FloatLike",
    "check_width",
    "as_float_tensor",
    "scalar_bits",
    "bits_of",
    "from_bits",
    "view_bits",
    "view_float",
    "format_bits",
]

FloatLike = Union[float, Tensor, np.floating, np.ndarray]

_BY_INT_DTYPE = {torch.int16: F16, torch.int32: F32, torch.int64: F64}


def check_width(layout: NaNLayout, width: object | None, value: object) -> None:
    """Raise :class:`ValueError` when an explicit *width* disagrees with *layout*."""
    if width is not None and layout_for(width) is not layout:
        raise ValueError(f"{value!r} is a {layout} value, not {layout_for(width)}.")


def as_float_tensor(value: FloatLike, width: object | None = None) -> Tuple[Tensor, NaNLayout]:
    """Wrap *value* as a float tensor without touching its bits.

    Python floats are always binary64; tensors and numpy values carry their
    own width.  An explicit *width* must agree with it.
    """
    if isinstance(value, Tensor):
        t = value
    elif isinstance(value, (np.ndarray, np.generic)):
        t = torch.as_tensor(np.asarray(value))
    elif isinstance(value, float):
        t = torch.tensor(value, dtype=torch.float64)
    else:
        raise TypeError(f"Expected a float, tensor or numpy value, got {type(value).__name__}.")
    layout = layout_for(t.dtype)
    check_width(layout, width, value)
    return t, layout


def scalar_bits(value: Union[int, FloatLike], width: object | None = None) -> Tuple[int, NaNLayout]:
    """Return ``(unsigned pattern, layout)`` for a single value.

    Integers are taken to *be* a raw pattern of ``width`` bits (default
    :data:`qnan.config.DEFAULT_WIDTH`) and must fit in it.
    """
    if isinstance(value, bool):
        raise TypeError("bool is not a bit pattern.")
    if isinstance(value, (int, np.integer)):
        layout = config.resolve_width(width)
        pattern = int(value)
        if not 0 <= pattern < (1 << layout.total_bits):
            raise ValueError(f"{pattern:#x} is not a {layout.total_bits}-bit pattern.")
        return pattern, layout

    t, layout = as_float_tensor(value, width)
    if t.numel() != 1:
        raise ValueError(f"Expected a single value, got shape {tuple(t.shape)}.")
    signed = t.reshape(()).view(layout.int_dtype).item()
    return layout.to_unsigned(signed), layout


def bits_of(value: Union[int, FloatLike], width: object | None = None) -> int:
    """Unsigned raw bit pattern of *value*."""
    return scalar_bits(value, width)[0]


def from_bits(pattern: int, width: object | None = None) -> Tensor:
    """0-dim float tensor whose storage is exactly *pattern*."""
    layout = config.resolve_width(width)
    pattern = int(pattern)
    if not 0 <= pattern < (1 << layout.total_bits):
        raise ValueError(f"{pattern:#x} is not a {layout.total_bits}-bit pattern.")
    return torch.tensor(layout.to_signed(pattern), dtype=layout.int_dtype).view(layout.float_dtype)


def view_bits(values: Union[Tensor, np.ndarray]) -> Tuple[Tensor, NaNLayout]:
    """Signed-integer bit view of a float tensor.

    Integer tensors of width 16/32/64 are assumed to already be such a view
    and are returned unchanged.
    """
    t = values if isinstance(values, Tensor) else torch.as_tensor(np.asarray(values))
    if t.dtype in _BY_INT_DTYPE:
        return t, _BY_INT_DTYPE[t.dtype]
    layout = layout_for(t.dtype)
    return t.view(layout.int_dtype), layout


def view_float(bits: Tensor, width: object | None = None) -> Tensor:
    """Inverse of :func:`view_bits`."""
    layout = _BY_INT_DTYPE.get(bits.dtype)
    if layout is None:
        raise TypeError(f"Expected an int16/int32/int64 tensor, got {bits.dtype}.")
    check_width(layout, width, bits.dtype)
    return bits.view(layout.float_dtype)


def format_bits(value: Union[int, FloatLike], width: object | None = None) -> str:
    """Zero-padded hex of the raw pattern, e.g. ``0x7ff8000000000001``."""
    pattern, layout = scalar_bits(value, width)
    return f"0x{pattern:0{layout.hex_digits}x}"
