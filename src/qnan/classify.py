"""Quiet-NaN predicates over raw bit patterns or float values.

Every predicate accepts

* a raw pattern as ``int`` (width from ``width=`` or the configured default),
* a Python ``float`` (binary64), a numpy float scalar or a 0-dim tensor,
  returning a plain ``bool``,
* a float tensor / numpy array (or its signed-integer bit view) with
  ``ndim > 0``, returning an elementwise bool tensor.

The predicates are total and agree with each other::

    is_quiet_nan(x) == is_positive_quiet_nan(x) or is_negative_quiet_nan(x)
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Union

import numpy as np
import torch
from torch import Tensor

from .bits import FloatLike, check_width, scalar_bits, view_bits
from .layout import NaNLayout

__all__ = [
    "NaNKind",
    "is_reserved_runtime_nan",
    "is_quiet_nan",
    "is_positive_quiet_nan",
    "is_negative_quiet_nan",
    "classify",
    "classify_tensor",
]

Classifiable = Union[int, FloatLike]


class NaNKind(IntEnum):
    """Mutually exclusive classes of a bit pattern."""

    NOT_QNAN = 0
    RESERVED = 1  # the runtime's own indeterminate NaN, no payload
    POSITIVE_PAYLOAD = 2
    NEGATIVE_PAYLOAD = 3


# -----------------------------------------------------------------------------
# Dispatch – scalar patterns are unsigned Python ints, tensors are signed views
# -----------------------------------------------------------------------------


def _dispatch(
    x: Classifiable,
    width: object | None,
    scalar_fn: Callable[[int, NaNLayout], bool],
    tensor_fn: Callable[[Tensor, NaNLayout], Tensor],
) -> Union[bool, Tensor]:
    if isinstance(x, (Tensor, np.ndarray)):
        bits, layout = view_bits(x)
        check_width(layout, width, x.dtype)
        result = tensor_fn(bits, layout)
        return bool(result.item()) if result.ndim == 0 else result
    pattern, layout = scalar_bits(x, width)
    return scalar_fn(pattern, layout)


def _reserved(u: int, layout: NaNLayout) -> bool:
    return u == layout.neg_base or u == layout.pos_base


def _reserved_t(bits: Tensor, layout: NaNLayout) -> Tensor:
    return (bits == layout.neg_base_signed) | (bits == layout.pos_base_signed)


def _quiet(u: int, layout: NaNLayout) -> bool:
    return (u & layout.pos_base) == layout.pos_base


def _quiet_t(bits: Tensor, layout: NaNLayout) -> Tensor:
    return (bits & layout.pos_base_signed) == layout.pos_base_signed


def _positive(u: int, layout: NaNLayout) -> bool:
    return (u & layout.neg_base) == layout.pos_base


def _positive_t(bits: Tensor, layout: NaNLayout) -> Tensor:
    return (bits & layout.neg_base_signed) == layout.pos_base_signed


def _negative(u: int, layout: NaNLayout) -> bool:
    return (u & layout.neg_base) == layout.neg_base


def _negative_t(bits: Tensor, layout: NaNLayout) -> Tensor:
    return (bits & layout.neg_base_signed) == layout.neg_base_signed


# -----------------------------------------------------------------------------
# Public predicates
# -----------------------------------------------------------------------------


def is_reserved_runtime_nan(x: Classifiable, *, width: object | None = None) -> Union[bool, Tensor]:
    """True iff *x* is exactly one of the runtime's payload-less quiet NaNs."""
    return _dispatch(x, width, _reserved, _reserved_t)


def is_quiet_nan(x: Classifiable, *, width: object | None = None) -> Union[bool, Tensor]:
    """True iff *x* is any quiet NaN, payload-bearing or not."""
    return _dispatch(x, width, _quiet, _quiet_t)


def is_positive_quiet_nan(x: Classifiable, *, width: object | None = None) -> Union[bool, Tensor]:
    """True iff *x* is a quiet NaN with the sign bit clear."""
    return _dispatch(x, width, _positive, _positive_t)


def is_negative_quiet_nan(x: Classifiable, *, width: object | None = None) -> Union[bool, Tensor]:
    """True iff *x* is a quiet NaN with the sign bit set."""
    return _dispatch(x, width, _negative, _negative_t)


def classify(x: Classifiable, *, width: object | None = None) -> NaNKind:
    """Sort a single value into exactly one :class:`NaNKind`."""
    pattern, layout = scalar_bits(x, width)
    if not _quiet(pattern, layout):
        return NaNKind.NOT_QNAN
    if _reserved(pattern, layout):
        return NaNKind.RESERVED
    return NaNKind.NEGATIVE_PAYLOAD if _negative(pattern, layout) else NaNKind.POSITIVE_PAYLOAD


def classify_tensor(values: Union[Tensor, np.ndarray]) -> Tensor:
    """Elementwise :func:`classify`, returning ``int8`` :class:`NaNKind` codes."""
    bits, layout = view_bits(values)
    codes = torch.full(bits.shape, int(NaNKind.NOT_QNAN), dtype=torch.int8, device=bits.device)
    codes[_positive_t(bits, layout)] = int(NaNKind.POSITIVE_PAYLOAD)
    codes[_negative_t(bits, layout)] = int(NaNKind.NEGATIVE_PAYLOAD)
    codes[_reserved_t(bits, layout)] = int(NaNKind.RESERVED)
    return codes
