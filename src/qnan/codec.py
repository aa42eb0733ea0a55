"""Hide a signed integer inside a quiet NaN and get it back.

The magnitude of the payload goes into the bits below the quiet bit, its sign
into the sign bit of the NaN::

    >>> from qnan import encode, decode, format_bits
    >>> format_bits(encode(-1, 64))
    '0xfff8000000000001'
    >>> decode(encode(-1, 64))
    -1

Magnitude 0 is refused because it would reproduce the runtime's own
indeterminate NaN (see :mod:`qnan.layout`).  Symmetrically, :func:`decode`
refuses those two patterns unless ``strict=False`` (or
:func:`qnan.config.set_strict_decode`) asks for the permissive behaviour in
which they decode to ``0``.
"""

from __future__ import annotations

import operator
from typing import Sequence, Union

import numpy as np
import torch
from torch import Tensor

from . import config
from .bits import FloatLike, from_bits, scalar_bits, view_bits
from .classify import is_quiet_nan
from .errors import NotAQuietNaNError, PayloadTooLargeError, ReservedPayloadError
from .layout import NaNLayout

__all__ = [
    "encode",
    "encode_bits",
    "decode",
    "decode_bits",
    "encode_tensor",
    "decode_tensor",
]

PayloadLike = Union[Tensor, np.ndarray, Sequence[int]]


# -----------------------------------------------------------------------------
# Scalar codec
# -----------------------------------------------------------------------------


def encode_bits(payload: int, width: object | None = None) -> int:
    """Raw quiet-NaN bit pattern carrying *payload*.

    Raises
    ------
    ReservedPayloadError
        ``payload == 0``.
    PayloadTooLargeError
        ``abs(payload)`` does not fit below the quiet bit.
    """
    if isinstance(payload, (bool, np.bool_)) or (isinstance(payload, Tensor) and payload.dtype == torch.bool):
        raise TypeError("Payload must be an integer, not bool.")
    payload = operator.index(payload)
    layout = config.resolve_width(width)

    magnitude = abs(payload)
    if magnitude == 0:
        raise ReservedPayloadError(layout.total_bits)
    if magnitude > layout.max_payload:
        raise PayloadTooLargeError(magnitude, layout.max_payload, layout.total_bits)
    return magnitude | (layout.pos_base if payload > 0 else layout.neg_base)


def encode(payload: int, width: object | None = None) -> Tensor:
    """Quiet NaN of *width* bits (0-dim tensor) whose payload is *payload*.

    Parameters
    ----------
    payload:
        Non-zero signed integer, ``abs(payload) <= 2**payload_bits - 1``.
    width:
        ``16``, ``32``, ``64`` or a matching torch / numpy float dtype.
        Defaults to :data:`qnan.config.DEFAULT_WIDTH`.

    Returns
    -------
    torch.Tensor
        0-dim tensor of dtype float16 / float32 / float64.  For binary64,
        ``.item()`` gives a Python ``float`` with the same bits.
    """
    layout = config.resolve_width(width)
    return from_bits(encode_bits(payload, layout), layout)


def _decode_pattern(pattern: int, layout: NaNLayout, strict: bool | None, value: object) -> int:
    if not is_quiet_nan(pattern, width=layout):
        raise NotAQuietNaNError(value, pattern, layout.total_bits)
    magnitude = pattern & ~layout.neg_base
    if magnitude == 0 and config.resolve_strict(strict):
        raise ReservedPayloadError(layout.total_bits)
    return -magnitude if pattern & layout.sign_bit else magnitude


def decode(value: FloatLike, width: object | None = None, *, strict: bool | None = None) -> int:
    """Recover the signed payload from a quiet NaN produced by :func:`encode`.

    Raises
    ------
    NotAQuietNaNError
        *value* is finite, infinite or a signaling NaN.
    ReservedPayloadError
        *value* is the runtime's payload-less NaN and decoding is strict.
    """
    if isinstance(value, (int, np.integer)):
        raise TypeError("decode() expects a float value; use decode_bits() for raw patterns.")
    pattern, layout = scalar_bits(value, width)
    shown = value.item() if isinstance(value, Tensor) else value
    return _decode_pattern(pattern, layout, strict, shown)


def decode_bits(pattern: int, width: object | None = None, *, strict: bool | None = None) -> int:
    """:func:`decode` for a raw unsigned bit pattern."""
    pattern, layout = scalar_bits(operator.index(pattern), width)
    return _decode_pattern(pattern, layout, strict, from_bits(pattern, layout).item())


# -----------------------------------------------------------------------------
# Batched codec
# -----------------------------------------------------------------------------


def _check_python_payloads(payloads: Sequence[int], layout: NaNLayout) -> None:
    magnitudes = [
        abs(int(v))
        for v in np.asarray(payloads, dtype=object).reshape(-1)
        if isinstance(v, (int, np.integer)) and not isinstance(v, bool)
    ]
    if 0 in magnitudes:
        raise ReservedPayloadError(layout.total_bits)
    for magnitude in magnitudes:
        if magnitude > layout.max_payload:
            raise PayloadTooLargeError(magnitude, layout.max_payload, layout.total_bits)


def encode_tensor(payloads: PayloadLike, width: object | None = None) -> Tensor:
    """Elementwise :func:`encode` of an integer tensor / array-like.

    The whole batch is rejected if any element is invalid; the error reports
    the first offending magnitude.
    """
    layout = config.resolve_width(width)
    if not isinstance(payloads, (Tensor, np.ndarray)):
        # Python ints may not fit int64; check them before torch converts
        _check_python_payloads(payloads, layout)
    p = torch.as_tensor(payloads)
    if p.is_floating_point() or p.is_complex() or p.dtype == torch.bool:
        raise TypeError(f"Payloads must be integers, got {p.dtype}.")
    p = p.to(torch.int64)

    if bool((p == 0).any()):
        raise ReservedPayloadError(layout.total_bits)
    too_large = (p > layout.max_payload) | (p < -layout.max_payload)
    if bool(too_large.any()):
        first = int(p[too_large].reshape(-1)[0].item())
        raise PayloadTooLargeError(abs(first), layout.max_payload, layout.total_bits)

    magnitude = p.abs().to(layout.int_dtype)
    pos = torch.tensor(layout.pos_base_signed, dtype=layout.int_dtype, device=p.device)
    neg = torch.tensor(layout.neg_base_signed, dtype=layout.int_dtype, device=p.device)
    return (magnitude | torch.where(p > 0, pos, neg)).view(layout.float_dtype)


def decode_tensor(values: Union[Tensor, np.ndarray], *, strict: bool | None = None) -> Tensor:
    """Elementwise :func:`decode`, returning an ``int64`` payload tensor.

    *values* may be a float16/32/64 tensor or numpy array, or its signed
    integer bit view.
    """
    bits, layout = view_bits(values)
    pos_s, neg_s = layout.pos_base_signed, layout.neg_base_signed

    quiet = (bits & pos_s) == pos_s
    if not bool(quiet.all()):
        idx = int((~quiet).reshape(-1).nonzero()[0].item())
        bad = bits.reshape(-1)[idx]
        raise NotAQuietNaNError(
            bad.view(layout.float_dtype).item(), layout.to_unsigned(int(bad.item())), layout.total_bits
        )

    magnitude = (bits & ~neg_s).to(torch.int64)
    if config.resolve_strict(strict) and bool((magnitude == 0).any()):
        raise ReservedPayloadError(layout.total_bits)
    # sign bit set <=> negative in the signed view
    return torch.where(bits < 0, -magnitude, magnitude)
