"""Scalar encode / decode."""

import math

import numpy as np
import pytest
import torch
from hypothesis import given, strategies as st

from qnan import (
    LAYOUTS,
    NotAQuietNaNError,
    PayloadTooLargeError,
    QNaNError,
    ReservedPayloadError,
    bits_of,
    decode,
    decode_bits,
    encode,
    encode_bits,
    from_bits,
    is_reserved_runtime_nan,
)


def _payloads(width: int):
    cap = LAYOUTS[width].max_payload
    return st.integers(min_value=1, max_value=cap).flatmap(lambda m: st.sampled_from([m, -m]))


# -----------------------------------------------------------------------------
# Round trip
# -----------------------------------------------------------------------------


@pytest.mark.parametrize("width", sorted(LAYOUTS))
@given(data=st.data())
def test_roundtrip(width, data):
    p = data.draw(_payloads(width))
    x = encode(p, width)
    assert x.dtype == LAYOUTS[width].float_dtype
    assert torch.isnan(x)
    assert decode(x) == p
    assert decode_bits(encode_bits(p, width), width) == p


@given(_payloads(64))
def test_roundtrip_through_python_float(p: int):
    x = encode(p, 64).item()
    assert math.isnan(x)
    assert math.copysign(1.0, x) == (1.0 if p > 0 else -1.0)
    assert decode(x) == p


def test_roundtrip_through_numpy():
    x = encode(-300, 16).numpy()
    assert x.dtype == np.float16
    assert decode(x) == -300


# -----------------------------------------------------------------------------
# Concrete patterns
# -----------------------------------------------------------------------------


def test_concrete_f64():
    assert bits_of(encode(1, 64)) == 0x7FF8000000000001
    assert bits_of(encode(-1, 64)) == 0xFFF8000000000001
    assert decode(from_bits(0x7FF8000000000001, 64)) == 1
    assert decode(from_bits(0x7FF8000000000001, 64).item()) == 1
    assert bits_of(encode(2**51 - 1, 64)) == 0x7FFFFFFFFFFFFFFF
    with pytest.raises(PayloadTooLargeError):
        encode(2**51, 64)


def test_concrete_f32():
    assert encode_bits(1, 32) == 0x7FC00001
    assert encode_bits(-(2**22 - 1), 32) == 0xFFFFFFFF


def test_concrete_f16():
    assert bits_of(encode(1, 16)) == 0x7E01
    assert encode_bits(-511, 16) == 0xFFFF
    with pytest.raises(PayloadTooLargeError):
        encode(2**9, 16)


def test_default_width_is_64():
    assert encode_bits(5) == 0x7FF8000000000005
    assert encode(5).dtype == torch.float64


def test_accepts_integer_like_payloads():
    assert encode_bits(np.int16(3), 16) == 0x7E03
    assert encode_bits(torch.tensor(-3), 16) == 0xFE03
    with pytest.raises(TypeError):
        encode(1.0, 32)
    with pytest.raises(TypeError):
        encode(True)
    with pytest.raises(TypeError):
        encode_bits(torch.tensor(True), 16)
    with pytest.raises(TypeError):
        encode_bits(np.bool_(True), 16)


# -----------------------------------------------------------------------------
# Failures
# -----------------------------------------------------------------------------


@pytest.mark.parametrize("width", sorted(LAYOUTS))
def test_capacity_boundary(width):
    cap = LAYOUTS[width].max_payload
    assert decode(encode(cap, width)) == cap
    assert decode(encode(-cap, width)) == -cap
    for bad in (cap + 1, -(cap + 1)):
        with pytest.raises(PayloadTooLargeError) as info:
            encode(bad, width)
        assert info.value.magnitude == cap + 1
        assert info.value.capacity == cap
        assert info.value.width == width


@pytest.mark.parametrize("width", sorted(LAYOUTS))
def test_zero_is_reserved(width):
    with pytest.raises(ReservedPayloadError):
        encode(0, width)


@pytest.mark.parametrize("value", [0.0, -1.0, math.inf, -math.inf])
def test_decode_rejects_non_nan(value):
    with pytest.raises(NotAQuietNaNError) as info:
        decode(value)
    assert info.value.bits == bits_of(value)
    assert hex(bits_of(value))[2:] in str(info.value)


@pytest.mark.parametrize("width", sorted(LAYOUTS))
def test_decode_rejects_signaling_nan(width):
    layout = LAYOUTS[width]
    snan = (layout.pos_base & ~(1 << layout.payload_bits)) | 1
    with pytest.raises(NotAQuietNaNError):
        decode(from_bits(snan, width))
    with pytest.raises(NotAQuietNaNError):
        decode_bits(snan, width)


def test_errors_are_value_errors():
    for exc in (ReservedPayloadError, PayloadTooLargeError, NotAQuietNaNError):
        assert issubclass(exc, QNaNError)
        assert issubclass(exc, ValueError)


def test_decode_wants_floats():
    with pytest.raises(TypeError):
        decode(0x7FF8000000000001)


# -----------------------------------------------------------------------------
# Reserved runtime NaN on decode
# -----------------------------------------------------------------------------


@pytest.mark.parametrize("width", sorted(LAYOUTS))
def test_decode_reserved_is_strict_by_default(width):
    layout = LAYOUTS[width]
    for pattern in (layout.pos_base, layout.neg_base):
        x = from_bits(pattern, width)
        assert is_reserved_runtime_nan(x)
        with pytest.raises(ReservedPayloadError):
            decode(x)
        assert decode(x, strict=False) == 0
        assert decode_bits(pattern, width, strict=False) == 0


def test_decode_runtime_nan():
    zero = torch.zeros((), dtype=torch.float64)
    with pytest.raises(ReservedPayloadError):
        decode(zero / zero)
    assert decode(zero / zero, strict=False) == 0


def test_numpy_integer_width():
    assert encode_bits(1, np.int64(16)) == 0x7E01
