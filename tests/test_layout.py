import numpy as np
import pytest
import torch

from qnan import F16, F32, F64, LAYOUTS, UnsupportedWidthError, bits_of, layout_for


@pytest.mark.parametrize(
    "layout, pos, neg, payload_bits",
    [
        (F16, 0x7E00, 0xFE00, 9),
        (F32, 0x7FC00000, 0xFFC00000, 22),
        (F64, 0x7FF8000000000000, 0xFFF8000000000000, 51),
    ],
)
def test_constants(layout, pos, neg, payload_bits):
    assert layout.pos_base == pos
    assert layout.neg_base == neg
    assert layout.payload_bits == payload_bits
    assert layout.max_payload == 2**payload_bits - 1
    assert layout.neg_base == layout.pos_base | layout.sign_bit


def test_signed_views_match_torch():
    for layout in LAYOUTS.values():
        got = torch.tensor(layout.neg_base_signed, dtype=layout.int_dtype)
        assert layout.to_unsigned(int(got.item())) == layout.neg_base
        assert layout.to_signed(layout.pos_base) == layout.pos_base  # sign bit clear


@pytest.mark.parametrize(
    "key, expected",
    [
        (16, F16),
        (32, F32),
        (64, F64),
        (torch.float16, F16),
        (torch.float32, F32),
        (torch.float64, F64),
        (np.float16, F16),
        (np.dtype("float32"), F32),
        ("float64", F64),
        (F32, F32),
        (np.int64(16), F16),
        (np.int32(64), F64),
    ],
)
def test_layout_for(key, expected):
    assert layout_for(key) is expected


@pytest.mark.parametrize("key", [8, 128, True, None, torch.bfloat16, torch.int32, np.int64, "nonsense"])
def test_layout_for_rejects(key):
    with pytest.raises(UnsupportedWidthError):
        layout_for(key)


def test_layout_names_appear_in_width_errors():
    assert str(F32) == "float32"
    with pytest.raises(ValueError, match="float64 value, not float32"):
        bits_of(1.0, 32)
