"""Tests for hex helpers."""

import pytest

from credentoor.utils import decode_hex, to_hex


def test_to_hex():
    assert to_hex(b"\x00\xab") == "0x00ab"


@pytest.mark.parametrize("value", ["0x00ab", "00ab", "0x00AB"])
def test_decode_hex(value):
    assert decode_hex(value) == b"\x00\xab"


@pytest.mark.parametrize("value", ["0x00 ab", "0x00ab\n", " 0x00ab", "0x00ab ", "00\tab", "0x0ab", "0xzz"])
def test_decode_hex_rejects(value):
    with pytest.raises(ValueError):
        decode_hex(value)
