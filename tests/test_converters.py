"""Tests for wire value converters."""

import pytest

from cocoro.converters import (
    decode_binary,
    decode_range,
    decode_single,
    encode_binary,
    encode_range,
    encode_single,
    is_lowercase_hex,
)
from cocoro.enums import ValueSingle
from cocoro.exceptions import MalformedValueError, PropertyError


def test_single_is_identity():
    assert decode_single("30") == "30"
    assert encode_single("31") == "31"
    assert encode_single(ValueSingle.POWER_ON) == "30"


@pytest.mark.parametrize(
    "code,expected",
    [("25", 25), ("025", 25), ("0", 0), ("-5", -5), ("+5", 5)],
)
def test_decode_range(code, expected):
    assert decode_range(code) == expected


@pytest.mark.parametrize(
    "code",
    [
        "",
        "abc",
        "2.5",
        "1_000",
        " ",
        " 25",
        "25\n",
        " 25 ",
        "\u0662\u0665",  # Arabic-Indic digits
        "+",
    ],
)
def test_decode_range_rejects_non_integers(code):
    with pytest.raises(MalformedValueError) as excinfo:
        decode_range(code, "BB")
    assert excinfo.value.status_code == "BB"
    assert excinfo.value.value == code


def test_malformed_value_is_property_and_value_error():
    with pytest.raises(PropertyError):
        decode_range("x")
    with pytest.raises(ValueError):
        decode_range("x")


def test_encode_range_pads_to_width():
    assert encode_range(7, width=2) == "07"
    assert encode_range(25) == "25"
    assert encode_range(125, width=2) == "125"


def test_decode_binary():
    assert decode_binary("00FF10") == b"\x00\xff\x10"
    assert decode_binary("00ff10", width=3) == b"\x00\xff\x10"
    assert decode_binary("") == b""


@pytest.mark.parametrize(
    "code,width",
    [
        ("ABC", None),  # odd length
        ("ZZ00", None),  # not hex
        ("0000", 3),  # wrong width
    ],
)
def test_decode_binary_rejects(code, width):
    with pytest.raises(MalformedValueError):
        decode_binary(code, width)


def test_decode_binary_rejects_non_string():
    with pytest.raises(MalformedValueError):
        decode_binary(1234)  # type: ignore[arg-type]


def test_encode_binary_case():
    assert encode_binary(b"\xab\x01") == "AB01"
    assert encode_binary(b"\xab\x01", lowercase=True) == "ab01"


def test_is_lowercase_hex():
    assert is_lowercase_hex("ab01")
    assert not is_lowercase_hex("AB01")
    assert not is_lowercase_hex("aB01")
    assert not is_lowercase_hex("0001")


def test_decode_range_rejects_non_string():
    with pytest.raises(MalformedValueError):
        decode_range(25)  # type: ignore[arg-type]
