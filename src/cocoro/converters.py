"""Wire value converters for Cocoro property values.

The cloud API carries every property value as a string inside a
``{"code": ...}`` object. How that string is interpreted depends on the
property's :class:`~cocoro.enums.ValueType`:

- SINGLE: an enumerated code such as ``"30"`` (power on)
- RANGE: an integer in decimal notation such as ``"25"``
- BINARY: an even-length, fixed-width hex string packing several fields

Each ``decode_*`` function has an exact ``encode_*`` inverse.
"""

from __future__ import annotations

import re
import string

from .exceptions import MalformedValueError

__all__ = [
    "decode_single",
    "encode_single",
    "decode_range",
    "encode_range",
    "decode_binary",
    "encode_binary",
    "is_lowercase_hex",
]

_HEX_DIGITS = frozenset(string.hexdigits)
_DECIMAL = re.compile(r"[+-]?[0-9]+")


def decode_single(code: str) -> str:
    """Decode a SINGLE value.

    Enumerated codes are opaque, so this is the identity mapping.

    Example:
        >>> decode_single("30")
        '30'
    """
    return code


def encode_single(value: str) -> str:
    """Encode a SINGLE value (identity, accepts ``str`` enum members)."""
    return str(value.value if hasattr(value, "value") else value)


def decode_range(code: str, status_code: str | None = None) -> int:
    """Decode a RANGE value into an integer.

    Args:
        code: Wire string, e.g. ``"25"`` or ``"025"``.
        status_code: Optional status code, used for error reporting.

    Returns:
        The parsed integer.

    Raises:
        MalformedValueError: If ``code`` is not an optionally signed run
            of ASCII digits.

    Example:
        >>> decode_range("025")
        25
    """
    if not isinstance(code, str) or not _DECIMAL.fullmatch(code):
        raise MalformedValueError(
            f"range value {code!r} is not an integer",
            value=code,
            status_code=status_code,
        )
    return int(code)


def encode_range(value: int, width: int | None = None) -> str:
    """Encode an integer as a RANGE wire string.

    Args:
        value: Integer to encode.
        width: Minimum number of characters. The result is zero-padded to
            this width, matching the width of the code it replaces.

    Example:
        >>> encode_range(7, width=2)
        '07'
        >>> encode_range(25)
        '25'
    """
    text = str(int(value))
    if width:
        return text.zfill(width)
    return text


def decode_binary(
    code: str,
    width: int | None = None,
    status_code: str | None = None,
) -> bytes:
    """Decode a BINARY value into raw bytes.

    Args:
        code: Even-length hex string.
        width: Expected width in bytes; ``None`` skips the width check.
        status_code: Optional status code, used for error reporting.

    Raises:
        MalformedValueError: On odd length, non-hex characters, or a width
            other than ``width``.

    Example:
        >>> decode_binary("00FF10")
        b'\\x00\\xff\\x10'
    """
    if not isinstance(code, str):
        raise MalformedValueError(
            f"binary value must be a string, got {type(code).__name__}",
            value=code,
            status_code=status_code,
        )
    if len(code) % 2:
        raise MalformedValueError(
            f"binary value has odd length {len(code)}",
            value=code,
            status_code=status_code,
        )
    if not _HEX_DIGITS.issuperset(code):
        raise MalformedValueError(
            "binary value contains non-hex characters",
            value=code,
            status_code=status_code,
        )
    if width is not None and len(code) != width * 2:
        raise MalformedValueError(
            f"binary value is {len(code) // 2} bytes, expected {width}",
            value=code,
            status_code=status_code,
        )
    return bytes.fromhex(code)


def encode_binary(raw: bytes, lowercase: bool = False) -> str:
    """Encode raw bytes as a BINARY wire string.

    Uppercase is the wire convention; ``lowercase`` exists so a code that
    arrived in lowercase can be reproduced exactly.

    Example:
        >>> encode_binary(b"\\x00\\xff")
        '00FF'
    """
    text = bytes(raw).hex()
    return text if lowercase else text.upper()


def is_lowercase_hex(code: str) -> bool:
    """Return True if ``code`` has hex letters and all of them are lowercase."""
    letters = [c for c in code if c.isalpha()]
    return bool(letters) and all(c.islower() for c in letters)
