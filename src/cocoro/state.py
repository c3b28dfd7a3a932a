"""Composite state codec.

Some properties pack several independent settings into one fixed-width hex
string. The air conditioner's state detail property (``F1``), for
instance, carries power, operating mode, target temperature and a few flags
in a single BINARY value. This module decodes such a code into named fields,
lets callers change one field at a time, and re-encodes it.

Which bytes hold which field differs between device families, so the
layout is data: a :class:`StateLayout` lists the :class:`StateField` entries
for one status code. Bytes and bits that no field claims are carried
through unchanged, so ``decode(code).encode() == code`` for every valid
code, and setting one field never touches the bits of another.

Example:
    >>> layout = StateLayout(
    ...     status_code="F1",
    ...     width=4,
    ...     fields=(StateField("temperature", offset=3),),
    ... )
    >>> state = CompositeState.decode(layout, "AB000003")
    >>> state.temperature
    3
    >>> state.set("temperature", 25)
    >>> state.encode()
    'AB000019'
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Literal

from .converters import decode_binary, encode_binary, is_lowercase_hex
from .exceptions import InvalidFieldValueError

_logger = logging.getLogger(__name__)

__all__ = ["StateField", "StateLayout", "CompositeState"]

FieldKind = Literal["int", "flag"]


@dataclass(frozen=True)
class StateField:
    """One named field inside a composite state code.

    Attributes:
        name: Field name, used as the key for :meth:`CompositeState.get`
            and :meth:`CompositeState.set`.
        offset: Index of the first byte of the field.
        length: Number of bytes, read big-endian.
        mask: Bits of those bytes owned by the field. Defaults to all of
            them. Fields may share a byte as long as their masks are
            disjoint.
        kind: ``"int"`` decodes to an integer, ``"flag"`` to a bool that
            is true when any masked bit is set.
        minimum: Smallest value accepted by ``set`` (int fields).
        maximum: Largest value accepted by ``set`` (int fields).
        bias: Added to the raw bits on decode, subtracted on encode.
        choices: If given, the only values accepted by ``set``.
    """

    name: str
    offset: int
    length: int = 1
    mask: int | None = None
    kind: FieldKind = "int"
    minimum: int | None = None
    maximum: int | None = None
    bias: int = 0
    choices: frozenset[int] | None = None

    def __post_init__(self) -> None:
        if self.offset < 0 or self.length < 1:
            raise ValueError(
                f"Field {self.name}: offset must be >= 0 and length >= 1"
            )
        if self.kind not in ("int", "flag"):
            raise ValueError(f"Field {self.name}: unknown kind {self.kind!r}")
        if self.mask is not None and not 0 < self.mask <= self.full_mask:
            raise ValueError(
                f"Field {self.name}: mask {self.mask:#x} does not fit "
                f"in {self.length} byte(s)"
            )
        if self.kind == "int" and self.max_raw & (self.max_raw + 1):
            raise ValueError(
                f"Field {self.name}: int fields need a contiguous mask"
            )
        if self.choices is not None:
            object.__setattr__(self, "choices", frozenset(self.choices))

    @property
    def full_mask(self) -> int:
        return (1 << (8 * self.length)) - 1

    @property
    def bit_mask(self) -> int:
        """Mask of the bits owned by this field within its bytes."""
        return self.full_mask if self.mask is None else self.mask

    @property
    def shift(self) -> int:
        """Position of the lowest owned bit."""
        mask = self.bit_mask
        return (mask & -mask).bit_length() - 1

    @property
    def max_raw(self) -> int:
        return self.bit_mask >> self.shift

    @property
    def end(self) -> int:
        return self.offset + self.length

    def _read(self, raw: bytes | bytearray) -> int:
        return int.from_bytes(raw[self.offset : self.end], "big")

    def extract(self, raw: bytes | bytearray) -> int | bool:
        """Decode this field's value from ``raw``."""
        bits = self._read(raw) & self.bit_mask
        if self.kind == "flag":
            return bits != 0
        return (bits >> self.shift) + self.bias

    def to_raw(self, value: Any) -> int:
        """Validate ``value`` and return the bits to store, unshifted.

        Raises:
            InvalidFieldValueError: If ``value`` is outside the domain.
        """
        if self.kind == "flag":
            if not isinstance(value, bool):
                raise InvalidFieldValueError(
                    self.name, value, "expected a bool"
                )
            return self.max_raw if value else 0

        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidFieldValueError(self.name, value, "expected an int")
        if self.choices is not None and value not in self.choices:
            allowed = ", ".join(f"{c:#04x}" for c in sorted(self.choices))
            raise InvalidFieldValueError(
                self.name, value, f"must be one of {allowed}"
            )
        if self.minimum is not None and value < self.minimum:
            raise InvalidFieldValueError(
                self.name, value, f"must be >= {self.minimum}"
            )
        if self.maximum is not None and value > self.maximum:
            raise InvalidFieldValueError(
                self.name, value, f"must be <= {self.maximum}"
            )
        raw_value = value - self.bias
        if not 0 <= raw_value <= self.max_raw:
            raise InvalidFieldValueError(
                self.name,
                value,
                f"does not fit in the field (0-{self.max_raw} after bias)",
            )
        return raw_value

    def insert(self, raw: bytearray, raw_value: int) -> None:
        """Write ``raw_value`` into ``raw`` leaving unowned bits intact."""
        current = self._read(raw)
        updated = (current & ~self.bit_mask) | (
            (raw_value << self.shift) & self.bit_mask
        )
        raw[self.offset : self.end] = updated.to_bytes(self.length, "big")


@dataclass(frozen=True)
class StateLayout:
    """Byte layout of one composite state property.

    Raises:
        ValueError: If a field extends past ``width`` or two fields claim
            the same bit.
    """

    status_code: str
    width: int
    fields: tuple[StateField, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        if self.width < 1:
            raise ValueError("Layout width must be at least one byte")

        claimed: dict[int, str] = {}  # bit index -> field name
        names: set[str] = set()
        for f in self.fields:
            if f.name in names:
                raise ValueError(f"Duplicate field name {f.name!r}")
            names.add(f.name)
            if f.end > self.width:
                raise ValueError(
                    f"Field {f.name} ends at byte {f.end}, "
                    f"layout is {self.width} bytes wide"
                )
            position = f.bit_mask << (8 * (self.width - f.end))
            bit = 0
            while position:
                if position & 1:
                    if bit in claimed:
                        raise ValueError(
                            f"Fields {claimed[bit]} and {f.name} overlap"
                        )
                    claimed[bit] = f.name
                position >>= 1
                bit += 1

    def __iter__(self) -> Iterator[StateField]:
        return iter(self.fields)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> StateField:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(f"Layout {self.status_code} has no field {name!r}")

    def decode(self, code: str) -> CompositeState:
        return CompositeState.decode(self, code)

    def empty(self) -> CompositeState:
        return CompositeState.empty(self)

    def build(self, **values: Any) -> CompositeState:
        """Create a zero-filled state with the given fields set."""
        state = self.empty()
        for name, value in values.items():
            state.set(name, value)
        return state


class CompositeState:
    """Decoded view of a composite state code.

    The state keeps the complete byte string it was decoded from; fields
    are read from and written into it in place, so bytes outside every
    field are preserved verbatim. Call :meth:`encode` after each change to
    get the code to transmit. Bytes that still hold their decoded value are
    re-emitted with the exact characters they arrived as, so the letter
    case of the original code survives a round trip.

    A state created with :meth:`empty` starts out all zeroes. Sending it
    after setting a single field also sends zero for every other field, so
    prefer decoding the current value when one is available.
    """

    __slots__ = ("_layout", "_raw", "_source")

    def __init__(
        self,
        layout: StateLayout,
        raw: bytes | bytearray | None = None,
        *,
        source: str | None = None,
    ) -> None:
        if raw is None:
            raw = bytes(layout.width)
        if len(raw) != layout.width:
            raise ValueError(
                f"State {layout.status_code} needs {layout.width} bytes, "
                f"got {len(raw)}"
            )
        if source is not None and len(source) != 2 * layout.width:
            raise ValueError(
                f"State {layout.status_code} source code must be "
                f"{2 * layout.width} characters"
            )
        self._layout = layout
        self._raw = bytearray(raw)
        self._source = source

    @classmethod
    def decode(cls, layout: StateLayout, code: str) -> CompositeState:
        """Decode a wire code.

        Raises:
            MalformedValueError: If ``code`` is not a hex string of
                ``layout.width`` bytes.
        """
        raw = decode_binary(code, layout.width, layout.status_code)
        return cls(layout, raw, source=code)

    @classmethod
    def empty(cls, layout: StateLayout) -> CompositeState:
        return cls(layout)

    @property
    def layout(self) -> StateLayout:
        return self._layout

    @property
    def status_code(self) -> str:
        return self._layout.status_code

    @property
    def raw(self) -> bytes:
        return bytes(self._raw)

    def get(self, name: str) -> int | bool:
        """Return the decoded value of field ``name``.

        Raises:
            KeyError: If the layout has no such field.
        """
        return self._layout.get_field(name).extract(self._raw)

    def __getitem__(self, name: str) -> int | bool:
        return self.get(name)

    def __getattr__(self, name: str) -> int | bool:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.get(name)
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} has no field {name!r}"
            ) from None

    def set(self, name: str, value: Any) -> None:
        """Set field ``name`` to ``value``.

        Only the bits owned by the field change. On failure the state is
        left untouched.

        Raises:
            InvalidFieldValueError: If the field does not exist or
                ``value`` is outside its domain.
        """
        try:
            state_field = self._layout.get_field(name)
        except KeyError:
            raise InvalidFieldValueError(
                name, value, f"no such field in layout {self.status_code}"
            ) from None
        raw_value = state_field.to_raw(value)
        state_field.insert(self._raw, raw_value)
        _logger.debug(
            "State %s: %s set to %r", self.status_code, name, value
        )

    def update(self, values: dict[str, Any] | Iterable[tuple[str, Any]]) -> None:
        """Set several fields; all are validated before any is written."""
        items = list(values.items() if isinstance(values, dict) else values)
        staged = bytearray(self._raw)
        for name, value in items:
            try:
                state_field = self._layout.get_field(name)
            except KeyError:
                raise InvalidFieldValueError(
                    name, value, f"no such field in layout {self.status_code}"
                ) from None
            state_field.insert(staged, state_field.to_raw(value))
        self._raw = staged

    def encode(self) -> str:
        """Serialize the current bytes to a wire code."""
        if self._source is None:
            return encode_binary(self._raw)
        # Rewritten bytes follow the code's case if it was all lowercase
        lowercase = is_lowercase_hex(self._source)
        original = bytes.fromhex(self._source)
        parts: list[str] = []
        for i, byte in enumerate(self._raw):
            if byte == original[i]:
                parts.append(self._source[2 * i : 2 * i + 2])
            else:
                parts.append(encode_binary(bytes((byte,)), lowercase))
        return "".join(parts)

    def as_dict(self) -> dict[str, int | bool]:
        return {f.name: f.extract(self._raw) for f in self._layout}

    def copy(self) -> CompositeState:
        return type(self)(self._layout, self._raw, source=self._source)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompositeState):
            return NotImplemented
        return self._layout == other._layout and self._raw == other._raw

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"CompositeState({self.status_code}: {fields})"
