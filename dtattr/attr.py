"""Typed attribute values and their big-endian encoding in device trees."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from math import prod
from string import hexdigits
from typing import Any, Iterable, List, Optional, Tuple, Union

ATTR_MAX_LEN = 72
_U64_MAX = (1 << 64) - 1


class AttrType(IntEnum):
    UNKNOWN = 0
    UINT8 = 1
    UINT16 = 2
    UINT32 = 3
    UINT64 = 4
    INT8 = 5
    INT16 = 6
    INT32 = 7
    INT64 = 8
    STRING = 9
    COMPLEX = 10

    @property
    def is_numeric(self) -> bool:
        return AttrType.UINT8 <= self <= AttrType.INT64


_TYPE_LABELS = {
    AttrType.UINT8: "uint8",
    AttrType.UINT16: "uint16",
    AttrType.UINT32: "uint32",
    AttrType.UINT64: "uint64",
    AttrType.INT8: "int8",
    AttrType.INT16: "int16",
    AttrType.INT32: "int32",
    AttrType.INT64: "int64",
    AttrType.STRING: "str",
    AttrType.COMPLEX: "complex",
}
_LABEL_TYPES = {label: t for t, label in _TYPE_LABELS.items()}

_TYPE_SIZES = {
    AttrType.UINT8: 1, AttrType.INT8: 1,
    AttrType.UINT16: 2, AttrType.INT16: 2,
    AttrType.UINT32: 4, AttrType.INT32: 4,
    AttrType.UINT64: 8, AttrType.INT64: 8,
}

_SIZE_CODES = {1: "B", 2: "H", 4: "I", 8: "Q"}


def attr_type_from_string(text: str) -> AttrType:
    """Return the type named by ``text``, or ``AttrType.UNKNOWN``."""
    return _LABEL_TYPES.get(text, AttrType.UNKNOWN)


def attr_type_to_string(attr_type: int) -> str:
    """Return the label of a type; unknown types give ``"<NULL>"``."""
    try:
        return _TYPE_LABELS.get(AttrType(attr_type), "<NULL>")
    except ValueError:
        return "<NULL>"


def attr_type_size(attr_type: AttrType) -> int:
    """Return the element size in bytes of a numeric type."""
    try:
        return _TYPE_SIZES[AttrType(attr_type)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"type {attr_type!r} has no fixed size") from exc


def spec_size(spec: str) -> int:
    """Return the total size in bytes of a packing spec such as ``"4124"``."""
    if not all(ch in "0123456789" for ch in spec):
        raise ValueError(f"invalid packing spec {spec!r}")
    return sum(int(ch) for ch in spec)


def parse_number(text: str) -> int:
    """Parse an unsigned 64-bit number the way C's ``strtoull`` does with base 0.

    Hex (``0x``), octal (leading ``0``) and decimal are accepted; parsing
    stops at the first invalid character, negative numbers wrap around and
    values too large saturate at the 64-bit maximum.
    """
    s = text.lstrip()
    negative = False
    if s and s[0] in "+-":
        negative = s[0] == "-"
        s = s[1:]

    if s[:2].lower() == "0x" and len(s) > 2 and s[2] in hexdigits:
        base, valid, s = 16, hexdigits, s[2:]
    elif s.startswith("0"):
        base, valid = 8, "01234567"
    else:
        base, valid = 10, "0123456789"

    end = 0
    while end < len(s) and s[end] in valid:
        end += 1
    if end == 0:
        return 0

    value = int(s[:end], base)
    if value > _U64_MAX:
        return _U64_MAX
    return (-value) & _U64_MAX if negative else value


@dataclass(frozen=True)
class AttrEnum:
    """A named value of an enumerated attribute."""

    key: str
    value: int


Element = Union[int, bytes, Tuple[int, ...]]


@dataclass
class Attr:
    """An attribute definition together with its current values.

    ``values`` holds one element per array entry, in row-major order:
    an int for numeric types, ``elem_size`` bytes for strings and a tuple
    of ints (one per spec field) for complex types.
    """

    name: str
    type: AttrType = AttrType.UNKNOWN
    elem_size: int = 0
    dims: Tuple[int, ...] = ()
    enums: List[AttrEnum] = field(default_factory=list)
    spec: Optional[str] = None
    values: Optional[List[Element]] = None

    def __post_init__(self) -> None:
        self.type = AttrType(self.type)
        self.dims = tuple(self.dims)
        if self.elem_size == 0:
            if self.type.is_numeric:
                self.elem_size = attr_type_size(self.type)
            elif self.type == AttrType.COMPLEX and self.spec:
                self.elem_size = spec_size(self.spec)
        if self.values is None:
            self.values = [self._zero() for _ in range(self.count)]
        else:
            self.values = list(self.values)

    @property
    def count(self) -> int:
        """Number of elements; zero for attributes of unknown type."""
        if self.type == AttrType.UNKNOWN:
            return 0
        return prod(self.dims)

    @property
    def dim_count(self) -> int:
        return len(self.dims)

    def _zero(self) -> Element:
        if self.type == AttrType.STRING:
            return bytes(self.elem_size)
        if self.type == AttrType.COMPLEX:
            return (0,) * len(self.spec or "")
        return 0

    def _record_format(self) -> struct.Struct:
        spec = self.spec or ""
        try:
            return struct.Struct(">" + "".join(_SIZE_CODES[int(ch)] for ch in spec))
        except (KeyError, ValueError) as exc:
            raise ValueError(f"invalid packing spec {spec!r}") from exc

    def set_number(self, index: int, token: Union[str, Iterable[str]]) -> None:
        """Set element ``index`` from number text.

        For complex attributes ``token`` gives one number per spec field,
        either as a sequence or as one whitespace separated string; each
        field is cut to its own size.
        """
        if self.type.is_numeric:
            mask = (1 << (8 * self.elem_size)) - 1
            self.values[index] = parse_number(token) & mask
        elif self.type == AttrType.COMPLEX:
            fields = token.split() if isinstance(token, str) else list(token)
            spec = self.spec or ""
            if len(fields) != len(spec):
                raise ValueError(f"{self.name}: expected {len(spec)} fields, got {len(fields)}")
            self.values[index] = tuple(
                parse_number(text) & ((1 << (8 * int(size))) - 1)
                for text, size in zip(fields, spec)
            )
        else:
            raise ValueError(f"{self.name} of type {self.type.name} is not numeric")

    def set_enum(self, index: int, token: str) -> bool:
        """Set element ``index`` to the enum value named ``token``.

        Returns False, leaving the element alone, if no enum has that name.
        """
        for item in self.enums:
            if item.key == token:
                self.values[index] = item.value & ((1 << (8 * self.elem_size)) - 1)
                return True
        return False

    def set_string(self, index: int, token: str) -> None:
        """Set element ``index`` to ``token``, cut or NUL-padded to ``elem_size``."""
        data = token.encode("utf-8")[: self.elem_size]
        self.values[index] = data.ljust(self.elem_size, b"\0")

    def copy(self) -> "Attr":
        """Return a copy whose values can change independently."""
        return Attr(
            self.name,
            self.type,
            self.elem_size,
            self.dims,
            list(self.enums),
            self.spec,
            list(self.values),
        )

    def encode(self) -> bytes:
        """Return the values as stored in the device tree (big-endian)."""
        try:
            if self.type == AttrType.COMPLEX:
                record = self._record_format()
                return b"".join(record.pack(*item) for item in self.values)
            if self.type == AttrType.STRING:
                for item in self.values:
                    if len(item) != self.elem_size:
                        raise ValueError(f"{self.name}: string element is not {self.elem_size} bytes")
                return b"".join(self.values)
            code = _SIZE_CODES[self.elem_size]
            return struct.pack(f">{len(self.values)}{code}", *self.values)
        except (struct.error, KeyError) as exc:
            raise ValueError(f"{self.name}: cannot encode values: {exc}") from exc

    def decode(self, buf: bytes) -> None:
        """Replace the values with those stored in ``buf``."""
        data = bytes(buf)
        expected = self.count * self.elem_size
        if len(data) != expected:
            raise ValueError(f"{self.name}: expected {expected} bytes, got {len(data)}")

        if self.type == AttrType.COMPLEX:
            record = self._record_format()
            self.values = list(record.iter_unpack(data)) if data else []
        elif self.type == AttrType.STRING:
            size = self.elem_size
            self.values = [data[i:i + size] for i in range(0, len(data), size)]
        else:
            try:
                code = _SIZE_CODES[self.elem_size]
            except KeyError as exc:
                raise ValueError(f"{self.name}: invalid element size {self.elem_size}") from exc
            self.values = list(struct.unpack(f">{self.count}{code}", data))