"""Plain text rendering of device tree nodes and attribute values."""

from __future__ import annotations

from typing import Iterator

from .attr import Attr, AttrType
from .node import Node

_DUMP_LABELS = {
    AttrType.UINT8: "uint8",
    AttrType.UINT16: "uint16",
    AttrType.UINT32: "uint32",
    AttrType.UINT64: "uint64",
    AttrType.INT8: "int8",
    AttrType.INT16: "int16",
    AttrType.INT32: "int32",
    AttrType.INT64: "int64",
    AttrType.STRING: "string",
    AttrType.COMPLEX: "complex",
    AttrType.UNKNOWN: "",
}

_VALID_SIZES = (1, 2, 4, 8)


def _number(value: int, size: int) -> str:
    if size not in _VALID_SIZES:
        raise ValueError(f"invalid element size {size}")
    value &= (1 << (8 * size)) - 1
    return f"0x{value:0{2 * size}x}"


def _string(data: bytes, size: int) -> str:
    text = bytes(data)[:size].split(b"\0", 1)[0]
    return '"' + text.decode("utf-8", "replace") + '"'


def _enum_items(attr: Attr) -> Iterator[str]:
    for value in attr.values:
        key = next((e.key for e in attr.enums if e.value == value), None)
        if key is None:
            yield f"UNKNOWN_ENUM ({_number(value, attr.elem_size)})"
        else:
            yield key


def _complex_items(attr: Attr) -> Iterator[str]:
    spec = attr.spec or ""
    for record in attr.values:
        for value, size in zip(record, spec):
            yield _number(value, int(size))


def dump_node(node: Node) -> str:
    """Return the line naming ``node`` by its full path."""
    return f"{node.path()}\n"


def dump_attr_name(attr: Attr) -> str:
    """Return the indented name and type label that precede a value."""
    label = _DUMP_LABELS.get(attr.type, "invalid")
    return f"  {attr.name}: {label} "


def dump_attr(attr: Attr) -> str:
    """Return the values of ``attr`` separated by single spaces."""
    if attr.type == AttrType.UNKNOWN:
        return "**UNKNOWN**"
    if attr.type == AttrType.COMPLEX:
        return " ".join(_complex_items(attr))
    if attr.type == AttrType.STRING:
        return " ".join(_string(item, attr.elem_size) for item in attr.values)
    if not attr.type.is_numeric:
        raise ValueError(f"{attr.name}: type {attr.type!r} cannot be dumped")
    if attr.enums:
        return " ".join(_enum_items(attr))
    return " ".join(_number(value, attr.elem_size) for value in attr.values)