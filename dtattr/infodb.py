"""The attribute information database: attribute definitions and targets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .attr import ATTR_MAX_LEN, Attr, AttrEnum, AttrType, attr_type_from_string, attr_type_size, parse_number, spec_size

TARGET_MAX_LEN = 32


@dataclass
class Target:
    """A FAPI target type and the indexes of the attributes it carries."""

    name: str
    ids: List[int] = field(default_factory=list)


@dataclass
class InfoDb:
    """Attribute definitions (with default values) and target types."""

    attrs: List[Attr] = field(default_factory=list)
    targets: List[Target] = field(default_factory=list)

    def attr(self, name: str) -> Optional[Attr]:
        """Return the definition of the attribute called ``name``, or None."""
        return next((a for a in self.attrs if a.name == name), None)


def _read_value(lines: Iterator[str], key: str) -> str:
    line = next(lines, None)
    if line is None:
        raise ValueError(f"infodb ends before the {key!r} line")
    head, _, rest = line.rstrip("\n").partition(" ")
    if head != key:
        raise ValueError(f"infodb line {head!r} found where {key!r} was expected")
    return rest


def _parse_attr(name: str, data: str) -> Attr:
    tokens = iter(data.split())

    def take(what: str) -> str:
        tok = next(tokens, None)
        if tok is None:
            raise ValueError(f"missing {what}")
        return tok

    attr_type = attr_type_from_string(take("type"))
    if attr_type == AttrType.UNKNOWN:
        raise ValueError("unknown type")

    spec = None
    if attr_type == AttrType.COMPLEX:
        spec = take("spec")
        elem_size = spec_size(spec)
    elif attr_type == AttrType.STRING:
        elem_size = int(take("string size"))
    else:
        elem_size = attr_type_size(attr_type)
    if elem_size <= 0:
        raise ValueError(f"invalid element size {elem_size}")

    dim_count = int(take("dimension count"))
    if not 0 <= dim_count <= 3:
        raise ValueError(f"invalid dimension count {dim_count}")
    dims = tuple(int(take("dimension")) for _ in range(dim_count))
    if any(d <= 0 for d in dims):
        raise ValueError(f"invalid dimensions {dims}")

    enums: List[AttrEnum] = []
    if attr_type.is_numeric:
        for _ in range(int(take("enum count"))):
            key = take("enum name")
            enums.append(AttrEnum(key, parse_number(take("enum value"))))

    defined = int(take("defined flag"))
    if defined not in (0, 1):
        raise ValueError(f"invalid defined flag {defined}")

    attr = Attr(name, attr_type, elem_size, dims, enums, spec)
    if defined:
        for index in range(attr.count):
            if attr_type == AttrType.COMPLEX:
                attr.set_number(index, [take("value") for _ in spec])
            elif attr_type == AttrType.STRING:
                attr.set_string(index, take("value"))
            else:
                tok = take("value")
                if not attr.set_enum(index, tok):
                    attr.set_number(index, tok)
    return attr


def _names(data: str, what: str) -> List[str]:
    names = data.split()
    if not names:
        raise ValueError(f"empty {what} list in infodb")
    return names


def load_infodb(path) -> InfoDb:
    """Load an attribute information database from ``path``."""
    with open(path, encoding="utf-8") as fh:
        lines = iter(fh)

        attrs: List[Attr] = []
        for name in _names(_read_value(lines, "all"), "attribute"):
            if len(name) >= ATTR_MAX_LEN:
                raise ValueError(f"attribute name too long: {name}")
            data = _read_value(lines, name)
            try:
                attrs.append(_parse_attr(name, data))
            except ValueError as exc:
                raise ValueError(f"failed to read {name}: {exc}") from exc

        targets: List[Target] = []
        for name in _names(_read_value(lines, "targets"), "target"):
            if len(name) >= TARGET_MAX_LEN:
                raise ValueError(f"target name too long: {name}")
            ids = [int(tok) for tok in _names(_read_value(lines, name), f"{name} id")]
            targets.append(Target(name, ids))

    return InfoDb(attrs, targets)