"""In-memory device tree nodes and their properties."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Property:
    """A named property holding a raw byte value."""

    name: str
    value: bytes = b""

    def __post_init__(self) -> None:
        self.value = bytes(self.value)

    def __len__(self) -> int:
        return len(self.value)

    def set_value(self, value: bytes) -> None:
        """Replace the value; the new value must have the same length."""
        data = bytes(value)
        if len(data) != len(self.value):
            raise ValueError(
                f"property {self.name!r} holds {len(self.value)} bytes, got {len(data)}"
            )
        self.value = data

    def value_u32(self) -> int:
        """Return the value as a big-endian 32-bit unsigned integer."""
        if len(self.value) != 4:
            raise ValueError(f"property {self.name!r} is not a 32-bit cell")
        return struct.unpack(">I", self.value)[0]

    def copy(self) -> "Property":
        """Return an independent copy of this property."""
        return Property(self.name, self.value)


@dataclass(eq=False)
class Node:
    """A device tree node; nodes compare by identity."""

    name: str
    properties: List[Property] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list, repr=False)
    parent: Optional["Node"] = field(default=None, repr=False)
    enabled: bool = False

    def add_property(self, name: str, value: bytes) -> Property:
        """Append a new property and return it."""
        prop = Property(name, value)
        self.properties.append(prop)
        return prop

    def get_property(self, name: str) -> Optional[Property]:
        """Return the first property called ``name``, or None."""
        return next((p for p in self.properties if p.name == name), None)

    def add_child(self, child: "Node") -> "Node":
        """Attach ``child`` as the last child of this node and return it."""
        child.parent = self
        self.children.append(child)
        return child

    def path(self) -> str:
        """Return the full device tree path of this node."""
        names = []
        node: Optional[Node] = self
        while node is not None and node.parent is not None:
            names.append(node.name)
            node = node.parent
        if not names:
            return "/"
        return "/" + "/".join(reversed(names))

    def index(self) -> Optional[int]:
        """Return the "index" property of this node or its nearest ancestor.

        The root node never carries an index; None is returned when no
        node below the root has one.
        """
        node: Optional[Node] = self
        while node is not None and node.parent is not None:
            prop = node.get_property("index")
            if prop is not None:
                return prop.value_u32()
            node = node.parent
        return None

    def copy(self) -> "Node":
        """Copy name, properties and enabled flag, without parent or children."""
        return Node(
            self.name,
            properties=[p.copy() for p in self.properties],
            enabled=self.enabled,
        )