"""Conversion between device tree nodes and Cronus target names.

Cronus names look like ``k0`` (the system), ``p9n:k0:n0:s0:p00`` (a
processor) or ``p9n.xbus:k0:n0:s0:p00:c1`` (a unit of a processor).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .node import Node
from .tree import find_node_by_name, find_node_by_path, traverse
from .util import dtree_to_cronus_class, name_to_class

_NAME_MAX = 128
_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else 0


@dataclass
class CronusTarget:
    """The parts of a Cronus target name; unset parts are None."""

    cage: Optional[int] = None
    node: Optional[int] = None
    slot: Optional[int] = None
    chip_position: Optional[int] = None
    chip_unit: Optional[int] = None
    chip_name: Optional[str] = None
    class_name: Optional[str] = None

    def _need(self, *names: str) -> None:
        for name in names:
            if getattr(self, name) is None:
                raise ValueError(f"cronus target lacks {name}")

    def format(self) -> str:
        """Return the Cronus name of this target."""
        if self.chip_name is None:
            self._need("cage")
            text = f"k{self.cage}"
        elif self.class_name is None:
            self._need("cage", "node", "slot", "chip_position")
            text = (f"{self.chip_name}:k{self.cage}:n{self.node}:s{self.slot}"
                    f":p{self.chip_position:02d}")
        else:
            self._need("cage", "node", "slot", "chip_unit")
            prefix = f"{self.chip_name}.{self.class_name}:k{self.cage}:n{self.node}:s{self.slot}"
            if self.chip_position is None:
                text = f"{prefix}:c{self.chip_unit}"
            else:
                text = f"{prefix}:p{self.chip_position:02d}:c{self.chip_unit}"
        if len(text) >= _NAME_MAX:
            raise ValueError(f"cronus target name too long: {text}")
        return text


def parse_cronus_target(name: str, chip: str) -> CronusTarget:
    """Split a Cronus target name; ``chip`` is the expected chip name."""
    tokens = iter([t for t in name.split(":") if t])
    ct = CronusTarget()

    tok = next(tokens, None)
    if tok is None:
        raise ValueError(f"empty cronus target {name!r}")

    if tok.startswith("p"):
        parts = [p for p in tok.split(".") if p]
        if not parts or parts[0] != chip:
            raise ValueError(f"cronus target {name!r} is not of chip {chip!r}")
        ct.chip_name = parts[0]
        if len(parts) > 1:
            ct.class_name = parts[1]
        tok = next(tokens, None)
        if tok is None:
            raise ValueError(f"incomplete cronus target {name!r}")

    if tok.startswith("k"):
        ct.cage = _atoi(tok[1:])
        tok = next(tokens, None)
        if tok is None:
            return ct

    if tok.startswith("n"):
        ct.node = _atoi(tok[1:])
        tok = next(tokens, None)
        if tok is None:
            raise ValueError(f"incomplete cronus target {name!r}")

    if tok.startswith("s"):
        ct.slot = _atoi(tok[1:])
        tok = next(tokens, None)
        if tok is None:
            raise ValueError(f"incomplete cronus target {name!r}")

    if tok.startswith("p"):
        ct.chip_position = _atoi(tok[1:])
        tok = next(tokens, None)
        if tok is None:
            return ct

    if tok.startswith("c"):
        ct.chip_unit = _atoi(tok[1:])

    return ct


def _find_by_class(proc: Node, ct: CronusTarget) -> Optional[Node]:
    def match(node: Node) -> Optional[Node]:
        cronus_class = dtree_to_cronus_class(name_to_class(node.name))
        if cronus_class is None or cronus_class != ct.class_name:
            return None
        return node if node.index() == ct.chip_unit else None

    return traverse(proc, True, match)


def from_cronus_target(root: Node, name: str, chip: str) -> Optional[Node]:
    """Return the node named by a Cronus target, or None if there is none."""
    ct = parse_cronus_target(name, chip)

    if ct.chip_name is None:
        return root

    if ct.chip_position is None:
        if ct.class_name is None or ct.chip_unit is None:
            raise ValueError(f"cronus target {name!r} lacks class or unit")
        return find_node_by_name(root, f"{ct.class_name}{ct.chip_unit}")

    path = f"/proc{ct.chip_position}"
    proc = find_node_by_path(root, path)
    if proc is None:
        raise ValueError(f"no processor node at {path}")

    if ct.class_name is None:
        return proc

    if ct.chip_unit is None:
        raise ValueError(f"cronus target {name!r} lacks a chip unit")
    return _find_by_class(proc, ct)


def to_cronus_target(root: Node, node: Node, chip: str) -> Optional[str]:
    """Return the Cronus name of ``node``, or None if its class has none."""
    ct = CronusTarget(cage=0, node=0, slot=0)

    if node is not root:
        ct.chip_name = chip

        proc: Optional[Node] = node
        while proc is not None and name_to_class(proc.name) != "proc":
            proc = proc.parent
        if proc is not None:
            ct.chip_position = proc.index()

        if node is not proc:
            cronus_class = dtree_to_cronus_class(name_to_class(node.name))
            if cronus_class is None:
                return None
            ct.class_name = cronus_class
            ct.chip_unit = node.index()

    return ct.format()