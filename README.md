# dtattr

A library for working with platform attributes kept as properties of
device tree nodes: an in-memory device tree model, typed attribute values
with their big-endian encoding, an attribute information database reader,
Cronus-style target names and a plain text rendering of attributes.

No third-party packages are needed.

## Installation

```
pip install .
```

Install with the `test` extra to run the test suite with pytest.

## Modules

- `dtattr.node`: `Node` and `Property`. A node has a name, a list of
  properties, children, a parent and an `enabled` flag. `Node.path()` gives
  the full path (`"/"` for the root), `Node.index()` the big-endian
  `"index"` property of the node or its nearest ancestor below the root
  (or `None`), and `Property.value_u32()` reads a 4-byte property.
- `dtattr.tree`: `new_tree`, `copy_tree`, `remove_tree`, depth-first
  `traverse` and breadth-first `traverse_bfs` (the first truthy callback
  result stops the walk and is returned), `find_node_by_name`,
  `find_node_by_path`, `find_node_by_compatible`, and `rearrange`, which
  builds a new tree whose top level holds copies of chosen nodes, honouring
  `"same-as"` properties.
- `dtattr.attr`: `AttrType`, `AttrEnum` and `Attr`. An `Attr` holds a
  numeric, string or complex (packed by a spec such as `"4124"`) value
  array; `encode()` and `decode()` convert to and from the big-endian bytes
  stored in a property. `parse_number` reads numbers the way C's `strtoull`
  does with base 0.
- `dtattr.infodb`: `load_infodb(path)` reads an attribute information
  database into an `InfoDb` of `Attr` definitions (with default values) and
  `Target` entries listing the attribute indexes each target type carries.
- `dtattr.attr_list`: `parse_attr_list(path)` reads one attribute name per
  line into an `AttrList`; an empty list selects every name.
- `dtattr.util`: mapping between device tree, FAPI and Cronus class names,
  and `name_to_class` (`"core12@1f"` → `"core"`, `""` → `"root"`).
- `dtattr.cronus_target`: `CronusTarget`, `parse_cronus_target`,
  `from_cronus_target` and `to_cronus_target`, converting between nodes and
  names such as `k0`, `p10:k0:n0:s0:p00` and `p10.c:k0:n0:s0:p00:c1`.
- `dtattr.dump`: `dump_node`, `dump_attr_name` and `dump_attr` return the
  plain text lines for a node path and an attribute's values.

## Examples

Building a tree and naming its nodes:

```python
from dtattr.tree import new_tree, find_node_by_path
from dtattr.node import Node
from dtattr.cronus_target import to_cronus_target, from_cronus_target

root = new_tree()
proc = root.add_child(Node("proc0"))
proc.add_property("index", b"\x00\x00\x00\x00")
core = proc.add_child(Node("core1"))
core.add_property("index", b"\x00\x00\x00\x01")

print(find_node_by_path(root, "/proc0/core1") is core)   # True
name = to_cronus_target(root, core, "p10")               # "p10.c:k0:n0:s0:p00:c1"
print(from_cronus_target(root, name, "p10") is core)      # True
```

Typed attribute values and their encoding:

```python
from dtattr.attr import Attr, AttrType
from dtattr.dump import dump_attr_name, dump_attr

attr = Attr("ATTR_EXAMPLE", AttrType.UINT32, dims=(2,))
attr.set_number(0, "0x10")
core.add_property(attr.name, attr.encode())   # b"\x00\x00\x00\x10\x00\x00\x00\x00"

print(dump_attr_name(attr) + dump_attr(attr))
# "  ATTR_EXAMPLE: uint32 0x00000010 0x00000000"
```

An attribute information database is a text file: a line `all` followed by
the attribute names, one line per attribute (`NAME type [spec|size]
dim-count dims... [enum-count enums...] defined values...`), a line
`targets` followed by target names, and one line per target listing the
attribute indexes:

```
all ATTR_EXAMPLE
ATTR_EXAMPLE uint32 1 2 0 1 5 6
targets TARGET_TYPE_CORE
TARGET_TYPE_CORE 0
```

```python
from dtattr.infodb import load_infodb

db = load_infodb("attr.db")
print(db.attr("ATTR_EXAMPLE").values)   # [5, 6]
```

Errors are raised as `ValueError` (bad specs, sizes, names or database
lines) or as the usual `OSError` when a file cannot be opened.

## What this package does not do

The package works on trees in memory only. It does not read or write
flattened device tree (DTB) blobs, so there is no loading of a tree from
disk, no writing of a tree to disk and no in-place update of properties in
a blob. Consequently it offers no ready-made creation of a tree file with
default attribute values, no export or import of attributes between a
tree file and a dump, and no reading of Cronus dump files; it renders
single attributes and node paths as text (`dtattr.dump`) and converts
Cronus target names (`dtattr.cronus_target`). There is no command-line
program.