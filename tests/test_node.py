import pytest

from dtattr.node import Node, Property


def _tree():
    root = Node("")
    cpus = root.add_child(Node("cpus"))
    cpu = cpus.add_child(Node("cpu@0"))
    return root, cpus, cpu


def test_root_path():
    root, _, _ = _tree()
    assert root.path() == "/"


def test_nested_path():
    root, cpus, cpu = _tree()
    assert cpus.path() == "/cpus"
    assert cpu.path() == "/cpus/cpu@0"
    assert cpu.parent is cpus
    assert root.children == [cpus]


def test_children_keep_order():
    root = Node("")
    names = ["a", "b", "c"]
    for name in names:
        root.add_child(Node(name))
    assert [c.name for c in root.children] == names


def test_properties_and_lookup():
    node = Node("n")
    first = node.add_property("compatible", b"x\0")
    node.add_property("compatible", b"y\0")
    assert node.get_property("compatible") is first
    assert node.get_property("missing") is None
    assert [p.name for p in node.properties] == ["compatible", "compatible"]


def test_value_u32_is_big_endian():
    prop = Property("index", b"\x00\x00\x00\x05")
    assert prop.value_u32() == 5


def test_value_u32_wrong_length():
    with pytest.raises(ValueError):
        Property("index", b"\x01\x02").value_u32()


def test_set_value_same_length():
    prop = Property("p", b"abcd")
    prop.set_value(b"wxyz")
    assert prop.value == b"wxyz"


def test_set_value_wrong_length():
    prop = Property("p", b"abcd")
    with pytest.raises(ValueError):
        prop.set_value(b"abc")
    assert prop.value == b"abcd"


def test_index_inherited_from_parent():
    _, cpus, cpu = _tree()
    cpus.add_property("index", (3).to_bytes(4, "big"))
    assert cpu.index() == 3
    cpu.add_property("index", (7).to_bytes(4, "big"))
    assert cpu.index() == 7


def test_index_missing():
    root, _, cpu = _tree()
    root.add_property("index", (1).to_bytes(4, "big"))
    assert root.index() is None
    assert cpu.index() is None


def test_node_copy_is_shallow_and_independent():
    _, cpus, cpu = _tree()
    cpus.enabled = True
    cpus.add_property("reg", b"\x00\x01")
    dup = cpus.copy()
    assert dup.name == "cpus"
    assert dup.enabled is True
    assert dup.children == []
    assert dup.parent is None
    assert dup.properties == cpus.properties
    dup.get_property("reg").set_value(b"\x09\x09")
    assert cpus.get_property("reg").value == b"\x00\x01"


def test_property_copy():
    prop = Property("p", b"\x01\x02")
    dup = prop.copy()
    assert dup == prop
    assert dup is not prop


def test_nodes_compare_by_identity():
    assert Node("a") != Node("a")
    node = Node("a")
    assert [Node("a"), node].index(node) == 1