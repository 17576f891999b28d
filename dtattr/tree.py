"""Whole-tree operations on device trees: copying, traversal and search."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional

from .node import Node, Property

NodeFn = Callable[[Node], Any]
PropFn = Callable[[Node, Property], Any]


def new_tree() -> Node:
    """Create a tree holding only an unnamed root node."""
    return Node("")


def _copy_children(node: Node, node_copy: Node) -> None:
    for child in node.children:
        child_copy = node_copy.add_child(child.copy())
        _copy_children(child, child_copy)


def copy_tree(root: Node) -> Node:
    """Return a deep copy of the tree below ``root``; the copy has no parent."""
    root_copy = root.copy()
    _copy_children(root, root_copy)
    return root_copy


def remove_tree(node: Node) -> None:
    """Detach ``node`` (with everything below it) from its parent."""
    parent = node.parent
    if parent is not None:
        parent.children = [c for c in parent.children if c is not node]
        node.parent = None


def _visible_children(node: Node, do_all: bool) -> Iterable[Node]:
    return (c for c in node.children if do_all or c.enabled)


def _visit(node: Node, node_fn: NodeFn, prop_fn: Optional[PropFn]) -> Any:
    result = node_fn(node)
    if result:
        return result
    if prop_fn is not None:
        for prop in list(node.properties):
            result = prop_fn(node, prop)
            if result:
                return result
    return None


def traverse(root: Node, do_all: bool, node_fn: NodeFn,
             prop_fn: Optional[PropFn] = None) -> Any:
    """Walk the tree depth first, calling ``node_fn`` and ``prop_fn``.

    With ``do_all`` false, children that are not enabled are skipped
    together with everything below them.  The first truthy value returned
    by a callback stops the walk and is returned; otherwise None.
    """
    result = _visit(root, node_fn, prop_fn)
    if result:
        return result
    for child in list(_visible_children(root, do_all)):
        result = traverse(child, do_all, node_fn, prop_fn)
        if result:
            return result
    return None


def traverse_bfs(root: Node, do_all: bool, node_fn: NodeFn,
                 prop_fn: Optional[PropFn] = None) -> Any:
    """Walk the tree breadth first; otherwise behaves like :func:`traverse`."""
    level: List[Node] = [root]
    while level:
        for node in level:
            result = _visit(node, node_fn, prop_fn)
            if result:
                return result
        level = [c for node in level for c in _visible_children(node, do_all)]
    return None


def _find(root: Node, match: Callable[[Node], bool]) -> Optional[Node]:
    found: List[Node] = []

    def check(node: Node) -> bool:
        if match(node):
            found.append(node)
            return True
        return False

    traverse(root, True, check)
    return found[0] if found else None


def find_node_by_name(root: Node, name: str) -> Optional[Node]:
    """Return the first node (depth first) whose name is ``name``."""
    return _find(root, lambda node: node.name == name)


def _stringlist_contains(data: bytes, text: str) -> bool:
    wanted = text.encode("utf-8")
    rest = data
    while rest:
        nul = rest.find(b"\0")
        if nul < 0:
            return False
        if rest[:nul] == wanted:
            return True
        rest = rest[nul + 1:]
    return False


def find_node_by_compatible(root: Node, compatible: str) -> Optional[Node]:
    """Return the first node whose "compatible" string list holds ``compatible``."""

    def match(node: Node) -> bool:
        prop = node.get_property("compatible")
        return prop is not None and _stringlist_contains(prop.value, compatible)

    return _find(root, match)


def find_node_by_path(root: Node, path: str) -> Optional[Node]:
    """Return the node whose full path is ``path``."""
    return _find(root, lambda node: node.path() == path)


def _same_as(root: Node, node: Node) -> Optional[Node]:
    prop = node.get_property("same-as")
    if prop is None:
        return None
    path = prop.value.split(b"\0", 1)[0].decode("utf-8", "replace")
    return find_node_by_path(root, path)


def rearrange(root: Node, nodes: Iterable[Node]) -> Node:
    """Build a new tree whose top level holds copies of ``nodes`` in order.

    Everything below each chosen node is copied too.  A node is copied only
    once; a node whose "same-as" property names a node that has already
    been copied is left out.
    """
    copies: Dict[Node, Node] = {}
    root_copy = root.copy()
    level: List[Node] = []

    for node in nodes:
        if node in copies:
            continue
        twin = _same_as(root, node)
        if twin is not None and twin in copies:
            continue
        copies[node] = root_copy.add_child(node.copy())
        level.append(node)

    while level:
        next_level: List[Node] = []
        for node in level:
            node_copy = copies[node]
            for child in node.children:
                if child in copies:
                    continue
                if child.get_property("same-as") is not None:
                    twin = _same_as(root, child)
                    if twin is None:
                        raise ValueError(
                            f"same-as of {child.path()} names no node in the tree"
                        )
                    if twin in copies:
                        continue
                copies[child] = node_copy.add_child(child.copy())
                next_level.append(child)
        level = next_level

    return root_copy