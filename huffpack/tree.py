from dataclasses import dataclass
from typing import Dict, List, Union

from .errors import EmptyInputError


@dataclass(frozen=True)
class Leaf:
    byte: int
    weight: int = 0

    @property
    def is_leaf(self) -> bool:
        return True


@dataclass(frozen=True)
class Internal:
    left: "Node"
    right: "Node"
    weight: int = 0

    @property
    def is_leaf(self) -> bool:
        return False


Node = Union[Leaf, Internal]


def insert_ordered(nodes: List[Node], node: Node) -> List[Node]:
    if not nodes:
        nodes.append(node)
    elif nodes[0].weight > node.weight:
        nodes.insert(0, node)
    else:
        # Walk while the following node is strictly lighter, then insert after.
        idx = 0
        while idx + 1 < len(nodes) and nodes[idx + 1].weight < node.weight:
            idx += 1
        nodes.insert(idx + 1, node)
    return nodes


def initial_from_frequencies(table) -> List[Node]:
    nodes: List[Node] = []
    for byte, count in enumerate(table):
        if count > 0:
            insert_ordered(nodes, Leaf(byte, count))
    return nodes


def build_tree(nodes: List[Node]) -> Node:
    if not nodes:
        raise EmptyInputError("Empty symbol list - cannot build a Huffman tree")

    nodes = list(nodes)
    while len(nodes) > 1:
        left = nodes.pop(0)
        right = nodes.pop(0)
        insert_ordered(nodes, Internal(left, right, left.weight + right.weight))
    return nodes[0]


def generate_codes(root: Node) -> Dict[int, str]:
    codes: Dict[int, str] = {}
    _assign_codes(root, "", codes)
    return codes


def _assign_codes(node, prefix, codes):
    if node.is_leaf:
        codes[node.byte] = prefix
        return
    _assign_codes(node.left, prefix + "0", codes)
    _assign_codes(node.right, prefix + "1", codes)


def tree_height(root: Node) -> int:
    if root.is_leaf:
        return 0
    return 1 + max(tree_height(root.left), tree_height(root.right))


def leaf_count(root: Node) -> int:
    if root.is_leaf:
        return 1
    return leaf_count(root.left) + leaf_count(root.right)
