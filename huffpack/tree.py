from __future__ import annotations
from typing import Dict, Iterable, List, Tuple, Union
import heapq
import logging

from huffpack.errors import EmptyInputError

logger = logging.getLogger(__name__)


class Leaf:
    __slots__ = ("symbol", "weight")

    def __init__(self, symbol: int, weight: int = 0) -> None:
        self.symbol: int = symbol
        self.weight: int = weight

    def __repr__(self) -> str:
        return f"Leaf({self.symbol!r}, {self.weight})"


class Internal:
    __slots__ = ("left", "right", "weight")

    def __init__(self, left: Node, right: Node) -> None:
        self.left: Node = left
        self.right: Node = right
        self.weight: int = left.weight + right.weight

    def __repr__(self) -> str:
        return f"Internal({self.left!r}, {self.right!r})"


Node = Union[Leaf, Internal]


def count_frequencies(data: Iterable[int]) -> Dict[int, int]:
    # dicts keep insertion order, which is first-seen order here
    freq_table: Dict[int, int] = {}
    for symbol in data:
        if symbol in freq_table:
            freq_table[symbol] += 1
        else:
            freq_table[symbol] = 1
    return freq_table


def build_tree(freq_table: Dict[int, int]) -> Node:
    """Build a Huffman tree by repeatedly merging the two lightest nodes.

    Heap entries are ordered by ``(weight, sequence)``. Leaves take their
    sequence from the table's insertion order and every merged node takes the
    next free sequence number, so equal weights always resolve the same way
    and identical inputs give identical trees. The first node popped becomes
    the left child.
    """
    if not freq_table:
        raise EmptyInputError("cannot build a Huffman tree from zero symbols")

    heap: List[Tuple[int, int, Node]] = []
    sequence = 0
    for symbol, freq in freq_table.items():
        heap.append((freq, sequence, Leaf(symbol=symbol, weight=freq)))
        sequence += 1
    heapq.heapify(heap)

    while len(heap) != 1:
        _, _, node1 = heapq.heappop(heap)
        _, _, node2 = heapq.heappop(heap)
        new_parent_node = Internal(left=node1, right=node2)
        heapq.heappush(heap, (new_parent_node.weight, sequence, new_parent_node))
        sequence += 1

    root = heap[0][2]
    logger.debug(
        "Built tree over %d symbols, root weight %d", len(freq_table), root.weight
    )
    return root


def generate_coding_table(root: Node) -> Dict[int, str]:
    coding_table: Dict[int, str] = {}
    if isinstance(root, Leaf):
        # a lone leaf has no edge to label
        coding_table[root.symbol] = "0"
        return coding_table
    _generate_coding_table_rec(root=root, binary_string="", coding_table=coding_table)
    return coding_table


def _generate_coding_table_rec(
    root: Node, binary_string: str, coding_table: Dict[int, str]
) -> None:
    if isinstance(root, Leaf):
        coding_table[root.symbol] = binary_string
    elif isinstance(root, Internal):
        _generate_coding_table_rec(root.left, binary_string + "0", coding_table)
        _generate_coding_table_rec(root.right, binary_string + "1", coding_table)
    else:
        raise TypeError(f"not a tree node: {root!r}")


def iter_nodes(root: Node) -> Iterable[Node]:
    """Yield every node of the tree in preorder."""
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Internal):
            stack.append(node.right)
            stack.append(node.left)
