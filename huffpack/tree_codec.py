from __future__ import annotations
from typing import List, Optional
import logging

from huffpack.errors import MalformedTreeError
from huffpack.tree import Internal, Leaf, Node, iter_nodes

logger = logging.getLogger(__name__)

INTERNAL_MARKER = 0
LEAF_MARKER = 1


def serialize_tree(root: Node) -> bytes:
    """Preorder dump: ``0`` for an internal node, ``1 <symbol>`` for a leaf."""
    header = bytearray()
    for node in iter_nodes(root):
        if isinstance(node, Leaf):
            header.append(LEAF_MARKER)
            header.append(node.symbol)
        else:
            header.append(INTERNAL_MARKER)
    return bytes(header)


def deserialize_tree(data: bytes) -> Node:
    """Parse exactly one preorder-encoded tree out of ``data``.

    Weights are not stored in the header, so every rebuilt node has weight 0.
    """
    pos = 0
    # children collected so far for each internal node still being parsed
    pending: List[List[Node]] = []
    root: Optional[Node] = None
    while root is None:
        if pos >= len(data):
            raise MalformedTreeError(
                f"tree header ends after {pos} bytes with the tree incomplete"
            )
        marker = data[pos]
        pos += 1
        if marker == INTERNAL_MARKER:
            pending.append([])
            continue
        if marker != LEAF_MARKER:
            raise MalformedTreeError(f"invalid marker byte {marker} at offset {pos - 1}")
        if pos >= len(data):
            raise MalformedTreeError("tree header ends inside a leaf")
        node: Node = Leaf(symbol=data[pos])
        pos += 1

        while pending:
            children = pending[-1]
            children.append(node)
            if len(children) < 2:
                break
            pending.pop()
            node = Internal(left=children[0], right=children[1])
        else:
            root = node

    if pos != len(data):
        raise MalformedTreeError(
            f"{len(data) - pos} trailing bytes after a complete tree header"
        )
    logger.debug("Parsed tree header of %d bytes", len(data))
    return root
