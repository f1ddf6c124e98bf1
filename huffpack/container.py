from __future__ import annotations
from enum import Enum
import logging

from huffpack.bits import BitPacker, BitReader
from huffpack.errors import (
    CorruptPayloadError,
    MalformedTreeError,
    MissingLengthError,
    TruncatedPayloadError,
)
from huffpack.tree import (
    Leaf,
    Node,
    build_tree,
    count_frequencies,
    generate_coding_table,
)
from huffpack.tree_codec import deserialize_tree, serialize_tree

logger = logging.getLogger(__name__)

# Layout: header_length | tree header | valid_bit_count | payload
LENGTH_FIELD_SIZE = 4
BYTE_ORDER = "little"
MAX_FIELD_VALUE = (1 << (8 * LENGTH_FIELD_SIZE)) - 1


class DecodeState(Enum):
    READING_HEADER = "reading-header"
    READING_PAYLOAD = "reading-payload"
    DONE = "done"


def _length_field(value: int, name: str) -> bytes:
    if value > MAX_FIELD_VALUE:
        raise OverflowError(f"{name} {value} does not fit in {LENGTH_FIELD_SIZE} bytes")
    return value.to_bytes(length=LENGTH_FIELD_SIZE, byteorder=BYTE_ORDER)


def _read_length_field(container: bytes, offset: int, name: str) -> int:
    field = container[offset : offset + LENGTH_FIELD_SIZE]
    if len(field) < LENGTH_FIELD_SIZE:
        raise MissingLengthError(
            f"container ends at byte {len(container)} before the {name} field"
        )
    return int.from_bytes(field, byteorder=BYTE_ORDER)


def encode(data: bytes) -> bytes:
    """Compress ``data`` into a self-describing container.

    Empty input maps to the empty container.
    """
    data = bytes(data)
    if not data:
        return b""

    root = build_tree(count_frequencies(data))
    coding_table = generate_coding_table(root)

    packer = BitPacker()
    for symbol in data:
        packer.push_code(coding_table[symbol])
    payload, valid_bit_count = packer.finish()
    tree_header = serialize_tree(root)

    container = b"".join(
        (
            _length_field(len(tree_header), "header length"),
            tree_header,
            _length_field(valid_bit_count, "valid bit count"),
            payload,
        )
    )
    logger.debug(
        "Encoded %d bytes: %d symbols, %d header bytes, %d payload bits",
        len(data),
        len(coding_table),
        len(tree_header),
        valid_bit_count,
    )
    return container


def decode(container: bytes) -> bytes:
    """Rebuild the original bytes from a container produced by :func:`encode`."""
    container = bytes(container)
    if not container:
        return b""

    state = DecodeState.READING_HEADER
    output = bytearray()
    root: Node
    reader: BitReader

    while state is not DecodeState.DONE:
        if state is DecodeState.READING_HEADER:
            header_length = _read_length_field(container, 0, "header length")
            header_end = LENGTH_FIELD_SIZE + header_length
            if header_end > len(container):
                raise MalformedTreeError(
                    f"header length {header_length} runs past the end of the container"
                )
            root = deserialize_tree(container[LENGTH_FIELD_SIZE:header_end])
            valid_bit_count = _read_length_field(container, header_end, "valid bit count")
            payload = container[header_end + LENGTH_FIELD_SIZE :]
            reader = BitReader(payload, valid_bit_count)
            if len(payload) * 8 - valid_bit_count >= 8:
                logger.warning(
                    "Ignoring %d trailing bytes after the payload",
                    len(payload) - (valid_bit_count + 7) // 8,
                )
            state = DecodeState.READING_PAYLOAD
        elif state is DecodeState.READING_PAYLOAD:
            _walk_payload(root, reader, output)
            state = DecodeState.DONE

    logger.debug("Decoded %d bytes", len(output))
    return bytes(output)


def _walk_payload(root: Node, reader: BitReader, output: bytearray) -> None:
    if isinstance(root, Leaf):
        for bit in reader:
            if bit != 0:
                raise CorruptPayloadError(
                    "payload bit 1 is undefined for a single-symbol tree"
                )
            output.append(root.symbol)
        return

    curr_node: Node = root
    for bit in reader:
        curr_node = curr_node.right if bit else curr_node.left
        if isinstance(curr_node, Leaf):
            output.append(curr_node.symbol)
            curr_node = root
    if curr_node is not root:
        raise TruncatedPayloadError("payload bits ran out in the middle of a code")
