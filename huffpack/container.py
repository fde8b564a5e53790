import struct

from .bits import BitPacker, unpack_bits
from .errors import (
    CorruptStreamError,
    FieldOverflowError,
    TruncatedHeaderError,
    TruncatedTreeError,
)
from .frequency import count_frequencies
from .tree import Internal, Leaf


INTERNAL_MARKER = 0x2A  # '*'
ESCAPE_BYTE = 0x5C  # '\\'

TRASH_BITS = 3
TREE_SIZE_BITS = 13
MAX_TRASH_BITS = (1 << TRASH_BITS) - 1
MAX_TREE_SIZE = (1 << TREE_SIZE_BITS) - 1

HEADER_FORMAT = ">H"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)
RUN_LENGTH_FORMAT = ">Q"
RUN_LENGTH_SIZE = struct.calcsize(RUN_LENGTH_FORMAT)
MAX_RUN_LENGTH = 1 << 30

PAYLOAD_CHUNK = 1 << 16


def pack_header(trash_bits, tree_size):
    if not 0 <= trash_bits <= MAX_TRASH_BITS:
        raise FieldOverflowError(f"Trash bit count {trash_bits} does not fit in {TRASH_BITS} bits")
    if not 0 <= tree_size <= MAX_TREE_SIZE:
        raise FieldOverflowError(f"Tree size {tree_size} does not fit in {TREE_SIZE_BITS} bits")
    return struct.pack(HEADER_FORMAT, (trash_bits << TREE_SIZE_BITS) | tree_size)


def unpack_header(container):
    if len(container) < HEADER_SIZE:
        raise TruncatedHeaderError(
            f"Container has {len(container)} bytes, header needs {HEADER_SIZE}"
        )
    header = struct.unpack_from(HEADER_FORMAT, container, 0)[0]
    return (header >> TREE_SIZE_BITS) & MAX_TRASH_BITS, header & MAX_TREE_SIZE


def _needs_escape(byte):
    return byte in (INTERNAL_MARKER, ESCAPE_BYTE)


def tree_size(node):
    if node.is_leaf:
        return 2 if _needs_escape(node.byte) else 1
    return 1 + tree_size(node.left) + tree_size(node.right)


def write_tree(root):
    out = bytearray()
    _write_node(root, out)
    return bytes(out)


def _write_node(node, out):
    if node.is_leaf:
        if _needs_escape(node.byte):
            out.append(ESCAPE_BYTE)
        out.append(node.byte)
        return
    out.append(INTERNAL_MARKER)
    _write_node(node.left, out)
    _write_node(node.right, out)


def read_tree(container, offset=0):
    # Each open internal node collects its children here until it has two.
    pending = []
    while True:
        if offset >= len(container):
            raise TruncatedTreeError(f"Container ended inside the tree at offset {offset}")
        byte = container[offset]
        offset += 1
        if byte == INTERNAL_MARKER:
            pending.append([])
            continue
        if byte == ESCAPE_BYTE:
            if offset >= len(container):
                raise TruncatedTreeError("Container ended after an escape byte")
            byte = container[offset]
            offset += 1

        node = Leaf(byte)
        while pending:
            pending[-1].append(node)
            if len(pending[-1]) < 2:
                break
            left, right = pending.pop()
            node = Internal(left, right)
        else:
            return node, offset


def trash_bit_count(table, codes):
    total_bits = sum(count * len(codes[byte]) for byte, count in enumerate(table) if count)
    return (8 - total_bits % 8) % 8


def encode_payload(data, codes):
    if all(code == "" for code in codes.values()):
        return b""

    lookup = [""] * 256
    for byte, code in codes.items():
        lookup[byte] = code

    packer = BitPacker()
    out = bytearray()
    for start in range(0, len(data), PAYLOAD_CHUNK):
        bits = "".join(map(lookup.__getitem__, data[start : start + PAYLOAD_CHUNK]))
        if bits:
            out += packer.push_code(int(bits, 2), len(bits))
    tail = packer.flush()
    if tail is not None:
        out.append(tail)
    return bytes(out)


def _walk(root, cursor, bits, out):
    for bit in bits:
        if cursor.is_leaf:
            raise CorruptStreamError("Bit stream descends past a leaf")
        cursor = cursor.right if bit else cursor.left
        if cursor.is_leaf:
            out.append(cursor.byte)
            cursor = root
    return cursor


def decode_payload(root, payload, trash_bits):
    if not payload:
        raise CorruptStreamError("Container holds a code tree but no payload")

    out = bytearray()
    cursor = root
    # (cursor node id, payload byte) -> (decoded bytes, cursor afterwards)
    steps = {}
    last = len(payload) - 1
    for idx in range(last):
        key = (id(cursor), payload[idx])
        step = steps.get(key)
        if step is None:
            emitted = bytearray()
            end = _walk(root, cursor, unpack_bits(payload[idx]), emitted)
            step = steps[key] = (bytes(emitted), end)
        out += step[0]
        cursor = step[1]
    cursor = _walk(root, cursor, unpack_bits(payload[last], 8 - trash_bits), out)
    if cursor is not root:
        raise CorruptStreamError("Payload ended in the middle of a code")
    return bytes(out)


def encode_container(root, codes, data, table=None):
    if table is None:
        table = count_frequencies(data)
    trash_bits = trash_bit_count(table, codes)
    header = pack_header(trash_bits, tree_size(root))
    tree_bytes = write_tree(root)
    if root.is_leaf:
        if len(data) > MAX_RUN_LENGTH:
            raise FieldOverflowError(
                f"Run of {len(data)} bytes exceeds the {MAX_RUN_LENGTH}-byte limit"
            )
        # A lone leaf has an empty code, so the repeat count travels after the tree.
        return header + tree_bytes + struct.pack(RUN_LENGTH_FORMAT, len(data))
    return header + tree_bytes + encode_payload(data, codes)


def decode_container(container):
    trash_bits, _tree_size = unpack_header(container)
    root, payload_start = read_tree(container, HEADER_SIZE)
    return root, trash_bits, payload_start


def decode_run_length(root, trailer):
    if len(trailer) != RUN_LENGTH_SIZE:
        raise CorruptStreamError(
            f"Single-symbol container needs a {RUN_LENGTH_SIZE}-byte length, got {len(trailer)}"
        )
    count = struct.unpack(RUN_LENGTH_FORMAT, trailer)[0]
    if count == 0:
        raise CorruptStreamError("Single-symbol container declares zero repeats")
    if count > MAX_RUN_LENGTH:
        raise CorruptStreamError(
            f"Single-symbol container declares {count} repeats, limit is {MAX_RUN_LENGTH}"
        )
    return bytes([root.byte]) * count
