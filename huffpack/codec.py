from .container import decode_container, decode_payload, decode_run_length, encode_container
from .errors import EmptyInputError
from .frequency import count_frequencies, shannon_entropy
from .io import read_file_bytes, write_file_bytes
from .tree import build_tree, generate_codes, initial_from_frequencies, leaf_count, tree_height


def build_code_tree(data):
    table = count_frequencies(data)
    root = build_tree(initial_from_frequencies(table))
    return table, root, generate_codes(root)


def compress(data):
    if not data:
        raise EmptyInputError("Cannot compress an empty buffer")
    table, root, codes = build_code_tree(data)
    return encode_container(root, codes, data, table)


def decompress(container):
    root, trash_bits, payload_start = decode_container(container)
    payload = bytes(container[payload_start:])
    if root.is_leaf:
        return decode_run_length(root, payload)
    return decode_payload(root, payload, trash_bits)


def compress_file(input_path, output_path):
    data = read_file_bytes(input_path)
    container = compress(data)
    write_file_bytes(output_path, container)
    return len(data), len(container)


def decompress_file(input_path, output_path):
    container = read_file_bytes(input_path)
    data = decompress(container)
    write_file_bytes(output_path, data)
    return len(container), len(data)


def compress_with_stats(data):
    if not data:
        raise EmptyInputError("Cannot compress an empty buffer")
    table, root, codes = build_code_tree(data)
    container = encode_container(root, codes, data, table)
    total_bits = sum(count * len(codes[byte]) for byte, count in enumerate(table) if count)
    stats = {
        "input_bytes": len(data),
        "output_bytes": len(container),
        "ratio": len(container) / len(data),
        "symbols": leaf_count(root),
        "tree_height": tree_height(root),
        "avg_code_length": total_bits / len(data),
        "entropy": shannon_entropy(table),
    }
    return container, stats


def compression_stats(data):
    if not data:
        raise EmptyInputError("Cannot compute statistics for an empty buffer")
    _container, stats = compress_with_stats(data)
    return stats
