import numpy as np


ALPHABET_SIZE = 256


def count_frequencies(data):
    buffer = np.frombuffer(bytes(data), dtype=np.uint8)
    counts = np.bincount(buffer, minlength=ALPHABET_SIZE)
    return tuple(int(c) for c in counts)


def shannon_entropy(table):
    counts = np.asarray(table, dtype=np.float64)
    total = counts.sum()
    if total == 0:
        return 0.0
    probs = counts[counts > 0] / total
    return float(-np.sum(probs * np.log2(probs)))
