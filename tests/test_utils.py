import numpy as np


def entry_set(matrix) -> set[tuple[int, int, int]]:
    """Order independent view of the stored (row, col, value) triples."""
    return {(i, j, v) for (i, j), v in matrix.items()}


def parse_text_entries(text: str) -> tuple[int, int, set[tuple[int, int, int]]]:
    """Split serialized matrix text into (rows, cols, entry set) without using the library parser."""
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    rows = int(lines[0].split('=')[1])
    cols = int(lines[1].split('=')[1])
    entries = set()
    for line in lines[2:]:
        i, j, v = (int(p) for p in line[1:-1].split(','))
        entries.add((i, j, v))
    return rows, cols, entries


def validate_against_dense(matrix, expected: np.ndarray):
    """Raise AssertionError if the sparse matrix differs from the dense reference."""
    expected = np.asarray(expected)
    assert matrix.shape == expected.shape, f"shape {matrix.shape} != {expected.shape}"
    failed = []
    for i in range(expected.shape[0]):
        for j in range(expected.shape[1]):
            if matrix.get_element(i, j) != expected[i, j]:
                failed.append((i, j))
    stored_zeros = [k for k, v in matrix.items() if v == 0]
    if stored_zeros:
        raise AssertionError(f"zero values stored at: {stored_zeros}")
    if len(failed) > 0:
        raise AssertionError(f"sparse matrix differs from dense reference at: {failed}")
