import os
import numpy as np
import pandas as pd
from scipy import sparse

from .sparse_matrix import SparseMatrix


ENTRY_COLUMNS = ['row', 'col', 'value']


def read_matrix_file(fp: str, verbose: bool = True) -> SparseMatrix:
    """
    Read a matrix text file fully and parse it.

    Args:
        fp: Path of the matrix file
        verbose: Whether to print the file being read

    Returns:
        The parsed SparseMatrix

    Raises:
        FormatError: If the file content is malformed
    """
    if verbose:
        print(f"Reading file: {fp}")
    with open(fp, 'r', encoding='utf-8') as f:
        text = f.read()
    return SparseMatrix.from_text(text)


def write_matrix_file(matrix: SparseMatrix, fp: str) -> None:
    """Serialize the matrix and write it to fp, creating parent directories."""
    text = matrix.to_text()
    parent = os.path.dirname(fp)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(fp, 'w', encoding='utf-8') as f:
        f.write(text)


def to_dataframe(matrix: SparseMatrix) -> pd.DataFrame:
    """Entries as a DataFrame with int64 row/col/value columns sorted by position."""
    rows = [(i, j, v) for (i, j), v in matrix.items()]
    df = pd.DataFrame(rows, columns=ENTRY_COLUMNS).astype(np.int64)
    df = df.sort_values(['row', 'col']).reset_index(drop=True)
    return df


def from_dataframe(df: pd.DataFrame, num_rows: int, num_cols: int) -> SparseMatrix:
    """Build a matrix from a DataFrame holding row/col/value columns.

    Repeated positions overwrite each other in row order, as repeated entry lines do in the text format.
    """
    for col in ENTRY_COLUMNS:
        assert col in df.columns, f"Column \"{col}\" not found in df"
    if not all(pd.api.types.is_integer_dtype(df[col]) for col in ENTRY_COLUMNS):
        raise TypeError(f"Columns {ENTRY_COLUMNS} must have integer dtypes, got {df[ENTRY_COLUMNS].dtypes.tolist()}")

    matrix = SparseMatrix(num_rows, num_cols)
    for i, j, v in df[ENTRY_COLUMNS].itertuples(index=False, name=None):
        matrix.set_element(int(i), int(j), int(v))
    return matrix


def to_dense(matrix: SparseMatrix) -> np.ndarray:
    """Materialize the matrix as a dense int64 numpy array."""
    _check_in_bounds(matrix)
    dense = np.zeros(matrix.shape, dtype=np.int64)
    for (i, j), v in matrix.items():
        dense[i, j] = v
    return dense


def from_dense(array: np.ndarray) -> SparseMatrix:
    """Build a matrix from a 2D integer numpy array, keeping only the non-zero cells."""
    array = np.asarray(array)
    if array.ndim != 2:
        raise ValueError(f"Expected a 2D array, got {array.ndim} dimensions")
    if not np.issubdtype(array.dtype, np.integer):
        raise TypeError(f"Expected an integer array, got dtype {array.dtype}")

    matrix = SparseMatrix(array.shape[0], array.shape[1])
    rows, cols = np.nonzero(array)
    for i, j in zip(rows.tolist(), cols.tolist()):
        matrix.set_element(i, j, int(array[i, j]))
    return matrix


def to_scipy(matrix: SparseMatrix) -> sparse.coo_matrix:
    """Convert to a scipy COO matrix with int64 data."""
    _check_in_bounds(matrix)
    n = len(matrix)
    rows = np.fromiter((i for i, _ in matrix.keys()), dtype=np.int64, count=n)
    cols = np.fromiter((j for _, j in matrix.keys()), dtype=np.int64, count=n)
    data = np.fromiter(matrix.values(), dtype=np.int64, count=n)
    return sparse.coo_matrix((data, (rows, cols)), shape=matrix.shape, dtype=np.int64)


def from_scipy(sp_matrix) -> SparseMatrix:
    """Build a matrix from any 2D scipy sparse matrix with an integer dtype.

    Duplicate coordinates are summed, following scipy's COO semantics.
    """
    if not np.issubdtype(sp_matrix.dtype, np.integer):
        raise TypeError(f"Expected an integer sparse matrix, got dtype {sp_matrix.dtype}")
    coo = sparse.coo_matrix(sp_matrix)
    coo.sum_duplicates()

    matrix = SparseMatrix(coo.shape[0], coo.shape[1])
    for i, j, v in zip(coo.row.tolist(), coo.col.tolist(), coo.data.tolist()):
        matrix.set_element(i, j, v)
    return matrix


def _check_in_bounds(matrix: SparseMatrix) -> None:
    for i, j in matrix.keys():
        if not (0 <= i < matrix.num_rows and 0 <= j < matrix.num_cols):
            raise IndexError(f"Entry ({i}, {j}) is outside a {matrix.num_rows}x{matrix.num_cols} matrix")
