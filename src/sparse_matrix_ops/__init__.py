"""
Sparse integer matrices stored as (row, col) -> value maps.

Text format loading and saving, addition, subtraction and multiplication that
preserve sparsity, plus a batch driver for directories of matrix files.
"""

__version__ = "0.1.0"

from .sparse_matrix import SparseMatrix
from .matrix_errors import SparseMatrixError, DimensionMismatchError, FormatError, NoInputFilesError, BatchConfigError
from .matrix_io import read_matrix_file, write_matrix_file, to_dataframe, from_dataframe, to_dense, from_dense, to_scipy, from_scipy
from .batch import SparseMatrixBatchRunner
from .config import BatchConfig

__all__ = [
    "SparseMatrix",
    "SparseMatrixError",
    "DimensionMismatchError",
    "FormatError",
    "NoInputFilesError",
    "BatchConfigError",
    "read_matrix_file",
    "write_matrix_file",
    "to_dataframe",
    "from_dataframe",
    "to_dense",
    "from_dense",
    "to_scipy",
    "from_scipy",
    "SparseMatrixBatchRunner",
    "BatchConfig",
]
