import pytest
import os
import sys
import numpy as np
import pandas as pd
from scipy import sparse

# Add the src directory to Python path to import local sparse_matrix_ops
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from sparse_matrix_ops import (SparseMatrix, FormatError, read_matrix_file, write_matrix_file,
                               to_dataframe, from_dataframe, to_dense, from_dense, to_scipy, from_scipy)
from test_utils import entry_set, validate_against_dense


INPUT_DIR = os.path.join(os.path.dirname(__file__), 'data', 'inputs')


class TestMatrixFiles:
    """Reading and writing matrix text files."""

    def test_read_square(self, capsys):
        fp = os.path.join(INPUT_DIR, 'square_2x2.txt')
        m = read_matrix_file(fp)
        assert m.shape == (2, 2)
        assert entry_set(m) == {(0, 0, 1), (0, 1, 2), (1, 0, 3), (1, 1, 4)}
        assert f"Reading file: {fp}" in capsys.readouterr().out

    def test_read_quiet(self, capsys):
        read_matrix_file(os.path.join(INPUT_DIR, 'wide_3x4.txt'), verbose=False)
        assert capsys.readouterr().out == ""

    def test_read_wide_normalizes(self):
        m = read_matrix_file(os.path.join(INPUT_DIR, 'wide_3x4.txt'), verbose=False)
        assert m.shape == (3, 4)
        assert entry_set(m) == {(0, 3, 5), (2, 1, -7), (2, 2, 9)}

    def test_read_bad_header(self):
        with pytest.raises(FormatError):
            read_matrix_file(os.path.join(INPUT_DIR, 'bad_header.txt'), verbose=False)

    def test_write_then_read(self, tmp_path):
        m = SparseMatrix(4, 3, {(3, 2): -1, (0, 1): 12})
        fp = os.path.join(str(tmp_path), 'nested', 'out.txt')
        write_matrix_file(m, fp)
        with open(fp, 'r') as f:
            assert f.read() == m.to_text()
        assert read_matrix_file(fp, verbose=False) == m


class TestConversions:
    """numpy, pandas and scipy conversions."""

    @pytest.fixture
    def matrix(self) -> SparseMatrix:
        return SparseMatrix(3, 4, {(2, 3): 6, (0, 0): -2, (1, 2): 5})

    def test_dense_round_trip(self, matrix):
        d = to_dense(matrix)
        assert d.dtype == np.int64
        validate_against_dense(matrix, d)
        assert from_dense(d) == matrix

    def test_from_dense_rejects_floats(self):
        with pytest.raises(TypeError):
            from_dense(np.ones((2, 2), dtype=np.float64))
        with pytest.raises(ValueError):
            from_dense(np.ones(3, dtype=np.int64))

    def test_to_dense_out_of_bounds(self):
        m = SparseMatrix(2, 2)
        m.set_element(-1, 0, 3)
        with pytest.raises(IndexError):
            to_dense(m)

    def test_dataframe_round_trip(self, matrix):
        df = to_dataframe(matrix)
        assert list(df.columns) == ['row', 'col', 'value']
        assert df[['row', 'col']].values.tolist() == [[0, 0], [1, 2], [2, 3]]
        assert from_dataframe(df, 3, 4) == matrix

    def test_empty_dataframe(self):
        df = to_dataframe(SparseMatrix(2, 2))
        assert len(df) == 0
        assert len(from_dataframe(df, 2, 2)) == 0

    def test_from_dataframe_rejects_floats(self):
        df = pd.DataFrame({'row': [0], 'col': [0], 'value': [1.5]})
        with pytest.raises(TypeError):
            from_dataframe(df, 1, 1)

    def test_scipy_round_trip(self, matrix):
        sp = to_scipy(matrix)
        assert sp.shape == (3, 4)
        assert sp.nnz == 3
        assert np.array_equal(sp.toarray(), to_dense(matrix))
        assert from_scipy(sp.tocsr()) == matrix

    def test_from_scipy_sums_duplicates(self):
        sp = sparse.coo_matrix((np.array([2, 3, 4]), (np.array([0, 0, 1]), np.array([1, 1, 0]))), shape=(2, 2))
        assert entry_set(from_scipy(sp)) == {(0, 1, 5), (1, 0, 4)}

    def test_product_matches_scipy(self):
        rng = np.random.default_rng(3)
        a_dense = rng.integers(-5, 6, size=(6, 5)) * (rng.random((6, 5)) < 0.3)
        b_dense = rng.integers(-5, 6, size=(5, 7)) * (rng.random((5, 7)) < 0.3)
        a = from_dense(a_dense.astype(np.int64))
        b = from_dense(b_dense.astype(np.int64))
        expected = (to_scipy(a).tocsr() @ to_scipy(b).tocsr()).toarray()
        validate_against_dense(a @ b, expected)
