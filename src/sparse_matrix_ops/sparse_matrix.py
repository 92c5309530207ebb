import operator
import re
from collections import defaultdict
from dataclasses import dataclass, field, InitVar
from typing import Optional

from .constants import ROWS_KEY, COLS_KEY
from .matrix_errors import DimensionMismatchError, FormatError


_DIMENSIONS = ('num_rows', 'num_cols')
_HEADER_RE = re.compile(r'^(\w+)\s*=\s*([+-]?\d+)$')
_ENTRY_RE = re.compile(r'^\(\s*([+-]?\d+)\s*,\s*([+-]?\d+)\s*,\s*([+-]?\d+)\s*\)$')


@dataclass
class SparseMatrix:
    """
    Integer matrix that only stores its non-zero entries.

    Entries live in a dict keyed by the (row, col) tuple. A missing key is the
    only representation of zero: no entry with value 0 is ever stored.
    ``num_rows`` and ``num_cols`` cannot be rebound after construction.
    """

    num_rows: int
    num_cols: int
    entries: InitVar[Optional[dict[tuple[int, int], int]]] = None
    _entries: dict[tuple[int, int], int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self, entries):
        object.__setattr__(self, 'num_rows', _as_dimension(self.num_rows, 'num_rows'))
        object.__setattr__(self, 'num_cols', _as_dimension(self.num_cols, 'num_cols'))
        if entries is not None:
            for (i, j), v in entries.items():
                self.set_element(i, j, v)

    def __setattr__(self, name, value) -> None:
        if name in _DIMENSIONS and name in self.__dict__:
            raise AttributeError(f"'{name}' is fixed once the SparseMatrix is constructed")
        super().__setattr__(name, value)

    def __delattr__(self, name) -> None:
        if name in _DIMENSIONS:
            raise AttributeError(f"'{name}' is fixed once the SparseMatrix is constructed")
        super().__delattr__(name)

    @classmethod
    def from_text(cls, text: str) -> 'SparseMatrix':
        """Parse the text format into a new matrix.

        Args:
            text: Matrix definition. Two header lines ``rows=<int>`` and
                ``cols=<int>`` followed by one ``(<row>,<col>,<value>)`` line per
                entry. Blank lines are ignored.

        Returns:
            The parsed matrix. Explicit zero entries are dropped.

        Raises:
            FormatError: If the header or any entry line is malformed.
        """
        lines = [(n, line.strip()) for n, line in enumerate(text.splitlines(), start=1) if line.strip()]
        if len(lines) < 2:
            raise FormatError("Matrix text must start with 'rows=<int>' and 'cols=<int>' header lines")

        num_rows = _parse_header(lines[0], ROWS_KEY)
        num_cols = _parse_header(lines[1], COLS_KEY)
        matrix = cls(num_rows, num_cols)

        for line_number, line in lines[2:]:
            match = _ENTRY_RE.match(line)
            if match is None:
                raise FormatError("Entry must be three comma-separated integers in parentheses", line_number, line)
            row, col, value = (int(g) for g in match.groups())
            matrix.set_element(row, col, value)
        return matrix

    @property
    def shape(self) -> tuple[int, int]:
        return self.num_rows, self.num_cols

    def get_element(self, row: int, col: int) -> int:
        """Get the value at position (row, col), 0 if not stored."""
        return self._entries.get((operator.index(row), operator.index(col)), 0)

    def set_element(self, row: int, col: int, value: int) -> None:
        """Set the value at position (row, col). Setting 0 removes the entry."""
        key = (operator.index(row), operator.index(col))
        value = operator.index(value)
        if value == 0:
            # Remove zero values to maintain sparsity
            self._entries.pop(key, None)
        else:
            self._entries[key] = value

    def add(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Elementwise sum, returned as a new matrix.

        Raises:
            DimensionMismatchError: If the shapes differ.
        """
        self._check_same_shape(other, 'addition')
        result = SparseMatrix(self.num_rows, self.num_cols)
        for (i, j), v in self._entries.items():
            result.set_element(i, j, v + other.get_element(i, j))
        for (i, j), v in other._entries.items():
            if (i, j) not in self._entries:
                result.set_element(i, j, v)
        return result

    def subtract(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Elementwise difference ``self - other``, returned as a new matrix.

        Raises:
            DimensionMismatchError: If the shapes differ.
        """
        self._check_same_shape(other, 'subtraction')
        result = SparseMatrix(self.num_rows, self.num_cols)
        for (i, j), v in self._entries.items():
            result.set_element(i, j, v - other.get_element(i, j))
        for (i, j), v in other._entries.items():
            if (i, j) not in self._entries:
                result.set_element(i, j, -v)
        return result

    def multiply(self, other: 'SparseMatrix') -> 'SparseMatrix':
        """Matrix product ``self @ other``, returned as a new matrix.

        Only products of two stored entries contribute, so the work scales with
        the number of non-zero pairs sharing an inner index rather than with
        ``num_rows * num_cols * inner``.

        Raises:
            DimensionMismatchError: If ``self.num_cols != other.num_rows``.
        """
        if self.num_cols != other.num_rows:
            raise DimensionMismatchError('multiplication', self.shape, other.shape)

        other_rows = defaultdict(list)
        for (k, j), v in other._entries.items():
            other_rows[k].append((j, v))

        sums = defaultdict(int)
        for (i, k), a in self._entries.items():
            for j, b in other_rows.get(k, ()):
                sums[(i, j)] += a * b

        result = SparseMatrix(self.num_rows, other.num_cols)
        for (i, j), v in sums.items():
            result.set_element(i, j, v)
        return result

    def to_text(self) -> str:
        """Serialize to the text format accepted by ``from_text``.

        Entries are written in storage order, which is not numerically sorted.
        """
        lines = [f"{ROWS_KEY}={self.num_rows}", f"{COLS_KEY}={self.num_cols}"]
        lines.extend(f"({i},{j},{v})" for (i, j), v in self._entries.items())
        return "\n".join(lines) + "\n"

    def _check_same_shape(self, other: 'SparseMatrix', operation: str) -> None:
        if self.shape != other.shape:
            raise DimensionMismatchError(operation, self.shape, other.shape)

    def __getitem__(self, key) -> int:
        """Returns the value at position (i, j).

        Args:
            key: The (row, col) tuple, as produced by ``m[i, j]``

        Returns:
            The value at position (i, j), or 0 if not found.
        """
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")
        return self.get_element(i, j)

    def __setitem__(self, key, value: int) -> None:
        """Sets the value at the (row, col) tuple key. Setting 0 removes the entry."""
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")
        self.set_element(i, j, value)

    def __contains__(self, key) -> bool:
        """True if position (i, j) holds a non-zero value."""
        if not (isinstance(key, tuple) and len(key) == 2):
            return False
        return key in self._entries

    def __len__(self) -> int:
        """Returns the number of non-zero elements."""
        return len(self._entries)

    def __iter__(self):
        """Allows iteration over the position tuples with non-zero values."""
        return iter(self._entries.keys())

    def keys(self):
        return self._entries.keys()

    def values(self):
        return self._entries.values()

    def items(self) -> list[tuple[tuple[int, int], int]]:
        """Returns a list of ((row, col), value) pairs, mimicking dict.items()."""
        return list(self._entries.items())

    def __add__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        return self.add(other)

    def __sub__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        return self.subtract(other)

    def __matmul__(self, other: 'SparseMatrix') -> 'SparseMatrix':
        return self.multiply(other)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        """String representation of the matrix."""
        items_str = ", ".join(f"{k}: {v}" for k, v in sorted(self._entries.items()))
        return f"SparseMatrix({self.num_rows}x{self.num_cols}, {{{items_str}}})"

    def copy(self) -> 'SparseMatrix':
        """Returns an independent copy of the matrix."""
        result = SparseMatrix(self.num_rows, self.num_cols)
        result._entries = self._entries.copy()
        return result


def _as_dimension(value, name: str) -> int:
    try:
        value = operator.index(value)
    except TypeError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def _parse_header(numbered_line: tuple[int, str], expected_key: str) -> int:
    line_number, line = numbered_line
    match = _HEADER_RE.match(line)
    if match is None or match.group(1) != expected_key:
        raise FormatError(f"Header must be '{expected_key}=<int>'", line_number, line)
    value = int(match.group(2))
    if value < 0:
        raise FormatError(f"'{expected_key}' must be non-negative", line_number, line)
    return value
