"""
Matrix class: a dense 2D float64 container with shape-checked arithmetic.
Every operation returns a new Matrix; none of them mutate their operands.
"""
import numbers

import numpy as np

from .errors import DimensionMismatchError, InvalidAxisError, ShapeError


class Matrix:
    """
    Stores a rows x cols block of float64 values.

    Args:
        data: 2D array-like (nested sequence or ndarray). A flat sequence
            becomes a single row.
    """

    def __init__(self, data):
        if isinstance(data, Matrix):
            data = data.data
        try:
            values = np.array(data, dtype=np.float64)
        except (TypeError, ValueError) as e:
            # ragged or non-numeric nested sequences end up here
            raise ShapeError(f"Cannot build a matrix from {data!r}: {e}") from e

        if values.ndim == 1:
            values = values.reshape(1, -1)
        if values.ndim != 2:
            raise ShapeError(f"Matrix data must be 2D, got {values.ndim} dimensions")
        if values.size == 0:
            raise ShapeError(f"Matrix must have at least one row and column, got shape {values.shape}")

        self.data = values

    @property
    def rows(self):
        return self.data.shape[0]

    @property
    def cols(self):
        return self.data.shape[1]

    @property
    def shape(self):
        """(rows, cols) tuple"""
        return self.data.shape

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def _wrap(cls, values):
        """Build a Matrix around an already validated 2D float64 array."""
        out = cls.__new__(cls)
        out.data = values
        return out

    @classmethod
    def zeros(cls, rows, cols):
        """All-zero matrix of the given shape."""
        return cls(np.zeros((rows, cols), dtype=np.float64))

    @classmethod
    def random(cls, rows, cols, low=-1.0, high=1.0, rng=None):
        """
        Matrix with every cell drawn independently from U[low, high].

        Args:
            rows: Number of rows
            cols: Number of columns
            low: Lower bound (default: -1)
            high: Upper bound (default: 1)
            rng: numpy Generator to draw from; a fresh unseeded one if None
        """
        if rng is None:
            rng = np.random.default_rng()
        return cls(rng.uniform(low, high, size=(rows, cols)))

    @classmethod
    def from_rows(cls, rows):
        """
        Build a matrix from a non-empty sequence of equal-length rows.

        Raises:
            ShapeError: if there are no rows, a row is empty, or row lengths differ
        """
        try:
            rows = [list(row) for row in rows]
        except TypeError as e:
            raise ShapeError(f"Rows must be sequences of numbers: {e}") from e
        if not rows:
            raise ShapeError("Cannot build a matrix from zero rows")

        width = len(rows[0])
        if width == 0:
            raise ShapeError("Cannot build a matrix from empty rows")
        for i, row in enumerate(rows):
            if len(row) != width:
                raise ShapeError(
                    f"Row {i} has {len(row)} values, expected {width}"
                )

        return cls(rows)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def dot_product(self, other):
        """Matrix multiplication: (r, k) . (k, c) -> (r, c)"""
        other = _as_matrix(other)
        if self.cols != other.rows:
            raise DimensionMismatchError(
                f"Cannot multiply {self.shape} by {other.shape}: "
                f"{self.cols} columns vs {other.rows} rows"
            )
        return Matrix._wrap(self.data @ other.data)

    def add(self, other):
        """
        Elementwise sum. `other` may have the same shape, be a (1, cols) row
        vector repeated across every row, or a (rows, 1) column vector
        repeated across every column.
        """
        other = _as_matrix(other)
        same = other.shape == self.shape
        row_vector = other.rows == 1 and other.cols == self.cols
        col_vector = other.cols == 1 and other.rows == self.rows
        if not (same or row_vector or col_vector):
            raise DimensionMismatchError(
                f"Cannot add {other.shape} to {self.shape}"
            )
        return Matrix._wrap(self.data + other.data)

    def subtract(self, other):
        """Elementwise difference. Shapes must match exactly (no broadcasting)."""
        other = self._check_same_shape(other, "subtract")
        return Matrix._wrap(self.data - other.data)

    def scalar_multiplication(self, other):
        """Elementwise (Hadamard) product. Shapes must match exactly."""
        other = self._check_same_shape(other, "multiply elementwise")
        return Matrix._wrap(self.data * other.data)

    def square(self):
        """Elementwise self * self"""
        return self.scalar_multiplication(self)

    def scale(self, factor):
        """Multiply every element by a scalar"""
        return Matrix._wrap(self.data * float(factor))

    def map(self, function):
        """Apply a unary float -> float function to every element."""
        mapped = np.vectorize(function, otypes=[np.float64])(self.data)
        return Matrix._wrap(mapped)

    def apply(self, function):
        """
        Apply an elementwise function to the whole array at once.
        `function` takes and returns an ndarray of the same shape, like the
        numpy ufuncs and the activations in nn_gym.activations.
        """
        applied = np.asarray(function(self.data), dtype=np.float64)
        if applied.shape != self.shape:
            raise DimensionMismatchError(
                f"Elementwise function changed shape {self.shape} to {applied.shape}"
            )
        return Matrix._wrap(applied)

    def transpose(self):
        """Standard transpose: (r, c) -> (c, r)"""
        return Matrix._wrap(self.data.T.copy())

    @property
    def T(self):
        return self.transpose()

    # ------------------------------------------------------------------
    # Reductions
    # ------------------------------------------------------------------

    def sum_by_axis(self, axis):
        """
        Sum along an axis, always returning a single-row matrix.

        axis 0 collapses the rows -> (1, cols) column sums
        axis 1 collapses the columns -> (1, rows) row sums
        """
        if axis == 0:
            return Matrix._wrap(self.data.sum(axis=0).reshape(1, self.cols))
        if axis == 1:
            return Matrix._wrap(self.data.sum(axis=1).reshape(1, self.rows))
        raise InvalidAxisError(f"Axis must be 0 or 1, got {axis!r}")

    def collect_sum(self):
        """Sum of all elements"""
        return float(self.data.sum())

    def count(self):
        """Number of elements (rows * cols)"""
        return self.rows * self.cols

    # ------------------------------------------------------------------
    # Comparison and conversion
    # ------------------------------------------------------------------

    def allclose(self, other, tol=1e-9):
        """Same shape and every element within `tol` of the other."""
        other = _as_matrix(other)
        return self.shape == other.shape and bool(
            np.allclose(self.data, other.data, rtol=0.0, atol=tol)
        )

    def tolist(self):
        """Nested Python lists, one per row"""
        return self.data.tolist()

    def numpy(self):
        """Return a copy of the data as a numpy array."""
        return self.data.copy()

    def _check_same_shape(self, other, verb):
        other = _as_matrix(other)
        if other.shape != self.shape:
            raise DimensionMismatchError(
                f"Cannot {verb} {self.shape} and {other.shape}"
            )
        return other

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.data, other.data))

    __hash__ = None

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __mul__(self, other):
        if isinstance(other, numbers.Number):
            return self.scale(other)
        return self.scalar_multiplication(other)

    def __rmul__(self, other):
        return self * other

    def __matmul__(self, other):
        return self.dot_product(other)

    def __neg__(self):
        return self.scale(-1.0)

    def __len__(self):
        return self.rows

    def __getitem__(self, idx):
        """Cell access: m[i, j] -> float, m[i] -> row as list"""
        if isinstance(idx, tuple):
            return float(self.data[idx])
        return self.data[idx].tolist()

    def __repr__(self):
        body = "\n".join(
            "  " + " ".join(repr(float(v)) for v in row) for row in self.data
        )
        return f"Matrix {{\n{body}\n}}"


def _as_matrix(value):
    """Accept a Matrix or anything Matrix() can build one from."""
    return value if isinstance(value, Matrix) else Matrix(value)
