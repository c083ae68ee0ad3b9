"""Dense square matrices with a cyclic Jacobi eigensolver for Hermitian input."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Number

import numpy as np

DEFAULT_MAX_ITERATIONS = 50
_UINT32 = 0xFFFFFFFF


def minabs(a, b):
    """Return whichever of ``a`` and ``b`` has the smaller magnitude (``b`` on ties)."""
    return a if abs(a) < abs(b) else b


def maxabs(a, b):
    """Return whichever of ``a`` and ``b`` has the larger magnitude (``a`` on ties)."""
    return b if abs(a) < abs(b) else a


def str2int(text: str) -> int:
    """Hash a string into an unsigned 32-bit integer (djb2 with xor, folded from the end)."""
    result = 5381
    for byte in reversed(text.encode("utf-8")):
        char = byte - 256 if byte >= 128 else byte
        result = ((result * 33) ^ char) & _UINT32
    return result


def _format_cell(value) -> str:
    if isinstance(value, complex):
        text = f"({value.real:.10f},{value.imag:.10f})"
    else:
        text = f"{float(value):.10f}"
    return f"{text:>8}"


def format_square(rows) -> str:
    """Render a square table with fixed ten-digit precision, one row per line."""
    lines = ["".join(f"{_format_cell(cell)}  " for cell in row) for row in rows]
    return "\n" + "".join(f"{line}\n" for line in lines)


@dataclass
class Eigensystem:
    """Eigenvalues and eigenvectors (as columns) found by the Jacobi method."""

    values: np.ndarray
    vectors: np.ndarray
    converged: bool
    iterations: int

    @property
    def error(self) -> int:
        """Status code: 0 when the sweeps converged, -1 otherwise."""
        return 0 if self.converged else -1


def jacobi_eigen(matrix, max_iterations: int = DEFAULT_MAX_ITERATIONS) -> Eigensystem:
    """Diagonalise a Hermitian matrix with cyclic complex Jacobi rotations.

    Only the upper triangle of ``matrix`` is read; the input is left untouched.
    """
    a = np.array(matrix, dtype=complex)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError("matrix must be square")
    n = a.shape[0]
    q_mat = np.eye(n, dtype=complex)
    w = a.diagonal().real.astype(float).copy()
    upper = np.triu_indices(n, k=1)

    for iteration in range(max_iterations):
        off = a[upper]
        so = float(np.sum(np.abs(off.real) + np.abs(off.imag)))
        if so == 0.0:
            return Eigensystem(w, q_mat, True, iteration)

        thresh = 0.2 * so / (n * n) if iteration < 4 else 0.0

        for p in range(n):
            for q in range(p + 1, n):
                apq = a[p, q]
                mag = abs(apq.real) + abs(apq.imag)
                g = 100.0 * mag
                if (
                    iteration > 4
                    and abs(w[p]) + g == abs(w[p])
                    and abs(w[q]) + g == abs(w[q])
                ):
                    a[p, q] = 0.0
                    continue
                if mag <= thresh:
                    continue

                h = w[q] - w[p]
                if abs(h) + g == abs(h):
                    t = apq / h
                else:
                    squared = abs(apq) ** 2
                    if h < 0.0:
                        t = -2.0 * apq / (np.sqrt(h * h + 4.0 * squared) - h)
                    elif h == 0.0:
                        t = apq * (1.0 / abs(apq))
                    else:
                        t = 2.0 * apq / (np.sqrt(h * h + 4.0 * squared) + h)
                c = 1.0 / np.sqrt(1.0 + abs(t) ** 2)
                s = t * c
                z = (t * np.conj(apq)).real

                a[p, q] = 0.0
                w[p] -= z
                w[q] += z

                head_p = a[:p, p].copy()
                head_q = a[:p, q].copy()
                a[:p, p] = c * head_p - np.conj(s) * head_q
                a[:p, q] = s * head_p + c * head_q

                mid_p = a[p, p + 1:q].copy()
                mid_q = a[p + 1:q, q].copy()
                a[p, p + 1:q] = c * mid_p - s * np.conj(mid_q)
                a[p + 1:q, q] = s * np.conj(mid_p) + c * mid_q

                tail_p = a[p, q + 1:].copy()
                tail_q = a[q, q + 1:].copy()
                a[p, q + 1:] = c * tail_p - s * tail_q
                a[q, q + 1:] = np.conj(s) * tail_p + c * tail_q

                col_p = q_mat[:, p].copy()
                col_q = q_mat[:, q].copy()
                q_mat[:, p] = c * col_p - np.conj(s) * col_q
                q_mat[:, q] = s * col_p + c * col_q

    return Eigensystem(w, q_mat, False, max_iterations)


class Matrix:
    """A square matrix with the results of its last eigen decomposition."""

    def __init__(self, data):
        array = np.array(data)
        if array.dtype.kind not in "fc":
            array = array.astype(float)
        if array.ndim != 2 or array.shape[0] != array.shape[1]:
            raise ValueError("matrix must be square")
        self.data = array
        self.eigensystem: Eigensystem | None = None

    @classmethod
    def zeros(cls, dim: int) -> "Matrix":
        """A complex zero matrix of the given dimension."""
        if dim < 0:
            raise ValueError("dimension must be non-negative")
        return cls(np.zeros((dim, dim), dtype=complex))

    @property
    def dim(self) -> int:
        return self.data.shape[0]

    def clear(self) -> None:
        """Zero every element and forget any eigen decomposition."""
        self.data[...] = 0
        self.eigensystem = None

    def eigen_problem(self) -> Eigensystem:
        """Solve for eigenvalues and eigenvectors, keep and return the result."""
        self.eigensystem = jacobi_eigen(self.data)
        return self.eigensystem

    def is_hermitian(self) -> bool:
        """True when the matrix equals its conjugate transpose exactly."""
        return bool(np.all((self - self.hermitian_conjugate()).data == 0))

    def transposed(self) -> "Matrix":
        return Matrix(self.data.T.copy())

    def conjugated(self) -> "Matrix":
        return Matrix(np.conj(self.data))

    def hermitian_conjugate(self) -> "Matrix":
        return self.transposed().conjugated()

    def _check_same_shape(self, other: "Matrix") -> None:
        if other.data.shape != self.data.shape:
            raise ValueError("matrices differ in dimension")

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other)
        return Matrix(self.data + other.data)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check_same_shape(other)
        return Matrix(self.data - other.data)

    def __mul__(self, other):
        if isinstance(other, Matrix):
            self._check_same_shape(other)
            return Matrix(self.data @ other.data)
        if isinstance(other, Number):
            return Matrix(self.data * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, Number):
            return Matrix(other * self.data)
        return NotImplemented

    def format(self) -> str:
        """The matrix as a fixed-precision text table."""
        return format_square(self.data.tolist())

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Matrix({self.data.tolist()!r})"