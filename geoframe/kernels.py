# kernels.py

import numpy as np
from numba import njit
from numba.core.errors import NumbaPerformanceWarning
import warnings
warnings.filterwarnings("ignore", category=NumbaPerformanceWarning)


@njit(cache=True)
def equals_with_tolerance(a: np.ndarray, b: np.ndarray, tolerance: float) -> bool:
    """
    Element-wise comparison of two matrices of the same shape.

    NaN is considered equal to NaN and infinities of the same sign are equal.
    Finite values are equal when their absolute difference is not greater
    than `tolerance`.
    """
    rows, cols = a.shape
    for i in range(rows):
        for j in range(cols):
            x = a[i, j]
            y = b[i, j]
            if x == y:
                continue
            if np.isnan(x) and np.isnan(y):
                continue
            if not (abs(x - y) <= tolerance):
                return False
    return True


@njit(cache=True)
def normalize_columns(m: np.ndarray) -> None:
    """Divide in place every column by its Euclidean norm. Zero columns are left unchanged."""
    rows, cols = m.shape
    for j in range(cols):
        s = 0.0
        for i in range(rows):
            s += m[i, j] * m[i, j]
        if s == 0.0:
            continue
        n = np.sqrt(s)
        for i in range(rows):
            m[i, j] /= n


@njit(cache=True, error_model="numpy")
def projective_transform(matrix: np.ndarray, src: np.ndarray, dst: np.ndarray) -> None:
    """
    Apply a (tgt+1) x (src+1) homogeneous matrix to every row of `src`.

    `dst` may be the same array as `src` when both dimensions are equal,
    each point is computed in a scratch buffer before being written.
    """
    tgt_dim = matrix.shape[0] - 1
    src_dim = matrix.shape[1] - 1
    buffer = np.empty(tgt_dim, dtype=np.float64)
    for p in range(src.shape[0]):
        w = matrix[tgt_dim, src_dim]
        for j in range(src_dim):
            w += matrix[tgt_dim, j] * src[p, j]
        for i in range(tgt_dim):
            s = matrix[i, src_dim]
            for j in range(src_dim):
                s += matrix[i, j] * src[p, j]
            buffer[i] = s / w
        for i in range(tgt_dim):
            dst[p, i] = buffer[i]


@njit(cache=True, error_model="numpy")
def projective_derivative(matrix: np.ndarray, point: np.ndarray) -> np.ndarray:
    """Jacobian of a homogeneous projective mapping at the given point."""
    tgt_dim = matrix.shape[0] - 1
    src_dim = matrix.shape[1] - 1
    w = matrix[tgt_dim, src_dim]
    for j in range(src_dim):
        w += matrix[tgt_dim, j] * point[j]
    out = np.empty((tgt_dim, src_dim), dtype=np.float64)
    for i in range(tgt_dim):
        y = matrix[i, src_dim]
        for j in range(src_dim):
            y += matrix[i, j] * point[j]
        y /= w
        for j in range(src_dim):
            out[i, j] = (matrix[i, j] - y * matrix[tgt_dim, j]) / w
    return out
