"""Small linear-algebra helpers used by pose integration and drawing.

Both helpers work on anything numpy can turn into a 1-D or 2-D float array
and return numpy arrays. Shape problems are programming errors and raise
DimensionMismatch straight away.
"""

import math
from typing import Sequence

import numpy as np
import numpy.typing as npt

from .exceptions import DimensionMismatch


def add(u: Sequence[float], v: Sequence[float]) -> npt.NDArray[np.float64]:
    """Element-wise sum of two vectors.

    Args:
        u: First vector.
        v: Second vector.

    Returns:
        u + v as a float array.

    Raises:
        DimensionMismatch: If the vectors have different lengths.
    """
    u_arr = np.asarray(u, dtype=float)
    v_arr = np.asarray(v, dtype=float)
    if u_arr.shape != v_arr.shape:
        raise DimensionMismatch(f"Incompatible vector shapes: {u_arr.shape} and {v_arr.shape}")
    return u_arr + v_arr


def multiply(matrix: Sequence[Sequence[float]], vector: Sequence[float]) -> npt.NDArray[np.float64]:
    """Multiply a column vector by a row-major matrix.

    Args:
        matrix: Rows of the matrix; every row must be as long as the vector.
        vector: Column vector.

    Returns:
        Product with one entry per matrix row.

    Raises:
        DimensionMismatch: If the matrix is ragged or its rows do not match
            the vector length.
    """
    vec = np.asarray(vector, dtype=float)
    rows = [np.asarray(row, dtype=float) for row in matrix]
    for i, row in enumerate(rows):
        if row.shape != vec.shape:
            raise DimensionMismatch(
                f"Matrix row {i} has shape {row.shape}, vector has shape {vec.shape}"
            )
    if not rows:
        return np.zeros(0)
    return np.stack(rows) @ vec


def rotate(
    point: Sequence[float], angle: float, center: Sequence[float] = (0.0, 0.0)
) -> npt.NDArray[np.float64]:
    """Rotate a 2-D point counter-clockwise by `angle` about `center`."""
    translated = add(point, -np.asarray(center, dtype=float))
    rotation = [
        [math.cos(angle), -math.sin(angle)],
        [math.sin(angle), math.cos(angle)],
    ]
    return add(multiply(rotation, translated), center)
