"""Utility functions shared by the analysis layer."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd

from .exceptions import InvalidConnectionError, ShapeMismatchError


def upper_triangle_positions(n: int) -> Tuple[np.ndarray, np.ndarray]:
    """Row/column indices of the strict upper triangle of an ``n x n`` matrix.

    Positions are returned in column-major order, i.e. (0, 1), (0, 2), (1, 2),
    (0, 3), ... which is the order every labelled output of the package uses.

    Args:
        n: Number of rows (and columns) of the square matrix

    Returns:
        Tuple ``(rows, cols)`` of integer arrays with ``n * (n - 1) / 2`` entries
    """
    if n < 2:
        empty = np.array([], dtype=int)
        return empty, empty
    # Lower triangle in row-major order is the upper triangle in column-major order
    cols, rows = np.tril_indices(n, k=-1)
    return rows, cols


def upper_triangle(matrix: pd.DataFrame | np.ndarray) -> np.ndarray:
    """Strict upper triangle values, aligned with `upper_triangle_positions`."""
    values = np.asarray(matrix, dtype=float)
    rows, cols = upper_triangle_positions(values.shape[0])
    return values[rows, cols]


def pair_labels(n: int) -> List[str]:
    """Concatenate 1-based row/column indices for each upper-triangle cell."""
    rows, cols = upper_triangle_positions(n)
    return [f"{i + 1}{j + 1}" for i, j in zip(rows, cols)]


def default_block_names(n: int) -> List[str]:
    return [f"block{i + 1}" for i in range(n)]


def _align_connection_frame(
    frame: pd.DataFrame,
    names: Sequence[str] | None,
) -> Tuple[np.ndarray, List[str] | None]:
    """Reorder a labelled connection matrix to ``names``.

    A frame with default integer labels on both axes is taken positionally.
    """
    if isinstance(frame.index, pd.RangeIndex) and isinstance(frame.columns, pd.RangeIndex):
        return frame.to_numpy(dtype=float, copy=True), names

    index = [str(i) for i in frame.index]
    columns = [str(c) for c in frame.columns]
    if len(set(columns)) != len(columns) or sorted(index) != sorted(columns):
        raise ShapeMismatchError(
            f"Connection matrix rows {index} and columns {columns} must carry the same unique labels."
        )

    target = columns if names is None else [str(n) for n in names]
    if sorted(target) != sorted(columns):
        raise ShapeMismatchError(
            f"Connection matrix is labelled {columns} but the blocks are {target}."
        )

    aligned = frame.copy()
    aligned.index = index
    aligned.columns = columns
    return aligned.loc[target, target].to_numpy(dtype=float, copy=True), target


def as_connection_frame(
    connection: pd.DataFrame | np.ndarray | Sequence[Sequence[float]],
    names: Sequence[str] | None = None,
) -> pd.DataFrame:
    """Validate a connection (design) matrix and label both axes.

    Args:
        connection: Square, symmetric matrix with non-negative finite weights
        names: Optional labels. A labelled DataFrame is reordered to them and
               must carry exactly these labels; when omitted it keeps its own
               labels and anything else gets `default_block_names`

    Returns:
        Float DataFrame with identical row and column labels
    """
    if isinstance(connection, pd.DataFrame):
        values, names = _align_connection_frame(connection, names)
    else:
        values = np.array(connection, dtype=float)

    if values.ndim != 2 or values.shape[0] != values.shape[1]:
        raise InvalidConnectionError(
            f"Connection matrix must be square, got shape {values.shape}."
        )
    if not np.all(np.isfinite(values)):
        raise InvalidConnectionError("Connection matrix must only contain finite values.")
    if np.any(values < 0):
        raise InvalidConnectionError("Connection matrix weights must be non-negative.")
    if not np.allclose(values, values.T):
        raise InvalidConnectionError("Connection matrix must be symmetric.")

    n = values.shape[0]
    labels = list(names) if names is not None else default_block_names(n)
    if len(labels) != n:
        raise ShapeMismatchError(
            f"Connection matrix is {n}x{n} but {len(labels)} labels were given."
        )
    return pd.DataFrame(values, index=labels, columns=labels)
