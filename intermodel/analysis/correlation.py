"""Correlations between the canonical components of the blocks of a fit."""

from __future__ import annotations

from typing import List

import numpy as np
import pandas as pd

from ..core import FitResult, Scheme, ShapeMismatchError
from ..core.logging import get_logger
from ..core.utils import pair_labels, upper_triangle

logger = get_logger(__name__)


def index(fit: FitResult) -> List[str]:
    """Label every block pair above the diagonal of the connection matrix.

    Labels concatenate the 1-based row and column indices ("12", "13", "23",
    "14", ...) in column-major order. Pairs are labelled whether or not they
    are connected.
    """
    return pair_labels(fit.call.n_blocks)


def dimensions_correlation(fit: FitResult, component: int = 0) -> pd.DataFrame:
    """Pearson correlation between one canonical component of every block.

    Args:
        fit: Validated fit result
        component: 0-based dimension taken from each block's scores.
                   Defaults to the first canonical component.

    Returns:
        Symmetric ``N x N`` DataFrame labelled by block name.
    """
    rows = {name: scores.shape[0] for name, scores in fit.Y.items()}
    if len(set(rows.values())) > 1:
        raise ShapeMismatchError(f"Score matrices differ in number of observations: {rows}")

    columns = {}
    for name, scores in fit.Y.items():
        if not 0 <= component < scores.shape[1]:
            raise ShapeMismatchError(
                f"Block {name!r} has {scores.shape[1]} dimension(s); component {component} is not available."
            )
        columns[name] = scores[:, component]

    stacked = pd.DataFrame(columns)
    cY = stacked.corr(method="pearson")

    if cY.isna().to_numpy().any():
        logger.warning("Undefined correlations (constant component scores) in blocks: %s",
                       [c for c in cY.columns if cY[c].isna().all()])
    logger.debug("Correlated component %d of %d blocks over %d observations",
                 component, fit.n_blocks, stacked.shape[0])
    return cY


def canonical_correlation(
    cY: pd.DataFrame | np.ndarray,
    connection: pd.DataFrame | np.ndarray,
    scheme: Scheme | str,
) -> float:
    """Aggregate design-weighted component correlations into one value.

    The correlations are multiplied elementwise by the connection matrix, so
    unconnected pairs contribute nothing, then the strict upper triangle is
    summed according to the scheme:

        - centroid: sum of absolute values
        - horst: sum of values
        - factorial: sum of squared values
    """
    scheme = Scheme.parse(scheme)
    corr = np.asarray(cY, dtype=float)
    design = np.asarray(connection, dtype=float)
    if corr.shape != design.shape:
        raise ShapeMismatchError(
            f"Correlation matrix {corr.shape} and connection matrix {design.shape} differ in shape."
        )

    weighted = upper_triangle(corr * design)

    if scheme is Scheme.CENTROID:
        return float(np.sum(np.abs(weighted)))
    if scheme is Scheme.HORST:
        return float(np.sum(weighted))
    if scheme is Scheme.FACTORIAL:
        return float(np.sum(weighted ** 2))
    raise AssertionError(f"Unhandled scheme: {scheme}")


def helper_cc(fit: FitResult, cY: pd.DataFrame | np.ndarray) -> float:
    """Canonical correlation of ``fit`` under its own scheme and design."""
    return canonical_correlation(cY, fit.call.connection, fit.call.scheme)
