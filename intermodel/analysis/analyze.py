from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from ..core import FitResult
from ..core.logging import get_logger
from ..core.utils import upper_triangle
from .correlation import dimensions_correlation, helper_cc, index

logger = get_logger(__name__)


def _flatten(name: str, values: np.ndarray) -> pd.Series:
    """Name a scalar after its field, and a vector as field1, field2, ..."""
    if values.size == 1:
        return pd.Series([float(values[0])], index=[name])
    return pd.Series(values.astype(float), index=[f"{name}{i + 1}" for i in range(values.size)])


def analyze(fit: FitResult) -> pd.Series:
    """Summarise a fit as one flat, labelled vector.

    The entries are, in this order:
        - ``vs<pair>``: correlation between the first components of each block pair
        - ``AVE_inner*`` and ``AVE_outer*``: average variance explained
        - ``cc1``: canonical correlation under the fit's scheme
        - ``var<pair>``: connection weight of each block pair
        - ``weights``: number of connected pairs

    Every pair above the diagonal is reported, connected or not, so the output
    length only depends on the number of blocks and of AVE dimensions.
    """
    ind = index(fit)

    cY = dimensions_correlation(fit)
    cc = helper_cc(fit, cY)

    var = pd.Series(upper_triangle(cY), index=[f"vs{i}" for i in ind])
    vars_ = pd.Series(upper_triangle(fit.call.connection), index=[f"var{i}" for i in ind])
    weight = pd.Series([int(np.count_nonzero(vars_.to_numpy()))], index=["weights"])

    result = pd.concat(
        [
            var,
            _flatten("AVE_inner", fit.AVE.inner),
            _flatten("AVE_outer", fit.AVE.outer),
            pd.Series([cc], index=["cc1"]),
            vars_,
            weight,
        ]
    ).astype(float)

    logger.debug("Analyzed %d blocks (%s): cc1=%.4f, %d connected pairs",
                 fit.n_blocks, fit.call.scheme.value, cc, int(weight.iloc[0]))
    return result


def analyze_many(
    fits: Iterable[FitResult],
    labels: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Apply `analyze` to several fits, e.g. the candidates of a design search.

    Args:
        fits: Fit results to summarise
        labels: Optional row labels, one per fit. Defaults to 0..n-1.

    Returns:
        DataFrame with one row per fit and one column per `analyze` entry.
        Fits with a different number of blocks leave NaN in the columns they lack.
    """
    fit_list: List[FitResult] = list(fits)
    if not fit_list:
        raise ValueError("No fit results provided.")
    if labels is not None and len(labels) != len(fit_list):
        raise ValueError(f"Got {len(labels)} labels for {len(fit_list)} fits.")

    rows = [analyze(fit) for fit in tqdm(fit_list, desc="Analyzing fits")]

    frame = pd.DataFrame(rows)
    frame.index = pd.Index(list(labels) if labels is not None else range(len(rows)), name="model")
    return frame
