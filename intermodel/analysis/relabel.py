"""Relabel and reshape the output of a fit for downstream use."""

from __future__ import annotations

import dataclasses
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from ..core import AVE, FitResult, HeterogeneousAve, MissingNamesError, ShapeMismatchError, UniformAve
from ..core.data_types import AveX, ave_x_as_dict
from ..core.logging import get_logger

logger = get_logger(__name__)


def simplify_ave(x: AveX) -> UniformAve | HeterogeneousAve:
    """Lay per-block AVE vectors out as a dimension x block table when possible.

    If every block has the same number of dimensions the result is a
    `UniformAve` with rows ``comp1..compK`` and one column per block.
    Otherwise the vectors are kept as they are in a `HeterogeneousAve`.
    """
    values = ave_x_as_dict(x)
    lengths = {name: vec.size for name, vec in values.items()}

    if len(set(lengths.values())) <= 1:
        n_dims = next(iter(lengths.values()), 0)
        table = pd.DataFrame(
            values,
            index=[f"comp{i + 1}" for i in range(n_dims)],
            columns=list(values.keys()),
        )
        return UniformAve(table=table)

    logger.debug("AVE_X kept per block, dimensions differ: %s", lengths)
    return HeterogeneousAve(values=values)


def aves(fit: FitResult) -> FitResult:
    """Return a copy of ``fit`` with ``AVE.x`` simplified by `simplify_ave`."""
    ave = AVE(inner=fit.AVE.inner.copy(), outer=fit.AVE.outer.copy(), x=simplify_ave(fit.AVE.x))
    return dataclasses.replace(
        fit,
        AVE=ave,
        call=fit.call.relabel(fit.block_names),
        metadata=dict(fit.metadata),
    )


def improve(fit: FitResult, names: Optional[Sequence[str]]) -> FitResult:
    """Name the blocks of a fit and simplify its AVE.

    The names label ``Y``, ``a``, ``astar``, ``AVE.x`` and both axes of the
    connection matrix, in block order. The input is left untouched.

    Args:
        fit: Validated fit result
        names: One unique name per block, e.g. the names of the original data

    Returns:
        A relabelled copy of ``fit`` with ``AVE.x`` simplified
    """
    if names is None:
        raise MissingNamesError("names shouldn't be None. Consider adding names to the blocks.")
    if isinstance(names, str):
        raise TypeError("names must be a sequence of block names, not a single string.")

    names = [str(n) for n in names]
    if len(names) != fit.n_blocks:
        raise ShapeMismatchError(f"Got {len(names)} names for {fit.n_blocks} blocks.")
    if len(set(names)) != len(names):
        raise ShapeMismatchError(f"Block names must be unique, got {names}.")

    def rename(collection):
        return {new: np.array(value, copy=True) for new, value in zip(names, collection.values())}

    ave = AVE(
        inner=fit.AVE.inner.copy(),
        outer=fit.AVE.outer.copy(),
        x=rename(ave_x_as_dict(fit.AVE.x)),
    )
    relabelled = dataclasses.replace(
        fit,
        Y=rename(fit.Y),
        a=rename(fit.a),
        astar=rename(fit.astar),
        AVE=ave,
        call=fit.call.relabel(names),
        metadata=dict(fit.metadata),
    )
    logger.debug("Relabelled %d blocks as %s", len(names), names)
    return aves(relabelled)
