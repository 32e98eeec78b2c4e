from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .exceptions import ShapeMismatchError, UnrecognizedSchemeError
from .utils import as_connection_frame, default_block_names


class Scheme(str, Enum):
    """Rule used to aggregate component correlations into one summary."""

    CENTROID = "centroid"
    HORST = "horst"
    FACTORIAL = "factorial"

    @classmethod
    def parse(cls, value: Union[str, "Scheme"]) -> "Scheme":
        """Resolve a scheme member from a member or its exact lowercase tag."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise UnrecognizedSchemeError(
            f"Unrecognized scheme: {value!r}. "
            f"Expected one of: {', '.join(s.value for s in cls)}."
        )


@dataclass
class UniformAve:
    """Per-block AVE laid out as a table: rows are dimensions, columns are blocks."""

    table: pd.DataFrame

    @property
    def block_names(self) -> List[str]:
        return [str(c) for c in self.table.columns]

    def to_dict(self) -> Dict[str, np.ndarray]:
        return {
            str(col): self.table[col].to_numpy(dtype=float, copy=True)
            for col in self.table.columns
        }


@dataclass
class HeterogeneousAve:
    """Per-block AVE vectors that could not be laid out as a table."""

    values: Dict[str, np.ndarray]

    @property
    def block_names(self) -> List[str]:
        return list(self.values.keys())

    def to_dict(self) -> Dict[str, np.ndarray]:
        return {name: np.array(vec, dtype=float) for name, vec in self.values.items()}


AveX = Union[Dict[str, np.ndarray], UniformAve, HeterogeneousAve]


def ave_x_as_dict(x: AveX) -> Dict[str, np.ndarray]:
    """Return the per-block AVE as a name -> vector mapping, whatever its layout."""
    if isinstance(x, (UniformAve, HeterogeneousAve)):
        return x.to_dict()
    return {str(name): np.atleast_1d(np.array(vec, dtype=float)) for name, vec in x.items()}


@dataclass
class AVE:
    """Average Variance Explained of a fit.

    ``inner`` and ``outer`` hold one value per extracted dimension; ``x`` holds
    one vector per block (one value per dimension of that block).
    """

    inner: np.ndarray
    outer: np.ndarray
    x: AveX

    def __post_init__(self):
        self.inner = np.atleast_1d(np.asarray(self.inner, dtype=float)).ravel()
        self.outer = np.atleast_1d(np.asarray(self.outer, dtype=float)).ravel()
        if not isinstance(self.x, (UniformAve, HeterogeneousAve)):
            self.x = ave_x_as_dict(self.x)

    @property
    def block_names(self) -> List[str]:
        if isinstance(self.x, (UniformAve, HeterogeneousAve)):
            return self.x.block_names
        return list(self.x.keys())


class FitCall:
    """Configuration the fit was run with."""

    def __init__(
        self,
        connection: pd.DataFrame | np.ndarray | Sequence[Sequence[float]],
        scheme: Union[str, Scheme] = Scheme.CENTROID,
        ncomp: Optional[Union[int, Sequence[int]]] = None,
        options: Optional[Dict[str, Any]] = None,
        block_names: Optional[Sequence[str]] = None,
    ):
        """
        Initialize fit configuration.

        Args:
            connection: Design matrix over blocks. Must be square, symmetric,
                        finite and non-negative; a nonzero (i, j) entry links
                        blocks i and j.
            scheme: Aggregation scheme ('centroid', 'horst' or 'factorial')
            ncomp: Number of components per block (int or one int per block)
            options: Any other parameter of the fit (tau, sparsity, ...)
            block_names: Labels for both axes of the connection matrix.
                         Defaults to the DataFrame labels, or block1..blockN.
        """
        self.connection = as_connection_frame(connection, block_names)
        self.scheme = Scheme.parse(scheme)
        self.options = dict(options) if options else {}

        # Validation
        if ncomp is not None:
            counts = [ncomp] if np.isscalar(ncomp) else list(ncomp)
            if any(int(c) != c or c < 1 for c in counts):
                raise ValueError("ncomp must contain positive integers.")
            if not np.isscalar(ncomp) and len(counts) != self.n_blocks:
                raise ShapeMismatchError(
                    f"ncomp has {len(counts)} entries but the design has {self.n_blocks} blocks."
                )
            ncomp = int(ncomp) if np.isscalar(ncomp) else [int(c) for c in counts]
        self.ncomp = ncomp

    @property
    def n_blocks(self) -> int:
        return self.connection.shape[0]

    @property
    def block_names(self) -> List[str]:
        return [str(c) for c in self.connection.columns]

    def relabel(self, names: Sequence[str]) -> FitCall:
        """Return a copy with new labels on both axes of the connection matrix."""
        return FitCall(
            connection=self.connection.to_numpy(copy=True),
            scheme=self.scheme,
            ncomp=self.ncomp,
            options=self.options,
            block_names=names,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        return {
            "connection": self.connection.to_numpy().tolist(),
            "block_names": self.block_names,
            "scheme": self.scheme.value,
            "ncomp": self.ncomp,
            **self.options,
        }

    def __repr__(self) -> str:
        return (
            f"FitCall(blocks={self.block_names}, "
            f"scheme='{self.scheme.value}', "
            f"ncomp={self.ncomp}, "
            f"options={self.options})"
        )


def _as_matrix(values: Any, what: str) -> np.ndarray:
    arr = np.array(values, dtype=float)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise ShapeMismatchError(f"{what} must be a vector or a matrix, got {arr.ndim} dimensions.")
    return arr


def _as_block_dict(values: Any, names: List[str], what: str) -> Dict[str, Any]:
    """Key a per-block collection by block name."""
    if isinstance(values, Mapping):
        keys = [str(k) for k in values.keys()]
        if keys != names:
            raise ShapeMismatchError(f"{what} is labelled {keys} but the blocks are {names}.")
        return dict(zip(keys, values.values()))
    if isinstance(values, (np.ndarray, str)) or not isinstance(values, Sequence):
        raise TypeError(f"{what} must be a sequence or a mapping of per-block values.")
    if len(values) != len(names):
        raise ShapeMismatchError(f"{what} has {len(values)} entries but there are {len(names)} blocks.")
    return dict(zip(names, values))


@dataclass
class FitResult:
    """Output of an SGCCA/RGCCA fit, keyed by block name.

    Attributes:
        Y: Block name -> score matrix (observations x dimensions)
        a: Block name -> weight matrix (variables x dimensions)
        astar: Block name -> derived weight matrix (variables x dimensions)
        AVE: Average Variance Explained summary
        call: Configuration of the fit (connection matrix and scheme)
        metadata: Free-form information carried along untouched
    """

    Y: Dict[str, np.ndarray]
    a: Dict[str, np.ndarray]
    astar: Dict[str, np.ndarray]
    AVE: AVE
    call: FitCall
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.Y:
            raise ShapeMismatchError("A fit result needs at least one block.")

        names = [str(k) for k in self.Y.keys()]
        self.Y = {name: _as_matrix(m, f"Y[{name!r}]") for name, m in zip(names, self.Y.values())}

        rows = {name: m.shape[0] for name, m in self.Y.items()}
        if len(set(rows.values())) > 1:
            raise ShapeMismatchError(f"Score matrices differ in number of observations: {rows}")

        self.a = {
            name: _as_matrix(m, f"a[{name!r}]")
            for name, m in _as_block_dict(self.a, names, "a").items()
        }
        self.astar = {
            name: _as_matrix(m, f"astar[{name!r}]")
            for name, m in _as_block_dict(self.astar, names, "astar").items()
        }

        if self.AVE.block_names != names:
            raise ShapeMismatchError(
                f"AVE_X is labelled {self.AVE.block_names} but the blocks are {names}."
            )
        if self.call.n_blocks != len(names):
            raise ShapeMismatchError(
                f"Connection matrix is {self.call.n_blocks}x{self.call.n_blocks} "
                f"but there are {len(names)} blocks."
            )
        if self.call.block_names != names:
            raise ShapeMismatchError(
                f"Connection matrix is labelled {self.call.block_names} but the blocks are {names}."
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FitResult:
        """Build a validated fit result from the raw output of a fitting routine.

        The expected layout mirrors the RGCCA output object::

            {
                "Y": [...], "a": [...], "astar": [...],
                "AVE": {"AVE_inner": ..., "AVE_outer": ..., "AVE_X": [...]},
                "call": {"connection": ..., "scheme": ..., ...},
            }

        Per-block entries may be sequences (named block1..blockN) or mappings
        (their keys become the block names). A labelled connection DataFrame
        is reordered to the block names and must carry exactly those labels.
        """
        missing = [key for key in ("Y", "a", "astar", "AVE", "call") if key not in data]
        if missing:
            raise KeyError(f"Fit result is missing fields: {missing}")

        ave = data["AVE"]
        missing = [key for key in ("AVE_inner", "AVE_outer", "AVE_X") if key not in ave]
        if missing:
            raise KeyError(f"AVE is missing fields: {missing}")

        call = dict(data["call"])
        missing = [key for key in ("connection", "scheme") if key not in call]
        if missing:
            raise KeyError(f"call is missing fields: {missing}")

        raw_y = data["Y"]
        if isinstance(raw_y, Mapping):
            names = [str(k) for k in raw_y.keys()]
        elif isinstance(raw_y, Sequence) and not isinstance(raw_y, str):
            names = default_block_names(len(raw_y))
        else:
            raise TypeError("Y must be a sequence or a mapping of per-block score matrices.")

        connection = call.pop("connection")
        return cls(
            Y=_as_block_dict(raw_y, names, "Y"),
            a=_as_block_dict(data["a"], names, "a"),
            astar=_as_block_dict(data["astar"], names, "astar"),
            AVE=AVE(
                inner=ave["AVE_inner"],
                outer=ave["AVE_outer"],
                x=_as_block_dict(ave["AVE_X"], names, "AVE_X"),
            ),
            call=FitCall(
                connection=connection,
                scheme=call.pop("scheme"),
                ncomp=call.pop("ncomp", None),
                options=call,
                block_names=names,
            ),
        )

    @property
    def block_names(self) -> List[str]:
        return list(self.Y.keys())

    @property
    def n_blocks(self) -> int:
        return len(self.Y)

    @property
    def n_observations(self) -> int:
        return next(iter(self.Y.values())).shape[0]

    def __str__(self) -> str:
        """String representation for print()."""
        lines = []
        lines.append("=" * 60)
        lines.append("SGCCA FIT")
        lines.append("=" * 60)
        lines.append(f"\nBlocks ({self.n_blocks}):       {', '.join(self.block_names)}")
        lines.append(f"Observations:       {self.n_observations:,}")
        lines.append(f"Scheme:             {self.call.scheme.value}")
        dims = ", ".join(f"{name}={m.shape[1]}" for name, m in self.Y.items())
        lines.append(f"Dimensions:         {dims}")

        lines.append("\n" + "-" * 60)
        lines.append("DESIGN")
        lines.append("-" * 60)
        lines.append(self.call.connection.to_string())

        lines.append("\n" + "-" * 60)
        lines.append("AVERAGE VARIANCE EXPLAINED")
        lines.append("-" * 60)
        lines.append(f"\nInner:              {', '.join(f'{v:.4f}' for v in self.AVE.inner)}")
        lines.append(f"Outer:              {', '.join(f'{v:.4f}' for v in self.AVE.outer)}")
        for name, vec in ave_x_as_dict(self.AVE.x).items():
            lines.append(f"  {name:<18}{', '.join(f'{v:.4f}' for v in vec)}")

        lines.append("\n" + "=" * 60)
        return "\n".join(lines)
