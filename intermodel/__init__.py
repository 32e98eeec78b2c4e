"""intermodel - Tidy post-processing of SGCCA/RGCCA fits.

This package provides:
- A validated record of a fit's output (scores, weights, AVE, design)
- Correlations between the canonical components of the blocks
- The canonical correlation of a design under its scheme
- Relabelling of blocks and simplification of the AVE

Quick Start:
    import numpy as np
    from intermodel import FitResult, analyze, improve

    # Raw output of the fitting routine, one entry per block
    fit = FitResult.from_dict({
        "Y": [y_agric, y_ind, y_polit],
        "a": [a_agric, a_ind, a_polit],
        "astar": [astar_agric, astar_ind, astar_polit],
        "AVE": {"AVE_inner": 0.62, "AVE_outer": 0.71, "AVE_X": [0.8, 0.9, 0.5]},
        "call": {
            "connection": np.array([[0, 0, 1], [0, 0, 1], [1, 1, 0]]),
            "scheme": "factorial",
        },
    })

    fit = improve(fit, ["Agric", "Ind", "Polit"])
    summary = analyze(fit)   # vs12, vs13, vs23, AVE_inner, AVE_outer, cc1, ...
"""

# Core exports
from .core import (
    AVE,
    FitCall,
    FitResult,
    HeterogeneousAve,
    Scheme,
    UniformAve,
    IntermodelError,
    InvalidConnectionError,
    MissingNamesError,
    ShapeMismatchError,
    UnrecognizedSchemeError,
    set_log_level,
)

# Main interface
from .analysis import (
    analyze,
    analyze_many,
    aves,
    canonical_correlation,
    dimensions_correlation,
    helper_cc,
    improve,
    index,
)

__version__ = "0.1.0"

__all__ = [
    # Core types
    "AVE",
    "FitCall",
    "FitResult",
    "HeterogeneousAve",
    "Scheme",
    "UniformAve",
    # Errors
    "IntermodelError",
    "InvalidConnectionError",
    "MissingNamesError",
    "ShapeMismatchError",
    "UnrecognizedSchemeError",
    # Main interface
    "analyze",
    "analyze_many",
    "aves",
    "improve",
    # Helpers
    "canonical_correlation",
    "dimensions_correlation",
    "helper_cc",
    "index",
    "set_log_level",
]
