"""Correlation summaries and relabelling of SGCCA fit results."""

from .analyze import analyze, analyze_many
from .correlation import canonical_correlation, dimensions_correlation, helper_cc, index
from .relabel import aves, improve, simplify_ave

__all__ = [
    "analyze",
    "analyze_many",
    "aves",
    "canonical_correlation",
    "dimensions_correlation",
    "helper_cc",
    "improve",
    "index",
    "simplify_ave",
]
