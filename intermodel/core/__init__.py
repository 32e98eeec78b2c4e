"""Core data types and utilities for SGCCA post-processing."""

from .data_types import AVE, FitCall, FitResult, HeterogeneousAve, Scheme, UniformAve
from .exceptions import (
    IntermodelError,
    InvalidConnectionError,
    MissingNamesError,
    ShapeMismatchError,
    UnrecognizedSchemeError,
)
from .logging import get_logger, set_log_level

__all__ = [
    "AVE",
    "FitCall",
    "FitResult",
    "HeterogeneousAve",
    "Scheme",
    "UniformAve",
    "IntermodelError",
    "InvalidConnectionError",
    "MissingNamesError",
    "ShapeMismatchError",
    "UnrecognizedSchemeError",
    "get_logger",
    "set_log_level",
]
