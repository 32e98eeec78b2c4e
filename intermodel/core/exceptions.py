"""
intermodel Exceptions
=====================
Centralized exception hierarchy for the intermodel package.

Every concrete error also derives from ``ValueError`` so callers that only
care about bad input can keep catching the built-in type.
"""


class IntermodelError(Exception):
    """Base class for all intermodel exceptions."""
    pass


class MissingNamesError(IntermodelError, ValueError):
    """Raised when block names are required but None was given."""
    pass


class UnrecognizedSchemeError(IntermodelError, ValueError):
    """Raised when the scheme tag is not one of centroid, horst or factorial."""
    pass


class ShapeMismatchError(IntermodelError, ValueError):
    """Raised when blocks disagree in observations, count or labels (e.g. 3 blocks but 2 names)."""
    pass


class InvalidConnectionError(IntermodelError, ValueError):
    """Raised when the connection matrix is not square, symmetric, finite and non-negative."""
    pass
