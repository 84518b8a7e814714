"""
Container error taxonomy.
Every error carries an HTTP-like ``code`` so entry points can surface it as-is.
"""

from typing import Optional


class ContainerError(Exception):
    """Base class for every error raised while resolving a component."""

    default_code = 500

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code

    def to_dict(self) -> dict:
        return {"error": self.__class__.__name__, "message": self.message, "code": self.code}


class NotFoundError(ContainerError):
    """Requested application module / controller does not exist on disk."""

    default_code = 404


class ContractViolationError(ContainerError):
    """A built object does not satisfy the type contract its role demands."""


class TypeNotFoundError(ContainerError):
    """A type reference does not resolve to an importable class."""


class ConstructionError(ContainerError):
    """The constructor rejected the arguments it was given."""
