"""
Core layer: domain models, collaborator interfaces, exceptions and the
event emitter.
"""

from .exceptions import (
    BindError,
    ConfigConflictError,
    ConfigNotDefinedError,
    IgnisError,
    InvalidArgumentError,
    MissingEnvarError,
)

__all__ = [
    "IgnisError",
    "InvalidArgumentError",
    "ConfigNotDefinedError",
    "ConfigConflictError",
    "MissingEnvarError",
    "BindError",
]
