"""
Exception hierarchy for the Ignis framework.

Configuration and argument errors are raised synchronously at the call site.
Startup errors travel through the startup sequence completion instead.
"""

from typing import Any, Optional


class IgnisError(Exception):
    """Base class for all framework errors."""
    pass


class InvalidArgumentError(IgnisError, ValueError):
    """Raised when a caller passes an argument the framework cannot use."""
    pass


class ConfigNotDefinedError(IgnisError, KeyError):
    """Raised when a config path does not exist in the store."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config option '{path}' is not defined.")
        self.path = path

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class ConfigConflictError(IgnisError):
    """Raised when a config write has to descend through a non-mapping node."""

    def __init__(self, path: str, segment: str) -> None:
        super().__init__(
            f"Cannot set config option '{path}': '{segment}' is not a mapping.")
        self.path = path
        self.segment = segment


class MissingEnvarError(IgnisError):
    """Raised when a substitution expression names an unset variable."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing envar: {name}")
        self.name = name


class BindError(IgnisError):
    """Raised when the network listener fails to bind its port."""

    def __init__(self, port: Any, reason: Optional[BaseException] = None) -> None:
        message = f"Failed to listen on port {port}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.port = port
        self.reason = reason
