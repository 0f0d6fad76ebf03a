"""
Interfaces for the collaborators the framework drives but does not own.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable

ListenCallback = Callable[..., None]


class IListener(ABC):
    """Interface for the network listener root handed to startup actions."""

    @abstractmethod
    def listen(self, port: int, callback: ListenCallback) -> Any:
        """
        Bind the given port and start accepting connections.

        Args:
            port: Port number to bind
            callback: Called once with ``None`` when the listener is up, or
                with the exception that prevented it from binding
        """
        pass


class IModuleLoader(ABC):
    """Interface for resolving extension names to loadable objects."""

    @abstractmethod
    def load(self, name: str) -> Any:
        """
        Resolve an extension name.

        Args:
            name: Extension name as passed to ``use``

        Returns:
            A callable or a namespace object exposing ``default``
        """
        pass
