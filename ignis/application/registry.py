"""
Process-wide extension and initializer registry.

The registry records which extension functions have been attached to the
application class and keeps the ordered list of initializers that every
application instance runs once. A single registry lives for the whole
process; ``reset_registry`` swaps in a fresh one (test boundaries).
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Union

from ..core.exceptions import InvalidArgumentError
from ..core.interfaces.network import IModuleLoader
from ..infrastructure.modules.loader import ModuleLoader

logger = logging.getLogger(__name__)

ExtensionFunction = Callable[..., Any]
InitializerFunction = Callable[[Any], Any]
ExtensionSource = Union[str, ExtensionFunction, Any]


def _describe(fn: Any) -> str:
    return getattr(fn, '__qualname__', None) or getattr(fn, '__name__', None) or repr(fn)


class ExtensionRegistry:
    """
    Registry of attached extensions and global initializers.

    Extensions are deduplicated by identity: attaching the same function
    object twice invokes it only once. Extensions commonly register
    initializers, or attach other extensions, while being invoked, so every
    mutation happens under a re-entrant lock.
    """

    def __init__(self, loader: Optional[IModuleLoader] = None) -> None:
        self._lock = threading.RLock()
        self._loader = loader or ModuleLoader()
        # Keyed by id(); the value keeps the object alive so ids stay unique
        self._extensions: Dict[int, ExtensionFunction] = {}
        self._initializers: List[InitializerFunction] = []
        self._global_instance: Optional[Any] = None

    @property
    def loader(self) -> IModuleLoader:
        """Module loader used for extensions referenced by name."""
        return self._loader

    @property
    def extensions(self) -> List[ExtensionFunction]:
        """Attached extensions in attachment order."""
        with self._lock:
            return list(self._extensions.values())

    @property
    def initializers(self) -> List[InitializerFunction]:
        """Snapshot of the initializers in registration order."""
        with self._lock:
            return list(self._initializers)

    def resolve(self, source: ExtensionSource) -> ExtensionFunction:
        """
        Turn an extension source into the function to attach.

        Args:
            source: A callable, an object exposing a callable ``default``
                (such as a module), or a name for the module loader

        Returns:
            The extension function

        Raises:
            InvalidArgumentError: If the source does not resolve to a callable
        """
        if isinstance(source, str):
            source = self._loader.load(source)

        # Namespace wrappers (modules, SimpleNamespace, ...) are not callable
        # themselves; their ``default`` attribute is the extension
        if not callable(source):
            default = getattr(source, 'default', None)
            if callable(default):
                source = default

        if not callable(source):
            raise InvalidArgumentError(
                f"Extension must be callable, got {type(source).__name__}")

        return source

    def is_attached(self, fn: ExtensionFunction) -> bool:
        """Check whether this exact function object has been attached."""
        with self._lock:
            return self._extensions.get(id(fn)) is fn

    def attach(self, source: ExtensionSource, target: Any,
               *args: Any, **kwargs: Any) -> bool:
        """
        Attach an extension to the application class.

        Args:
            source: Extension source, see ``resolve``
            target: Application class passed to the extension
            *args: Forwarded to the extension
            **kwargs: Forwarded to the extension

        Returns:
            True if the extension was invoked, False if it was already attached
        """
        fn = self.resolve(source)

        with self._lock:
            if self.is_attached(fn):
                logger.debug(f"Extension already attached: {_describe(fn)}")
                return False

            self._extensions[id(fn)] = fn
            logger.debug(f"Attaching extension: {_describe(fn)}")
            fn(target, *args, **kwargs)

        return True

    def add_initializer(self, fn: InitializerFunction) -> None:
        """Append an initializer to the global list."""
        if not callable(fn):
            raise InvalidArgumentError(
                f"Initializer must be callable, got {type(fn).__name__}")

        with self._lock:
            self._initializers.append(fn)
            logger.debug(f"Registered initializer: {_describe(fn)}")

    def global_instance(self, factory: Callable[[], Any]) -> Any:
        """
        Return the shared application instance, creating it on first use.

        Args:
            factory: Called without arguments to build the instance
        """
        with self._lock:
            if self._global_instance is None:
                self._global_instance = factory()
                logger.debug("Created global application instance")
            return self._global_instance


_registry = ExtensionRegistry()
_registry_lock = threading.Lock()


def get_registry() -> ExtensionRegistry:
    """Get the process-wide registry."""
    return _registry


def reset_registry(loader: Optional[IModuleLoader] = None) -> ExtensionRegistry:
    """
    Replace the process-wide registry with an empty one.

    Attached extensions, initializers and the global instance are all
    forgotten. Existing application instances keep their applied state.

    Args:
        loader: Module loader for the new registry

    Returns:
        The new registry
    """
    global _registry

    with _registry_lock:
        _registry = ExtensionRegistry(loader)
        logger.debug("Extension registry reset")
        return _registry
