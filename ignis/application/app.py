"""
The Ignis application class.

An application instance runs every registered initializer once, owns a
startup sequence of deferred actions, and is an event emitter. Behavior is
added to the class through extensions, which register initializers that
each new instance (and each existing instance that calls ``use``) applies.
"""

import asyncio
import logging
import os
from typing import Any, Callable, Dict, Optional

from ..core.exceptions import BindError, InvalidArgumentError
from ..core.services.event_bus import EventEmitter
from .registry import (
    ExtensionSource,
    InitializerFunction,
    get_registry,
)
from .sequencer import SequencerState, StartupSequencer, StartupStep

logger = logging.getLogger(__name__)


class Ignis(EventEmitter):
    """
    Ignis application.

    Args:
        root: Network listener root handed to startup actions. Defaults to a
            new ``RootApp`` (a FastAPI application able to serve itself).
    """

    def __init__(self, root: Optional[Any] = None) -> None:
        super().__init__()

        # Initializers already applied to this instance, keyed by id()
        self._applied: Dict[int, InitializerFunction] = {}
        self._initializing = False

        self._sequencer = StartupSequencer(lambda: self.root)

        if root is None:
            from ..presentation.http.root import RootApp
            root = RootApp()
        self.root = root

        self.run_initializers()

    @classmethod
    def create_instance(cls, *args: Any, **kwargs: Any) -> 'Ignis':
        """Create a new, independent application instance."""
        return cls(*args, **kwargs)

    @classmethod
    def get_or_create_global_instance(cls) -> 'Ignis':
        """Return the process-wide shared instance, creating it if needed."""
        return get_registry().global_instance(cls)  # type: ignore[no-any-return]

    @classmethod
    def register_extension(cls, source: ExtensionSource,
                           *args: Any, **kwargs: Any) -> type:
        """
        Attach an extension to the application class.

        The extension is called with the class and any forwarded arguments,
        unless this exact function has been attached before.

        Args:
            source: Extension function, object exposing a ``default``
                function, or extension name
            *args: Forwarded to the extension
            **kwargs: Forwarded to the extension

        Returns:
            The class for further chaining
        """
        get_registry().attach(source, cls, *args, **kwargs)
        return cls

    @classmethod
    def register_initializer(cls, fn: InitializerFunction) -> type:
        """
        Register an initializer run once by every application instance.

        Args:
            fn: Called with the application instance

        Returns:
            The class for further chaining
        """
        get_registry().add_initializer(fn)
        return cls

    def run_initializers(self) -> int:
        """
        Run every registered initializer not yet applied to this instance.

        Initializers registered while the pass is running are picked up by
        the same pass.

        Returns:
            Number of initializers run
        """
        registry = get_registry()
        count = 0
        index = 0

        self._initializing = True
        try:
            while True:
                initializers = registry.initializers
                if index >= len(initializers):
                    break

                fn = initializers[index]
                index += 1

                if self._applied.get(id(fn)) is fn:
                    continue

                self._applied[id(fn)] = fn
                logger.debug(f"Running initializer: {getattr(fn, '__qualname__', fn)!r}")
                fn(self)
                count += 1
        finally:
            self._initializing = False

        return count

    def use(self, source: ExtensionSource, *args: Any, **kwargs: Any) -> 'Ignis':
        """
        Attach an extension and apply its initializers to this instance.

        Args:
            source: See ``register_extension``
            *args: Forwarded to the extension
            **kwargs: Forwarded to the extension

        Returns:
            This instance for further chaining
        """
        type(self).register_extension(source, *args, **kwargs)

        # An initializer pass already in progress picks up new initializers
        if not self._initializing:
            self.run_initializers()

        return self

    @property
    def startup(self) -> StartupStep:
        """Completion of every startup action queued so far."""
        return self._sequencer.tail

    @property
    def startup_state(self) -> SequencerState:
        """State of the startup sequence."""
        return self._sequencer.state

    @property
    def startup_error(self) -> Optional[BaseException]:
        """The error that failed startup, if any."""
        return self._sequencer.error

    def wait(self, action: Callable[[Any], Any]) -> 'Ignis':
        """
        Make startup wait for an action.

        Args:
            action: Called with ``root`` once every earlier action has
                completed; may return an awaitable

        Returns:
            This instance for further chaining

        Raises:
            InvalidArgumentError: If the action is not callable
        """
        logger.debug("Ignis.wait()")
        self._sequencer.enqueue(action)
        return self

    def listen(self, port: Optional[int] = None) -> StartupStep:
        """
        Queue binding the root listener as the final startup action.

        Args:
            port: Port to listen on (default: the PORT environment variable)

        Returns:
            Completion of the whole startup sequence including the bind
        """
        logger.debug("Ignis.listen()")
        if not isinstance(port, int) or isinstance(port, bool):
            port = _port_from_environment()

        bound_port = port
        self.wait(lambda root: _bind(root, bound_port))
        return self.startup


def _port_from_environment() -> int:
    value = os.environ.get('PORT')
    if value is None:
        raise InvalidArgumentError("No port given and PORT is not set")

    try:
        return int(value)
    except ValueError:
        raise InvalidArgumentError(f"PORT is not a number: {value!r}") from None


def _bind(root: Any, port: int) -> 'asyncio.Future[None]':
    """Adapt ``root.listen(port, callback)`` into a future."""
    loop = asyncio.get_running_loop()
    future: 'asyncio.Future[None]' = loop.create_future()

    def settle(error: Any) -> None:
        if future.done():
            return

        if error is None:
            logger.info(f"Ignis up and ready on port {port}")
            future.set_result(None)
            return

        if isinstance(error, BindError):
            future.set_exception(error)
            return

        failure = BindError(port, error)
        if isinstance(error, BaseException):
            failure.__cause__ = error
        future.set_exception(failure)

    def done(error: Any = None, *args: Any) -> None:
        loop.call_soon_threadsafe(settle, error)

    try:
        root.listen(port, done)
    except Exception as e:
        raise BindError(port, e) from e

    return future
