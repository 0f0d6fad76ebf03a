"""
Startup sequencing for application instances.

Startup actions are queued with ``enqueue`` and run one after another on the
running asyncio loop. An action may return an awaitable; the next action
starts only once it has completed. The first failure stops the sequence for
good: later actions never run and their completions raise the same error.
"""

import asyncio
import inspect
import logging
from collections import deque
from enum import Enum
from typing import Any, Callable, Deque, Generator, Optional

from ..core.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


class SequencerState(Enum):
    """Observable state of a startup sequence."""
    RESOLVED = "resolved"
    PENDING = "pending"
    FAILED = "failed"


class StartupStep:
    """
    Completion of one queued startup action.

    Awaiting a step waits for it (and every step before it) to finish and
    returns the action's result or raises its error. A step can be awaited
    any number of times.
    """

    def __init__(self, sequencer: Optional['StartupSequencer'],
                 action: Optional[Callable[[Any], Any]]) -> None:
        self._sequencer = sequencer
        self.action = action
        self._done = asyncio.Event()
        self._result: Any = None
        self._error: Optional[BaseException] = None

    @classmethod
    def resolved(cls, result: Any = None) -> 'StartupStep':
        """Create a step that has already completed."""
        step = cls(None, None)
        step.set_result(result)
        return step

    def done(self) -> bool:
        """Whether the step has completed, successfully or not."""
        return self._done.is_set()

    def result(self) -> Any:
        """Result of a completed step; raises the step's error if it failed."""
        if not self.done():
            raise asyncio.InvalidStateError("Startup step has not completed")
        if self._error is not None:
            raise self._error
        return self._result

    def exception(self) -> Optional[BaseException]:
        """Error of a completed step, or None."""
        if not self.done():
            raise asyncio.InvalidStateError("Startup step has not completed")
        return self._error

    def set_result(self, result: Any) -> None:
        self._result = result
        self._done.set()

    def set_exception(self, error: BaseException) -> None:
        self._error = error
        self._done.set()

    async def wait(self) -> Any:
        """Wait for the step to complete and return its result."""
        if self._sequencer is not None:
            self._sequencer.schedule()
        await self._done.wait()
        return self.result()

    def __await__(self) -> Generator[Any, None, Any]:
        return self.wait().__await__()


class StartupSequencer:
    """
    FIFO queue of startup actions executed by a single drain task.

    Args:
        argument: Zero-argument callable returning the value passed to each
            action when it runs (the application's root handle)
    """

    def __init__(self, argument: Callable[[], Any]) -> None:
        self._argument = argument
        self._steps: Deque[StartupStep] = deque()
        self._tail = StartupStep.resolved()
        self._error: Optional[BaseException] = None
        self._task: Optional['asyncio.Task[None]'] = None

    @property
    def state(self) -> SequencerState:
        """Current state of the sequence."""
        if self._error is not None:
            return SequencerState.FAILED
        if self._steps or not self._tail.done():
            return SequencerState.PENDING
        return SequencerState.RESOLVED

    @property
    def tail(self) -> StartupStep:
        """Completion of the most recently queued action."""
        return self._tail

    @property
    def error(self) -> Optional[BaseException]:
        """The error that failed the sequence, if any."""
        return self._error

    def enqueue(self, action: Callable[[Any], Any]) -> StartupStep:
        """
        Queue an action behind every action queued so far.

        Args:
            action: Called with the root handle; may return an awaitable

        Returns:
            The completion of the queued action

        Raises:
            InvalidArgumentError: If the action is not callable
        """
        if not callable(action):
            raise InvalidArgumentError("Cannot wait on non-function objects.")

        step = StartupStep(self, action)
        self._steps.append(step)
        self._tail = step
        self.schedule()
        return step

    def schedule(self) -> None:
        """Start draining the queue if a loop is running and work is pending."""
        if not self._steps:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Drained on the first await of a completion instead
            return

        if self._task is None or self._task.done():
            self._task = loop.create_task(self._drain())

    async def _drain(self) -> None:
        while self._steps:
            step = self._steps.popleft()

            if self._error is not None:
                step.set_exception(self._error)
                continue

            try:
                result = step.action(self._argument())  # type: ignore[misc]
                if inspect.isawaitable(result):
                    result = await result
            except Exception as e:
                self._fail(step, e)
            except BaseException as e:
                # Cancellation: settle every queued step before stopping
                self._fail(step, e)
                self._flush()
                raise
            else:
                step.set_result(result)

    def _fail(self, step: StartupStep, error: BaseException) -> None:
        self._error = error
        logger.error(f"Startup action {_describe(step.action)} failed: {error!r}")
        step.set_exception(error)

    def _flush(self) -> None:
        while self._steps:
            self._steps.popleft().set_exception(self._error)  # type: ignore[arg-type]


def _describe(action: Any) -> str:
    return getattr(action, '__qualname__', None) or repr(action)
