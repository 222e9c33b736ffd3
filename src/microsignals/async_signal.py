"""
Signal whose dispatch can be awaited.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Optional, Set

from .binding import Binding, HandlerFunc
from .core import Signal

logger = logging.getLogger(__name__)


class _Completion:
    """
    The `done` callback shared by all handlers of one dispatch.
    The first call resolves the dispatch; later calls are ignored.
    """

    __slots__ = ("_future",)

    def __init__(self, future: asyncio.Future) -> None:
        self._future = future

    def __call__(self) -> None:
        if not self._future.done():
            self._future.set_result(None)

    def task_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        if self._future.done():
            logger.error(
                "Handler task %r failed after dispatch completed", task, exc_info=exc
            )
        else:
            self._future.set_exception(exc)


class AsyncSignal(Signal):
    """
    A signal whose handlers receive a completion callback.

    Handlers are called as `handler([context,] done, *args, **kwargs)`.
    `await signal.dispatch(...)` returns as soon as any handler calls `done()`;
    it does not wait for the other handlers to finish.

    Coroutine handlers are scheduled as tasks on the running loop.
    """

    def __init__(self) -> None:
        super().__init__()
        self._tasks: Set[asyncio.Task] = set()

    def add(self, handler: HandlerFunc, context: Any = None) -> Binding:
        """
        Bind a handler called as `handler([context,] done, *args, **kwargs)`.
        """
        return super().add(handler, context)

    async def dispatch(self, *args: Any, **kwargs: Any) -> None:
        """
        Call every bound handler, then wait until one of them calls `done()`.

        Returns immediately when the signal is disabled or has no handlers.
        Exceptions raised synchronously by handlers propagate and stop the dispatch.

        Args:
            *args: Positional arguments to pass to the handlers.
            **kwargs: Keyword arguments to pass to the handlers.

        Returns:
            None
        """
        if not self.enabled or not self.has_any():
            return

        future = asyncio.get_running_loop().create_future()
        completion = _Completion(future)

        try:
            super().dispatch(completion, *args, **kwargs)
        except BaseException:
            # nobody awaits the future now; late task failures get logged
            future.cancel()
            raise

        logger.debug("%r dispatched, waiting for completion", self)
        await future

    def dispatch_sync(self, *args: Any, **kwargs: Any) -> Optional[asyncio.Task]:
        """
        Convenience to use dispatch(...) from sync code.

        - If no loop is running, it blocks until done.
        - If a loop is running, schedules and returns an asyncio.Task (fire-and-forget).

        Args:
            *args: Positional arguments to pass to the handlers.
            **kwargs: Keyword arguments to pass to the handlers.

        Returns:
            None if no loop is running, otherwise an asyncio.Task
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self.dispatch(*args, **kwargs))
            return None
        else:
            return loop.create_task(self.dispatch(*args, **kwargs))

    def _invoke(self, binding: Binding, args: tuple, kwargs: dict) -> Any:
        result = super()._invoke(binding, args, kwargs)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            task.add_done_callback(args[0].task_done)
        return result
