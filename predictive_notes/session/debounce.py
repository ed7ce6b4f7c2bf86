# debounce.py
# Cancellable debounce timer owned by an editing session.
# Each trigger cancels the outstanding handle and schedules a fresh one, so the
# callback only runs once the caller has been quiet for `delay` seconds.

from __future__ import annotations
import asyncio
import inspect
from typing import Any, Callable, Optional, Protocol, Set

from predictive_notes.utils.logger_utils import Log


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def loop_scheduler(delay: float, fn: Callable[[], None]) -> TimerHandle:
    """Schedule on the running asyncio loop (Textual's loop under the TUI)."""
    return asyncio.get_running_loop().call_later(delay, fn)


class Debouncer:
    """
    Args:
        delay: quiet period in seconds.
        callback: plain function or coroutine function; coroutines run as tasks.
        scheduler: (delay, fn) -> handle with cancel(); defaults to loop.call_later.
        name: label used in log lines.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[..., Any],
        scheduler: Optional[Scheduler] = None,
        name: str = "debounce",
    ):
        self.delay = delay
        self.callback = callback
        self.name = name
        self._schedule = scheduler or loop_scheduler
        self._handle: Optional[TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, *args: Any, **kwargs: Any) -> None:
        self.cancel()
        self._handle = self._schedule(self.delay, lambda: self._fire(args, kwargs))

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self, *args: Any, **kwargs: Any) -> Any:
        """Run the callback now, dropping any pending timer."""
        self.cancel()
        return self.callback(*args, **kwargs)

    async def join(self) -> None:
        """Wait for coroutine callbacks that have already fired."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _fire(self, args, kwargs) -> None:
        self._handle = None
        result = self.callback(*args, **kwargs)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            Log.error(f"[Debouncer:{self.name}] callback failed: {exc!r}")
