"""
Utility functions for the xComfort library
"""
import asyncio
import inspect
import logging
import sys
from typing import Any, Awaitable, Callable, Coroutine, Optional, TypeVar

T = TypeVar("T")

# Error-first callback: callback(error, result)
Callback = Callable[[Optional[BaseException], Any], Any]

logger = logging.getLogger(__name__)

# Async callbacks still running; asyncio itself only holds weak references
_callback_tasks: set[asyncio.Future] = set()


def spawn(awaitable: Awaitable[Any], tasks: set[asyncio.Future], log: logging.Logger) -> asyncio.Future:
    """
    Run an awaitable in the background.

    The task stays in tasks until it finishes. A failure is logged to log
    instead of surfacing later as an unretrieved task exception.
    """
    task = asyncio.ensure_future(awaitable)
    tasks.add(task)

    def _reap(t: asyncio.Future) -> None:
        tasks.discard(t)
        if not t.cancelled() and t.exception() is not None:
            log.error(f"Background task failed: {t.exception()!r}", exc_info=t.exception())
    task.add_done_callback(_reap)
    return task


def deferred(coro: Coroutine[Any, Any, T], callback: Optional[Callback] = None) -> "asyncio.Task[T]":
    """
    Schedule a coroutine and return its task, optionally reporting the outcome to a callback.

    The returned task can be awaited like any other. If a callback is supplied it is
    called once the task finishes, with (None, result) on success or (error, None) on
    failure. Both styles observe the same single execution of the coroutine.

    Args:
        coro: The coroutine to run
        callback: Optional error-first callback, plain function or coroutine function

    Returns:
        The scheduled task
    """
    task = asyncio.ensure_future(coro)
    if callback is not None:
        def _done(t: asyncio.Task) -> None:
            if t.cancelled():
                error, result = asyncio.CancelledError(), None
            elif t.exception() is not None:
                # Retrieving the exception here marks it as handled by the callback
                error, result = t.exception(), None
            else:
                error, result = None, t.result()
            try:
                outcome = callback(error, result)
            except Exception:
                logger.exception("Callback raised")
                return
            if inspect.isawaitable(outcome):
                spawn(outcome, _callback_tasks, logger)
        task.add_done_callback(_done)
    return task


def run_with_keyboard_interrupt(main_func: Callable[[], Awaitable[Any]]) -> None:
    """
    Run an async main function with graceful KeyboardInterrupt handling.

    This function wraps asyncio.run() to catch KeyboardInterrupt (Ctrl+C) and
    provide a clean shutdown experience.

    Args:
        main_func: The async main function to run
    """
    try:
        result = asyncio.run(main_func())
    except KeyboardInterrupt:
        print("\n🛑 Interrupted by user (Ctrl+C)")
        print("Shutting down gracefully...")
        sys.exit(0)
    except Exception as e:
        print(f"❌ Error: {e}")
        sys.exit(1)
    if isinstance(result, int):
        sys.exit(result)
