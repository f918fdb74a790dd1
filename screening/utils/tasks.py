"""
screening.utils.tasks - Background execution for export/summary I/O

The engine itself is single threaded. Slow I/O (remote summary, file
writes followed by sharing) is submitted here and handed back as a
concurrent.futures.Future. Futures are never cancelled implicitly;
callers that want cancellation call Future.cancel() themselves.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

LOG = logging.getLogger(__name__)


class BackgroundTasks:
    """
    Thin wrapper over ThreadPoolExecutor.

    Usage:
        tasks = BackgroundTasks()
        future = tasks.submit("summary", service.summarize, markers, fps)
        future.add_done_callback(...)
        tasks.shutdown()
    """

    def __init__(self, max_workers: int = 2):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="screening",
        )
        self._closed = False

    def submit(self, name: str, fn: Callable[..., Any], *args, **kwargs) -> Future:
        """Run fn(*args, **kwargs) in the pool and return its Future."""
        if self._closed:
            raise RuntimeError("BackgroundTasks has been shut down")

        LOG.debug("Submitting background task: %s", name)
        future = self._executor.submit(fn, *args, **kwargs)
        future.add_done_callback(lambda f: self._log_outcome(name, f))
        return future

    @staticmethod
    def _log_outcome(name: str, future: Future) -> None:
        if future.cancelled():
            LOG.info("Background task cancelled: %s", name)
            return
        exc = future.exception()
        if exc is not None:
            LOG.error("Background task %s failed: %s", name, exc)
        else:
            LOG.debug("Background task finished: %s", name)

    def shutdown(self, wait: bool = False, cancel_pending: Optional[bool] = None) -> None:
        """
        Release the worker threads.

        Args:
            wait: Block until running tasks finish
            cancel_pending: Cancel queued tasks that have not started
                (default False: queued work still runs)
        """
        self._closed = True
        self._executor.shutdown(wait=wait, cancel_futures=bool(cancel_pending))
