"""
Thread-per-stream worker management.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar

logger = logging.getLogger("NoiseStreamer")

R = TypeVar('R')

# Worker functions receive the pool's stop event as their first argument
WorkerTask = Tuple[Callable[..., Any], Dict[str, Any]]


class TaskResult(Generic[R]):
    """
    Wrapper for worker results with error information.
    """
    def __init__(
        self,
        result: Optional[R] = None,
        error: Optional[BaseException] = None,
        task_id: Optional[int] = None,
        duration: float = 0.0,
        finished: bool = True
    ):
        self.result = result
        self.error = error
        self.task_id = task_id
        self.duration = duration
        self.finished = finished
        self.success = finished and error is None

    def __bool__(self) -> bool:
        """Returns True if the worker finished without error."""
        return self.success

    def unwrap(self) -> R:
        """
        Unwrap the result or raise the stored exception.

        Returns:
            The result value if successful

        Raises:
            The stored exception if not successful
        """
        if self.error is not None:
            raise self.error
        return self.result

    def __repr__(self) -> str:
        state = "running" if not self.finished else ("ok" if self.success else f"failed: {self.error}")
        return f"TaskResult(task_id={self.task_id}, {state})"


class StreamWorkerPool:
    """
    Runs each stream on its own dedicated thread.

    Workers share nothing but the pool's stop event. A worker that fails
    is logged once and ends; the other workers keep running.
    """

    def __init__(self, name_prefix: str = "stream", join_interval: float = 0.1, shutdown_timeout: float = 5.0):
        """
        Initialize the pool.

        Args:
            name_prefix: Thread name prefix; threads are named <prefix>-<index>
            join_interval: Polling interval while waiting, keeps Ctrl+C responsive
            shutdown_timeout: Seconds to wait for workers when leaving a with block
        """
        self.name_prefix = name_prefix
        self.join_interval = join_interval
        self.shutdown_timeout = shutdown_timeout
        self._shutdown_event = threading.Event()
        self._threads: List[threading.Thread] = []
        self._results: List[TaskResult] = []
        self._results_lock = threading.Lock()

    @property
    def stop_event(self) -> threading.Event:
        return self._shutdown_event

    def shutdown(self) -> None:
        """Request shutdown of all running workers."""
        self._shutdown_event.set()

    def is_shutdown_requested(self) -> bool:
        """Check if shutdown has been requested."""
        return self._shutdown_event.is_set()

    def start(self, tasks: List[WorkerTask]) -> None:
        """
        Start one thread per task.

        Args:
            tasks: List of (function, kwargs) tuples; each function is called
                as function(stop_event, **kwargs)
        """
        if not tasks:
            logger.warning("No tasks provided to StreamWorkerPool")
            return

        offset = len(self._threads)
        with self._results_lock:
            self._results.extend(TaskResult(task_id=offset + i, finished=False) for i in range(len(tasks)))

        for i, (func, kwargs) in enumerate(tasks):
            task_id = offset + i
            thread = threading.Thread(
                target=self._run_worker,
                args=(func, kwargs, task_id),
                name=f"{self.name_prefix}-{task_id}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()

        logger.info(f"Started {len(tasks)} stream worker(s)")

    def _run_worker(self, func: Callable[..., Any], kwargs: Dict[str, Any], task_id: int) -> None:
        start = time.time()
        try:
            result = func(self._shutdown_event, **kwargs)
            task_result = TaskResult(result=result, task_id=task_id, duration=time.time() - start)
        except Exception as e:
            logger.error(f"Stream worker {task_id} failed: {e}")
            task_result = TaskResult(error=e, task_id=task_id, duration=time.time() - start)

        with self._results_lock:
            self._results[task_id] = task_result

    def alive_count(self) -> int:
        """Number of workers still running."""
        return sum(1 for t in self._threads if t.is_alive())

    def wait(self, timeout: Optional[float] = None) -> List[TaskResult]:
        """
        Wait for workers to finish.

        Args:
            timeout: Maximum time to wait in seconds, None waits indefinitely

        Returns:
            Snapshot of TaskResult objects in task order; unfinished workers
            are reported with finished=False
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while self.alive_count() > 0:
            remaining = None if deadline is None else deadline - time.monotonic()
            if remaining is not None and remaining <= 0:
                break
            interval = self.join_interval if remaining is None else min(self.join_interval, remaining)
            for thread in self._threads:
                if thread.is_alive():
                    thread.join(interval)
                    break

        return self.results()

    def results(self) -> List[TaskResult]:
        with self._results_lock:
            return list(self._results)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit: stop workers and wait for them."""
        self.shutdown()
        self.wait(timeout=self.shutdown_timeout)
