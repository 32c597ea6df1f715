"""
Bounded-concurrency execution of conversion tasks.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import List, Optional, Sequence

from .models import ConversionResult, ObjectDescriptor


class ConversionWorkerPool:
    """
    Runs conversion tasks with at most ``max_concurrent_jobs`` in flight.

    One pool lives for the whole run. Permits are drawn from a single
    semaphore before a task is submitted and released when the task
    finishes, whatever its outcome, so the ceiling holds across page
    boundaries. ``process_page`` returns only once every task of the page
    has finished.
    """

    def __init__(self, task, max_concurrent_jobs: int = 4, logger: Optional[logging.Logger] = None):
        """
        Args:
            task: Object with ``execute(candidate) -> ConversionResult``
            max_concurrent_jobs: Number of permits (K)
            logger: Sink for unexpected task errors
        """
        if max_concurrent_jobs < 1:
            raise ValueError("max_concurrent_jobs must be at least 1")
        self.task = task
        self.max_concurrent_jobs = max_concurrent_jobs
        self.logger = logger or logging.getLogger(__name__)
        self._permits = threading.BoundedSemaphore(max_concurrent_jobs)
        self._executor = ThreadPoolExecutor(
            max_workers=max_concurrent_jobs,
            thread_name_prefix="svg2gif-worker"
        )

    def __enter__(self) -> "ConversionWorkerPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def _run(self, candidate: ObjectDescriptor) -> ConversionResult:
        try:
            return self.task.execute(candidate)
        finally:
            self._permits.release()

    def process_page(self, candidates: Sequence[ObjectDescriptor]) -> List[ConversionResult]:
        """
        Convert every candidate of one page and wait for all of them.

        Args:
            candidates: Objects selected from the page

        Returns:
            One ConversionResult per candidate, in candidate order
        """
        futures = []
        for candidate in candidates:
            self._permits.acquire()
            try:
                futures.append(self._executor.submit(self._run, candidate))
            except BaseException:
                self._permits.release()
                raise

        wait(futures)

        results = []
        for candidate, future in zip(candidates, futures):
            try:
                results.append(future.result())
            except Exception as e:
                self.logger.error(f"Unexpected error processing {candidate.key}: {e}")
                results.append(ConversionResult.failed(candidate.key, str(e) or type(e).__name__))
        return results
