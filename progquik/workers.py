"""Per-worker progress counters and a thread pool that reports through them."""

import logging
import threading

__all__ = [
    "Worker",
    "WorkerPool",
]


class Worker:
    """Progress counter owned by a single thread.

    record() is the hot path: it only adds to count and compares against
    mark, an estimate of the count reached after one publish interval. When
    mark is crossed the session merges this worker's progress and decides
    whether to publish new status.
    """

    __slots__ = ("session", "total", "count", "last_count", "last_time", "mark")

    def __init__(self, session, total: int):
        self.session = session
        self.total = total
        self.count = 0
        self.last_count = 0
        self.last_time = 0.0
        self.mark = 0  # Publish as soon as possible

    def record(self, inc: int = 1) -> bool:
        """Account for inc units of work. Returns True if status was published."""
        self.count += inc
        return self.count >= self.mark and self.session._publish(self)

    def __repr__(self) -> str:
        return f"Worker(count={self.count}, total={self.total}, mark={self.mark:.0f})"


class WorkerPool:
    """Runs target over contiguous chunks of range(total) in parallel threads.

    Each chunk gets its own Worker, registered with the session before the
    threads start, and its thread calls target(worker, chunk). Call start()
    then join(); join() raises if any target failed.
    """

    def __init__(self, session, target, total: int, workers: int):
        if workers < 1:
            raise ValueError(f"Need at least one worker thread, got {workers}")
        self.session = session
        self.target = target
        self.total = total
        self.workers = workers
        self.results: list = [None] * workers
        self._errors: list[BaseException] = []
        self._errors_lock = threading.Lock()
        self._threads: list[threading.Thread] = []

    def chunks(self) -> list[range]:
        """Split range(total) into one contiguous chunk per worker."""
        step, extra = divmod(self.total, self.workers)
        out = []
        start = 0
        for i in range(self.workers):
            end = start + step + (1 if i < extra else 0)
            out.append(range(start, end))
            start = end
        return out

    def start(self):
        """Register all workers, then start their threads."""
        # Registering up front keeps the session total complete before any publish
        jobs = [
            (i, chunk, self.session.init_worker(len(chunk)))
            for i, chunk in enumerate(self.chunks())
        ]
        for job in jobs:
            t = threading.Thread(target=self._worker, args=job, daemon=True)
            self._threads.append(t)
            t.start()

    def _worker(self, index: int, chunk: range, worker: Worker):
        try:
            self.results[index] = self.target(worker, chunk)
        except BaseException as e:
            logging.exception("Worker thread exception: %s", e)
            with self._errors_lock:
                self._errors.append(e)

    def join(self) -> list:
        """Wait for all worker threads to finish and return their results."""
        for t in self._threads:
            t.join()
        self._threads.clear()
        if self._errors:
            raise RuntimeError(f"{len(self._errors)} worker thread(s) failed") from self._errors[0]
        return self.results
