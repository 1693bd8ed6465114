"""Progress session: aggregates worker counts and publishes status lines.

A Session is shared by every thread taking part in one tracked task. Each
thread reports through its own Worker (see progquik.workers), whose record()
method costs a single add and compare. Only when a worker's adaptive mark is
crossed does the session lock, merge the worker's progress and, at most about
once per interval, publish a new Snapshot and erase the previous status lines
so the caller can print fresh ones:

    session = Session()
    worker = session.init(len(items))
    for item in items:
        process(item)
        if worker.record(1):
            session.write_status(
                "{} [{}] {} left", session.percent(), session.bar(0, "#."),
                session.remaining(),
            )
"""

import logging
import math
import sys
import threading
from dataclasses import dataclass
from typing import TextIO

from progquik.bar import MIN_BAR_LEN, Bar
from progquik.escapes import printable_len
from progquik.stats import Throbber, format_interval, format_percent, format_rate
from progquik.terminal import MAX_LINE_LEN, Renderer, get_width
from progquik.utils import Clock
from progquik.workers import Worker

__all__ = ["Session", "Settings", "Snapshot"]


@dataclass
class Settings:
    """Session configuration, read when the session is initialized."""

    output: TextIO | None = None  # Status line stream, sys.stdout if None
    interval: float = 0.2  # Seconds between published updates
    lock_on_update: bool = False  # Keep the lock after publishing until release_lock()
    publish_threshold: float = 0.8  # Fraction of interval that allows a publish
    min_bar_len: int = MIN_BAR_LEN
    max_line_len: int = MAX_LINE_LEN  # Also the longest bar

    def validate(self):
        if not self.interval > 0:
            raise ValueError(f"Publish interval must be positive, got {self.interval}")
        if not 0 < self.publish_threshold <= 1:
            raise ValueError(
                f"Publish threshold must be in (0, 1], got {self.publish_threshold}"
            )
        if self.min_bar_len < 1:
            raise ValueError(f"Minimum bar length must be positive, got {self.min_bar_len}")
        if self.max_line_len < self.min_bar_len:
            raise ValueError(
                f"Maximum line length {self.max_line_len} is below the minimum "
                f"bar length {self.min_bar_len}"
            )


@dataclass(frozen=True)
class Snapshot:
    """Published status, replaced as a whole on every publish.

    Times are in seconds, rates in work units per second. Values that cannot
    be estimated yet are nan.
    """

    progress: float = 0.0
    elapsed: float = 0.0
    remaining: float = math.nan
    instant_rate: float = math.nan  # Over the last publish interval
    mean_rate: float = math.nan  # Since init
    terminal_width: int = -1  # Terminal columns, -1 if not a terminal


def _ratio(a: float, b: float) -> float:
    """a / b giving nan or inf for a zero divisor instead of raising."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a)


class Session:
    """Shared progress state for one tracked task.

    Call init() to start (or restart) tracking; it registers the calling
    thread as a worker. Other threads get their own counter from
    init_worker(). Status fields in snapshot and the formatting helpers are
    valid right after a record() call returned True.
    """

    def __init__(self, settings: Settings | None = None, clock: Clock | None = None):
        self.settings = settings or Settings()
        self.clock = clock or Clock()
        self._lock = threading.Lock()
        self._throbber = Throbber()
        self._total = 0
        self._count = 0
        self._last_count = 0
        self._last_time = 0.0
        # Expanding bars waiting for the line width. Updated by the printing
        # thread without the lock, which it may already hold (lock_on_update)
        self._pending_expand = 0
        self.snapshot = Snapshot()
        self.renderer = Renderer(self._output(), self.settings.max_line_len)

    def _output(self) -> TextIO:
        return self.settings.output if self.settings.output is not None else sys.stdout

    @property
    def total(self) -> int:
        return self._total

    @property
    def count(self) -> int:
        return self._count

    def init(self, total_work: int = 0) -> Worker:
        """Reset all progress and register the calling thread as a worker.

        Args:
            total_work: Work units done by the caller itself, 0 for a thread
                that only coordinates other workers

        Returns:
            The caller's Worker
        """
        self.settings.validate()
        output = self._output()
        with self._lock:
            self.clock.reset()
            self._total = 0
            self._count = 0
            self._last_count = 0
            self._last_time = 0.0
            self._pending_expand = 0
            self._throbber = Throbber()
            self.snapshot = Snapshot()
            self.renderer = Renderer(output, self.settings.max_line_len)
        if get_width(output) < 0:
            logging.debug("Status output %r is not a terminal, status lines disabled", output)
        worker = self.init_worker(total_work)
        logging.debug("Progress session started with %d work units", total_work)
        return worker

    def init_worker(self, total_work: int) -> Worker:
        """Register one more worker doing total_work units."""
        if total_work < 0:
            raise ValueError(f"Work total must not be negative, got {total_work}")
        with self._lock:
            self._total += total_work
        return Worker(self, total_work)

    def _publish(self, worker: Worker) -> bool:
        """Merge a worker that crossed its mark, publishing if it is time to.

        Returns True after publishing a new snapshot. With lock_on_update the
        lock is then still held and must be freed with release_lock().
        """
        settings = self.settings
        hold = False
        self._lock.acquire()
        try:
            now = self.clock()

            # Predict the count reached one interval from now
            delta = worker.count - worker.last_count
            dt = now - worker.last_time
            if dt > 0:
                worker.mark += settings.interval * delta / dt
            # The total is always a mark, so completion is always published
            if worker.count < worker.total and worker.mark > worker.total:
                worker.mark = worker.total
            worker.last_count = worker.count
            worker.last_time = now

            self._count += delta
            global_dt = now - self._last_time

            # Marks are estimates: accept a publish a bit before the interval
            ready = global_dt > settings.publish_threshold * settings.interval
            first = self._count == delta
            finished = worker.count == worker.total
            if not (ready or first or finished):
                return False

            # Instant rate is noisy over short spans, keep the previous one
            rate = self.snapshot.instant_rate
            if ready:
                rate = _ratio(self._count - self._last_count, global_dt)
            width = self.renderer.update_width()
            self.snapshot = Snapshot(
                progress=self._count / self._total if self._total else 1.0,
                elapsed=now,
                remaining=_ratio(self._total - self._count, rate),
                instant_rate=rate,
                mean_rate=_ratio(self._count, now),
                terminal_width=width,
            )
            self._last_count = self._count
            self._last_time = now
            self._pending_expand = 0

            self.renderer.erase()
            hold = settings.lock_on_update
            return True
        finally:
            if not hold:
                self._lock.release()

    def release_lock(self):
        """End the critical section kept open by lock_on_update."""
        self._lock.release()

    # Formatting helpers for the current snapshot

    def percent(self) -> str:
        return format_percent(self.snapshot.progress)

    def elapsed(self) -> str:
        return format_interval(self.snapshot.elapsed)

    def remaining(self) -> str:
        return format_interval(self.snapshot.remaining)

    def rate(self) -> str:
        return format_rate(self.snapshot.instant_rate)

    def mean_rate(self) -> str:
        return format_rate(self.snapshot.mean_rate)

    def throbber(self, anim: str) -> str:
        """Next frame of anim, or a blank once all work is done."""
        return self._throbber(anim, done=self._count == self._total)

    def bar(self, length: int = 0, fill: str = "#.", label: str = "") -> Bar:
        """Progress bar for the current snapshot.

        Length 0 makes the bar take the space left on the line; such a bar
        is sized by write_status() and must be passed to it as an argument.
        """
        bar = Bar(
            self.snapshot.progress,
            length,
            fill,
            label,
            self.settings.min_bar_len,
            self.settings.max_line_len,
        )
        if bar.expand:
            self._pending_expand += 1
        return bar

    # Output

    def write_status(self, fmt: str, *args, **kwargs):
        """Write one status line built with fmt.format(*args, **kwargs).

        Expanding bars among the arguments share the columns left by the
        rest of the line, so the line fills the terminal width.
        """
        if not self.renderer.usable:
            self._pending_expand = 0
            return
        pending = [a for a in (*args, *kwargs.values()) if isinstance(a, Bar) and a.pending]
        if pending:
            expandable = max(self._pending_expand, len(pending))
            # First pass: everything but the expanding bars
            avail = self.renderer.line_width - printable_len(fmt.format(*args, **kwargs))
            size = avail // expandable if avail > expandable else 1
            for bar in pending:
                bar.resolve(size)
        self._pending_expand = 0
        self.renderer.write_line(fmt.format(*args, **kwargs))

    def write_raw(self, text: str):
        """Write text as one status line, without bar sizing."""
        self.renderer.write_line(text)

    def clear(self):
        """Erase the status lines, e.g. before printing a final summary."""
        self.renderer.erase()
