"""Benchmark measuring the cost of progress reporting in a tight loop."""

import sys

from progquik.progress import Session
from progquik.utils import stopwatch

__all__ = ["bench_loop", "run_benchmark"]


def _loop_reporting(session: Session, count: int) -> float:
    worker = session.init(count)
    s = 0.0
    for n in range(1, count + 1):
        s += 1.0 / (n * n)
        if worker.record(1):
            session.write_status(
                "{} [{}] Remaining: {}",
                session.percent(),
                session.bar(0, "#."),
                session.remaining(),
            )
            if session.settings.lock_on_update:
                session.release_lock()
    session.clear()
    return s


def _loop_plain(session: Session, count: int) -> float:
    worker = session.init(count)
    s = 0.0
    for n in range(1, count + 1):
        s += 1.0 / (n * n)
    # One update at completion makes elapsed time and mean rate available
    if worker.record(count) and session.settings.lock_on_update:
        session.release_lock()
    return s


def bench_loop(session: Session, count: int, reporting: bool, max_repeats: int = 3) -> float:
    """Median wall time of summing count terms, with or without reporting."""
    loop = _loop_reporting if reporting else _loop_plain
    times = []
    timer = stopwatch()
    for _ in range(max_repeats):
        next(timer)  # reset
        loop(session, count)
        times.append(next(timer))
    return sorted(times)[len(times) // 2]


def run_benchmark(session: Session, count: int):
    """Compare a loop reporting every term against a plain loop."""
    sys.stdout.write(f"{'progquik':<20}{'seconds':>10}{'terms/s':>12}\n")
    sys.stdout.write("-" * 42 + "\n")
    results = {}
    for reporting in (True, False):
        label = "record(1) per term" if reporting else "plain loop"
        t = bench_loop(session, count, reporting)
        results[reporting] = t
        rate = count / t if t > 0 else float("inf")
        sys.stdout.write(f"{label:<20}{t:>10.3f}{rate:>12.3g}\n")
        sys.stdout.flush()
    sys.stdout.write("-" * 42 + "\n")

    plain = results[False]
    overhead = 100 * (results[True] - plain) / plain if plain > 0 else float("nan")
    sys.stdout.write(f"\n>>> Progress reporting overhead {overhead:.0f}%\n")
