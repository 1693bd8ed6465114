"""Command-line demo: sums the Basel series while showing progress."""

import argparse
import logging
import math
import sys

import tracerite

from progquik.benchmark import run_benchmark
from progquik.progress import Session, Settings
from progquik.utils import parse_count
from progquik.workers import Worker, WorkerPool

tracerite.load()

__all__ = ["main"]

DEFAULT_COUNT = "5m"

SPINNER = "|/-\\"


def show_bar(s: Session):
    s.write_status(
        "{} {} [{}] Remaining: {}, Speed: {} terms/s",
        s.percent(),
        s.throbber(SPINNER),
        s.bar(0, "#."),
        s.remaining(),
        s.rate(),
    )


def show_fixed(s: Session):
    s.write_status(
        "{} {} [{}] Remaining: {}, Speed: {} terms/s",
        s.percent(),
        s.throbber(".oOo"),
        s.bar(20, "#."),
        s.remaining(),
        s.rate(),
    )


def show_text(s: Session):
    label = f" {s.percent()} {s.throbber(SPINNER)} "
    s.write_status(
        "[{}] Remaining: {}, Speed: {} terms/s", s.bar(0, "#.", label), s.remaining(), s.rate()
    )


def show_reverse(s: Session):
    label = f" {s.percent()} {s.throbber(SPINNER)} "
    s.write_status(
        "|{}| Remaining: {}, Speed: {} terms/s", s.bar(0, ":", label), s.remaining(), s.rate()
    )


def show_multiline(s: Session):
    s.write_status("[{}] {} {}", s.bar(0, "#."), s.percent(), s.throbber(SPINNER))
    s.write_status("Remaining: {}, Speed: {} terms/s", s.remaining(), s.rate())
    s.write_status("Terms summed: {}", s.count)


STYLES = {
    "bar": show_bar,
    "fixed": show_fixed,
    "text": show_text,
    "reverse": show_reverse,
    "multiline": show_multiline,
    "final": show_text,
}


def basel_sum(session: Session, worker: Worker, terms: range, show) -> float:
    """Compensated sum of 1/n² over terms (1-based), reporting each term."""
    s = 0.0
    c = 0.0
    for n in terms:
        x = 1.0 / ((n + 1) * (n + 1))
        y = x + c
        t = s + y
        c = y - (t - s)
        s = t
        if worker.record(1):
            try:
                show(session)
            finally:
                if session.settings.lock_on_update:
                    session.release_lock()
    return s


def print_summary(session: Session, total: float, replace: bool):
    """Print the final status line and the result."""
    if replace:
        session.clear()
    line = f"Elapsed: {session.elapsed()}, Mean speed: {session.mean_rate()} terms/s"
    if session.renderer.usable:
        session.write_raw(line)
        print()
    else:
        print(line)
    print(f"pi = {math.sqrt(6 * total):.14f}")


def _main():
    """Internal main function that may raise exceptions."""
    parser = argparse.ArgumentParser(
        description="Progress indicator demo: approximate pi by summing 1/n²"
    )
    parser.add_argument(
        "-n",
        "--count",
        help=f"Number of terms to sum (e.g. 100k, 5m, 1g; default: {DEFAULT_COUNT})",
        type=str,
        default=DEFAULT_COUNT,
    )
    parser.add_argument(
        "-t",
        "--threads",
        help="Number of worker threads (default: sum in the main thread)",
        type=int,
        default=0,
    )
    parser.add_argument(
        "-i",
        "--interval",
        help="Seconds between status updates (default: 0.2)",
        type=float,
        default=0.2,
    )
    parser.add_argument(
        "-s",
        "--style",
        choices=sorted(STYLES),
        default="bar",
        help="Status line style (default: bar)",
    )
    parser.add_argument(
        "--lock",
        action="store_true",
        help="Hold the progress lock while printing (serializes output of threads)",
    )
    parser.add_argument(
        "--benchmark",
        action="store_true",
        help="Measure the overhead of progress reporting",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose mode: debug logging",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    count = parse_count(args.count)
    if args.threads < 0:
        raise ValueError("Number of threads cannot be negative")

    settings = Settings(interval=args.interval, lock_on_update=args.lock)
    session = Session(settings)

    if args.benchmark:
        run_benchmark(session, count)
        return

    print(f"Summing {count} terms")
    show = STYLES[args.style]

    if args.threads == 0:
        worker = session.init(count)
        total = basel_sum(session, worker, range(count), show)
    else:
        # The main thread only coordinates
        session.init(0)
        pool = WorkerPool(
            session,
            lambda worker, chunk: basel_sum(session, worker, chunk, show),
            count,
            args.threads,
        )
        pool.start()
        total = sum(pool.join())

    print_summary(session, total, replace=args.style == "final")


def main():
    """Main entry point for the CLI with exception handling."""
    try:
        _main()
    except (KeyboardInterrupt, BrokenPipeError):
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
