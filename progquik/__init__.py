"""progquik - Low-overhead progress indicators for long-running computations.

Worker threads report work through a cheap counter; status is published a few
times per second and rendered as terminal status lines with auto-sized bars.
"""

from progquik.bar import Bar, render_bar
from progquik.progress import Session, Settings, Snapshot
from progquik.stats import format_interval, format_percent, format_rate
from progquik.workers import Worker, WorkerPool

__version__ = "0.1.0"

__all__ = [
    "Bar",
    "Session",
    "Settings",
    "Snapshot",
    "Worker",
    "WorkerPool",
    "__version__",
    "format_interval",
    "format_percent",
    "format_rate",
    "render_bar",
]
