"""
ledgerbench - Timing and Throughput Reporting
"""

import time
from dataclasses import dataclass
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class BenchmarkResult:
    """
    Timing of one benchmark phase.

    Attributes:
        title: Phase name, e.g. "Random writes"
        seconds: Elapsed wall-clock time
        operations: Number of operations in the phase
    """

    title: str
    seconds: float
    operations: int

    @property
    def rate(self) -> float:
        """Operations per second (0.0 for a zero-length phase)."""
        if self.seconds <= 0:
            return 0.0
        return self.operations / self.seconds

    def format(self) -> str:
        """One-line report: '<title> <secs> s <rate> tx/s'."""
        return f"{self.title} {self.seconds:6.3f} s {self.rate:6.2f} tx/s"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "title": self.title,
            "seconds": round(self.seconds, 6),
            "operations": self.operations,
            "rate": round(self.rate, 2),
        }


class Stopwatch:
    """
    Context manager measuring elapsed wall-clock time.

    Example:
        >>> with Stopwatch() as sw:
        ...     pass
        >>> sw.elapsed >= 0
        True
    """

    def __init__(self) -> None:
        self._start: float | None = None
        self.elapsed = 0.0

    def __enter__(self) -> "Stopwatch":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.elapsed = time.perf_counter() - self._start


def elapsed(title: str, seconds: float, operations: int) -> BenchmarkResult:
    """Build a result and log it."""
    result = BenchmarkResult(title=title, seconds=seconds, operations=operations)
    logger.info(
        result.format(),
        phase=title,
        seconds=round(seconds, 3),
        rate=round(result.rate, 2),
    )
    return result
