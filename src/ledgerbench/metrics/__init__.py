"""
ledgerbench - Metrics Module

Prometheus metrics for Merkle operations and benchmark phases.
"""

from ledgerbench.metrics.bench_metrics import (
    BenchMetrics,
    get_bench_metrics,
)

__all__ = [
    "BenchMetrics",
    "get_bench_metrics",
]
