"""
ledgerbench - Benchmark Harness

Generators, timing, and the benchmark runner.
"""

from ledgerbench.bench.generators import random_keys, sequential_leaf, sequential_leaves
from ledgerbench.bench.runner import BenchmarkError, BenchmarkReport, BenchmarkRunner
from ledgerbench.bench.timing import BenchmarkResult, Stopwatch, elapsed

__all__ = [
    "random_keys",
    "sequential_leaf",
    "sequential_leaves",
    "BenchmarkError",
    "BenchmarkReport",
    "BenchmarkRunner",
    "BenchmarkResult",
    "Stopwatch",
    "elapsed",
]
