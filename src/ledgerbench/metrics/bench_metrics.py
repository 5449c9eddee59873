"""
ledgerbench - Benchmark Metrics

Prometheus metrics for Merkle tree operations and benchmark phases.

Metrics Categories:
- Merkle tree building
- Proof verification
- Benchmark phase duration and throughput
- Storage misses
- Signature checks
"""

from prometheus_client import Counter, Gauge, Histogram, Info

import structlog

logger = structlog.get_logger(__name__)


class BenchMetrics:
    """
    Centralized metrics for ledgerbench.

    Provides visibility into:
    - Merkle build time and tree size
    - Proof verification results
    - Per-phase benchmark duration and throughput
    """

    def __init__(self) -> None:
        """Initialize all benchmark metrics."""
        self._init_merkle_metrics()
        self._init_phase_metrics()
        self._init_storage_metrics()
        self._init_signature_metrics()
        self._init_info_metrics()

    def _init_merkle_metrics(self) -> None:
        """Initialize Merkle tree metrics."""
        self.merkle_build_duration = Histogram(
            "ledgerbench_merkle_build_duration_seconds",
            "Merkle tree build time",
            buckets=[0.001, 0.01, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0],
        )

        self.merkle_tree_size = Histogram(
            "ledgerbench_merkle_tree_size",
            "Number of leaves in Merkle tree",
            buckets=[10, 100, 1000, 10000, 100000, 1000000, 10000000],
        )

        self.merkle_verifications = Counter(
            "ledgerbench_merkle_verifications_total",
            "Merkle proof verifications",
            ["result"],
        )

    def _init_phase_metrics(self) -> None:
        """Initialize benchmark phase metrics."""
        self.phase_duration = Histogram(
            "ledgerbench_phase_duration_seconds",
            "Benchmark phase duration",
            ["phase"],
            buckets=[0.01, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0, 300.0],
        )

        self.phase_operations = Counter(
            "ledgerbench_phase_operations_total",
            "Operations executed per benchmark phase",
            ["phase"],
        )

        self.phase_throughput = Gauge(
            "ledgerbench_phase_throughput_ops",
            "Throughput of the last run of a phase (operations per second)",
            ["phase"],
        )

    def _init_storage_metrics(self) -> None:
        """Initialize storage metrics."""
        self.storage_misses = Counter(
            "ledgerbench_storage_misses_total",
            "Reads that found no value for a written key",
        )

    def _init_signature_metrics(self) -> None:
        """Initialize signature metrics."""
        self.signature_verifications = Counter(
            "ledgerbench_signature_verifications_total",
            "Signature verifications",
            ["result"],
        )

    def _init_info_metrics(self) -> None:
        """Initialize info metrics."""
        self.service_info = Info(
            "ledgerbench",
            "ledgerbench run information",
        )

    # Convenience methods

    def record_merkle_build(self, duration: float, tree_size: int) -> None:
        """Record Merkle tree build."""
        self.merkle_build_duration.observe(duration)
        self.merkle_tree_size.observe(tree_size)

    def record_merkle_verification(self, valid: bool, count: int = 1) -> None:
        """Record Merkle proof verifications."""
        result = "valid" if valid else "invalid"
        self.merkle_verifications.labels(result=result).inc(count)

    def record_phase(self, phase: str, duration: float, operations: int) -> None:
        """Record a completed benchmark phase."""
        self.phase_duration.labels(phase=phase).observe(duration)
        self.phase_operations.labels(phase=phase).inc(operations)
        if duration > 0:
            self.phase_throughput.labels(phase=phase).set(operations / duration)

    def record_storage_miss(self, count: int = 1) -> None:
        self.storage_misses.inc(count)

    def record_signature_verification(self, valid: bool, count: int = 1) -> None:
        """Record signature verifications."""
        result = "valid" if valid else "invalid"
        self.signature_verifications.labels(result=result).inc(count)

    def set_service_info(
        self,
        version: str,
        environment: str,
        digest_algorithm: str = "sha256",
    ) -> None:
        """Set run info labels."""
        self.service_info.info({
            "version": version,
            "environment": environment,
            "digest_algorithm": digest_algorithm,
        })


# Singleton instance
_bench_metrics: BenchMetrics | None = None


def get_bench_metrics() -> BenchMetrics:
    """Get global benchmark metrics instance."""
    global _bench_metrics
    if _bench_metrics is None:
        _bench_metrics = BenchMetrics()
        logger.debug("Benchmark metrics initialized")
    return _bench_metrics
