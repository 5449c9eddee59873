"""
Tests for benchmark metrics and configuration.
"""

from prometheus_client import REGISTRY

from ledgerbench.core.config import Settings, get_settings
from ledgerbench.metrics.bench_metrics import get_bench_metrics


def sample(name: str, labels: dict[str, str] | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestBenchMetrics:
    """Tests for BenchMetrics."""

    def test_singleton(self) -> None:
        """Test the global instance is reused."""
        assert get_bench_metrics() is get_bench_metrics()

    def test_record_merkle_verification(self) -> None:
        """Test verification counter by result."""
        metrics = get_bench_metrics()
        before = sample("ledgerbench_merkle_verifications_total", {"result": "invalid"})

        metrics.record_merkle_verification(False, 3)

        after = sample("ledgerbench_merkle_verifications_total", {"result": "invalid"})
        assert after - before == 3

    def test_record_phase(self) -> None:
        """Test phase counters and throughput gauge."""
        metrics = get_bench_metrics()
        before = sample("ledgerbench_phase_operations_total", {"phase": "Build tree"})

        metrics.record_phase("Build tree", 2.0, 100)

        assert sample("ledgerbench_phase_operations_total", {"phase": "Build tree"}) - before == 100
        assert sample("ledgerbench_phase_throughput_ops", {"phase": "Build tree"}) == 50.0

    def test_record_merkle_build(self) -> None:
        """Test build histogram."""
        metrics = get_bench_metrics()
        before = sample("ledgerbench_merkle_build_duration_seconds_count")

        metrics.record_merkle_build(0.01, 1000)

        assert sample("ledgerbench_merkle_build_duration_seconds_count") - before == 1


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        """Test default values."""
        settings = Settings()

        assert settings.DIGEST_ALGORITHM == "sha256"
        assert settings.DIGEST_LENGTH == 32
        assert settings.BENCH_KEY_LENGTH == 20
        assert settings.BENCH_VALUE_LENGTH == 4

    def test_env_override(self, monkeypatch) -> None:
        """Test values are read from the environment."""
        monkeypatch.setenv("BENCH_COUNT", "42")
        monkeypatch.setenv("DIGEST_ALGORITHM", "blake2s")

        settings = Settings()

        assert settings.BENCH_COUNT == 42
        assert settings.DIGEST_ALGORITHM == "blake2s"

    def test_cached(self) -> None:
        """Test get_settings returns a cached instance."""
        assert get_settings() is get_settings()
