"""
Pytest configuration and shared fixtures for ledgerbench tests.
"""

import random
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from ledgerbench.bench.runner import BenchmarkRunner
from ledgerbench.crypto.merkle import MerkleProofVerifier, MerkleTreeBuilder
from ledgerbench.metrics.bench_metrics import BenchMetrics


def make_leaf(marker: int) -> bytes:
    """32-byte leaf filled with one byte value."""
    return bytes([marker]) * 32


@pytest.fixture
def builder() -> MerkleTreeBuilder:
    """Create a SHA-256 tree builder."""
    return MerkleTreeBuilder()


@pytest.fixture
def verifier() -> MerkleProofVerifier:
    """Create a SHA-256 proof verifier."""
    return MerkleProofVerifier()


@pytest.fixture
def three_leaves() -> list[bytes]:
    """Leaves A, B, C."""
    return [make_leaf(0xA), make_leaf(0xB), make_leaf(0xC)]


@pytest.fixture
def four_leaves() -> list[bytes]:
    """Leaves A, B, C, D."""
    return [make_leaf(0xA), make_leaf(0xB), make_leaf(0xC), make_leaf(0xD)]


@pytest.fixture
def mock_metrics() -> MagicMock:
    """Create a mock metrics sink."""
    return MagicMock(spec=BenchMetrics)


@pytest.fixture
def runner(mock_metrics: MagicMock) -> BenchmarkRunner:
    """Create a seeded benchmark runner with mock metrics."""
    return BenchmarkRunner(rng=random.Random(1234), metrics=mock_metrics)


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    """SQLite URL in a temporary directory."""
    return f"sqlite:///{tmp_path / 'storage.db'}"
