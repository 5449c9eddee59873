"""
ledgerbench - Benchmark Runner

Runs the three benchmarks:
1. Merkle: build one tree over sequential leaves, then verify every leaf
2. Storage: write random keys to a key-value store, then read them back
3. Signatures: sign a batch of digests, then verify every signature

Each benchmark returns a BenchmarkReport holding one BenchmarkResult per
timed phase.
"""

import random
from dataclasses import dataclass, field
from typing import Any

import structlog

from ledgerbench.bench.generators import random_keys, sequential_leaves
from ledgerbench.bench.timing import BenchmarkResult, Stopwatch, elapsed
from ledgerbench.core.config import Settings
from ledgerbench.crypto.digest import get_digest_function
from ledgerbench.crypto.merkle import (
    MerkleProofVerifier,
    MerkleTreeBuilder,
    ProofMismatchError,
)
from ledgerbench.crypto.signing import SigningKeyPair
from ledgerbench.metrics.bench_metrics import BenchMetrics, get_bench_metrics
from ledgerbench.storage.kv_store import KeyValueStore

logger = structlog.get_logger(__name__)


class BenchmarkError(Exception):
    """A verification step inside a benchmark failed."""

    pass


@dataclass
class BenchmarkReport:
    """Outcome of one benchmark."""

    name: str
    count: int
    results: list[BenchmarkResult] = field(default_factory=list)
    failures: int = 0
    root: str | None = None

    @property
    def success(self) -> bool:
        return self.failures == 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "count": self.count,
            "success": self.success,
            "failures": self.failures,
            "root": self.root,
            "results": [r.to_dict() for r in self.results],
        }


class BenchmarkRunner:
    """
    Runs benchmarks with injected digest, randomness and metrics.

    Args:
        builder: Merkle tree builder (its digest is also used by the verifier)
        rng: Random source for key generation
        metrics: Metrics sink, or None to skip metrics
        key_length: Storage key length in bytes
        value_length: Storage value length in bytes
        strict: Raise BenchmarkError on the first failed check instead of
            counting failures
    """

    def __init__(
        self,
        builder: MerkleTreeBuilder | None = None,
        rng: random.Random | None = None,
        metrics: BenchMetrics | None = None,
        key_length: int = 20,
        value_length: int = 4,
        strict: bool = False,
    ) -> None:
        self._builder = builder or MerkleTreeBuilder()
        self._verifier = MerkleProofVerifier(self._builder.digest)
        self._rng = rng or random.Random()
        self._metrics = metrics
        self._key_length = key_length
        self._value_length = value_length
        self._strict = strict

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        seed: int | None = None,
        key_length: int | None = None,
        strict: bool = False,
    ) -> "BenchmarkRunner":
        """
        Create a runner from application settings.

        Args:
            settings: Application settings
            seed: Overrides settings.BENCH_SEED
            key_length: Overrides settings.BENCH_KEY_LENGTH
            strict: Raise on the first failed check

        Raises:
            UnsupportedDigestError: If DIGEST_ALGORITHM is unknown or does not
                produce DIGEST_LENGTH bytes
        """
        digest = get_digest_function(
            settings.DIGEST_ALGORITHM,
            expected_length=settings.DIGEST_LENGTH,
        )
        return cls(
            builder=MerkleTreeBuilder(digest=digest, digest_length=settings.DIGEST_LENGTH),
            rng=random.Random(seed if seed is not None else settings.BENCH_SEED),
            metrics=get_bench_metrics() if settings.METRICS_ENABLED else None,
            key_length=key_length if key_length is not None else settings.BENCH_KEY_LENGTH,
            value_length=settings.BENCH_VALUE_LENGTH,
            strict=strict,
        )

    def _phase(self, report: BenchmarkReport, title: str, sw: Stopwatch, ops: int) -> None:
        report.results.append(elapsed(title, sw.elapsed, ops))
        if self._metrics is not None:
            self._metrics.record_phase(title, sw.elapsed, ops)

    def run_merkle(self, count: int) -> BenchmarkReport:
        """
        Build a tree over count leaves and verify every leaf.

        Raises:
            InvalidLeavesError: If count is 0
            BenchmarkError: In strict mode, if a leaf fails verification
        """
        logger.info("Starting Merkle benchmark", count=count)
        report = BenchmarkReport(name="merkle", count=count)

        with Stopwatch() as sw:
            leaves = sequential_leaves(count, self._builder.digest_length)
        self._phase(report, "Init leaves", sw, count)

        with Stopwatch() as sw:
            root, proofs = self._builder.build(leaves)
        self._phase(report, "Build tree", sw, count)
        report.root = root.hex()

        if self._metrics is not None:
            self._metrics.record_merkle_build(sw.elapsed, count)

        with Stopwatch() as sw:
            for leaf in leaves:
                if self._strict:
                    try:
                        self._verifier.verify_or_raise(root, leaf, proofs)
                    except ProofMismatchError as e:
                        raise BenchmarkError(str(e)) from e
                elif not self._verifier.verify(root, leaf, proofs):
                    report.failures += 1
        self._phase(report, "Verify proofs", sw, count)

        if self._metrics is not None:
            self._metrics.record_merkle_verification(True, count - report.failures)
            if report.failures:
                self._metrics.record_merkle_verification(False, report.failures)

        logger.info(
            "Merkle benchmark completed",
            root=report.root[:16] + "...",
            records=len(proofs),
            failures=report.failures,
        )
        return report

    def run_storage(self, count: int, store: KeyValueStore) -> BenchmarkReport:
        """
        Write count random keys to the store, then read them all back.

        Raises:
            StorageError: On store failure
            BenchmarkError: In strict mode, if a written key is not found
        """
        logger.info("Starting storage benchmark", count=count, key_length=self._key_length)
        report = BenchmarkReport(name="storage", count=count)
        value = bytes(self._value_length)

        with Stopwatch() as sw:
            keys = random_keys(count, self._key_length, self._rng)
        self._phase(report, "Init vector", sw, count)

        with Stopwatch() as sw:
            for key in keys:
                store.put(key, value)
            store.commit()
        self._phase(report, "Random writes", sw, count)

        with Stopwatch() as sw:
            for key in keys:
                if store.get(key) is None:
                    if self._strict:
                        raise BenchmarkError(f"Value not found for key {key.hex()}")
                    report.failures += 1
        self._phase(report, "Random reads", sw, count)

        if report.failures:
            logger.warning("Values not found", missing=report.failures)
            if self._metrics is not None:
                self._metrics.record_storage_miss(report.failures)

        return report

    def run_signatures(
        self,
        count: int,
        key_pair: SigningKeyPair | None = None,
    ) -> BenchmarkReport:
        """
        Sign count message digests and verify every signature.

        Raises:
            BenchmarkError: In strict mode, if a signature does not verify
        """
        key_pair = key_pair or SigningKeyPair.generate()
        logger.info("Starting signature benchmark", count=count, key=key_pair.fingerprint)
        report = BenchmarkReport(name="signatures", count=count)

        digest = self._builder.digest
        messages = [digest(leaf) for leaf in sequential_leaves(count)]

        with Stopwatch() as sw:
            signatures = [key_pair.sign(message) for message in messages]
        self._phase(report, "Sign", sw, count)

        with Stopwatch() as sw:
            for message, signature in zip(messages, signatures):
                if not key_pair.verify(message, signature):
                    if self._strict:
                        raise BenchmarkError(f"Invalid signature for {message.hex()}")
                    report.failures += 1
        self._phase(report, "Verify signatures", sw, count)

        if self._metrics is not None:
            self._metrics.record_signature_verification(True, count - report.failures)
            if report.failures:
                self._metrics.record_signature_verification(False, report.failures)

        return report
