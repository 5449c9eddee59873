"""
ledgerbench - Main Entry Point

Runs the Merkle, storage and signature benchmarks from the command line.

Usage:
    ledgerbench merkle [--count N]
    ledgerbench storage [--count N] [--key-length N] [--storage-url URL]
    ledgerbench signatures [--count N]
    ledgerbench all [--count N]

Common options: --seed, --json, --strict, --log-level, --metrics-port
"""

import argparse
import json
import sys
from collections.abc import Sequence

import structlog
from prometheus_client import start_http_server

from ledgerbench.bench.runner import BenchmarkError, BenchmarkReport, BenchmarkRunner
from ledgerbench.core.config import settings
from ledgerbench.core.logging import setup_logging
from ledgerbench.crypto.digest import UnsupportedDigestError
from ledgerbench.crypto.merkle import MerkleError
from ledgerbench.metrics.bench_metrics import get_bench_metrics
from ledgerbench.storage.kv_store import StorageError, open_store

logger = structlog.get_logger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

BENCHMARKS = ("merkle", "storage", "signatures")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ledgerbench",
        description="Merkle, storage and signature benchmarks",
    )
    parser.add_argument(
        "benchmark",
        choices=BENCHMARKS + ("all",),
        help="Benchmark to run",
    )
    parser.add_argument(
        "--count", "-n",
        type=int,
        default=settings.BENCH_COUNT,
        help=f"Number of items (default: {settings.BENCH_COUNT})",
    )
    parser.add_argument(
        "--key-length",
        type=int,
        default=settings.BENCH_KEY_LENGTH,
        help=f"Storage key length in bytes (default: {settings.BENCH_KEY_LENGTH})",
    )
    parser.add_argument(
        "--storage-url",
        default=settings.STORAGE_URL,
        help="SQLAlchemy URL or memory:// (default: %(default)s)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.BENCH_SEED,
        help="Seed for random key generation",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first failed verification",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print reports as JSON",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help="Log level (default: %(default)s)",
    )
    parser.add_argument(
        "--metrics-port",
        type=int,
        default=settings.METRICS_PORT,
        help="Expose Prometheus metrics on this port",
    )
    return parser


def run(args: argparse.Namespace) -> list[BenchmarkReport]:
    """Run the selected benchmarks and return their reports."""
    runner = BenchmarkRunner.from_settings(
        settings,
        seed=args.seed,
        key_length=args.key_length,
        strict=args.strict,
    )

    selected = BENCHMARKS if args.benchmark == "all" else (args.benchmark,)
    reports = []

    logger.info(
        f"Working with {args.count} elements with key length {args.key_length} bytes",
        benchmarks=list(selected),
    )

    for name in selected:
        if name == "merkle":
            reports.append(runner.run_merkle(args.count))
        elif name == "storage":
            with open_store(args.storage_url) as store:
                reports.append(runner.run_storage(args.count, store))
        elif name == "signatures":
            reports.append(runner.run_signatures(args.count))

    return reports


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    if args.count < 0:
        parser.error("--count must be non-negative")
    if args.key_length <= 0:
        parser.error("--key-length must be positive")

    logger.info(
        "Starting ledgerbench",
        version=settings.VERSION,
        environment=settings.ENV,
        digest=settings.DIGEST_ALGORITHM,
    )

    if settings.METRICS_ENABLED:
        get_bench_metrics().set_service_info(
            version=settings.VERSION,
            environment=settings.ENV,
            digest_algorithm=settings.DIGEST_ALGORITHM,
        )
        if args.metrics_port:
            start_http_server(args.metrics_port)
            logger.info("Metrics server started", port=args.metrics_port)

    try:
        reports = run(args)
    except BenchmarkError as e:
        logger.error("Verification failed", error=str(e))
        return EXIT_VERIFICATION_FAILED
    except (MerkleError, StorageError, UnsupportedDigestError) as e:
        logger.error("Benchmark failed", error=str(e))
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps([r.to_dict() for r in reports], indent=2))
    else:
        for report in reports:
            for result in report.results:
                print(result.format())

    if not all(r.success for r in reports):
        return EXIT_VERIFICATION_FAILED
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
