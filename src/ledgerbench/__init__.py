"""
ledgerbench - Merkle tree with precomputed inclusion records, plus storage
and signature benchmarks.
"""

__version__ = "0.1.0"
