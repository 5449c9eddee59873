"""
ledgerbench - Cryptographic Utilities

Provides digest functions, Merkle tree construction with precomputed
inclusion records, proof verification, and ECDSA signing.
"""

from ledgerbench.crypto.digest import (
    DigestFunction,
    UnsupportedDigestError,
    double_digest,
    get_digest_function,
    sha256,
)
from ledgerbench.crypto.merkle import (
    InvalidLeavesError,
    MerkleError,
    MerkleProofVerifier,
    MerkleTree,
    MerkleTreeBuilder,
    ProofMismatchError,
    SiblingRecord,
    build_tree,
    compute_parent_hash,
    verify_inclusion,
)
from ledgerbench.crypto.signing import SigningError, SigningKeyPair

__all__ = [
    "DigestFunction",
    "UnsupportedDigestError",
    "double_digest",
    "get_digest_function",
    "sha256",
    "InvalidLeavesError",
    "MerkleError",
    "MerkleProofVerifier",
    "MerkleTree",
    "MerkleTreeBuilder",
    "ProofMismatchError",
    "SiblingRecord",
    "build_tree",
    "compute_parent_hash",
    "verify_inclusion",
    "SigningError",
    "SigningKeyPair",
]
