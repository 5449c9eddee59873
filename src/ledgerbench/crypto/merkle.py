"""
ledgerbench - Merkle Tree Implementation

Builds a Merkle root over an ordered list of fixed-size leaf digests and,
in the same pass, records the sibling pair of every node on every level.
Inclusion of any leaf can then be verified by walking those records upward
without re-reading the original leaf list.

Conventions:
- Parent digest is double-hashed: H(H(left || right))
- For an odd number of nodes on a level, the last node is duplicated
  (paired with itself), both for hashing and in the sibling record
- The sibling record maps a node digest to the concatenated pair
  (left || right) it was merged from
- A single leaf is its own root and needs no records
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from ledgerbench.crypto.digest import (
    DEFAULT_DIGEST_LENGTH,
    DigestFunction,
    digest_name,
    double_digest,
    sha256,
)

# Maps a node digest to the (left || right) pair it belongs to
SiblingRecord = dict[bytes, bytes]


class MerkleError(Exception):
    """Base exception for Merkle tree errors."""

    pass


class InvalidLeavesError(MerkleError, ValueError):
    """Leaf list is empty or contains a leaf of the wrong length."""

    pass


class ProofMismatchError(MerkleError):
    """Proof walk ended on a digest that is not the expected root."""

    def __init__(self, leaf: bytes, expected_root: bytes, computed: bytes) -> None:
        self.leaf = leaf
        self.expected_root = expected_root
        self.computed = computed
        super().__init__(
            f"Leaf {leaf.hex()} resolves to {computed.hex()}, "
            f"expected root {expected_root.hex()}"
        )


def compute_parent_hash(
    left: bytes,
    right: bytes,
    digest: DigestFunction = sha256,
) -> bytes:
    """
    Compute the digest of an internal node.

    Args:
        left: Left child digest
        right: Right child digest
        digest: Digest function

    Returns:
        digest(digest(left || right))
    """
    return double_digest(digest, left + right)


class MerkleTreeBuilder:
    """
    Reduces a leaf list to a root while recording sibling pairs.

    The builder is stateless between calls; each build() returns a fresh
    sibling record.

    Example:
        >>> builder = MerkleTreeBuilder()
        >>> root, proofs = builder.build([b"\\x01" * 32, b"\\x02" * 32])
        >>> MerkleProofVerifier().verify(root, b"\\x01" * 32, proofs)
        True
    """

    def __init__(
        self,
        digest: DigestFunction = sha256,
        digest_length: int = DEFAULT_DIGEST_LENGTH,
    ) -> None:
        self._digest = digest
        self._digest_length = digest_length

    @property
    def digest(self) -> DigestFunction:
        return self._digest

    @property
    def digest_length(self) -> int:
        return self._digest_length

    def _validate(self, leaves: Sequence[bytes]) -> None:
        if not leaves:
            raise InvalidLeavesError("Cannot build Merkle tree from empty leaves")

        for i, leaf in enumerate(leaves):
            if len(leaf) != self._digest_length:
                raise InvalidLeavesError(
                    f"Leaf {i} has length {len(leaf)}, "
                    f"expected {self._digest_length}"
                )

    def build(self, leaves: Sequence[bytes]) -> tuple[bytes, SiblingRecord]:
        """
        Build the tree.

        Args:
            leaves: Ordered leaf digests, all of the configured length

        Returns:
            Tuple of (root digest, sibling record)

        Raises:
            InvalidLeavesError: If leaves is empty or a leaf has the wrong length
        """
        self._validate(leaves)

        proofs: SiblingRecord = {}
        current_level = [bytes(leaf) for leaf in leaves]

        while len(current_level) > 1:
            # Record the whole level before computing the next one
            pairs = []
            for i in range(0, len(current_level), 2):
                left = current_level[i]
                right = current_level[i + 1] if i + 1 < len(current_level) else left
                pair = left + right

                proofs[left] = pair
                proofs[right] = pair
                pairs.append(pair)

            current_level = [double_digest(self._digest, pair) for pair in pairs]

        return current_level[0], proofs


class MerkleProofVerifier:
    """
    Verifies leaf inclusion by walking a sibling record up to the root.

    Holds no mutable state; one instance can be shared across threads.
    """

    def __init__(self, digest: DigestFunction = sha256) -> None:
        self._digest = digest

    def _walk(self, leaf: bytes, proofs: Mapping[bytes, bytes]) -> list[bytes]:
        """Return the list of digests visited, starting at leaf."""
        path = [leaf]
        current = leaf

        # Each record is used at most once on a well-formed walk
        max_steps = len(proofs)

        while current in proofs:
            if len(path) > max_steps:
                break
            current = double_digest(self._digest, proofs[current])
            path.append(current)

        return path

    def compute_root(self, leaf: bytes, proofs: Mapping[bytes, bytes]) -> bytes:
        """
        Compute the digest reached by walking the records from a leaf.

        Args:
            leaf: Leaf digest
            proofs: Sibling record produced by MerkleTreeBuilder

        Returns:
            The last digest of the walk
        """
        return self._walk(leaf, proofs)[-1]

    def proof_path(self, leaf: bytes, proofs: Mapping[bytes, bytes]) -> list[bytes]:
        """
        Collect the inclusion proof for a leaf.

        Returns:
            The sibling pairs (left || right) visited from leaf to root
        """
        visited = self._walk(leaf, proofs)
        return [proofs[node] for node in visited[:-1]]

    def verify(self, root: bytes, leaf: bytes, proofs: Mapping[bytes, bytes]) -> bool:
        """
        Check that a leaf is included under a root.

        Args:
            root: Expected root digest
            leaf: Leaf digest to check
            proofs: Sibling record produced by MerkleTreeBuilder

        Returns:
            True if the walk from leaf ends at root
        """
        path = self._walk(leaf, proofs)
        if path[-1] in proofs:
            # Walk was cut short by the step limit
            return False
        return path[-1] == root

    def verify_or_raise(
        self,
        root: bytes,
        leaf: bytes,
        proofs: Mapping[bytes, bytes],
    ) -> None:
        """
        Same as verify() but raises on failure.

        Raises:
            ProofMismatchError: If the leaf does not resolve to root
        """
        if not self.verify(root, leaf, proofs):
            raise ProofMismatchError(leaf, root, self.compute_root(leaf, proofs))


@dataclass(frozen=True)
class MerkleTree:
    """
    Built Merkle tree: root plus a read-only sibling record.

    Attributes:
        root: Root digest
        proofs: Read-only view of the sibling record
        leaf_count: Number of leaves the tree was built from
        digest_name: Name of the digest function used
    """

    root: bytes
    proofs: Mapping[bytes, bytes]
    leaf_count: int
    digest_name: str
    _verifier: MerkleProofVerifier = field(repr=False, compare=False)

    @classmethod
    def from_leaves(
        cls,
        leaves: Sequence[bytes],
        builder: MerkleTreeBuilder | None = None,
    ) -> "MerkleTree":
        """
        Build a tree from leaf digests.

        Args:
            leaves: Ordered leaf digests
            builder: Builder to use (SHA-256, 32-byte leaves by default)

        Raises:
            InvalidLeavesError: If leaves is empty or malformed
        """
        builder = builder or MerkleTreeBuilder()
        root, proofs = builder.build(leaves)
        return cls(
            root=root,
            proofs=MappingProxyType(proofs),
            leaf_count=len(leaves),
            digest_name=digest_name(builder.digest),
            _verifier=MerkleProofVerifier(builder.digest),
        )

    @property
    def root_hex(self) -> str:
        """Root digest as hex."""
        return self.root.hex()

    @property
    def depth(self) -> int:
        """Number of levels above the leaves (proof path length)."""
        return (self.leaf_count - 1).bit_length()

    def verify(self, leaf: bytes) -> bool:
        """Check that a leaf is included in this tree."""
        return self._verifier.verify(self.root, leaf, self.proofs)

    def verify_or_raise(self, leaf: bytes) -> None:
        self._verifier.verify_or_raise(self.root, leaf, self.proofs)

    def get_proof_path(self, leaf: bytes) -> list[bytes]:
        """Sibling pairs from leaf to root."""
        return self._verifier.proof_path(leaf, self.proofs)


def build_tree(
    leaves: Sequence[bytes],
    digest: DigestFunction = sha256,
    digest_length: int = DEFAULT_DIGEST_LENGTH,
) -> tuple[bytes, SiblingRecord]:
    """
    Build root and sibling record.

    Args:
        leaves: Ordered leaf digests
        digest: Digest function
        digest_length: Required leaf length in bytes

    Returns:
        Tuple of (root, sibling record)
    """
    builder = MerkleTreeBuilder(digest=digest, digest_length=digest_length)
    return builder.build(leaves)


def verify_inclusion(
    root: bytes,
    leaf: bytes,
    proofs: Mapping[bytes, bytes],
    digest: DigestFunction = sha256,
) -> bool:
    """
    Verify that a leaf resolves to root through the sibling record.

    Returns:
        True if the leaf is included
    """
    return MerkleProofVerifier(digest).verify(root, leaf, proofs)
