"""
ledgerbench - ECDSA Signing

ECDSA P-256 key pair used by the signature benchmark. Messages are
signed with SHA-256 and signatures are DER encoded.
"""

import hashlib
from dataclasses import dataclass
from pathlib import Path

import structlog
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

logger = structlog.get_logger(__name__)


class SigningError(Exception):
    """Base exception for signing errors."""

    pass


@dataclass(frozen=True)
class SigningKeyPair:
    """
    ECDSA private/public key pair.

    Attributes:
        private_key: Private key used for signing
        public_key: Matching public key used for verification
    """

    private_key: ec.EllipticCurvePrivateKey
    public_key: ec.EllipticCurvePublicKey

    @classmethod
    def generate(cls) -> "SigningKeyPair":
        """Generate a fresh SECP256R1 key pair."""
        private_key = ec.generate_private_key(ec.SECP256R1())
        return cls(private_key=private_key, public_key=private_key.public_key())

    @classmethod
    def from_pem_file(cls, path: str | Path) -> "SigningKeyPair":
        """
        Load an unencrypted PEM private key.

        Raises:
            SigningError: If the file does not hold an EC private key
        """
        pem = Path(path).read_bytes()
        try:
            private_key = serialization.load_pem_private_key(pem, password=None)
        except ValueError as e:
            raise SigningError(f"Cannot load private key from {path}: {e}") from e

        if not isinstance(private_key, ec.EllipticCurvePrivateKey):
            raise SigningError(f"Key in {path} is not an EC private key")

        logger.debug("Loaded signing key", path=str(path))
        return cls(private_key=private_key, public_key=private_key.public_key())

    @property
    def fingerprint(self) -> str:
        """First 16 hex chars of the SHA-256 of the DER public key."""
        der = self.public_key.public_bytes(
            serialization.Encoding.DER,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        return hashlib.sha256(der).hexdigest()[:16]

    def public_key_pem(self) -> bytes:
        return self.public_key.public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Args:
            message: Bytes to sign (typically a digest)

        Returns:
            DER-encoded ECDSA signature
        """
        return self.private_key.sign(message, ec.ECDSA(hashes.SHA256()))

    def verify(self, message: bytes, signature: bytes) -> bool:
        """
        Verify a signature against this key pair's public key.

        Returns:
            True if the signature is valid, False otherwise
        """
        try:
            self.public_key.verify(signature, message, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature:
            return False
        return True
