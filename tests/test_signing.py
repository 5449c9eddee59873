"""
Unit tests for ECDSA signing.
"""

from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from ledgerbench.crypto.digest import sha256
from ledgerbench.crypto.signing import SigningError, SigningKeyPair


@pytest.fixture(scope="module")
def key_pair() -> SigningKeyPair:
    """Generate one key pair for the module."""
    return SigningKeyPair.generate()


class TestSigningKeyPair:
    """Tests for SigningKeyPair."""

    def test_sign_and_verify(self, key_pair: SigningKeyPair) -> None:
        """Test a fresh signature verifies."""
        message = sha256(b"payload")
        signature = key_pair.sign(message)

        assert key_pair.verify(message, signature)

    def test_tampered_message_fails(self, key_pair: SigningKeyPair) -> None:
        """Test signature does not verify for another message."""
        signature = key_pair.sign(sha256(b"payload"))

        assert not key_pair.verify(sha256(b"other"), signature)

    def test_other_key_fails(self, key_pair: SigningKeyPair) -> None:
        """Test signature does not verify under another key."""
        message = sha256(b"payload")
        signature = key_pair.sign(message)

        assert not SigningKeyPair.generate().verify(message, signature)

    def test_malformed_signature_fails(self, key_pair: SigningKeyPair) -> None:
        """Test garbage signature bytes return False."""
        assert not key_pair.verify(sha256(b"payload"), b"\x30\x00")

    def test_fingerprint(self, key_pair: SigningKeyPair) -> None:
        """Test fingerprint format and stability."""
        assert len(key_pair.fingerprint) == 16
        assert key_pair.fingerprint == key_pair.fingerprint
        assert key_pair.fingerprint != SigningKeyPair.generate().fingerprint

    def test_public_key_pem(self, key_pair: SigningKeyPair) -> None:
        """Test PEM export."""
        assert key_pair.public_key_pem().startswith(b"-----BEGIN PUBLIC KEY-----")

    def test_from_pem_file(self, key_pair: SigningKeyPair, tmp_path: Path) -> None:
        """Test loading a key written to disk."""
        path = tmp_path / "key.pem"
        path.write_bytes(
            key_pair.private_key.private_bytes(
                serialization.Encoding.PEM,
                serialization.PrivateFormat.PKCS8,
                serialization.NoEncryption(),
            )
        )

        loaded = SigningKeyPair.from_pem_file(path)

        assert loaded.fingerprint == key_pair.fingerprint
        assert loaded.verify(b"m", key_pair.sign(b"m"))

    def test_from_pem_file_rejects_non_ec_key(self, tmp_path: Path) -> None:
        """Test loading a non-EC key raises."""
        path = tmp_path / "ed.pem"
        path.write_bytes(
            ed25519.Ed25519PrivateKey.generate().private_bytes(
                serialization.Encoding.PEM,
                serialization.PrivateFormat.PKCS8,
                serialization.NoEncryption(),
            )
        )

        with pytest.raises(SigningError, match="not an EC"):
            SigningKeyPair.from_pem_file(path)

    def test_from_pem_file_rejects_garbage(self, tmp_path: Path) -> None:
        """Test loading an invalid file raises."""
        path = tmp_path / "bad.pem"
        path.write_bytes(b"not a key")

        with pytest.raises(SigningError):
            SigningKeyPair.from_pem_file(path)
