from dataclasses import dataclass
from typing import Any, Dict, Optional

import pgpy
from cryptography.exceptions import UnsupportedAlgorithm
from pgpy.constants import (
    CompressionAlgorithm,
    EllipticCurveOID,
    HashAlgorithm,
    KeyFlags,
    PubKeyAlgorithm,
    SymmetricKeyAlgorithm,
)
from pgpy.errors import PGPError

from ..errors import KeyGenerationError
from ..identity import DEFAULT_DISPLAY_NAME, Identity, derive_identity
from ..utils import get_logger

logger = get_logger(__name__)

SUPPORTED_ALGORITHMS = ("rsa", "ed25519")
MIN_RSA_KEY_SIZE = 1024

# Failures PGPy and the cryptography backend surface while building keys.
_BACKEND_ERRORS = (PGPError, UnsupportedAlgorithm, NotImplementedError, ValueError)


@dataclass
class KeySettings:
    """Parameters shared by every generated key."""
    algorithm: str = "rsa"
    key_size: int = 2048
    display_name: str = DEFAULT_DISPLAY_NAME
    self_check: bool = True

    def __post_init__(self) -> None:
        self.algorithm = str(self.algorithm).lower()
        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unknown key algorithm '{self.algorithm}'")
        try:
            self.key_size = int(self.key_size)
        except (TypeError, ValueError) as exc:
            raise ValueError("key_size must be an integer") from exc
        if self.algorithm == "rsa" and self.key_size < MIN_RSA_KEY_SIZE:
            raise ValueError(f"RSA key_size must be at least {MIN_RSA_KEY_SIZE}")
        if not str(self.display_name).strip():
            raise ValueError("display_name cannot be empty")

    @classmethod
    def from_mapping(cls, data: Optional[Dict[str, Any]]) -> "KeySettings":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("'key' must be a mapping of key settings")
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown key setting(s): {', '.join(sorted(unknown))}")
        return cls(**data)


@dataclass(frozen=True)
class KeyRecord:
    """Armored key material generated for one identity name."""
    name: str
    fingerprint: str
    armored_public_key: str
    armored_private_key: str


def fingerprint_hex(key: pgpy.PGPKey) -> str:
    """Lowercase hex fingerprint of the primary key, without spaces."""
    return str(key.fingerprint).replace(" ", "").lower()


def load_armored_key(text: str) -> pgpy.PGPKey:
    """Parse an ASCII-armored public or private key block."""
    key, _ = pgpy.PGPKey.from_blob(text)
    return key


def generate_key(identity: Identity, settings: KeySettings) -> pgpy.PGPKey:
    """
    Create an unprotected signing key carrying a single user ID for ``identity``.
    Backend exceptions propagate unchanged.
    """
    if settings.algorithm == "ed25519":
        key = pgpy.PGPKey.new(PubKeyAlgorithm.EdDSA, EllipticCurveOID.Ed25519)
    else:
        key = pgpy.PGPKey.new(PubKeyAlgorithm.RSAEncryptOrSign, settings.key_size)
    uid = pgpy.PGPUID.new(identity.display_name, comment=identity.comment, email=identity.email)
    key.add_uid(
        uid,
        usage={KeyFlags.Sign, KeyFlags.Certify},
        hashes=[HashAlgorithm.SHA256, HashAlgorithm.SHA512],
        ciphers=[SymmetricKeyAlgorithm.AES256, SymmetricKeyAlgorithm.AES128],
        compression=[CompressionAlgorithm.ZLIB, CompressionAlgorithm.Uncompressed],
    )
    if settings.self_check:
        # Serialize once and drop the bytes so a broken key fails here.
        bytes(key)
    return key


def produce_key_record(
    name: str,
    settings: Optional[KeySettings] = None,
    identity: Optional[Identity] = None,
) -> KeyRecord:
    """
    Generate key material for ``name`` and export it in armored form.
    ``identity`` defaults to the one derived from ``name``.

    Raises:
        KeyGenerationError: wrapping any PGPy or cryptography failure.
    """
    settings = settings or KeySettings()
    identity = identity or derive_identity(name, settings.display_name)
    try:
        key = generate_key(identity, settings)
        armored_private = str(key)
        armored_public = str(key.pubkey)
        fingerprint = fingerprint_hex(key)
    except _BACKEND_ERRORS as exc:
        raise KeyGenerationError(name, exc) from exc
    logger.info("Generated %s key for %s (fingerprint %s)", settings.algorithm, name, fingerprint)
    return KeyRecord(
        name=name,
        fingerprint=fingerprint,
        armored_public_key=armored_public,
        armored_private_key=armored_private,
    )
