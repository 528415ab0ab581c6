"""
signing.py — Ed25519 signatures over canonical JSON

Signs a JSON object the way federated servers do:
  - 'signatures' and 'unsigned' are removed from the object.
  - The rest is rendered as canonical JSON.
  - The Ed25519 signature over those bytes is stored, unpadded base64, at
    signatures[<entity>][<key id>].

Key ids are server signing key ids (``ed25519:<version>``).

Dependencies:
  - cryptography >= 41.0
"""

from __future__ import annotations
import base64
from dataclasses import dataclass
from typing import Any, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from . import server_key_id
from .canonical_json import (
    CanonicalJsonObject,
    Object,
    String,
    canonical_bytes,
    try_from_json_map,
)

SIGNATURES = "signatures"
UNSIGNED = "unsigned"


def encode_base64(data: bytes) -> str:
    """Unpadded standard base64."""
    return base64.b64encode(data).decode("ascii").rstrip("=")


def decode_base64(text: str) -> bytes:
    """Decode standard base64 with or without padding."""
    return base64.b64decode(text + "=" * (-len(text) % 4), validate=True)


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------

@dataclass
class SigningKey:
    """An Ed25519 private key and the key id it signs under."""
    private_key: Ed25519PrivateKey
    key_id: str

    def __post_init__(self) -> None:
        server_key_id.validate(self.key_id)

    @classmethod
    def generate(cls, version: str) -> "SigningKey":
        """Generate a new key with id ``ed25519:<version>``."""
        return cls(Ed25519PrivateKey.generate(), f"ed25519:{version}")

    @classmethod
    def from_seed_b64(cls, seed_b64: str, key_id: str) -> "SigningKey":
        """Load a key from its base64-encoded 32-byte seed."""
        return cls(Ed25519PrivateKey.from_private_bytes(decode_base64(seed_b64)), key_id)

    @property
    def public_key(self) -> Ed25519PublicKey:
        return self.private_key.public_key()

    def seed_b64(self) -> str:
        raw = self.private_key.private_bytes(
            Encoding.Raw, PrivateFormat.Raw, NoEncryption()
        )
        return encode_base64(raw)

    def public_key_b64(self) -> str:
        raw = self.public_key.public_bytes(Encoding.Raw, PublicFormat.Raw)
        return encode_base64(raw)


def load_public_key_b64(b64_str: str) -> Ed25519PublicKey:
    """Load an Ed25519 public key from base64-encoded raw bytes."""
    return Ed25519PublicKey.from_public_bytes(decode_base64(b64_str))


# ---------------------------------------------------------------------------
# Signing
# ---------------------------------------------------------------------------

def _as_object(obj: Any) -> CanonicalJsonObject:
    if isinstance(obj, Object):
        return obj.entries
    if isinstance(obj, CanonicalJsonObject):
        return obj
    return try_from_json_map(obj)


def signable_bytes(obj: Any) -> bytes:
    """Canonical bytes of ``obj`` without its 'signatures' and 'unsigned' keys."""
    entries = _as_object(obj)
    stripped = CanonicalJsonObject(
        (k, v) for k, v in entries.items() if k not in (SIGNATURES, UNSIGNED)
    )
    return canonical_bytes(stripped)


def sign_json(entity: str, key: SigningKey, obj: Any) -> CanonicalJsonObject:
    """
    Sign a JSON object as ``entity`` and return the signed copy.

    Existing signatures from other entities or keys are kept. ``obj`` may be
    a plain mapping or a canonical object; it is never modified.
    """
    entries = _as_object(obj)
    sig = key.private_key.sign(signable_bytes(entries))

    existing = entries.get(SIGNATURES)
    signatures = dict(existing.entries) if isinstance(existing, Object) else {}
    existing_own = signatures.get(entity)
    own = dict(existing_own.entries) if isinstance(existing_own, Object) else {}
    own[key.key_id] = String(encode_base64(sig))
    signatures[entity] = Object(own)

    signed = dict(entries)
    signed[SIGNATURES] = Object(signatures)
    return CanonicalJsonObject(signed)


def verify_json(
    entity: str,
    public_key: Ed25519PublicKey,
    key_id: str,
    obj: Any,
) -> bool:
    """
    Verify the signature ``entity`` made with ``key_id`` on ``obj``.

    Returns True if valid, False if invalid or missing.
    """
    entries = _as_object(obj)
    sig_b64 = _lookup_signature(entries, entity, key_id)
    if sig_b64 is None:
        return False

    try:
        sig_bytes = decode_base64(sig_b64)
    except ValueError:
        return False

    try:
        public_key.verify(sig_bytes, signable_bytes(entries))
        return True
    except InvalidSignature:
        return False


def _lookup_signature(entries: CanonicalJsonObject, entity: str, key_id: str) -> Optional[str]:
    signatures = entries.get(SIGNATURES)
    if not isinstance(signatures, Object):
        return None
    own = signatures.entries.get(entity)
    if not isinstance(own, Object):
        return None
    sig = own.entries.get(key_id)
    if not isinstance(sig, String):
        return None
    return sig.value
