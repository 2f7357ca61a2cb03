"""API key generation, hashing and validation.

Keys look like ``sk_<publicId>.<secret>``. The public id allows an indexed
lookup; the whole key is verified against a salted scrypt hash.
"""

import base64
import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

PUBLIC_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ-"
PUBLIC_ID_LENGTH = 12
KEY_PREFIX_LENGTH = 12
SECRET_BYTES = 32
SALT_BYTES = 32
HASH_BYTES = 64

# scrypt work factors (N, r, p)
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1


@dataclass(frozen=True)
class GeneratedApiKey:
    """A freshly generated key and the values stored for it.

    Attributes:
        id: Record identifier
        public_id: Lookup identifier embedded in the key
        key: Full key, shown to the user once
        key_hash: base64(salt + scrypt hash)
        key_prefix: Display prefix
    """

    id: str
    public_id: str
    key: str
    key_hash: str
    key_prefix: str


def _generate_public_id() -> str:
    return "".join(secrets.choice(PUBLIC_ID_ALPHABET) for _ in range(PUBLIC_ID_LENGTH))


def _scrypt(key: str, salt: bytes) -> bytes:
    return hashlib.scrypt(
        key.encode(),
        salt=salt,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=HASH_BYTES,
    )


def hash_api_key(key: str) -> str:
    """Hash a key with a random salt.

    Args:
        key: Full API key

    Returns:
        base64 of the salt followed by the derived hash
    """
    salt = secrets.token_bytes(SALT_BYTES)
    return base64.b64encode(salt + _scrypt(key, salt)).decode()


def generate_api_key() -> GeneratedApiKey:
    """Generate a new API key with its hash and display prefix.

    Returns:
        Generated key material
    """
    public_id = _generate_public_id()
    secret = base64.urlsafe_b64encode(secrets.token_bytes(SECRET_BYTES)).rstrip(b"=").decode()
    key = f"sk_{public_id}.{secret}"
    return GeneratedApiKey(
        id=str(uuid4()),
        public_id=public_id,
        key=key,
        key_hash=hash_api_key(key),
        key_prefix=key[:KEY_PREFIX_LENGTH],
    )


def validate_api_key(key: str, stored_hash: str) -> bool:
    """Check a key against its stored hash in constant time.

    Args:
        key: Full API key
        stored_hash: Value produced by hash_api_key

    Returns:
        True if the key matches; False on mismatch or malformed input
    """
    try:
        raw = base64.b64decode(stored_hash, validate=True)
        salt, expected = raw[:SALT_BYTES], raw[SALT_BYTES:]
        if len(expected) != HASH_BYTES:
            return False
        return hmac.compare_digest(_scrypt(key, salt), expected)
    except (ValueError, TypeError):
        return False


def is_api_key_expired(expires_at: datetime | None) -> bool:
    """Check whether an expiry timestamp lies in the past.

    Naive timestamps are taken as UTC.
    """
    if expires_at is None:
        return False
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    return expires_at < datetime.now(UTC)


def extract_public_id(key: str) -> str | None:
    """Extract the public id from a full key.

    Args:
        key: Full API key, ``sk_<publicId>.<secret>``

    Returns:
        The public id, or None if the key is malformed
    """
    parts = key.split(".")
    if len(parts) != 2:
        return None
    public_id = parts[0].split("_")[-1]
    if len(public_id) != PUBLIC_ID_LENGTH:
        return None
    return public_id


def mask_api_key(key_prefix: str) -> str:
    """Render a key prefix for display."""
    return f"{key_prefix}..."
