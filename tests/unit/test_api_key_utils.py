"""Tests for API key generation and validation."""

from datetime import UTC, datetime, timedelta

from agents_manage.utils.api_keys import (
    KEY_PREFIX_LENGTH,
    PUBLIC_ID_LENGTH,
    extract_public_id,
    generate_api_key,
    hash_api_key,
    is_api_key_expired,
    mask_api_key,
    validate_api_key,
)


class TestGenerateApiKey:
    """Tests for generate_api_key."""

    def test_key_format(self) -> None:
        """Key is sk_<publicId>.<secret> and embeds its public id."""
        generated = generate_api_key()

        assert generated.key.startswith(f"sk_{generated.public_id}.")
        assert len(generated.public_id) == PUBLIC_ID_LENGTH
        assert generated.key_prefix == generated.key[:KEY_PREFIX_LENGTH]

    def test_hash_validates_key(self) -> None:
        """Stored hash matches the generated key."""
        generated = generate_api_key()

        assert validate_api_key(generated.key, generated.key_hash)

    def test_keys_are_unique(self) -> None:
        """Two generated keys never share id, public id or secret."""
        first, second = generate_api_key(), generate_api_key()

        assert first.id != second.id
        assert first.public_id != second.public_id
        assert first.key != second.key


class TestValidateApiKey:
    """Tests for validate_api_key."""

    def test_rejects_other_key(self) -> None:
        """A different key does not match the hash."""
        generated = generate_api_key()

        assert not validate_api_key(generate_api_key().key, generated.key_hash)

    def test_same_key_hashes_differently(self) -> None:
        """Each hash uses a fresh salt."""
        key = generate_api_key().key

        first, second = hash_api_key(key), hash_api_key(key)

        assert first != second
        assert validate_api_key(key, first)
        assert validate_api_key(key, second)

    def test_malformed_hash(self) -> None:
        """Garbage instead of a hash is a mismatch, not an error."""
        assert not validate_api_key("sk_abc.def", "not base64!")
        assert not validate_api_key("sk_abc.def", "c2hvcnQ=")


class TestExtractPublicId:
    """Tests for extract_public_id."""

    def test_extracts_public_id(self) -> None:
        generated = generate_api_key()

        assert extract_public_id(generated.key) == generated.public_id

    def test_rejects_malformed_keys(self) -> None:
        """Keys without exactly one dot or with a short id are rejected."""
        assert extract_public_id("sk_abcdefghijkl") is None
        assert extract_public_id("sk_abc.secret") is None
        assert extract_public_id("sk_abcdefghijkl.sec.ret") is None


class TestExpiry:
    """Tests for is_api_key_expired."""

    def test_no_expiry(self) -> None:
        assert not is_api_key_expired(None)

    def test_past_and_future(self) -> None:
        now = datetime.now(UTC)

        assert is_api_key_expired(now - timedelta(minutes=1))
        assert not is_api_key_expired(now + timedelta(days=1))

    def test_naive_timestamp_is_utc(self) -> None:
        """Naive timestamps, as SQLite returns them, are compared as UTC."""
        past = datetime.now(UTC).replace(tzinfo=None) - timedelta(hours=1)

        assert is_api_key_expired(past)


def test_mask_api_key() -> None:
    """Masked key shows only the prefix."""
    assert mask_api_key("sk_abcdefghi") == "sk_abcdefghi..."
