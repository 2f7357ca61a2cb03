"""Shared helpers."""

from .api_keys import (
    GeneratedApiKey,
    extract_public_id,
    generate_api_key,
    hash_api_key,
    is_api_key_expired,
    mask_api_key,
    validate_api_key,
)
from .logger import configure_logging

__all__ = [
    "GeneratedApiKey",
    "configure_logging",
    "extract_public_id",
    "generate_api_key",
    "hash_api_key",
    "is_api_key_expired",
    "mask_api_key",
    "validate_api_key",
]
