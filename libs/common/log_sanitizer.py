"""Secret masking utilities for log output.

The signer holds a raw private key and two bearer secrets. None of them may
ever reach a log line, so every structured log entry is passed through
``sanitize_value`` before it is serialized.
"""

from __future__ import annotations

import re
from typing import Any

# 0x-prefixed 32-byte hex key, as accepted by PRIVATE_KEY.
PRIVATE_KEY_PATTERN = re.compile(r"\b0x[0-9a-fA-F]{64}\b")
# "Bearer <token>" as it appears in Authorization headers.
BEARER_PATTERN = re.compile(r"\bBearer\s+[^\s,;\"']+")

_SENSITIVE_KEYS = frozenset({"authorization", "password", "private_key", "privatekey", "api_key"})
# Suffixes naming a credential; "token_id" identifies a market outcome and is not one.
_SENSITIVE_SUFFIXES = ("token", "secret")


def mask_private_key(key: str) -> str:
    """Mask a private key, keeping only the last four hex digits."""
    suffix = key[-4:] if len(key) > 4 else ""
    return f"0x***...{suffix}"


def mask_bearer_token(value: str) -> str:
    """Replace the credential part of a bearer header value."""
    scheme, _, _ = value.partition(" ")
    return f"{scheme} ***"


def _sanitize_string(text: str) -> str:
    sanitized = PRIVATE_KEY_PATTERN.sub(lambda m: mask_private_key(m.group(0)), text)
    return BEARER_PATTERN.sub(lambda m: mask_bearer_token(m.group(0)), sanitized)


def _is_sensitive_key(key: str) -> bool:
    normalized = key.lower().replace("-", "_")
    return normalized in _SENSITIVE_KEYS or normalized.endswith(_SENSITIVE_SUFFIXES)


def sanitize_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively mask secrets in a mapping.

    Values under sensitive keys (``*_token``, ``*_secret``, ``authorization``,
    ``private_key``) are replaced wholesale; other strings are scanned for
    embedded keys and bearer credentials.
    """
    sanitized: dict[str, Any] = {}
    for raw_key, raw_value in data.items():
        if _is_sensitive_key(str(raw_key)):
            sanitized[raw_key] = "***"
        else:
            sanitized[raw_key] = sanitize_value(raw_value)
    return sanitized


def sanitize_value(value: Any) -> Any:
    """Sanitize arbitrary values, preserving container types."""
    if isinstance(value, dict):
        return sanitize_dict(value)
    if isinstance(value, list):
        return [sanitize_value(item) for item in value]
    if isinstance(value, tuple):
        return tuple(sanitize_value(item) for item in value)
    if isinstance(value, str):
        return _sanitize_string(value)
    return value


__all__ = [
    "BEARER_PATTERN",
    "PRIVATE_KEY_PATTERN",
    "mask_bearer_token",
    "mask_private_key",
    "sanitize_dict",
    "sanitize_value",
]
