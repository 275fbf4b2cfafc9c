"""Kernel security – SHA-256 digest used to sign ``auth_sign`` requests."""
from __future__ import annotations

import hashlib

__all__ = ["sha256_hex", "sign_credentials"]


def sha256_hex(content: str) -> str:
    """Return the lowercase hex SHA-256 digest of *content* (UTF-8)."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def sign_credentials(app_key: str, timestamp_ms: int, master_secret: str) -> str:
    """Signature expected by ``/auth_sign``: ``sha256(appkey + timestamp + mastersecret)``."""
    return sha256_hex(f"{app_key}{timestamp_ms}{master_secret}")
