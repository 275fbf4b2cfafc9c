"""Kernel security – request signing and sensitive field defaults."""
from getui_rest.kernel.security.digest import sha256_hex, sign_credentials

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "authtoken", "auth_token", "sign", "secret", "app_secret", "appsecret",
    "master_secret", "mastersecret", "token", "authorization",
})

__all__ = ["DEFAULT_SENSITIVE_FIELDS", "sha256_hex", "sign_credentials"]
