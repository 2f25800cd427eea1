"""
Version constants and protocol-version token helpers for pgwire-negotiate.

Two unrelated kinds of "version" live here:
- PACKAGE_VERSION: User-facing package version (semver)
- Protocol version tokens: opaque identifiers of wire-protocol generations
  ("3", "2", ...) as they appear in registries and request configuration
"""

from __future__ import annotations

from typing import Any, Optional

# pgwire-negotiate version (user-facing semver)
PACKAGE_VERSION = "0.1.0"

# Configuration key carrying the requested protocol version
PROTOCOL_VERSION_KEY = "protocolVersion"

# Configuration keys whose values are masked in reprs and never logged
SECRET_KEYS = frozenset({"password", "sslpassword"})


def normalize_version_token(value: Any) -> Optional[str]:
    """
    Normalize a protocol version token for comparison.

    Tokens are compared as exact strings, so the integer 3 and the string
    "3" name the same protocol generation while "3 " and "" name none.

    Args:
        value: Raw token (str, int, or None)

    Returns:
        String token, or None if the value is absent
    """
    if value is None:
        return None
    return str(value)


def redact_configuration(configuration: Any) -> dict:
    """
    Return a copy of a configuration mapping with secret values masked.

    Args:
        configuration: Key/value mapping from a connection request

    Returns:
        Plain dict safe to log or repr
    """
    return {
        key: ("***" if str(key).lower() in SECRET_KEYS else value)
        for key, value in configuration.items()
    }
