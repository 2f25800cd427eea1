"""
Core negotiation machinery for pgwire-negotiate.

This module handles:
- Package version constants and protocol version token helpers
- The ordered, immutable protocol version registry
"""

from pgwire_negotiate._core.version import (
    PACKAGE_VERSION,
    PROTOCOL_VERSION_KEY,
    normalize_version_token,
)
from pgwire_negotiate._core.registry import (
    ProtocolImplementation,
    RegistryEntry,
    VersionRegistry,
)

__all__ = [
    # Version
    "PACKAGE_VERSION",
    "PROTOCOL_VERSION_KEY",
    "normalize_version_token",
    # Registry
    "ProtocolImplementation",
    "RegistryEntry",
    "VersionRegistry",
]
