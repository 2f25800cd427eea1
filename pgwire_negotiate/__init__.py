"""
pgwire-negotiate: Protocol version negotiation for PostgreSQL-style drivers.

This package provides:
- An ordered, immutable registry of wire-protocol implementations
- A dispatcher that tries them newest-first and returns the first connection
- Explicit three-way attempt results (success / declined / failed)
- A single terminal error when no protocol version is usable

It implements no wire protocol itself: each protocol generation is supplied
by the caller as an object with an attempt(request) method.

Quickstart:
    from pgwire_negotiate import (
        AttemptResult,
        NegotiationDispatcher,
        VersionRegistry,
    )

    class V3Protocol:
        async def attempt(self, request):
            conn = await open_v3_session(request)
            if conn is None:
                return AttemptResult.declined("server predates protocol 3")
            return AttemptResult.success(conn)

    registry = VersionRegistry.from_pairs([
        ("3", V3Protocol()),
        ("2", V2Protocol()),
    ])
    dispatcher = NegotiationDispatcher(registry)
    conn = await dispatcher.establish("localhost", 5432, "app", "appdb")
"""

from pgwire_negotiate.types import (
    AttemptOutcome,
    AttemptRecord,
    AttemptResult,
    ConnectionRequest,
)
from pgwire_negotiate.errors import (
    PGWireNegotiateError,
    ConnectionRequestError,
    RegistryError,
    ProtocolUnavailableError,
    RequestedVersionUnavailableError,
)
from pgwire_negotiate.config import NegotiationConfig
from pgwire_negotiate.negotiate import (
    NegotiationDispatcher,
    establish,
    establish_sync,
)
from pgwire_negotiate._core.registry import (
    ProtocolImplementation,
    RegistryEntry,
    VersionRegistry,
)
from pgwire_negotiate._core.version import (
    PACKAGE_VERSION,
    PROTOCOL_VERSION_KEY,
)

__version__ = PACKAGE_VERSION

__all__ = [
    # Version
    "__version__",
    "PACKAGE_VERSION",
    "PROTOCOL_VERSION_KEY",
    # Types
    "AttemptOutcome",
    "AttemptRecord",
    "AttemptResult",
    "ConnectionRequest",
    # Errors
    "PGWireNegotiateError",
    "ConnectionRequestError",
    "RegistryError",
    "ProtocolUnavailableError",
    "RequestedVersionUnavailableError",
    # Config
    "NegotiationConfig",
    # Registry
    "ProtocolImplementation",
    "RegistryEntry",
    "VersionRegistry",
    # Negotiation
    "NegotiationDispatcher",
    "establish",
    "establish_sync",
]
