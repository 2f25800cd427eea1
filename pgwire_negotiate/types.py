"""
Type definitions for pgwire-negotiate.

Defines enums and dataclasses used across the package for:
- Connection requests handed to protocol implementations
- Explicit three-way attempt results (success / declined / failed)
- Per-entry diagnostic records collected during a negotiation
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pgwire_negotiate._core.version import redact_configuration
from pgwire_negotiate.errors import ConnectionRequestError


# =============================================================================
# Enums
# =============================================================================


class AttemptOutcome(str, Enum):
    """
    Outcome of a single registry entry during negotiation.

    - SUCCESS: The implementation established a session
    - DECLINED: The server does not speak this protocol version
    - FAILED: A version-independent failure (network, auth, protocol error)
    - SKIPPED: The entry did not match the requested version and was not invoked
    """
    SUCCESS = "success"
    DECLINED = "declined"
    FAILED = "failed"
    SKIPPED = "skipped"


# =============================================================================
# Dataclasses
# =============================================================================


@dataclass(frozen=True, repr=False)
class ConnectionRequest:
    """
    Target and credentials for one connection attempt.

    The request is read-only: configuration is copied into a mapping proxy
    at construction, so no implementation can alter what the next one sees.

    Attributes:
        host: Server host name or address
        port: Server TCP port
        user: User name to authenticate as (required)
        database: Database to connect to (required)
        configuration: Open key/value bag; "protocolVersion" pins a version,
            "password" and other keys pass through to implementations
    """
    host: str
    port: int
    user: str
    database: str
    configuration: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not self.host:
            raise ConnectionRequestError("host may not be empty")
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ConnectionRequestError(f"port must be an integer, got {self.port!r}")
        if not 0 < self.port < 65536:
            raise ConnectionRequestError(f"port out of range: {self.port}")
        if not self.user:
            raise ConnectionRequestError("user may not be empty")
        if not self.database:
            raise ConnectionRequestError("database may not be empty")

        object.__setattr__(
            self, "configuration", MappingProxyType(dict(self.configuration or {}))
        )

    def __repr__(self) -> str:
        return (
            f"ConnectionRequest(host={self.host!r}, port={self.port!r}, "
            f"user={self.user!r}, database={self.database!r}, "
            f"configuration={redact_configuration(self.configuration)!r})"
        )


@dataclass(frozen=True)
class AttemptResult:
    """
    Explicit result of one protocol implementation attempt.

    Use the constructors rather than building instances directly:

        return AttemptResult.success(conn)
        return AttemptResult.declined("server requires protocol 2")
        return AttemptResult.failed(exc)

    A failed result is treated exactly like raising its error.
    """
    outcome: AttemptOutcome
    connection: Any = None
    reason: Optional[str] = None
    error: Optional[BaseException] = None

    def __post_init__(self) -> None:
        if self.outcome == AttemptOutcome.SUCCESS and self.connection is None:
            raise ValueError("successful attempt requires a connection")
        if self.outcome == AttemptOutcome.FAILED and self.error is None:
            raise ValueError("failed attempt requires an error")
        if self.outcome == AttemptOutcome.SKIPPED:
            raise ValueError("an invoked attempt cannot be skipped")

    @classmethod
    def success(cls, connection: Any) -> "AttemptResult":
        return cls(AttemptOutcome.SUCCESS, connection=connection)

    @classmethod
    def declined(cls, reason: Optional[str] = None) -> "AttemptResult":
        return cls(AttemptOutcome.DECLINED, reason=reason)

    @classmethod
    def failed(cls, error: BaseException) -> "AttemptResult":
        return cls(AttemptOutcome.FAILED, error=error)

    @property
    def is_success(self) -> bool:
        """Check if the attempt produced a connection."""
        return self.outcome == AttemptOutcome.SUCCESS

    @property
    def is_declined(self) -> bool:
        """Check if the server declined this protocol version."""
        return self.outcome == AttemptOutcome.DECLINED


@dataclass(frozen=True)
class AttemptRecord:
    """
    What happened to one registry entry during a negotiation.

    Collected in order and attached to ProtocolUnavailableError.
    """
    version: str
    outcome: AttemptOutcome
    reason: Optional[str] = None
