"""
Exception types for pgwire-negotiate.

Provides typed exceptions for:
- Invalid connection requests
- Invalid version registries
- Negotiation exhaustion (no compatible protocol version)

Hard failures raised by protocol implementations (network, authentication,
protocol errors) are NOT wrapped by this package; they reach the caller
unchanged.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from pgwire_negotiate.types import AttemptRecord


class PGWireNegotiateError(Exception):
    """Base exception for all pgwire-negotiate errors."""
    pass


# =============================================================================
# Request and Registry Errors
# =============================================================================


class ConnectionRequestError(PGWireNegotiateError):
    """
    Raised when a connection request is invalid.

    This includes:
    - Empty user or database name
    - Empty host
    - Port outside 1..65535

    Raised before any protocol implementation is invoked.
    """
    pass


class RegistryError(PGWireNegotiateError):
    """
    Raised when a version registry cannot be built.

    This includes:
    - Duplicate protocol version identifiers
    - Empty registries
    - Implementations without a callable attempt()
    """
    pass


# =============================================================================
# Negotiation Errors
# =============================================================================


class ProtocolUnavailableError(PGWireNegotiateError):
    """
    Raised when every registry entry was skipped or declined.

    This is the terminal "no compatible protocol version" failure. It is not
    attributable to any single implementation: each candidate either did not
    match the requested version or reported that the server does not speak
    it.

    Example:
        try:
            conn = await dispatcher.establish(host, 5432, "app", "appdb")
        except ProtocolUnavailableError as e:
            for record in e.attempts:
                logger.info(f"v{record.version}: {record.outcome.value}")
    """

    def __init__(
        self,
        message: str = "No compatible protocol version available",
        attempts: Sequence["AttemptRecord"] = (),
        requested_version: Optional[str] = None,
    ):
        self.attempts: Tuple["AttemptRecord", ...] = tuple(attempts)
        self.requested_version = requested_version
        super().__init__(message)

    @property
    def declined_versions(self) -> Tuple[str, ...]:
        """Versions whose implementation was invoked and declined."""
        from pgwire_negotiate.types import AttemptOutcome

        return tuple(
            record.version
            for record in self.attempts
            if record.outcome == AttemptOutcome.DECLINED
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(requested_version={self.requested_version!r}, "
            f"declined_versions={self.declined_versions!r})"
        )


class RequestedVersionUnavailableError(ProtocolUnavailableError):
    """
    Raised when a pinned protocol version could not be used.

    Still an exhaustion failure (catchable as ProtocolUnavailableError).
    The registered attribute tells the two causes apart:
    - registered=False: no registry entry carries the requested version
    - registered=True: the entry was tried and the server declined it
    """

    def __init__(
        self,
        requested_version: str,
        registered: bool,
        attempts: Sequence["AttemptRecord"] = (),
    ):
        self.registered = registered

        if registered:
            message = (
                f"No compatible protocol version available: server declined "
                f"requested protocol version {requested_version}"
            )
        else:
            message = (
                f"No compatible protocol version available: protocol version "
                f"{requested_version} is not supported by this client"
            )

        super().__init__(
            message,
            attempts=attempts,
            requested_version=requested_version,
        )

    def __repr__(self) -> str:
        return (
            f"RequestedVersionUnavailableError(requested_version="
            f"{self.requested_version!r}, registered={self.registered!r})"
        )
