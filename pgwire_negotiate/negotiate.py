"""
Protocol version negotiation and connection establishment.

This module walks a VersionRegistry in priority order and returns the first
connection any protocol implementation establishes:

1. If the request pins a version, every other entry is skipped
2. A declined attempt falls back to the next (older) protocol
3. A hard failure (network, authentication, protocol error) is raised
   immediately and unchanged; it would recur on every older protocol
4. If nothing succeeds, ProtocolUnavailableError is raised

Usage:
    from pgwire_negotiate import NegotiationDispatcher, VersionRegistry

    registry = VersionRegistry.from_pairs([
        ("3", V3Protocol()),
        ("2", V2Protocol()),
    ])
    dispatcher = NegotiationDispatcher(registry)

    conn = await dispatcher.establish(
        "db.example.com", 5432, "app", "appdb",
        {"password": "secret"},
    )

    # Pin a protocol version
    conn = await dispatcher.establish(
        "legacy.example.com", 5432, "app", "appdb",
        {"protocolVersion": "2"},
    )
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
from typing import Any, List, Mapping, Optional

from pgwire_negotiate._core.attempt import run_attempt
from pgwire_negotiate._core.registry import VersionRegistry
from pgwire_negotiate.config import NegotiationConfig
from pgwire_negotiate.errors import (
    ProtocolUnavailableError,
    RequestedVersionUnavailableError,
)
from pgwire_negotiate.types import AttemptOutcome, AttemptRecord, ConnectionRequest

logger = logging.getLogger(__name__)


class NegotiationDispatcher:
    """
    Ordered-fallback connection dispatcher.

    Holds no per-request state; one dispatcher can serve any number of
    concurrent negotiations.

    Attributes:
        registry: Protocol versions in negotiation order
        config: Dispatcher configuration
    """

    def __init__(
        self,
        registry: VersionRegistry,
        config: Optional[NegotiationConfig] = None,
    ) -> None:
        self.registry = registry
        self.config = config or NegotiationConfig()

    async def establish(
        self,
        host: str,
        port: int,
        user: str,
        database: str,
        configuration: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Establish a connection using the best protocol both sides support.

        Args:
            host: Server host
            port: Server port
            user: User name (required)
            database: Database name (required)
            configuration: Extra properties; "protocolVersion" pins a version

        Returns:
            Live connection handle from the first implementation that succeeded

        Raises:
            ConnectionRequestError: If the request is invalid
            ProtocolUnavailableError: If every protocol was skipped or declined
            Exception: Any hard failure raised by an implementation, unchanged
        """
        request = ConnectionRequest(
            host=host,
            port=port,
            user=user,
            database=database,
            configuration=configuration or {},
        )
        return await self.establish_request(request)

    async def establish_request(self, request: ConnectionRequest) -> Any:
        """
        Negotiate a connection for an already-built request.

        See establish() for the result and error contract.
        """
        requested = self.config.requested_version(request.configuration)
        attempts: List[AttemptRecord] = []

        for entry in self.registry.all_entries():
            if requested is not None and requested != entry.version:
                attempts.append(AttemptRecord(entry.version, AttemptOutcome.SKIPPED))
                continue

            try:
                result = await run_attempt(entry, request)
            except Exception as e:
                logger.warning(
                    f"Protocol version {entry.version} failed for "
                    f"{request.host}:{request.port}: {e}"
                )
                raise

            if result.outcome == AttemptOutcome.FAILED:
                logger.warning(
                    f"Protocol version {entry.version} failed for "
                    f"{request.host}:{request.port}: {result.error}"
                )
                raise result.error

            if result.is_success:
                logger.info(
                    f"Connected to {request.host}:{request.port} "
                    f"using protocol version {entry.version}"
                )
                return result.connection

            logger.debug(
                f"Server {request.host}:{request.port} declined protocol "
                f"version {entry.version}"
                + (f": {result.reason}" if result.reason else "")
            )
            attempts.append(
                AttemptRecord(entry.version, AttemptOutcome.DECLINED, result.reason)
            )

        raise self._exhausted(request, requested, attempts)

    def establish_sync(
        self,
        host: str,
        port: int,
        user: str,
        database: str,
        configuration: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Sync wrapper for establish.

        Inside a running event loop the negotiation runs on its own loop in a
        worker thread; the calling loop is blocked until it finishes.
        """
        return _run_sync(
            self.establish(host, port, user, database, configuration)
        )

    def _exhausted(
        self,
        request: ConnectionRequest,
        requested: Optional[str],
        attempts: List[AttemptRecord],
    ) -> ProtocolUnavailableError:
        if requested is not None:
            registered = requested in self.registry
            logger.warning(
                f"Requested protocol version {requested} unavailable for "
                f"{request.host}:{request.port} (registered={registered})"
            )
            return RequestedVersionUnavailableError(
                requested_version=requested,
                registered=registered,
                attempts=attempts,
            )

        logger.warning(
            f"No compatible protocol version for {request.host}:{request.port}; "
            f"tried {', '.join(record.version for record in attempts)}"
        )
        return ProtocolUnavailableError(attempts=attempts)


def _run_sync(coro: Any) -> Any:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
            return executor.submit(asyncio.run, coro).result()
    return asyncio.run(coro)


async def establish(
    registry: VersionRegistry,
    host: str,
    port: int,
    user: str,
    database: str,
    configuration: Optional[Mapping[str, Any]] = None,
    config: Optional[NegotiationConfig] = None,
) -> Any:
    """
    Negotiate a connection against a registry without keeping a dispatcher.

    Args:
        registry: Protocol versions in negotiation order
        host: Server host
        port: Server port
        user: User name (required)
        database: Database name (required)
        configuration: Extra properties; "protocolVersion" pins a version
        config: Dispatcher configuration

    Returns:
        Live connection handle
    """
    dispatcher = NegotiationDispatcher(registry, config)
    return await dispatcher.establish(host, port, user, database, configuration)


def establish_sync(
    registry: VersionRegistry,
    host: str,
    port: int,
    user: str,
    database: str,
    configuration: Optional[Mapping[str, Any]] = None,
    config: Optional[NegotiationConfig] = None,
) -> Any:
    """Sync wrapper for establish."""
    return _run_sync(
        establish(registry, host, port, user, database, configuration, config)
    )
