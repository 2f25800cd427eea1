"""
Protocol version registry.

Holds the canonical ordered set of supported protocol versions and their
implementations. Order is negotiation priority: newest protocol first.
Registries are immutable; supporting an older protocol means building a new
registry with the entry appended at the end.

Usage:
    registry = VersionRegistry.from_pairs([
        ("3", V3Protocol()),
        ("2", V2Protocol()),
    ])
    registry.versions        # ("3", "2")
    registry.find("2")       # RegistryEntry(version="2", ...)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    Any,
    Iterable,
    Iterator,
    Optional,
    Protocol,
    Tuple,
    TYPE_CHECKING,
    runtime_checkable,
)

from pgwire_negotiate._core.version import normalize_version_token
from pgwire_negotiate.errors import RegistryError

if TYPE_CHECKING:
    from pgwire_negotiate.types import ConnectionRequest

logger = logging.getLogger(__name__)


@runtime_checkable
class ProtocolImplementation(Protocol):
    """
    A wire-protocol generation able to open a session.

    attempt() may be a coroutine function or a plain function. It returns:
    - AttemptResult: explicit success / declined / failed
    - any other non-None object: the live connection (success)
    - None: the server does not support this protocol version (declined)

    Any exception it raises is a hard failure and ends negotiation.
    Implementations are shared between concurrent requests and must not keep
    per-request state.
    """

    def attempt(self, request: "ConnectionRequest") -> Any:
        ...


@dataclass(frozen=True)
class RegistryEntry:
    """A protocol version identifier paired with its implementation."""
    version: str
    implementation: ProtocolImplementation


class VersionRegistry:
    """
    Ordered, immutable sequence of protocol versions.

    Safe to share between any number of concurrent negotiations.
    """

    __slots__ = ("_entries", "_index")

    def __init__(self, entries: Iterable[RegistryEntry]) -> None:
        normalized = []
        index = {}

        for entry in entries:
            version = normalize_version_token(entry.version)
            if not version:
                raise RegistryError("protocol version identifier may not be empty")
            if version in index:
                raise RegistryError(f"duplicate protocol version: {version}")
            if not callable(getattr(entry.implementation, "attempt", None)):
                raise RegistryError(
                    f"implementation for protocol version {version} has no attempt()"
                )

            if version != entry.version:
                entry = RegistryEntry(version, entry.implementation)
            index[version] = entry
            normalized.append(entry)

        if not normalized:
            raise RegistryError("a version registry needs at least one entry")

        self._entries: Tuple[RegistryEntry, ...] = tuple(normalized)
        self._index = index

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[Tuple[Any, ProtocolImplementation]],
    ) -> "VersionRegistry":
        """
        Build a registry from (version, implementation) pairs.

        Args:
            pairs: Pairs in priority order, newest protocol first

        Returns:
            New VersionRegistry

        Raises:
            RegistryError: On empty input, duplicates or invalid implementations
        """
        return cls(RegistryEntry(version, impl) for version, impl in pairs)

    def all_entries(self) -> Tuple[RegistryEntry, ...]:
        """Entries in negotiation order, most preferred first."""
        return self._entries

    def find(self, identifier: Any) -> Optional[RegistryEntry]:
        """
        Look up the entry for a protocol version.

        Args:
            identifier: Version token (normalized before lookup)

        Returns:
            Matching entry, or None if the version is not registered
        """
        version = normalize_version_token(identifier)
        if version is None:
            return None
        return self._index.get(version)

    def with_fallback(
        self,
        version: Any,
        implementation: ProtocolImplementation,
    ) -> "VersionRegistry":
        """
        Return a new registry with an older protocol appended last.

        Existing entries keep their order and priority.
        """
        logger.debug(f"Adding fallback protocol version {version} to registry")
        return VersionRegistry(self._entries + (RegistryEntry(version, implementation),))

    @property
    def versions(self) -> Tuple[str, ...]:
        """Protocol version identifiers in negotiation order."""
        return tuple(entry.version for entry in self._entries)

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: Any) -> bool:
        return self.find(identifier) is not None

    def __repr__(self) -> str:
        return f"VersionRegistry(versions={self.versions!r})"
