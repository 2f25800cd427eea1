"""
Dispatcher configuration for pgwire-negotiate.

Environment Variables:
    PGWIRE_PROTOCOL_VERSION: Protocol version to pin when a request does not
        name one (unset means "negotiate")
    PGWIRE_VERSION_KEY: Configuration key holding the requested version
        (default: "protocolVersion")
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from pgwire_negotiate._core.version import PROTOCOL_VERSION_KEY, normalize_version_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NegotiationConfig:
    """
    Configuration for a NegotiationDispatcher.

    Attributes:
        version_key: Request configuration key naming the requested version
        default_version: Version to pin when the request names none
    """
    version_key: str = PROTOCOL_VERSION_KEY
    default_version: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "NegotiationConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            NegotiationConfig with environment overrides applied
        """
        env = os.environ if environ is None else environ

        version_key = env.get("PGWIRE_VERSION_KEY") or PROTOCOL_VERSION_KEY
        # An empty variable counts as unset
        default_version = normalize_version_token(env.get("PGWIRE_PROTOCOL_VERSION") or None)

        if default_version is not None:
            logger.info(f"Pinning protocol version {default_version} from PGWIRE_PROTOCOL_VERSION")

        return cls(version_key=version_key, default_version=default_version)

    def requested_version(self, configuration: Mapping[str, object]) -> Optional[str]:
        """
        Resolve the requested protocol version for one request.

        The request's own entry wins; the config default applies only when
        the request carries no entry at all. An empty entry is a pin that
        matches no registered version.
        """
        token = normalize_version_token(configuration.get(self.version_key))
        if token is not None:
            return token
        return normalize_version_token(self.default_version)
