"""
Pytest configuration for pgwire-negotiate tests.
"""

import pytest
from unittest.mock import MagicMock

from pgwire_negotiate import AttemptResult, ConnectionRequest, VersionRegistry

# Note: With pytest-asyncio in auto mode, no event_loop fixture needed


class FakeProtocol:
    """
    Scripted protocol implementation that counts its invocations.

    behaviour is one of:
    - "succeed": return a fresh MagicMock connection
    - "decline": return None
    - an exception instance: raise it
    - an AttemptResult: return it as-is
    """

    def __init__(self, version, behaviour):
        self.version = version
        self.behaviour = behaviour
        self.calls = []
        self.connection = MagicMock(name=f"conn-v{version}")

    async def attempt(self, request):
        self.calls.append(request)
        if isinstance(self.behaviour, BaseException):
            raise self.behaviour
        if isinstance(self.behaviour, AttemptResult):
            return self.behaviour
        if self.behaviour == "succeed":
            return self.connection
        return None

    @property
    def call_count(self):
        return len(self.calls)


@pytest.fixture
def make_protocol():
    """Factory for FakeProtocol instances."""
    return FakeProtocol


@pytest.fixture
def make_registry():
    """Build a registry from FakeProtocol instances, in the given order."""
    def _make(*protocols):
        return VersionRegistry.from_pairs((p.version, p) for p in protocols)
    return _make


@pytest.fixture
def sample_request():
    """Valid connection request with credentials."""
    return ConnectionRequest(
        host="db.example.com",
        port=5432,
        user="app",
        database="appdb",
        configuration={"password": "s3cret"},
    )
