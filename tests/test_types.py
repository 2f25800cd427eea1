"""
Tests for pgwire_negotiate.types module.
"""

import pytest
from unittest.mock import MagicMock

from pgwire_negotiate.errors import ConnectionRequestError
from pgwire_negotiate.types import (
    AttemptOutcome,
    AttemptRecord,
    AttemptResult,
    ConnectionRequest,
)


class TestAttemptOutcome:
    """Tests for AttemptOutcome enum."""

    def test_values(self):
        assert AttemptOutcome.SUCCESS.value == "success"
        assert AttemptOutcome.DECLINED.value == "declined"
        assert AttemptOutcome.FAILED.value == "failed"
        assert AttemptOutcome.SKIPPED.value == "skipped"

    def test_string_enum(self):
        assert AttemptOutcome.DECLINED == "declined"


class TestAttemptResult:
    """Tests for AttemptResult dataclass."""

    def test_success(self):
        conn = MagicMock()
        result = AttemptResult.success(conn)
        assert result.outcome == AttemptOutcome.SUCCESS
        assert result.connection is conn
        assert result.is_success
        assert not result.is_declined

    def test_declined(self):
        result = AttemptResult.declined("server speaks protocol 2 only")
        assert result.is_declined
        assert result.reason == "server speaks protocol 2 only"
        assert result.connection is None

    def test_declined_without_reason(self):
        assert AttemptResult.declined().reason is None

    def test_failed(self):
        error = OSError("reset by peer")
        result = AttemptResult.failed(error)
        assert result.outcome == AttemptOutcome.FAILED
        assert result.error is error

    def test_success_requires_connection(self):
        with pytest.raises(ValueError):
            AttemptResult.success(None)

    def test_failed_requires_error(self):
        with pytest.raises(ValueError):
            AttemptResult(AttemptOutcome.FAILED)

    def test_skipped_not_allowed(self):
        with pytest.raises(ValueError):
            AttemptResult(AttemptOutcome.SKIPPED)


class TestAttemptRecord:
    """Tests for AttemptRecord dataclass."""

    def test_defaults(self):
        record = AttemptRecord("3", AttemptOutcome.SKIPPED)
        assert record.version == "3"
        assert record.reason is None


class TestConnectionRequest:
    """Tests for ConnectionRequest dataclass."""

    def test_valid_request(self, sample_request):
        assert sample_request.host == "db.example.com"
        assert sample_request.port == 5432
        assert sample_request.configuration["password"] == "s3cret"

    def test_configuration_defaults_empty(self):
        request = ConnectionRequest("localhost", 5432, "app", "appdb")
        assert dict(request.configuration) == {}

    def test_configuration_is_read_only(self, sample_request):
        with pytest.raises(TypeError):
            sample_request.configuration["password"] = "other"

    def test_configuration_copied(self):
        configuration = {"protocolVersion": "3"}
        request = ConnectionRequest("localhost", 5432, "app", "appdb", configuration)
        configuration["protocolVersion"] = "2"
        assert request.configuration["protocolVersion"] == "3"

    def test_request_is_frozen(self, sample_request):
        with pytest.raises(AttributeError):
            sample_request.user = "root"

    def test_request_is_hashable(self, sample_request):
        """Requests can be dict keys and set members."""
        same = ConnectionRequest(
            "db.example.com", 5432, "app", "appdb", {"password": "s3cret"}
        )
        assert hash(sample_request) == hash(same)
        assert {sample_request: "v3"}[same] == "v3"
        assert len({sample_request, same}) == 1

    def test_equality_includes_configuration(self, sample_request):
        other = ConnectionRequest(
            "db.example.com", 5432, "app", "appdb", {"password": "other"}
        )
        assert sample_request != other
        assert len({sample_request, other}) == 2

    @pytest.mark.parametrize("kwargs", [
        {"user": ""},
        {"database": ""},
        {"host": ""},
        {"port": 0},
        {"port": 70000},
        {"port": "5432"},
        {"port": True},
    ])
    def test_invalid_requests(self, kwargs):
        params = {"host": "localhost", "port": 5432, "user": "app", "database": "appdb"}
        params.update(kwargs)
        with pytest.raises(ConnectionRequestError):
            ConnectionRequest(**params)

    def test_repr_masks_password(self, sample_request):
        text = repr(sample_request)
        assert "s3cret" not in text
        assert "'password': '***'" in text
        assert "db.example.com" in text
