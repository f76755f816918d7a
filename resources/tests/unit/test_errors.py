"""
Unit tests for error normalization.
"""

from unittest.mock import Mock

import pytest
from elasticsearch import ApiError, BadRequestError, NotFoundError
from elasticsearch import ConnectionError as ESConnectionError

from elastic_mcp.utils.errors import (
    BackendError,
    ConfigurationError,
    ElasticMCPError,
    ValidationError,
    describe_error,
)


def _api_error(cls, status, body):
    return cls("api error", meta=Mock(status=status), body=body)


class TestElasticMCPError:

    def test_default_error_code(self):
        error = ValidationError("bad input")

        assert error.error_code == "VALIDATIONERROR"
        assert error.suggestions == []
        assert error.context == {}
        assert str(error) == "bad input"

    def test_explicit_fields(self):
        error = ConfigurationError("missing url", error_code="NO_URL", suggestions=["set ES_URL"])

        assert error.error_code == "NO_URL"
        assert error.suggestions == ["set ES_URL"]
        assert isinstance(error, ElasticMCPError)


class TestDescribeError:

    def test_own_error(self):
        detail = describe_error(BackendError("Malformed search response"))

        assert detail.kind == "BACKENDERROR"
        assert detail.message == "Malformed search response"

    def test_api_error_reason(self):
        error = _api_error(
            NotFoundError,
            404,
            {"error": {"type": "index_not_found_exception", "reason": "no such index [x]"}, "status": 404},
        )

        detail = describe_error(error)

        assert detail.kind == "BACKEND_ERROR"
        assert detail.message == "no such index [x] (status 404)"

    def test_api_error_type_without_reason(self):
        error = _api_error(BadRequestError, 400, {"error": {"type": "parsing_exception"}})

        assert describe_error(error).message == "parsing_exception (status 400)"

    def test_api_error_string_body(self):
        error = _api_error(ApiError, 401, {"error": "unauthorized"})

        assert describe_error(error).message == "unauthorized (status 401)"

    def test_connection_error(self):
        detail = describe_error(ESConnectionError("Connection refused"))

        assert detail.kind == "CONNECTION_ERROR"
        assert detail.message == "Connection refused"

    def test_connection_error_with_cause(self):
        cause = OSError("[Errno 111] Connection refused")

        detail = describe_error(ESConnectionError("Cannot reach es:9200", errors=(cause,)))

        assert detail.message == "Cannot reach es:9200 (caused by: [Errno 111] Connection refused)"

    @pytest.mark.parametrize(
        "error, expected",
        [
            (ValueError("bad value"), "bad value"),
            (KeyError("hits"), "'hits'"),
            (RuntimeError("  "), "RuntimeError"),
            (TimeoutError(), "TimeoutError"),
        ],
    )
    def test_foreign_exceptions(self, error, expected):
        assert describe_error(error).message == expected
