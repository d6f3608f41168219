"""
Unit tests for the HTTP execution layer.

Tests cover:
- Status code mapping (2xx, 422, 401/403, 404, 429, 5xx)
- Undecodable bodies
- Transport failures
- Middleware chaining
- Session construction with retries
"""

import json

import pytest
import requests
from unittest.mock import Mock, patch

from tmdbkit.api_client import (
    AuthError,
    ErrorType,
    Executor,
    MiddlewareExecutor,
    NotFoundError,
    QuotaError,
    RequestError,
    RequestsExecutor,
    ResponseError,
    ServerError,
    ServerValidationError,
    build_session,
    classify_status,
    parse_response,
)

from conftest import FakeExecutor, load_fixture

URL = "https://api.themoviedb.org/3/movie/550"


def mock_response(status_code, body):
    response = Mock()
    response.status_code = status_code
    response.text = body if isinstance(body, str) else json.dumps(body)
    return response


class TestParseResponse:
    """Test status code mapping shared by every executor."""

    def test_success_returns_json(self):
        assert parse_response(200, '{"id": 550}') == {"id": 550}

    def test_success_invalid_json(self):
        with pytest.raises(ResponseError) as exc_info:
            parse_response(200, "<html>oops</html>")

        assert exc_info.value.status_code == 200
        assert exc_info.value.error_type == ErrorType.RESPONSE

    def test_422_raises_validation_error(self):
        """Test 422 raises ServerValidationError with the errors list."""
        with pytest.raises(ServerValidationError) as exc_info:
            parse_response(422, json.dumps(load_fixture("error_422.json")))

        assert exc_info.value.status_code == 422
        assert exc_info.value.errors == ["page must be less than or equal to 500"]
        assert exc_info.value.error_type == ErrorType.VALIDATION

    def test_401_raises_auth_error(self):
        """Test 401 raises AuthError."""
        with pytest.raises(AuthError) as exc_info:
            parse_response(401, json.dumps(load_fixture("error_401.json")))

        assert exc_info.value.status_code == 401
        assert exc_info.value.body.status_code == 7
        assert "Invalid API key" in exc_info.value.body.status_message
        assert "401" in str(exc_info.value)

    def test_403_raises_auth_error(self):
        """Test 403 raises AuthError."""
        with pytest.raises(AuthError):
            parse_response(403, '{"status_code": 3, "status_message": "Authentication failed"}')

    def test_404_raises_not_found_error(self):
        """Test 404 raises NotFoundError."""
        with pytest.raises(NotFoundError) as exc_info:
            parse_response(404, json.dumps(load_fixture("error_404.json")))

        assert exc_info.value.body.status_code == 34
        assert exc_info.value.error_type == ErrorType.NOT_FOUND

    def test_429_raises_quota_error(self):
        """Test 429 raises QuotaError."""
        with pytest.raises(QuotaError):
            parse_response(429, '{"status_code": 25, "status_message": "Request count over limit"}')

    def test_500_raises_server_error(self):
        with pytest.raises(ServerError) as exc_info:
            parse_response(500, '{"status_code": 11, "status_message": "Internal error"}')

        assert type(exc_info.value) is ServerError
        assert exc_info.value.error_type == ErrorType.SERVER

    def test_error_with_undecodable_body(self):
        """Test an error status with an HTML body raises ResponseError carrying the status."""
        with pytest.raises(ResponseError) as exc_info:
            parse_response(502, "<html>Bad Gateway</html>")

        assert exc_info.value.status_code == 502

    def test_error_with_unexpected_payload(self):
        with pytest.raises(ResponseError) as exc_info:
            parse_response(500, '{"message": "nope"}')

        assert exc_info.value.status_code == 500

    def test_422_with_unexpected_payload(self):
        with pytest.raises(ResponseError):
            parse_response(422, '{"status_code": 22}')

    @pytest.mark.parametrize("status, expected", [
        (401, ErrorType.AUTH),
        (403, ErrorType.AUTH),
        (404, ErrorType.NOT_FOUND),
        (422, ErrorType.VALIDATION),
        (429, ErrorType.QUOTA),
        (500, ErrorType.SERVER),
        (418, ErrorType.SERVER),
    ])
    def test_classify_status(self, status, expected):
        assert classify_status(status) == expected


class TestRequestsExecutor:
    """Test suite for RequestsExecutor."""

    def test_initialization_defaults(self):
        executor = RequestsExecutor()
        assert executor.timeout == 10.0
        assert isinstance(executor.session, requests.Session)

    def test_timeout_from_env(self, monkeypatch):
        monkeypatch.setenv("TMDB_TIMEOUT", "2.5")
        assert RequestsExecutor().timeout == 2.5

    def test_successful_request(self):
        executor = RequestsExecutor(timeout=3.0)

        with patch.object(executor.session, "get", return_value=mock_response(200, {"id": 550})) as get:
            result = executor.execute(URL, {"api_key": "k"})

        assert result == {"id": 550}
        get.assert_called_once_with(
            URL,
            params={"api_key": "k"},
            headers={"Accept": "application/json"},
            timeout=3.0,
        )

    def test_status_error(self):
        executor = RequestsExecutor()

        with patch.object(executor.session, "get", return_value=mock_response(404, load_fixture("error_404.json"))):
            with pytest.raises(NotFoundError):
                executor.execute(URL, {})

    def test_timeout_raises_request_error(self):
        """Test timeouts raise RequestError."""
        executor = RequestsExecutor()

        with patch.object(executor.session, "get", side_effect=requests.exceptions.Timeout("timed out")):
            with pytest.raises(RequestError) as exc_info:
                executor.execute(URL, {})

        assert exc_info.value.error_type == ErrorType.REQUEST
        assert isinstance(exc_info.value.original_error, requests.exceptions.Timeout)

    def test_connection_error_raises_request_error(self):
        executor = RequestsExecutor()

        with patch.object(executor.session, "get", side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(RequestError):
                executor.execute(URL, {})

    def test_invalid_url_raises_request_error(self):
        with RequestsExecutor() as executor:
            with pytest.raises(RequestError) as exc_info:
                executor.execute("http://localhost:notaport/3/movie/550", {})

        assert isinstance(exc_info.value.original_error, requests.exceptions.InvalidURL)

    def test_close_owned_session(self):
        executor = RequestsExecutor()

        with patch.object(executor.session, "close") as close:
            executor.close()

        close.assert_called_once()

    def test_close_leaves_shared_session_open(self):
        session = Mock(spec=requests.Session)
        executor = RequestsExecutor(session=session)

        executor.close()

        session.close.assert_not_called()

    def test_context_manager(self):
        executor = RequestsExecutor()

        with patch.object(executor.session, "close") as close:
            with executor:
                pass

        close.assert_called_once()


class TestMiddlewareExecutor:
    """Test middleware chaining."""

    def test_no_middleware_delegates(self):
        inner = FakeExecutor({"ok": True})
        executor = MiddlewareExecutor(inner)

        assert executor.execute(URL, {"a": "1"}) == {"ok": True}
        assert inner.calls == [(URL, {"a": "1"})]

    def test_middlewares_run_in_order(self):
        seen = []

        def first(url, params, call_next):
            seen.append("first")
            return call_next(url, {**params, "language": "fr-FR"})

        def second(url, params, call_next):
            seen.append("second")
            result = call_next(url, params)
            return {**result, "wrapped": True}

        inner = FakeExecutor({"ok": True})
        executor = MiddlewareExecutor(inner, first, second)

        result = executor.execute(URL, {"api_key": "k"})

        assert seen == ["first", "second"]
        assert inner.last_params == {"api_key": "k", "language": "fr-FR"}
        assert result == {"ok": True, "wrapped": True}

    def test_middleware_can_short_circuit(self):
        inner = FakeExecutor({"ok": True})
        executor = MiddlewareExecutor(inner, lambda url, params, call_next: {"cached": True})

        assert executor.execute(URL, {}) == {"cached": True}
        assert inner.calls == []

    def test_errors_propagate(self):
        inner = FakeExecutor(RequestError("boom"))
        executor = MiddlewareExecutor(inner, lambda url, params, call_next: call_next(url, params))

        with pytest.raises(RequestError):
            executor.execute(URL, {})

    def test_close_closes_inner(self):
        inner = FakeExecutor({})
        MiddlewareExecutor(inner).close()
        assert inner.closed


class TestExecutorBase:
    def test_execute_not_implemented(self):
        with pytest.raises(NotImplementedError):
            Executor().execute(URL, {})


class TestBuildSession:
    def test_retry_adapter_mounted(self):
        session = build_session(retries=3, backoff_factor=1.0)

        adapter = session.get_adapter("https://api.themoviedb.org")
        assert adapter.max_retries.total == 3
        assert adapter.max_retries.backoff_factor == 1.0
        assert 429 in adapter.max_retries.status_forcelist

    def test_usable_by_executor(self):
        session = build_session(retries=1)
        executor = RequestsExecutor(session=session)

        assert executor.session is session
