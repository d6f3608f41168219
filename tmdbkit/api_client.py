"""
HTTP execution layer for the TMDB API.

This module provides the pluggable transport used by ``tmdbkit.Client``:
an Executor performs one GET request and returns decoded JSON, mapping every
failure onto the library's error taxonomy.

Key Features:
- Swappable executors (default ``requests`` session, middleware-wrapped)
- Connection pooling through ``requests.Session``
- Opt-in transport retries via urllib3 ``Retry`` adapters
- Structured logging and Prometheus metrics for every request

Error Taxonomy:
- RequestError: Transport failure (connection, timeout, invalid URL)
- ResponseError: Body could not be decoded or deserialized
- ServerValidationError: HTTP 422 with the upstream ``errors`` list
- ServerError: Any other non-2xx status, with the upstream status payload
  - AuthError (401, 403), NotFoundError (404), QuotaError (429)
"""

import json
import os
from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, List, Optional

import requests
from pydantic import BaseModel, ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from tmdbkit.logging_config import get_logger
from tmdbkit.metrics import track_tmdb_request

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


def default_timeout() -> float:
    """Request timeout in seconds, from ``TMDB_TIMEOUT`` when set."""
    return float(os.getenv("TMDB_TIMEOUT", str(DEFAULT_TIMEOUT)))


class ErrorType(Enum):
    """Classification of client errors."""
    REQUEST = "request"  # Transport failures
    RESPONSE = "response"  # Undecodable or unexpected payloads
    VALIDATION = "validation"  # 422 with an errors list
    SERVER = "server"  # Other non-2xx statuses
    AUTH = "auth"  # 401, 403
    NOT_FOUND = "not_found"  # 404
    QUOTA = "quota"  # 429
    RATE_LIMIT = "rate_limit"  # Refused by the local rate limiter
    CONFIG = "config"  # Client misconfiguration


class TMDBError(Exception):
    """Base exception for all tmdbkit errors."""

    def __init__(self, message: str, error_type: ErrorType, status_code: Optional[int] = None,
                 original_error: Optional[Exception] = None):
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        self.original_error = original_error
        super().__init__(message)


class MissingApiKeyError(TMDBError):
    """No API key was given and ``TMDB_API_KEY`` is not set."""

    def __init__(self, message: str = "missing api key"):
        super().__init__(message, ErrorType.CONFIG)


class RequestError(TMDBError):
    """The request could not be sent or no response was received."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, ErrorType.REQUEST, None, original_error)


class ResponseError(TMDBError):
    """The response body could not be read into the expected shape."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 original_error: Optional[Exception] = None):
        super().__init__(message, ErrorType.RESPONSE, status_code, original_error)


class ServerErrorBody(BaseModel):
    """Payload TMDB sends with most non-2xx responses."""
    status_code: int
    status_message: str
    success: Optional[bool] = None


class ServerValidationBody(BaseModel):
    """Payload TMDB sends with 422 responses."""
    errors: List[str]


class ServerValidationError(TMDBError):
    """The server rejected the request parameters (HTTP 422)."""

    def __init__(self, message: str, errors: List[str], status_code: int = 422):
        super().__init__(message, ErrorType.VALIDATION, status_code)
        self.errors = errors


class ServerError(TMDBError):
    """Non-2xx response carrying the upstream status payload."""

    def __init__(self, message: str, body: ServerErrorBody, status_code: int,
                 error_type: ErrorType = ErrorType.SERVER):
        super().__init__(message, error_type, status_code)
        self.body = body


class AuthError(ServerError):
    """Authentication or authorization error (401, 403)."""

    def __init__(self, message: str, body: ServerErrorBody, status_code: int):
        super().__init__(message, body, status_code, ErrorType.AUTH)


class NotFoundError(ServerError):
    """Resource not found error (404)."""

    def __init__(self, message: str, body: ServerErrorBody, status_code: int = 404):
        super().__init__(message, body, status_code, ErrorType.NOT_FOUND)


class QuotaError(ServerError):
    """Upstream rate limiting (429)."""

    def __init__(self, message: str, body: ServerErrorBody, status_code: int = 429):
        super().__init__(message, body, status_code, ErrorType.QUOTA)


def classify_status(status_code: int) -> ErrorType:
    """
    Classify a non-2xx HTTP status code.

    Args:
        status_code: HTTP status code

    Returns:
        ErrorType classification
    """
    if status_code in (401, 403):
        return ErrorType.AUTH
    if status_code == 404:
        return ErrorType.NOT_FOUND
    if status_code == 422:
        return ErrorType.VALIDATION
    if status_code == 429:
        return ErrorType.QUOTA
    return ErrorType.SERVER


def _raise_server_error(status_code: int, body: ServerErrorBody):
    message = f"TMDB request failed with status {status_code}: {body.status_message}"
    error_type = classify_status(status_code)
    if error_type == ErrorType.AUTH:
        raise AuthError(message, body, status_code)
    elif error_type == ErrorType.NOT_FOUND:
        raise NotFoundError(message, body, status_code)
    elif error_type == ErrorType.QUOTA:
        raise QuotaError(message, body, status_code)
    raise ServerError(message, body, status_code)


def _decode_json(text: str, status_code: int) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ResponseError(
            f"Invalid JSON response (status {status_code}): {e}",
            status_code=status_code,
            original_error=e,
        ) from e


def parse_response(status_code: int, text: str) -> Any:
    """
    Turn a raw HTTP response into decoded JSON or a typed error.

    Shared by every executor so that transports only differ in how they send
    the request.

    Args:
        status_code: HTTP status code
        text: Response body

    Returns:
        Decoded JSON for 2xx responses

    Raises:
        ResponseError: Body is not valid JSON or not the expected error shape
        ServerValidationError: 422 response
        ServerError: Any other non-2xx response
    """
    if 200 <= status_code < 300:
        return _decode_json(text, status_code)

    payload = _decode_json(text, status_code)

    if status_code == 422:
        try:
            body = ServerValidationBody.model_validate(payload)
        except ValidationError as e:
            raise ResponseError(
                f"Unexpected validation error payload (status {status_code})",
                status_code=status_code,
                original_error=e,
            ) from e
        raise ServerValidationError(
            f"TMDB rejected the request: {'; '.join(body.errors)}",
            errors=body.errors,
            status_code=status_code,
        )

    try:
        body = ServerErrorBody.model_validate(payload)
    except ValidationError as e:
        raise ResponseError(
            f"Unexpected error payload (status {status_code})",
            status_code=status_code,
            original_error=e,
        ) from e
    _raise_server_error(status_code, body)


# =============================================================================
# Executors
# =============================================================================


class Executor:
    """
    Synchronous HTTP transport.

    Subclasses implement ``execute`` to perform a GET request on ``url`` with
    the given query parameters and return decoded JSON.
    """

    def execute(self, url: str, params: Dict[str, str]) -> Any:
        raise NotImplementedError

    def close(self):
        """Release transport resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class RequestsExecutor(Executor):
    """
    Default executor backed by a ``requests.Session``.

    Configuration via environment variables:
    - TMDB_TIMEOUT: Request timeout in seconds (default: 10)
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        """
        Initialize the executor.

        Args:
            session: Session to send requests with. Pass a session built with
                ``build_session`` (or your own adapters/hooks) to add
                transport middleware. A new session is created when omitted.
            timeout: Request timeout in seconds (default: 10 or from env)
        """
        self.timeout = timeout or default_timeout()
        self._owns_session = session is None
        self.session = session or requests.Session()

    def execute(self, url: str, params: Dict[str, str]) -> Any:
        with track_tmdb_request(url):
            try:
                response = self.session.get(
                    url,
                    params=params,
                    headers={"Accept": "application/json"},
                    timeout=self.timeout,
                )
            except requests.exceptions.RequestException as e:
                raise RequestError(
                    f"TMDB request failed: {type(e).__name__}: {e}",
                    original_error=e,
                ) from e

            return parse_response(response.status_code, response.text)

    def close(self):
        """Close the underlying session when this executor created it."""
        if self._owns_session:
            self.session.close()

    def __repr__(self):
        return f"RequestsExecutor(timeout={self.timeout})"


Middleware = Callable[[str, Dict[str, str], Callable[[str, Dict[str, str]], Any]], Any]


class MiddlewareExecutor(Executor):
    """
    Executor wrapping another executor in a chain of middlewares.

    A middleware is a callable ``middleware(url, params, call_next)`` that may
    inspect or change the request, call ``call_next(url, params)`` to continue
    the chain, and inspect or change the result. Middlewares run in the order
    they were given; the innermost call reaches the wrapped executor.

    Example:
        def add_language(url, params, call_next):
            params = {**params, "language": params.get("language", "fr-FR")}
            return call_next(url, params)

        executor = MiddlewareExecutor(RequestsExecutor(), add_language)
    """

    def __init__(self, inner: Optional[Executor] = None, *middlewares: Middleware):
        self.inner = inner or RequestsExecutor()
        self.middlewares = list(middlewares)

    def _call(self, index: int, url: str, params: Dict[str, str]) -> Any:
        if index >= len(self.middlewares):
            return self.inner.execute(url, params)
        return self.middlewares[index](url, params, partial(self._call, index + 1))

    def execute(self, url: str, params: Dict[str, str]) -> Any:
        return self._call(0, url, params)

    def close(self):
        self.inner.close()

    def __repr__(self):
        return f"MiddlewareExecutor(inner={self.inner!r}, middlewares={len(self.middlewares)})"


def build_session(retries: int = 0, backoff_factor: float = 0.5,
                  status_forcelist=(429, 500, 502, 503, 504)) -> requests.Session:
    """
    Build a ``requests.Session`` with transport-level retries mounted.

    The client itself never retries; pass the returned session to
    ``RequestsExecutor`` to opt in.

    Args:
        retries: Total retry attempts (0 disables retries)
        backoff_factor: urllib3 exponential backoff factor
        status_forcelist: Statuses that trigger a retry

    Returns:
        Configured session
    """
    session = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=backoff_factor,
        status_forcelist=status_forcelist,
        allowed_methods=frozenset(["GET", "HEAD"]),
        respect_retry_after_header=True,
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    logger.debug("tmdb_session_built", retries=retries, backoff_factor=backoff_factor)
    return session
