"""
tmdbkit - The Movie Database API client

Typed bindings for the TMDB v3 REST API with pluggable HTTP executors,
optional rate limiting, structured logging and Prometheus metrics.
"""

__version__ = "1.0.0"

from .api_client import (
    AuthError,
    ErrorType,
    Executor,
    MiddlewareExecutor,
    MissingApiKeyError,
    NotFoundError,
    QuotaError,
    RequestError,
    RequestsExecutor,
    ResponseError,
    ServerError,
    ServerValidationError,
    TMDBError,
    build_session,
)
from .async_client import AsyncClient, AsyncExecutor, AsyncMiddlewareExecutor, HttpxAsyncExecutor
from .client import Client
from .rate_limiter import AsyncRateLimitedExecutor, RateLimitedExecutor, RateLimiter, RateLimitError
from .schemas import PaginatedResult
from .utils import image_url

__all__ = [
    "Client",
    "AsyncClient",
    "Executor",
    "RequestsExecutor",
    "MiddlewareExecutor",
    "AsyncExecutor",
    "HttpxAsyncExecutor",
    "AsyncMiddlewareExecutor",
    "RateLimiter",
    "RateLimitedExecutor",
    "AsyncRateLimitedExecutor",
    "build_session",
    "PaginatedResult",
    "image_url",
    "TMDBError",
    "ErrorType",
    "MissingApiKeyError",
    "RequestError",
    "ResponseError",
    "ServerError",
    "ServerValidationError",
    "AuthError",
    "NotFoundError",
    "QuotaError",
    "RateLimitError",
]
