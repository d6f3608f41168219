"""
Prometheus metrics for tmdbkit.

This module provides metrics collection for outgoing TMDB requests and the
local rate limiter. Metrics live in the default ``prometheus_client`` registry
so that applications exposing ``/metrics`` pick them up automatically.
"""

import re
import time
from contextlib import contextmanager
from urllib.parse import urlparse

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST

from tmdbkit.logging_config import get_logger

logger = get_logger(__name__)


# External API Call Metrics
tmdb_requests_total = Counter(
    'tmdbkit_requests_total',
    'Total number of TMDB API requests',
    ['endpoint', 'status']
)

tmdb_request_duration_seconds = Histogram(
    'tmdbkit_request_duration_seconds',
    'TMDB API request duration in seconds',
    ['endpoint']
)

# Rate Limiter Metrics
rate_limit_usage = Gauge(
    'tmdbkit_rate_limit_usage',
    'Calls made in the current rate limit window'
)

rate_limit_max = Gauge(
    'tmdbkit_rate_limit_max',
    'Maximum calls allowed per rate limit window'
)

rate_limit_remaining = Gauge(
    'tmdbkit_rate_limit_remaining',
    'Remaining calls in the current rate limit window'
)

rate_limit_exceeded_total = Counter(
    'tmdbkit_rate_limit_exceeded_total',
    'Total number of times the rate limit was exceeded'
)

_NUMERIC_SEGMENT = re.compile(r'/\d+(?=/|$)')
_FIND_SEGMENT = re.compile(r'/find/[^/]+')
_VERSION_PREFIX = re.compile(r'^/\d+(?=/)')


def endpoint_label(url: str) -> str:
    """
    Reduce a request URL to a low-cardinality endpoint label.

    Example:
        "https://api.themoviedb.org/3/movie/550/credits" -> "/movie/{id}/credits"
    """
    path = urlparse(url).path or url
    path = _VERSION_PREFIX.sub('', path)
    path = _FIND_SEGMENT.sub('/find/{external_id}', path)
    return _NUMERIC_SEGMENT.sub('/{id}', path)


@contextmanager
def track_tmdb_request(url: str):
    """
    Context manager to track a TMDB request.

    Records the request counter and duration histogram and logs the outcome.
    The status label is ``success`` or the error type of the raised error.

    Example:
        with track_tmdb_request(url):
            response = session.get(url, params=params)
    """
    endpoint = endpoint_label(url)
    start_time = time.time()
    status = 'success'

    logger.debug("tmdb_request_started", endpoint=endpoint)

    try:
        yield
    except Exception as e:
        error_type = getattr(e, 'error_type', None)
        status = error_type.value if error_type is not None else 'error'
        raise
    finally:
        duration = time.time() - start_time
        tmdb_requests_total.labels(endpoint=endpoint, status=status).inc()
        tmdb_request_duration_seconds.labels(endpoint=endpoint).observe(duration)

        if status == 'success':
            logger.info(
                "tmdb_request_completed",
                endpoint=endpoint,
                duration_ms=round(duration * 1000, 2)
            )
        else:
            logger.warning(
                "tmdb_request_failed",
                endpoint=endpoint,
                status=status,
                duration_ms=round(duration * 1000, 2)
            )


def update_rate_limit_metrics(usage, limit, remaining):
    """
    Update rate limiter metrics.

    Args:
        usage: Calls made in the current window
        limit: Maximum calls per window
        remaining: Remaining calls
    """
    rate_limit_usage.set(usage)
    rate_limit_max.set(limit)
    rate_limit_remaining.set(remaining)


def track_rate_limit_exceeded():
    """Record a rate limit exceeded event."""
    rate_limit_exceeded_total.inc()


def get_metrics():
    """
    Generate Prometheus metrics in text format.

    Returns:
        Tuple of (metrics_text, content_type)
    """
    return generate_latest(), CONTENT_TYPE_LATEST
