"""
Structured logging configuration for tmdbkit.

This module sets up structured logging using structlog with:
- JSON formatting by default
- Console formatting for development (DEBUG=1)
- Log scrubbing for sensitive data (API keys, tokens)
- Configurable log levels via environment variables

Applications that already configure structlog keep their configuration;
tmdbkit only installs its own when nothing else has.
"""

import os
import logging
import re
from typing import Any, Dict, Optional

import structlog

# Log level configuration via environment variable
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

REDACTED = "[REDACTED]"

# Sensitive data patterns for scrubbing
SENSITIVE_PATTERNS = {
    # api_key=... inside URLs and query strings
    "query_api_key": re.compile(r'(api_key=)([^&\s"\']+)', re.IGNORECASE),
    "api_key": re.compile(r'(api[_\-]?key["\s:=]+)([a-zA-Z0-9_\-]{20,})', re.IGNORECASE),
    "tmdb_key": re.compile(r'(tmdb[_\-]?api[_\-]?key["\s:=]+)([a-zA-Z0-9_\-]{20,})', re.IGNORECASE),
    "bearer_token": re.compile(r'(bearer\s+)([a-zA-Z0-9_\-\.]{20,})', re.IGNORECASE),
}

# Sensitive field names that should be fully redacted
SENSITIVE_FIELD_NAMES = {
    "api_key", "apikey", "api-key",
    "tmdb_api_key", "tmdb-api-key", "tmdb_key",
    "password", "secret", "token", "authorization",
    "bearer", "access_token", "read_access_token",
}

# Fields that should never be scrubbed
SAFE_FIELD_NAMES = {
    "event", "timestamp", "level", "service", "endpoint",
    "duration_ms", "status", "status_code",
}


def scrub_sensitive_data(value: Any, parent_key: Optional[str] = None) -> Any:
    """
    Recursively scrub sensitive data from log entries.

    Args:
        value: Value to scrub (can be dict, list, str, or other)
        parent_key: Parent key name for field-level redaction

    Returns:
        Scrubbed value with sensitive data replaced with [REDACTED]
    """
    if isinstance(value, dict):
        return {k: scrub_sensitive_data(v, k) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [scrub_sensitive_data(item, parent_key) for item in value]

    key = parent_key.lower() if isinstance(parent_key, str) else None
    if key in SAFE_FIELD_NAMES:
        return value
    if key in SENSITIVE_FIELD_NAMES:
        return REDACTED

    if isinstance(value, str):
        scrubbed = value
        for pattern in SENSITIVE_PATTERNS.values():
            scrubbed = pattern.sub(r'\1' + REDACTED, scrubbed)
        return scrubbed
    return value


def add_library_context(logger: Any, method_name: str, event_dict: Dict) -> Dict:
    """Tag log entries with the emitting library."""
    event_dict.setdefault("service", "tmdbkit")
    return event_dict


def add_scrubbing(logger: Any, method_name: str, event_dict: Dict) -> Dict:
    """
    Processor to scrub sensitive data from log entries.

    Args:
        logger: Logger instance
        method_name: Logging method name
        event_dict: Event dictionary to scrub

    Returns:
        Scrubbed event dictionary
    """
    return scrub_sensitive_data(event_dict)


def configure_structlog(force: bool = False):
    """
    Configure structlog for tmdbkit.

    Sets up processors, formatters, and output based on environment.

    Args:
        force: Reconfigure even if structlog is already configured
    """
    if structlog.is_configured() and not force:
        return

    is_dev = os.getenv("DEBUG") == "1"

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_library_context,
        add_scrubbing,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None):
    """
    Get a configured structlog logger.

    Args:
        name: Optional logger name (defaults to calling module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


configure_structlog()
