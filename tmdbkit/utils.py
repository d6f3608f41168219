"""
Utility functions for tmdbkit.

Helpers for the nullability quirks of the TMDB API (empty strings standing in
for missing values, nulls where lists are expected) and for turning command
attributes into query string values.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

DATE_FORMAT = "%Y-%m-%d"


def empty_string_to_none(value: Any) -> Any:
    """Treat ``""`` the same way as a missing value."""
    if isinstance(value, str) and value == "":
        return None
    return value


def null_to_empty_list(value: Any) -> Any:
    """Replace ``null`` with an empty list."""
    if value is None:
        return []
    return value


def null_to_zero(value: Any) -> Any:
    if value is None:
        return 0
    return value


def null_to_false(value: Any) -> Any:
    if value is None:
        return False
    return value


def parse_optional_date(value: Any) -> Optional[date]:
    """
    Parse a TMDB date (``YYYY-MM-DD``).

    ``None`` and ``""`` both map to ``None``. Values that are already dates are
    returned unchanged.

    Raises:
        ValueError: If the string is not a valid date
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if value == "":
            return None
        return datetime.strptime(value, DATE_FORMAT).date()
    raise ValueError(f"Cannot parse date from {value!r}")


CHANGE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def parse_utc_datetime(value: Any) -> Any:
    """
    Accept the ``2024-05-01 12:30:04 UTC`` form used by change entries.

    Other values are left for the regular datetime validation.
    """
    if isinstance(value, str) and value.endswith(" UTC"):
        return datetime.strptime(value, CHANGE_TIME_FORMAT).replace(tzinfo=timezone.utc)
    return value


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def to_query_value(value: Any) -> Optional[str]:
    """
    Convert a command attribute into a query string value.

    Returns None for values that must not be sent at all: ``None`` and
    ``False`` (TMDB flags are only sent when enabled).
    """
    if value is None or value is False:
        return None
    if value is True:
        return "true"
    if isinstance(value, (date, datetime)):
        return format_date(value)
    if hasattr(value, "value"):
        # Enum members
        return str(value.value)
    return str(value)


def build_query(params: Dict[str, Any]) -> Dict[str, str]:
    """Drop unset parameters and stringify the rest, keeping insertion order."""
    query = {}
    for key, value in params.items():
        converted = to_query_value(value)
        if converted is not None:
            query[key] = converted
    return query


def image_url(path: Optional[str], size: str = "w500") -> str:
    """
    Build a full image URL from a ``poster_path``-style value.

    Args:
        path: Path returned by the API (e.g. "/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg")
        size: TMDB size bucket (e.g. "w92", "w500", "original")

    Returns:
        Full URL, or empty string when path is missing
    """
    if not path:
        return ""
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{IMAGE_BASE_URL}/{size}{path}"
