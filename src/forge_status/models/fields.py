"""Reusable field types for Forge API documents.

The backend serializes every number as a JSON number and every timestamp as
an RFC3339 string, so the models accept exactly those shapes and nothing the
lax pydantic coercions would otherwise let through (numeric strings, booleans
as integers, bare dates, unix timestamps).
"""

from datetime import datetime
import math
import re
from typing import Annotated, Any
from urllib.parse import urlsplit

from pydantic import AfterValidator, BeforeValidator, StrictBool, StrictStr

_RFC3339_PATTERN = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


def parse_rfc3339(value: Any) -> datetime:
    """Parse an RFC3339 timestamp string into an aware datetime."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError("expected an RFC3339 timestamp string")
    match = _RFC3339_PATTERN.match(value)
    if not match:
        raise ValueError(f"invalid RFC3339 timestamp {value!r}")

    date_part, time_part, fraction, offset = match.groups()
    # datetime only keeps microseconds
    fraction = (fraction or "")[:7]
    if offset in ("Z", "z"):
        offset = "+00:00"
    try:
        return datetime.fromisoformat(f"{date_part}T{time_part}{fraction}{offset}")
    except ValueError as e:
        raise ValueError(f"invalid RFC3339 timestamp {value!r}: {e}") from e


def number_to_int(value: Any) -> int:
    """Accept any JSON number and truncate it to an integer."""
    # bool is an int subclass but never a JSON number
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValueError("expected a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"expected a finite number, got {value}")
    return int(value)


def extract_host(url: str) -> str:
    """Return the authority of a ``scheme://authority/path`` URL.

    Raises:
        ValueError: If the URL has no scheme, no authority or no path.
    """
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise ValueError(f"malformed url {url!r}: {e}") from e
    if not parts.scheme or not parts.netloc or not parts.path.startswith("/"):
        raise ValueError(f"url {url!r} is not of the form scheme://host/path")
    return parts.netloc


def _validate_url(value: str) -> str:
    extract_host(value)
    return value


JsonInt = Annotated[int, BeforeValidator(number_to_int)]
Timestamp = Annotated[datetime, BeforeValidator(parse_rfc3339)]
ServiceURL = Annotated[StrictStr, AfterValidator(_validate_url)]

__all__ = [
    "JsonInt",
    "ServiceURL",
    "StrictBool",
    "StrictStr",
    "Timestamp",
    "extract_host",
    "number_to_int",
    "parse_rfc3339",
]
