"""Normalization of TestNG timestamp strings to epoch milliseconds."""

import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

logger = logging.getLogger(__name__)


def _to_millis(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def _parse_timestamp(value: str) -> Optional[int]:
    """Parse an ISO-8601 or RFC 2822 timestamp; naive values are taken as UTC."""
    text = value.strip()
    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return _to_millis(datetime.fromisoformat(iso_text))
    except ValueError:
        pass
    try:
        return _to_millis(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        return None


def parse_date(date_string: Optional[str]) -> int:
    """
    Convert a timestamp string to epoch milliseconds.

    The full string is tried first, as ISO-8601 and then as RFC 2822.
    TestNG often appends a zone name such as ``IST`` that cannot be parsed
    on its own, so when the full string is rejected only the text before
    the first space is parsed. Returns 0 when both attempts fail.
    """
    if not date_string:
        logger.warning(f"Failed to parse date: {date_string!r}")
        return 0

    timestamp = _parse_timestamp(date_string)
    if timestamp is not None:
        return timestamp

    without_tz = date_string.split(" ", 1)[0]
    timestamp = _parse_timestamp(without_tz)
    if timestamp is not None:
        return timestamp

    logger.warning(f"Failed to parse date: {date_string}")
    return 0
