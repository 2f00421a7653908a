"""
Timestamp helpers for FeedPulse.

Article and event timestamps arrive as ISO 8601 strings from the ingestion
and persistence layers. Everything here works in naive local time, which is
what calendar-day bucketing and hour-of-day histograms are defined against.
"""
import logging
from datetime import date, datetime
from typing import Optional, Union

logger = logging.getLogger(__name__)

Timestamp = Union[str, datetime, None]


def to_local(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def parse_timestamp(value: Timestamp) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp into a naive local datetime.

    Args:
        value: ISO string, datetime or None

    Returns:
        The parsed datetime, or None when the value is missing or unparsable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_local(value)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith('Z') or text.endswith('z'):
        text = text[:-1] + '+00:00'

    try:
        return to_local(datetime.fromisoformat(text))
    except ValueError:
        logger.debug(f"Unparsable timestamp: {value!r}")
        return None


def format_timestamp(value: datetime) -> str:
    """Serialise a datetime the way article timestamps are stored."""
    return value.isoformat()


def day_key(value: Union[date, datetime]) -> str:
    """Calendar day as ``YYYY-MM-DD``."""
    return value.strftime('%Y-%m-%d')
