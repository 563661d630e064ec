from datetime import datetime, timezone

from dateutil import parser

from jumpweather.utils.log_util import app_logger

logger = app_logger(__name__)


def to_date(date_string: str) -> datetime:
    """
    Convert a date string to a timezone-aware datetime object.

    Strings without an offset are taken as UTC.

    :param date_string: str - The date string to parse.
    :return: datetime - Parsed datetime object.
    :raises: Exception if date string parsing fails.
    """
    try:
        parsed = parser.parse(date_string)
    except Exception as e:
        logger.error(f"Error parsing date string: {e}", exc_info=True)
        raise

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
