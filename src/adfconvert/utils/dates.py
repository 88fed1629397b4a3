from datetime import datetime, timedelta, timezone
import logging

from adfconvert.constants import LOGGER_NAME

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

logger = logging.getLogger(LOGGER_NAME)


def _unit(timestamp_unit: str) -> timedelta:
    return timedelta(seconds=1) if timestamp_unit == 'seconds' else timedelta(milliseconds=1)


def timestamp_to_rfc3339(timestamp: str, timestamp_unit: str = 'milliseconds') -> str:
    """Formats an ADF epoch timestamp as an RFC 3339 UTC date-time.

    Args:
        timestamp: the epoch timestamp stored in an ADF date node.
        timestamp_unit: `milliseconds` or `seconds`.

    Returns:
        The formatted date-time. Unparseable timestamps are formatted as the epoch.
    """

    try:
        value = EPOCH + int(timestamp) * _unit(timestamp_unit)
    except (ValueError, OverflowError):
        logger.warning(f'Unable to parse date timestamp {timestamp!r}; using the epoch')
        value = EPOCH
    timespec = 'milliseconds' if value.microsecond else 'seconds'
    return value.isoformat(timespec=timespec).replace('+00:00', 'Z')


def rfc3339_to_timestamp(value: str | None, timestamp_unit: str = 'milliseconds') -> str:
    """Parses the `datetime` attribute of a `<time>` element into an ADF epoch timestamp.

    Values made only of digits are already timestamps and are returned unchanged.

    Args:
        value: an RFC 3339 date-time or an epoch timestamp.
        timestamp_unit: `milliseconds` or `seconds`.

    Returns:
        The epoch timestamp as a string; `'0'` when the value cannot be parsed.
    """

    value = (value or '').strip()
    if value.isdigit():
        return value
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00').replace('z', '+00:00'))
    except ValueError:
        logger.warning(f'Unable to parse date {value!r}; using the epoch')
        return '0'
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return str((parsed - EPOCH) // _unit(timestamp_unit))
