"""
ISO-8601 instants for pydantic models.

`Instant` is a `datetime` that always validates to an aware UTC value and
always serializes to its canonical text, e.g. ``2025-06-25T19:04:26.781652Z``:

    class Event(BaseModel):
        moment: Instant
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator, WithJsonSchema

from stdext.config.logging_config import get_logger

log = get_logger(__name__)

_INSTANT_RE = re.compile(
    r"""
    (?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})
    T
    (?P<hour>\d{2}):(?P<minute>\d{2})
    (?::(?P<second>\d{2})(?:\.(?P<fraction>\d{1,9}))?)?
    (?P<offset>Z|[+-]\d{2}:\d{2})
    """,
    re.VERBOSE | re.ASCII,
)


class InstantFormatError(ValueError):
    """Raised when text cannot be parsed as an instant."""


def format_instant(value: datetime) -> str:
    """Format a datetime as canonical ISO-8601 UTC text.

    Naive datetimes are taken to be in UTC. The fractional part is left out
    for whole seconds and written with 3 digits for whole milliseconds,
    otherwise with 6.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)

    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    micros = value.microsecond
    if micros == 0:
        return text + "Z"
    if micros % 1000 == 0:
        return f"{text}.{micros // 1000:03d}Z"
    return f"{text}.{micros:06d}Z"


def parse_instant(text: str) -> datetime:
    """Parse ISO-8601 text carrying a ``Z`` or ``±HH:MM`` offset.

    The form is strict: upper-case ``T`` and ``Z``, a ``.`` before the
    fraction, and no surrounding whitespace. Fractions finer than
    microseconds are truncated.

    Raises:
        InstantFormatError: If the text is not a valid instant.
    """
    match = _INSTANT_RE.fullmatch(text)
    if match is None:
        log.debug("Rejected instant text %r", text)
        raise InstantFormatError(f"Invalid instant: {text!r}")

    fraction = (match["fraction"] or "")[:6].ljust(6, "0")
    offset = match["offset"]
    if offset == "Z":
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        if hours > 18 or minutes > 59:
            log.debug("Rejected instant offset %r", offset)
            raise InstantFormatError(f"Invalid offset in instant: {text!r}")
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))

    try:
        value = datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"] or 0),
            int(fraction),
            tzinfo=tz,
        ).astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        log.debug("Rejected instant %r: %s", text, e)
        raise InstantFormatError(f"Invalid instant: {text!r}") from e
    return value


def _validate_instant(value: Any) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, str):
        return parse_instant(value)
    raise InstantFormatError(f"Expected instant text or datetime, got {type(value).__name__}")


Instant = Annotated[
    datetime,
    PlainValidator(_validate_instant),
    PlainSerializer(format_instant, return_type=str, when_used="always"),
    WithJsonSchema({"type": "string", "format": "date-time"}),
]


__all__ = [
    "Instant",
    "InstantFormatError",
    "format_instant",
    "parse_instant",
]
