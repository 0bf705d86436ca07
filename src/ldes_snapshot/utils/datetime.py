"""DateTime utilities for snapshot cutoffs and version timestamps.

Every comparison in a selection pass happens on timezone-aware UTC
datetimes. Values without an offset are localized to a configured time
zone first.
"""

from datetime import datetime, timezone
from typing import Any, Optional

import pytz
from rdflib import Literal
from rdflib.namespace import XSD


def get_current_timestamp() -> datetime:
    """Get current UTC timestamp.

    Returns:
        Current timezone-aware UTC datetime
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime, tz: Optional[Any] = None) -> datetime:
    """Return ``dt`` as an aware UTC datetime.

    Args:
        dt: Datetime to normalize
        tz: pytz time zone used to localize naive values (UTC when omitted)
    """
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        dt = (tz or pytz.utc).localize(dt)
    return dt.astimezone(pytz.utc)


def to_datetime_literal(dt: datetime) -> Literal:
    """Convert a datetime into an ``xsd:dateTime`` literal."""
    return Literal(dt.isoformat(), datatype=XSD.dateTime)


def from_datetime_literal(value: Any, tz: Optional[Any] = None) -> datetime:
    """Parse an ``xsd:dateTime`` literal (or a datetime) into aware UTC.

    Plain string literals are accepted when they hold an ISO 8601 value.

    Args:
        value: rdflib Literal or datetime
        tz: pytz time zone used to localize values without an offset

    Returns:
        Timezone-aware UTC datetime

    Raises:
        ValueError: If the value is not a date-time
    """
    if isinstance(value, datetime):
        return ensure_utc(value, tz)

    if not isinstance(value, Literal):
        raise ValueError(f"Not a literal: {value!r}")

    parsed = value.toPython()
    if isinstance(parsed, datetime):
        return ensure_utc(parsed, tz)

    if value.datatype is not None and value.datatype != XSD.string:
        raise ValueError(f"Literal is not a date-time: {value!r}")

    text = str(value).strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text), tz)
    except ValueError:
        raise ValueError(f"Could not parse datetime string: {value}")
