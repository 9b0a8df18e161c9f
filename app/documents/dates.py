import math
import re
from datetime import datetime, timezone

# Supply requests are extracted as MM/DD/YY, every other type as DD-MM-YY.
_SLASH_DATE = re.compile(r"([0-9]{2})/([0-9]{2})/([0-9]{2})")
_DASH_DATE = re.compile(r"([0-9]{2})-([0-9]{2})-([0-9]{2})")


def parse_sortable_date(value: str) -> float:
    """Return a UTC timestamp for `MM/DD/YY` or `DD-MM-YY`, else +inf.

    Two-digit years are read as 20YY. Anything that does not match one of the
    two patterns exactly, or names an impossible calendar day, is +inf.
    """
    if not value:
        return math.inf

    match = _SLASH_DATE.fullmatch(value)
    if match:
        month, day, year = match.groups()
        return _timestamp(year, month, day)

    match = _DASH_DATE.fullmatch(value)
    if match:
        day, month, year = match.groups()
        return _timestamp(year, month, day)

    return math.inf


def _timestamp(year: str, month: str, day: str) -> float:
    try:
        moment = datetime(2000 + int(year), int(month), int(day), tzinfo=timezone.utc)
    except ValueError:
        return math.inf
    return moment.timestamp()
