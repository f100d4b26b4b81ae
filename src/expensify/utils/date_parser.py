"""Date parsing utilities.

Ecuadorian bank emails stamp transactions in local time (America/Guayaquil,
UTC-5 with no daylight saving). Everything here converts those local stamps
into UTC ISO-8601 strings.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as date_parser
from dateutil import tz

from expensify.utils.text import clean

ECUADOR_TZ = tz.gettz("America/Guayaquil")

SPANISH_MONTHS = {
    "enero": 1,
    "febrero": 2,
    "marzo": 3,
    "abril": 4,
    "mayo": 5,
    "junio": 6,
    "julio": 7,
    "agosto": 8,
    "septiembre": 9,
    "octubre": 10,
    "noviembre": 11,
    "diciembre": 12,
}

# "2026-01-05 a las 13:29"
_ISO_WITH_TIME = re.compile(r"(\d{4})-(\d{2})-(\d{2})\s+(?:a\s+las\s+)?(\d{1,2}):(\d{2})", re.IGNORECASE)
# "30/Enero/2026 10:03"
_SPANISH_MONTH = re.compile(
    r"(\d{1,2})/(" + "|".join(SPANISH_MONTHS) + r")/(\d{4})(?:\s+(\d{1,2}):(\d{2}))?",
    re.IGNORECASE,
)
# "16/01/2026 13:23:21" or "01/29/2026 15:13:45"
_SLASHED_WITH_TIME = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})\s+(\d{1,2}):(\d{2})(?::(\d{2}))?")
_SLASHED_DATE_ONLY = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_ISO_DATE_ONLY = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def format_utc(value: datetime) -> str:
    """Format an aware datetime as "YYYY-MM-DDTHH:MM:SS.000Z"."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def ecuador_to_utc_iso(
    year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0
) -> Optional[str]:
    """Interpret the given fields as Ecuador local time and return UTC ISO.

    Returns:
        UTC ISO string, or None if the fields do not form a valid date
    """
    try:
        local = datetime(year, month, day, hour, minute, second, tzinfo=ECUADOR_TZ)
    except ValueError:
        return None
    return format_utc(local)


def _parse_instant(value: str) -> Optional[datetime]:
    try:
        parsed = date_parser.isoparse(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _with_fallback_time(year: int, month: int, day: int, fallback_iso: str) -> str:
    received = _parse_instant(fallback_iso)
    if received is None:
        return fallback_iso
    local = received.astimezone(ECUADOR_TZ)
    result = ecuador_to_utc_iso(year, month, day, local.hour, local.minute, local.second)
    return result or fallback_iso


def _slashed(match: re.Match, month_first: bool) -> Optional[str]:
    first, second, year, hour, minute, sec = match.groups()
    day, month = (int(second), int(first)) if month_first else (int(first), int(second))
    if not (1 <= month <= 12 and 1 <= day <= 31):
        return None
    return ecuador_to_utc_iso(int(year), month, day, int(hour), int(minute), int(sec or 0))


def parse_occurred_at(text: Optional[str], fallback_iso: str, date_order: str = "dmy") -> str:
    """Parse a transaction date from a bank email into a UTC ISO string.

    Supported formats, tried in order (all in Ecuador local time):
    - "2026-01-05 a las 13:29" / "2026-01-05 13:29"
    - "30/Enero/2026 10:03" / "30/Enero/2026" (midnight)
    - "16/01/2026 13:23:21" (day first, only when the month field is <= 12)
    - "01/29/2026 15:13:45" (month first; tried first when date_order="mdy")
    - "19/01/2026" / "2026-01-30" (date only, time of day taken from the
      fallback instant converted to Ecuador time)

    Args:
        text: Date text from the email, may be None
        fallback_iso: Provider receive instant, returned when nothing matches
        date_order: "dmy" (default) or "mdy" for banks using US ordering

    Returns:
        UTC ISO string. Never raises; degrades to fallback_iso.
    """
    if not text or not clean(text):
        return fallback_iso

    t = clean(text)

    match = _ISO_WITH_TIME.search(t)
    if match:
        y, m, d, h, mi = (int(g) for g in match.groups())
        result = ecuador_to_utc_iso(y, m, d, h, mi)
        if result:
            return result

    match = _SPANISH_MONTH.search(t)
    if match:
        day, month_name, year, hour, minute = match.groups()
        result = ecuador_to_utc_iso(
            int(year), SPANISH_MONTHS[month_name.lower()], int(day), int(hour or 0), int(minute or 0)
        )
        if result:
            return result

    match = _SLASHED_WITH_TIME.search(t)
    if match:
        if date_order == "mdy":
            result = _slashed(match, month_first=True) or _slashed(match, month_first=False)
        else:
            result = _slashed(match, month_first=False) or _slashed(match, month_first=True)
        if result:
            return result

    match = _SLASHED_DATE_ONLY.match(t)
    if match:
        day, month, year = (int(g) for g in match.groups())
        return _with_fallback_time(year, month, day, fallback_iso)

    match = _ISO_DATE_ONLY.match(t)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return _with_fallback_time(year, month, day, fallback_iso)

    return fallback_iso


def now_utc_iso() -> str:
    """Current instant as a UTC ISO string, used when a message has no receive time."""
    return format_utc(datetime.now(timezone.utc))
