"""Amount parsing utilities."""

import math
import re
from typing import Optional

_NON_NUMERIC = re.compile(r"[^\d,.\-]")


def normalize_amount(raw: str) -> str:
    """Normalize a localized amount string to a plain decimal string.

    Handles the formats found in Ecuadorian bank emails:
    - "13.05" (dot decimal)
    - "35,93" (comma decimal)
    - "1.234,56" (dot thousands, comma decimal)
    - "$ 26.09", "USD 1.54" (currency markers are dropped)

    Args:
        raw: Amount text as found in the email

    Returns:
        Normalized amount string, or the raw text if it does not parse
    """
    cleaned = _NON_NUMERIC.sub("", (raw or "").replace(" ", " ")).strip()
    if not cleaned:
        return raw

    has_comma = "," in cleaned
    has_dot = "." in cleaned

    normalized = cleaned
    if has_comma and has_dot:
        normalized = cleaned.replace(".", "").replace(",", ".", 1)
    elif has_comma:
        normalized = cleaned.replace(",", ".", 1)

    try:
        value = float(normalized)
    except ValueError:
        return raw
    if not math.isfinite(value):
        return raw
    return repr(value)


def parse_amount_to_number(raw: str) -> Optional[float]:
    """Parse a localized amount string into a float.

    Args:
        raw: Amount text as found in the email

    Returns:
        The amount, or None when the text is not a finite number. Never NaN.
    """
    try:
        value = float(normalize_amount(raw))
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None
