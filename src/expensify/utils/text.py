"""Text helpers shared by the bank email extractors."""

import re
import unicodedata
from typing import Optional

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"\s+")
_TRAILING_CARD_DIGITS = re.compile(r"X*(\d{3,4})$")


def clean(text: str) -> str:
    """Collapse whitespace runs into single spaces and trim the result."""
    return _WHITESPACE.sub(" ", text or "").strip()


def strip_accents(text: str) -> str:
    """Remove diacritics ("Crédito" -> "Credito")."""
    decomposed = unicodedata.normalize("NFD", text or "")
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold(text: str) -> str:
    """Lowercase, accent-free and whitespace-collapsed form used for matching."""
    return clean(strip_accents(text).lower())


def extract_last4(card_text: str) -> Optional[str]:
    """Extract the trailing card digits from an obfuscated card number.

    Handles the masking used by the banks, e.g. "554574XXXXXXX439" or
    "XXX3733". Some banks only reveal three digits; those are returned as
    found and callers pad them with pad_last4().

    Args:
        card_text: Card or account text, without separators

    Returns:
        The 3 or 4 trailing digits, or None if the text does not end in digits
    """
    match = _TRAILING_CARD_DIGITS.search(card_text or "")
    return match.group(1) if match else None


def pad_last4(digits: Optional[str]) -> Optional[str]:
    """Left-pad digits to four characters with "0" and keep the last four."""
    if not digits:
        return None
    return digits.rjust(4, "0")[-4:]


def load_html(html: str) -> BeautifulSoup:
    """Parse an email body, dropping script, style and image nodes."""
    soup = BeautifulSoup(html or "", "html.parser")
    for node in soup(["script", "style", "img"]):
        node.decompose()
    return soup


def strip_to_text(html: str) -> str:
    """Flatten an HTML body to text with one cleaned, non-empty line per line."""
    text = load_html(html).get_text().replace("\r", "")
    lines = (clean(line) for line in text.split("\n"))
    return "\n".join(line for line in lines if line)
