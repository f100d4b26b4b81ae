"""Building blocks shared by the bank extractors.

An extractor is a pure function taking a RawMessage and returning
ExtractedTransactionData, or None when the message is not one it handles
(wrong subject, empty body) or a required field such as the amount cannot be
parsed. None never means partial success.
"""

import re
from typing import Callable, Optional

from bs4 import BeautifulSoup

from expensify.domain.entities import ExtractedTransactionData, RawMessage
from expensify.utils.amount_parser import parse_amount_to_number
from expensify.utils.date_parser import now_utc_iso, parse_occurred_at
from expensify.utils.text import clean, fold, load_html

Extractor = Callable[[RawMessage], Optional[ExtractedTransactionData]]


def has_body(message: RawMessage) -> bool:
    return bool((message.body or "").strip())


def subject_has(message: RawMessage, marker: str) -> bool:
    """Case- and accent-insensitive subject containment."""
    return fold(marker) in fold(message.subject)


def received_or_now(message: RawMessage) -> str:
    return message.received_at or now_utc_iso()


def occurred_at(message: RawMessage, text: Optional[str], date_order: str = "dmy") -> str:
    """Parse a date found in the body, falling back to the receive instant."""
    return parse_occurred_at(text, received_or_now(message), date_order)


def body_text(html: str) -> str:
    """Concatenated text of the body, newlines preserved between blocks."""
    return load_html(html).get_text()


def labeled(text: str, label: str, stops: Optional[str] = None) -> Optional[str]:
    """Value written after "label:" up to the end of the line or "Atentamente".

    Args:
        text: Flattened body text
        label: Regex for the label, without the colon
        stops: Regex alternation of labels that may follow on the same line.
            They match case-sensitively and only when followed by a colon, so
            a merchant such as "LA CUENTA BAR" is kept whole.
    """
    ends = [r"\s*Atentamente", r"\s*\n", r"\s*$"]
    if stops:
        ends.insert(0, rf"\s+(?-i:{stops})[^:\n]{{0,40}}:")
    pattern = rf"{label}\s*:\s*([^\n]+?)(?={'|'.join(ends)})"
    return search(pattern, text)


def search(pattern: str, text: str, flags: int = re.IGNORECASE) -> Optional[str]:
    """First group of the first match, cleaned, or None."""
    match = re.search(pattern, text, flags)
    if not match:
        return None
    value = clean(match.group(1))
    return value or None


def table_pairs(html: str) -> list[tuple[str, str]]:
    """Label/value pairs from the first two cells of every table row."""
    soup = load_html(html)
    pairs = []
    for row in soup.find_all("tr"):
        cells = row.find_all("td")
        if len(cells) < 2:
            continue
        label = clean(cells[0].get_text())
        value = clean(cells[1].get_text())
        if label and value:
            pairs.append((label, value))
    return pairs


def pair_value(pairs: list[tuple[str, str]], label: str) -> Optional[str]:
    """Value of the first pair whose label equals label, ignoring case."""
    wanted = label.lower()
    for key, value in pairs:
        if key.lower() == wanted:
            return value
    return None


def heading_pairs(soup: BeautifulSoup) -> dict[str, str]:
    """Map of lowercased h4 label to the text of the following p element."""
    pairs = {}
    for heading in soup.find_all("h4"):
        label = clean(heading.get_text())
        if not label:
            continue
        sibling = heading.find_next_sibling()
        value = clean(sibling.get_text()) if sibling is not None and sibling.name == "p" else ""
        pairs[label.lower()] = value
    return pairs


def element_text(soup: BeautifulSoup, selector: str) -> str:
    node = soup.select_one(selector)
    return clean(node.get_text()) if node else ""


def join_comment(parts: list[Optional[str]], separator: str = " | ") -> Optional[str]:
    kept = [p for p in parts if p]
    return separator.join(kept) if kept else None


def positive_amount(raw: Optional[str]) -> Optional[float]:
    """Parsed amount, or None unless it is a finite number above zero.

    Examples:
        >>> positive_amount("35,93")
        35.93
        >>> positive_amount("-$ 35,93") is None
        True
        >>> positive_amount("0.00") is None
        True
    """
    amount = parse_amount_to_number(raw) if raw else None
    if amount is None or amount <= 0:
        return None
    return amount
