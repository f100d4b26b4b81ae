"""Domain model entities for expensify.

These are pure data classes representing business concepts, independent of
database schema and of the mail provider's wire format.
"""

import math
from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class TransactionType(str, Enum):
    """Direction of money movement."""

    EXPENSE = "expense"
    INCOME = "income"


class PaymentMethod(str, Enum):
    """How a transaction was paid."""

    CARD = "card"
    TRANSFER = "transfer"


class CardType(str, Enum):
    """Card classification used when an email does not reveal card digits."""

    DEBIT = "debit"
    CREDIT = "credit"


@dataclass(frozen=True)
class RawMessage:
    """Email message as fetched from the mail provider."""

    id: str
    sender: str
    subject: str
    received_at: str
    body: str
    sender_name: str = ""


@dataclass(frozen=True)
class Bank:
    """Bank directory entry."""

    id: int
    name: str
    slug: Optional[str] = None
    emails: tuple[str, ...] = ()
    blacklisted_subjects: tuple[str, ...] = ()


@dataclass(frozen=True)
class Card:
    """Card directory entry."""

    id: int
    bank_id: Optional[int]
    name: str
    last4: Optional[str] = None
    card_type: Optional[str] = None
    card_kind: Optional[str] = None


@dataclass(frozen=True)
class ExtractedTransactionData:
    """Normalized output of a bank extractor.

    payment_method, card_last4 and prefer_card_type are independent hints:
    card_last4 holds the digits as found in the email, prefer_card_type is
    only consulted when no digits were found.
    """

    type: TransactionType
    description: str
    amount: float
    occurred_at: str
    payment_method: Optional[PaymentMethod] = None
    card_last4: Optional[str] = None
    prefer_card_type: Optional[CardType] = None
    comment: Optional[str] = None

    def __post_init__(self) -> None:
        if self.amount is None or not math.isfinite(self.amount) or self.amount <= 0:
            raise ValueError(f"Invalid extracted amount: {self.amount!r}")
        if not self.description or not self.description.strip():
            raise ValueError("Extracted description must not be empty")


@dataclass(frozen=True)
class TransactionInsert:
    """Persistable transaction built from an email."""

    type: TransactionType
    description: str
    amount: float
    occurred_at: str
    income_message_id: str
    bank_id: Optional[int]
    card_id: Optional[int] = None
    category_id: Optional[str] = None
    budget_id: Optional[str] = None
    comment: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the row shape expected by the transaction store."""
        data = asdict(self)
        data["type"] = self.type.value
        return data


@dataclass(frozen=True)
class Transaction:
    """Stored transaction."""

    id: int
    type: TransactionType
    description: str
    amount: float
    occurred_at: str
    income_message_id: Optional[str]
    bank_id: Optional[int]
    card_id: Optional[int]
    category_id: Optional[str]
    budget_id: Optional[str]
    comment: Optional[str]
    created_at: datetime = field(compare=False)
