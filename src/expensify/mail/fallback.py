"""Interface of the free-text extractor used when no bank extractor applies."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from expensify.domain.entities import TransactionType


@dataclass(frozen=True)
class FallbackTransaction:
    """Transaction guessed from an email's plain text."""

    type: TransactionType
    description: str
    amount: float
    occurred_at: str
    bank_id: Optional[int] = None
    card_id: Optional[int] = None
    category_id: Optional[str] = None


class FallbackExtractor(ABC):
    """Extracts a transaction from arbitrary email text, e.g. with a language model."""

    @abstractmethod
    def get_transaction_from_email(self, body_text: str) -> Optional[FallbackTransaction]:
        """Guess the transaction described by the text, or None."""
        pass
