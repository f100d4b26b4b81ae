"""Card directory domain service and card resolution."""

import re
from typing import Optional, Sequence

import structlog

from expensify.database.base import Database
from expensify.domain.entities import Card as CardEntity, CardType
from expensify.domain.errors import (
    NotFoundError,
    ValidationError,
    bank_not_found,
    invalid_last4,
)

logger = structlog.get_logger()

_DEBIT_PATTERN = re.compile(r"debit|d[eé]bito", re.IGNORECASE)
_CREDIT_PATTERN = re.compile(r"credit|cr[eé]dito", re.IGNORECASE)


class CardService:
    """Service for managing cards."""

    def __init__(self, db: Database):
        """Initialize card service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_card(
        self,
        name: str,
        bank_id: Optional[int],
        last4: Optional[str] = None,
        card_type: Optional[str] = None,
        card_kind: Optional[str] = None,
    ) -> int:
        """Create a new card.

        Args:
            name: Card name
            bank_id: Issuing bank ID
            last4: Last 3 or 4 digits of the card or account
            card_type: Free-form type, e.g. "debit" or "Crédito"
            card_kind: Free-form kind, e.g. "Visa"

        Returns:
            Card ID

        Raises:
            ValidationError: If the name is empty or last4 is malformed
            NotFoundError: If the bank does not exist
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Card name must not be empty")
        if last4 is not None:
            last4 = last4.strip()
            if not re.fullmatch(r"\d{3,4}", last4):
                raise ValidationError(invalid_last4(last4))
        if bank_id is not None and self.db.get_bank(bank_id) is None:
            raise NotFoundError(bank_not_found(str(bank_id)))

        card_id = self.db.create_card(
            name=name,
            bank_id=bank_id,
            last4=last4,
            card_type=card_type,
            card_kind=card_kind,
        )
        logger.info("card_created", card_id=card_id, bank_id=bank_id, last4=last4)
        return card_id

    def list_cards(self, bank_id: Optional[int] = None) -> list[CardEntity]:
        return self.db.list_cards(bank_id=bank_id)


def _matches_last4(card: CardEntity, last4: str) -> bool:
    if card.last4 is None:
        return False
    stored = str(card.last4).strip()
    suffix3 = last4[-3:] if len(last4) >= 3 else ""
    return (
        stored == last4
        or (len(last4) == 4 and stored.endswith(last4))
        or (len(suffix3) == 3 and stored.endswith(suffix3))
    )


def _matches_type(card: CardEntity, prefer: CardType) -> bool:
    pattern = _DEBIT_PATTERN if prefer == CardType.DEBIT else _CREDIT_PATTERN
    return any(
        value is not None and pattern.search(str(value).strip())
        for value in (card.card_type, card.card_kind)
    )


def resolve_card_id(
    cards: Sequence[CardEntity],
    card_last4: Optional[str],
    prefer_card_type: Optional[CardType] = None,
) -> Optional[int]:
    """Pick the card an extracted transaction was paid with.

    Digits win over the type hint. A card matches when its stored digits
    equal the extracted ones, end with them, or end with their last three
    digits, so a stored "439" matches extracted "0439". The first matching
    card in the given order is returned, even if a later card matches exactly.

    Args:
        cards: Cards of the transaction's bank, in directory order
        card_last4: Digits found in the email
        prefer_card_type: Type hint used when no digits matched

    Returns:
        Card ID or None
    """
    if card_last4:
        last4 = str(card_last4).strip()
        for card in cards:
            if _matches_last4(card, last4):
                return card.id

    if prefer_card_type is not None:
        for card in cards:
            if _matches_type(card, CardType(prefer_card_type)):
                return card.id

    return None
