"""Turning a bank notification email into a transaction ready to store."""

from dataclasses import dataclass
from typing import Optional, Sequence

import structlog

from expensify.database.base import Database
from expensify.domain.bank import is_subject_blacklisted
from expensify.domain.card import resolve_card_id
from expensify.domain.entities import Bank, Card, RawMessage, TransactionInsert
from expensify.domain.errors import FailureReason, MailProviderError
from expensify.extractors import pacifico
from expensify.extractors.base import Extractor
from expensify.extractors.registry import (
    get_extractor,
    get_registry_slug_from_bank_emails,
    normalize_subject,
)
from expensify.mail.base import MailClient

logger = structlog.get_logger()

# Produbanco transactions are booked to this budget unless changed by hand.
PRODUBANCO_DEFAULT_BUDGET_ID = "0dc7502d-9d2a-4be1-a83d-6afb53545cb7"


@dataclass(frozen=True)
class ExtractionResult:
    """Either a transaction to insert or the reason there is none."""

    data: Optional[TransactionInsert] = None
    failure: Optional[FailureReason] = None

    @property
    def ok(self) -> bool:
        return self.data is not None

    @property
    def error(self) -> Optional[str]:
        return self.failure.message if self.failure else None


def select_extractor(message: RawMessage, bank: Bank) -> Optional[Extractor]:
    """Find the extractor for a message from a known bank.

    Tries the bank's slug, then the slug recognized from its whitelisted
    addresses or the sender, then PacifiCard payment confirmations by sender
    and subject keywords.
    """
    subject = message.subject or ""
    extractor = get_extractor(bank.slug, subject)
    if extractor is None:
        slug = get_registry_slug_from_bank_emails(bank.emails)
        if slug is None and message.sender:
            slug = get_registry_slug_from_bank_emails([message.sender])
        if slug is not None:
            extractor = get_extractor(slug, subject)

    if extractor is None:
        sender = (message.sender or "").lower()
        subject_norm = normalize_subject(subject)
        if (
            ("infopacificard" in sender or "pacificard" in sender)
            and "confirmacion" in subject_norm
            and "pago" in subject_norm
        ):
            extractor = pacifico.extract_confirmacion_pago

    return extractor


def is_produbanco(bank: Bank) -> bool:
    return "produbanco" in (bank.slug or "").lower() or "produbanco" in (bank.name or "").lower()


def build_transaction_insert_from_email(
    message: RawMessage,
    bank: Bank,
    message_id: str,
    cards: Sequence[Card] = (),
) -> Optional[TransactionInsert]:
    """Build a TransactionInsert from an already validated message.

    Whitelist, blacklist and body checks are the caller's job.

    Args:
        message: Fetched message
        bank: Bank the sender belongs to
        message_id: Idempotence key stored as income_message_id
        cards: Cards of the bank, in directory order

    Returns:
        TransactionInsert, or None if no extractor applies or it found nothing
    """
    extractor = select_extractor(message, bank)
    if extractor is None:
        return None

    extracted = extractor(message)
    if extracted is None:
        return None

    bank_cards = [card for card in cards if card.bank_id == bank.id]
    card_id = resolve_card_id(bank_cards, extracted.card_last4, extracted.prefer_card_type)

    return TransactionInsert(
        type=extracted.type,
        description=extracted.description,
        amount=extracted.amount,
        occurred_at=extracted.occurred_at,
        income_message_id=message_id,
        bank_id=bank.id,
        card_id=card_id,
        category_id=None,
        budget_id=PRODUBANCO_DEFAULT_BUDGET_ID if is_produbanco(bank) else None,
        comment=extracted.comment,
    )


class ExtractionService:
    """Fetches, validates and extracts bank notification emails."""

    def __init__(self, db: Database, mail_client: Optional[MailClient] = None):
        """Initialize extraction service.

        Args:
            db: Database holding the bank and card directory
            mail_client: Mail provider the messages are fetched from; only
                needed by extract_transaction_data
        """
        self.db = db
        self.mail_client = mail_client

    def check_message(self, message: Optional[RawMessage]) -> tuple[Optional[Bank], Optional[FailureReason]]:
        """Run the policy checks in order and return the sender's bank or the first failure."""
        if message is None:
            return None, FailureReason.MESSAGE_NOT_FOUND

        bank = self.db.get_bank_by_email(message.sender)
        if bank is None:
            return None, FailureReason.NOT_WHITELISTED

        if is_subject_blacklisted(bank, message.subject):
            return bank, FailureReason.BLACKLISTED

        if not (message.body or "").strip():
            return bank, FailureReason.EMPTY_BODY

        return bank, None

    def extract_from_message(self, message: Optional[RawMessage], message_id: str) -> ExtractionResult:
        """Validate an already fetched message and build its transaction."""
        bank, failure = self.check_message(message)
        if failure is None:
            cards = self.db.list_cards(bank_id=bank.id)
            data = build_transaction_insert_from_email(message, bank, message_id, cards)
            if data is not None:
                logger.info(
                    "transaction_extracted",
                    message_id=message_id,
                    bank=bank.slug or bank.name,
                    amount=data.amount,
                    card_id=data.card_id,
                )
                return ExtractionResult(data=data)
            failure = FailureReason.NO_EXTRACTOR

        logger.info("extraction_failed", message_id=message_id, reason=failure.message)
        return ExtractionResult(failure=failure)

    def extract_transaction_data(self, message_id: str) -> ExtractionResult:
        """Fetch a message and turn it into a TransactionInsert without storing it.

        Args:
            message_id: Mail provider message ID

        Returns:
            ExtractionResult with data, or with the first failed check

        Raises:
            MailProviderError: If the mail provider fails
        """
        if self.mail_client is None:
            raise MailProviderError("No mail client configured")
        message = self.mail_client.get_message_by_id(message_id)
        return self.extract_from_message(message, message_id)
