"""Ingestion of bank emails announced by mail provider webhooks."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

import structlog

from expensify.database.base import Database
from expensify.domain.entities import Bank, RawMessage, TransactionInsert
from expensify.domain.errors import ConflictError, FailureReason
from expensify.domain.extraction import (
    PRODUBANCO_DEFAULT_BUDGET_ID,
    ExtractionService,
    build_transaction_insert_from_email,
    is_produbanco,
)
from expensify.domain.transaction import TransactionService
from expensify.mail.base import MailClient
from expensify.mail.fallback import FallbackExtractor, FallbackTransaction
from expensify.utils.text import strip_to_text

logger = structlog.get_logger()

ALREADY_EXISTS = "Transaction already exists"
FALLBACK_FAILED = "Could not extract transaction from email"


class IngestionStatus(str, Enum):
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of ingesting one message."""

    message_id: str
    status: IngestionStatus
    transaction_id: Optional[int] = None
    reason: Optional[str] = None


def message_id_from_notification(notification: dict[str, Any]) -> Optional[str]:
    """Message ID of a change notification.

    Uses resourceData.id, else the last segment of the resource path
    (e.g. "Users/abc/Messages/AAMk..." yields "AAMk...").
    """
    resource_data = notification.get("resourceData") or {}
    message_id = resource_data.get("id")
    if not message_id:
        resource = notification.get("resource") or ""
        message_id = resource.rstrip("/").split("/")[-1] if resource else None
    return message_id or None


def _is_usable(extracted: FallbackTransaction) -> bool:
    """Whether a fallback result can be stored: positive finite amount, description and date."""
    amount = extracted.amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    if not math.isfinite(amount) or amount <= 0:
        return False
    return bool((extracted.description or "").strip()) and bool(extracted.occurred_at)


class EmailIngestionService:
    """Creates at most one transaction per bank email.

    Retried webhook deliveries of the same message are skipped: an existing
    transaction is looked up before extraction, and a uniqueness conflict on
    insert is treated as already ingested.
    """

    def __init__(
        self,
        db: Database,
        mail_client: MailClient,
        fallback: Optional[FallbackExtractor] = None,
    ):
        """Initialize ingestion service.

        Args:
            db: Database instance
            mail_client: Mail provider messages are fetched from
            fallback: Free-text extractor tried when no bank extractor applies
        """
        self.db = db
        self.mail_client = mail_client
        self.fallback = fallback
        self.extraction = ExtractionService(db, mail_client)
        self.transactions = TransactionService(db)

    def _failed(self, message_id: str, reason: str) -> IngestionResult:
        logger.info("ingestion_failed", message_id=message_id, reason=reason)
        return IngestionResult(message_id=message_id, status=IngestionStatus.FAILED, reason=reason)

    def _skipped(self, message_id: str) -> IngestionResult:
        logger.info("ingestion_skipped", message_id=message_id, reason=ALREADY_EXISTS)
        return IngestionResult(
            message_id=message_id, status=IngestionStatus.SKIPPED, reason=ALREADY_EXISTS
        )

    def _from_fallback(self, message: RawMessage, bank: Bank, message_id: str) -> Optional[TransactionInsert]:
        extracted = self.fallback.get_transaction_from_email(strip_to_text(message.body))
        if extracted is None:
            return None
        if not _is_usable(extracted):
            logger.warning(
                "fallback_result_rejected",
                message_id=message_id,
                amount=extracted.amount,
                description=extracted.description,
            )
            return None
        return TransactionInsert(
            type=extracted.type,
            description=extracted.description.strip(),
            amount=extracted.amount,
            occurred_at=extracted.occurred_at,
            income_message_id=message_id,
            bank_id=extracted.bank_id if extracted.bank_id is not None else bank.id,
            card_id=extracted.card_id,
            category_id=extracted.category_id,
            budget_id=PRODUBANCO_DEFAULT_BUDGET_ID if is_produbanco(bank) else None,
        )

    def ingest_message(self, message_id: str) -> IngestionResult:
        """Fetch, validate, extract and store one message.

        Args:
            message_id: Mail provider message ID

        Returns:
            IngestionResult; status is skipped when the message was already ingested

        Raises:
            MailProviderError: If the mail provider fails
        """
        message = self.mail_client.get_message_by_id(message_id)
        bank, failure = self.extraction.check_message(message)
        if failure is not None:
            return self._failed(message_id, failure.message)

        if self.transactions.get_by_income_message_id(message_id) is not None:
            return self._skipped(message_id)

        cards = self.db.list_cards(bank_id=bank.id)
        insert = build_transaction_insert_from_email(message, bank, message_id, cards)
        if insert is None and self.fallback is not None:
            logger.info("fallback_extraction_started", message_id=message_id, bank=bank.name)
            insert = self._from_fallback(message, bank, message_id)
            if insert is None:
                return self._failed(message_id, FALLBACK_FAILED)
        if insert is None:
            return self._failed(message_id, FailureReason.NO_EXTRACTOR.message)

        try:
            transaction_id = self.transactions.create_transaction(insert)
        except ConflictError:
            # Concurrent delivery of the same message won the insert
            return self._skipped(message_id)

        return IngestionResult(
            message_id=message_id,
            status=IngestionStatus.CREATED,
            transaction_id=transaction_id,
        )

    def ingest_notifications(self, payload: dict[str, Any] | Iterable[dict[str, Any]]) -> list[IngestionResult]:
        """Ingest every message referenced by a change notification payload.

        Args:
            payload: Webhook body ({"value": [...]}) or the list of notifications

        Returns:
            One result per notification that named a message
        """
        notifications = (payload.get("value") or []) if isinstance(payload, dict) else payload
        results = []
        for notification in notifications:
            message_id = message_id_from_notification(notification)
            if message_id is None:
                logger.warning("notification_without_message_id", notification=notification)
                continue
            results.append(self.ingest_message(message_id))
        return results
