"""Transaction domain service."""

from typing import Optional

import structlog

from expensify.database.base import Database
from expensify.domain.entities import Transaction as TransactionEntity, TransactionInsert

logger = structlog.get_logger()


class TransactionService:
    """Service for storing and looking up transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(self, insert: TransactionInsert) -> int:
        """Store a transaction built from an email.

        Args:
            insert: Transaction to store

        Returns:
            Transaction ID

        Raises:
            ConflictError: If a transaction for the same message already exists
        """
        transaction_id = self.db.create_transaction(insert)
        logger.info(
            "transaction_created",
            transaction_id=transaction_id,
            message_id=insert.income_message_id,
            amount=insert.amount,
        )
        return transaction_id

    def get_by_income_message_id(self, message_id: str) -> Optional[TransactionEntity]:
        return self.db.get_transaction_by_income_message_id(message_id)
