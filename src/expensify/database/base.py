"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from expensify.domain.entities import (
    Bank,
    Card,
    Transaction,
    TransactionInsert,
)


class Database(ABC):
    """Abstract database interface for expensify."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Bank operations
    @abstractmethod
    def create_bank(self, name: str, slug: Optional[str] = None) -> int:
        """Create a bank. Returns bank ID."""
        pass

    @abstractmethod
    def get_bank(self, bank_id: int) -> Optional[Bank]:
        """Get bank by ID."""
        pass

    @abstractmethod
    def get_bank_by_slug(self, slug: str) -> Optional[Bank]:
        """Get bank by slug."""
        pass

    @abstractmethod
    def get_bank_by_email(self, address: str) -> Optional[Bank]:
        """Get the bank whose whitelist contains the sender address (exact match)."""
        pass

    @abstractmethod
    def list_banks(self) -> list[Bank]:
        """List all banks."""
        pass

    @abstractmethod
    def add_bank_email(self, bank_id: int, address: str) -> None:
        """Whitelist a sender address for a bank."""
        pass

    @abstractmethod
    def add_blacklisted_subject(self, bank_id: int, subject: str) -> None:
        """Blacklist a subject substring for a bank."""
        pass

    # Card operations
    @abstractmethod
    def create_card(
        self,
        name: str,
        bank_id: Optional[int],
        last4: Optional[str] = None,
        card_type: Optional[str] = None,
        card_kind: Optional[str] = None,
    ) -> int:
        """Create a card. Returns card ID."""
        pass

    @abstractmethod
    def list_cards(self, bank_id: Optional[int] = None) -> list[Card]:
        """List cards in creation order, optionally filtered by bank."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(self, insert: TransactionInsert) -> int:
        """Create a transaction. Returns transaction ID.

        Raises:
            ConflictError: If a transaction with the same income_message_id exists
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def get_transaction_by_income_message_id(self, message_id: str) -> Optional[Transaction]:
        """Get the transaction created from a mail message."""
        pass

    @abstractmethod
    def list_transactions(self, bank_id: Optional[int] = None) -> list[Transaction]:
        """List transactions, newest occurrence first, optionally filtered by bank."""
        pass
