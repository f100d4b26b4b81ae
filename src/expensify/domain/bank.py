"""Bank directory domain service."""

from typing import Optional

import structlog

from expensify.database.base import Database
from expensify.domain.entities import Bank as BankEntity
from expensify.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    bank_not_found,
    duplicate_bank_slug,
    duplicate_sender_email,
)

logger = structlog.get_logger()


class BankService:
    """Service for managing banks, their sender whitelist and subject blacklist."""

    def __init__(self, db: Database):
        """Initialize bank service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_bank(self, name: str, slug: Optional[str] = None) -> int:
        """Create a new bank.

        Args:
            name: Display name, e.g. "Banco del Pacífico"
            slug: Registry slug, e.g. "pacifico"

        Returns:
            Bank ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a bank with the same slug exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Bank name must not be empty")
        slug = slug.strip().lower() if slug else None
        if slug and self.db.get_bank_by_slug(slug) is not None:
            raise ConflictError(duplicate_bank_slug(slug))

        bank_id = self.db.create_bank(name=name, slug=slug)
        logger.info("bank_created", bank_id=bank_id, name=name, slug=slug)
        return bank_id

    def get_bank(self, bank_id: int) -> Optional[BankEntity]:
        return self.db.get_bank(bank_id)

    def list_banks(self) -> list[BankEntity]:
        return self.db.list_banks()

    def resolve_bank(self, bank: str | int) -> BankEntity:
        """Resolve a bank ID or slug to a bank.

        Args:
            bank: Bank ID (int or numeric string) or slug

        Returns:
            Bank entity

        Raises:
            NotFoundError: If no bank matches
        """
        try:
            found = self.db.get_bank(int(bank))
        except (ValueError, TypeError):
            found = self.db.get_bank_by_slug(str(bank).strip().lower())
        if found is None:
            raise NotFoundError(bank_not_found(str(bank)))
        return found

    def add_email(self, bank_id: int, address: str) -> None:
        """Whitelist a sender address for a bank.

        Addresses are stored lowercased, matching how messages are fetched.

        Raises:
            NotFoundError: If the bank does not exist
            ConflictError: If the address already belongs to a bank
        """
        bank = self.db.get_bank(bank_id)
        if bank is None:
            raise NotFoundError(bank_not_found(str(bank_id)))
        address = (address or "").strip().lower()
        if not address:
            raise ValidationError("Sender address must not be empty")
        owner = self.db.get_bank_by_email(address)
        if owner is not None:
            raise ConflictError(duplicate_sender_email(address, owner.name))

        self.db.add_bank_email(bank_id, address)
        logger.info("bank_email_whitelisted", bank_id=bank_id, address=address)

    def blacklist_subject(self, bank_id: int, subject: str) -> None:
        """Reject this bank's emails whose subject contains the given text.

        Raises:
            NotFoundError: If the bank does not exist
        """
        if self.db.get_bank(bank_id) is None:
            raise NotFoundError(bank_not_found(str(bank_id)))
        subject = (subject or "").strip()
        if not subject:
            raise ValidationError("Blacklisted subject must not be empty")

        self.db.add_blacklisted_subject(bank_id, subject)
        logger.info("bank_subject_blacklisted", bank_id=bank_id, subject=subject)


def is_subject_blacklisted(bank: BankEntity, subject: Optional[str]) -> bool:
    """Case-insensitive containment of any blacklisted entry in the subject."""
    subject_upper = (subject or "").upper()
    return any(entry.upper() in subject_upper for entry in bank.blacklisted_subjects)
