"""Shared domain error messages and error types."""

from enum import Enum


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class MailProviderError(Exception):
    """The mail provider could not be reached or returned an error."""


class FailureReason(str, Enum):
    """Why an email could not be turned into a transaction.

    The value is the message shown to the operator.
    """

    MESSAGE_NOT_FOUND = "Message not found"
    NOT_WHITELISTED = "Email not in bank whitelist"
    BLACKLISTED = "Subject blacklisted for this bank"
    EMPTY_BODY = "No message body"
    NO_EXTRACTOR = "No extractor for this bank and subject"

    @property
    def message(self) -> str:
        return self.value


def bank_not_found(bank: str) -> str:
    """Return message for missing bank by ID or slug."""
    return f"Bank '{bank}' not found"


def duplicate_bank_slug(slug: str) -> str:
    """Return message for duplicate bank slug."""
    return f"Bank with slug '{slug}' already exists"


def duplicate_sender_email(email: str, bank_name: str) -> str:
    """Return message when a sender address is already whitelisted."""
    return f"Sender '{email}' is already whitelisted for bank '{bank_name}'"


def duplicate_income_message_id(message_id: str) -> str:
    """Return message for a transaction already created from a message."""
    return f"Transaction for message '{message_id}' already exists"


def invalid_last4(last4: str) -> str:
    """Return message for malformed card digits."""
    return f"Card last4 must be 3 or 4 digits, got '{last4}'"
