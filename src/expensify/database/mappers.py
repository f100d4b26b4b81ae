"""Mapper functions to convert between domain models and SQLAlchemy models."""

from expensify.domain import entities as domain
from expensify.database.models import (
    Bank as ORMBank,
    Card as ORMCard,
    Transaction as ORMTransaction,
)


def bank_to_domain(orm_bank: ORMBank) -> domain.Bank:
    """Convert SQLAlchemy Bank model to domain Bank entity."""
    return domain.Bank(
        id=orm_bank.id,
        name=orm_bank.name,
        slug=orm_bank.slug,
        emails=tuple(e.address for e in orm_bank.emails),
        blacklisted_subjects=tuple(s.subject for s in orm_bank.blacklisted_subjects),
    )


def card_to_domain(orm_card: ORMCard) -> domain.Card:
    """Convert SQLAlchemy Card model to domain Card entity."""
    return domain.Card(
        id=orm_card.id,
        bank_id=orm_card.bank_id,
        name=orm_card.name,
        last4=orm_card.last4,
        card_type=orm_card.card_type,
        card_kind=orm_card.card_kind,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        type=domain.TransactionType(orm_transaction.type),
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        occurred_at=orm_transaction.occurred_at,
        income_message_id=orm_transaction.income_message_id,
        bank_id=orm_transaction.bank_id,
        card_id=orm_transaction.card_id,
        category_id=orm_transaction.category_id,
        budget_id=orm_transaction.budget_id,
        comment=orm_transaction.comment,
        created_at=orm_transaction.created_at,
    )


def transaction_insert_to_orm(insert: domain.TransactionInsert) -> ORMTransaction:
    """Build a SQLAlchemy Transaction row from a domain TransactionInsert."""
    return ORMTransaction(**insert.to_dict())
