"""Tests for Database interface returning domain models."""

from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from expensify.domain import entities
from expensify.domain.entities import TransactionInsert, TransactionType
from expensify.domain.errors import ConflictError, NotFoundError


def make_insert(message_id="msg-1", bank_id=None, amount=12.5, occurred_at="2026-01-30T15:03:00.000Z"):
    return TransactionInsert(
        type=TransactionType.EXPENSE,
        description="DIDI RIDES EC KS",
        amount=amount,
        occurred_at=occurred_at,
        income_message_id=message_id,
        bank_id=bank_id,
        budget_id="0dc7502d-9d2a-4be1-a83d-6afb53545cb7",
        comment="Tarjeta: XXX3733",
    )


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_bank_returns_domain_model(self, temp_db):
        """Test that get_bank returns a domain Bank entity with its lists."""
        bank_id = temp_db.create_bank(name="Produbanco", slug="produbanco")
        temp_db.add_bank_email(bank_id, "a@produbanco.com")
        temp_db.add_bank_email(bank_id, "b@produbanco.com")
        temp_db.add_blacklisted_subject(bank_id, "Estado de cuenta")

        bank = temp_db.get_bank(bank_id)

        assert isinstance(bank, entities.Bank)
        assert bank.slug == "produbanco"
        assert bank.emails == ("a@produbanco.com", "b@produbanco.com")
        assert bank.blacklisted_subjects == ("Estado de cuenta",)

    def test_get_bank_by_email_is_exact(self, temp_db):
        """Test that sender lookup is an exact address match."""
        bank_id = temp_db.create_bank(name="Produbanco", slug="produbanco")
        temp_db.add_bank_email(bank_id, "notificaciones@produbanco.com")

        assert temp_db.get_bank_by_email("notificaciones@produbanco.com").id == bank_id
        assert temp_db.get_bank_by_email("otro@produbanco.com") is None
        assert temp_db.get_bank_by_slug("nope") is None
        assert temp_db.get_bank(999) is None

    def test_duplicate_slug_and_email(self, temp_db):
        """Test uniqueness of slugs and whitelisted addresses."""
        bank_id = temp_db.create_bank(name="Produbanco", slug="produbanco")
        temp_db.add_bank_email(bank_id, "a@produbanco.com")

        with pytest.raises(ConflictError):
            temp_db.create_bank(name="Otro", slug="produbanco")
        with pytest.raises(ConflictError):
            temp_db.add_bank_email(bank_id, "a@produbanco.com")

    def test_add_email_to_missing_bank(self, temp_db):
        """Test whitelisting for a bank that does not exist."""
        with pytest.raises(NotFoundError):
            temp_db.add_bank_email(42, "a@b.com")

    def test_list_cards_in_creation_order(self, temp_db):
        """Test card listing order and bank filter."""
        bank_id = temp_db.create_bank(name="Produbanco")
        other_id = temp_db.create_bank(name="Guayaquil")
        first = temp_db.create_card(name="B card", bank_id=bank_id, last4="1439")
        temp_db.create_card(name="Other", bank_id=other_id, last4="0001")
        second = temp_db.create_card(name="A card", bank_id=bank_id, last4="0439", card_type="credit")

        cards = temp_db.list_cards(bank_id=bank_id)

        assert [c.id for c in cards] == [first, second]
        assert all(isinstance(c, entities.Card) for c in cards)
        assert cards[1].card_type == "credit"
        assert len(temp_db.list_cards()) == 3

    def test_create_transaction_round_trip(self, temp_db):
        """Test that stored transactions come back as domain entities."""
        bank_id = temp_db.create_bank(name="Produbanco", slug="produbanco")
        transaction_id = temp_db.create_transaction(make_insert(bank_id=bank_id))

        transaction = temp_db.get_transaction(transaction_id)

        assert isinstance(transaction, entities.Transaction)
        assert transaction.type == TransactionType.EXPENSE
        assert transaction.amount == 12.5
        assert transaction.bank_id == bank_id
        assert transaction.card_id is None
        assert transaction.budget_id == "0dc7502d-9d2a-4be1-a83d-6afb53545cb7"
        assert transaction.comment == "Tarjeta: XXX3733"
        assert isinstance(transaction.created_at, datetime)
        assert temp_db.get_transaction_by_income_message_id("msg-1").id == transaction_id
        assert temp_db.get_transaction_by_income_message_id("msg-2") is None

    def test_create_transaction_duplicate_message(self, temp_db):
        """Test that a message can only produce one transaction."""
        temp_db.create_transaction(make_insert())

        with pytest.raises(ConflictError, match="msg-1"):
            temp_db.create_transaction(make_insert(amount=99.0))

        assert [t.amount for t in temp_db.list_transactions()] == [12.5]

    def test_create_transaction_other_violation_is_not_a_conflict(self, temp_db):
        """Test that only a repeated message ID is reported as a conflict."""
        with pytest.raises(IntegrityError):
            temp_db.create_transaction(make_insert(amount=None))

        assert temp_db.list_transactions() == []
        temp_db.create_transaction(make_insert())
        assert len(temp_db.list_transactions()) == 1

    def test_list_transactions_newest_first(self, temp_db):
        """Test transaction listing order."""
        temp_db.create_transaction(make_insert("a", occurred_at="2026-01-01T10:00:00.000Z"))
        temp_db.create_transaction(make_insert("b", occurred_at="2026-01-03T10:00:00.000Z"))
        temp_db.create_transaction(make_insert("c", occurred_at="2026-01-02T10:00:00.000Z"))

        assert [t.income_message_id for t in temp_db.list_transactions()] == ["b", "c", "a"]


def test_resolve_database_path(tmp_path, monkeypatch):
    """Test database path precedence."""
    from expensify.database.factories import resolve_database_path

    env_path = tmp_path / "env" / "env.db"
    monkeypatch.setenv("EXPENSIFY_DB_PATH", str(env_path))

    assert resolve_database_path(str(tmp_path / "explicit.db")) == tmp_path / "explicit.db"
    assert resolve_database_path() == env_path
    assert env_path.parent.is_dir()
