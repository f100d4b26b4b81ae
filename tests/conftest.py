"""Shared pytest fixtures for expensify tests."""

import tempfile
import os
import pytest
from click.testing import CliRunner

from expensify.database.factories import create_sqlite_database
from expensify.domain.bank import BankService
from expensify.domain.card import CardService
from expensify.domain.entities import RawMessage
from expensify.mail.base import MailClient

PRODUBANCO_SENDER = "notificaciones@produbanco.com"
GUAYAQUIL_SENDER = "bancavirtual@bancoguayaquil.com"
PACIFICARD_SENDER = "notificaciones@infopacificard.com.ec"
RECEIVED_AT = "2026-01-30T16:00:00.000Z"

# Scenario used across tests: Produbanco credit card consumption
PRODUBANCO_CREDIT_SUBJECT = "Consumo Tarjeta de Crédito por USD 1.54"
PRODUBANCO_CREDIT_BODY = """<html><body>
<p>Estimado cliente, le informamos que se ha registrado un consumo:</p>
<p>Valor: USD 1.54</p>
<p>Establecimiento: DIDI RIDES EC KS</p>
<p>Tarjeta de Crédito: XXX3733</p>
<p>Fecha y Hora: 30/Enero/2026 10:03</p>
<p>Atentamente, Produbanco</p>
</body></html>"""


class FakeMailClient(MailClient):
    """Mail client serving messages from a dict."""

    def __init__(self, messages=None):
        self.messages = {m.id: m for m in (messages or [])}
        self.requested = []

    def add(self, message: RawMessage) -> RawMessage:
        self.messages[message.id] = message
        return message

    def get_message_by_id(self, message_id):
        self.requested.append(message_id)
        return self.messages.get(message_id)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def bank_service(temp_db):
    """Create a BankService with a temporary database."""
    return BankService(temp_db)


@pytest.fixture
def card_service(temp_db):
    """Create a CardService with a temporary database."""
    return CardService(temp_db)


@pytest.fixture
def mail_client():
    """Create an empty fake mail client."""
    return FakeMailClient()


@pytest.fixture
def make_message():
    """Factory for RawMessage with sensible defaults."""

    def _make(
        body="",
        subject="",
        sender=PRODUBANCO_SENDER,
        message_id="msg-1",
        received_at=RECEIVED_AT,
    ):
        return RawMessage(
            id=message_id,
            sender=sender,
            subject=subject,
            received_at=received_at,
            body=body,
        )

    return _make


@pytest.fixture
def produbanco_bank(bank_service):
    """Produbanco with its notification sender whitelisted."""
    bank_id = bank_service.create_bank(name="Produbanco", slug="produbanco")
    bank_service.add_email(bank_id, PRODUBANCO_SENDER)
    return bank_service.get_bank(bank_id)


@pytest.fixture
def guayaquil_bank(bank_service):
    """Banco Guayaquil with its notification sender whitelisted."""
    bank_id = bank_service.create_bank(name="Banco Guayaquil", slug="guayaquil")
    bank_service.add_email(bank_id, GUAYAQUIL_SENDER)
    return bank_service.get_bank(bank_id)


@pytest.fixture
def produbanco_cards(card_service, produbanco_bank):
    """A credit and a debit card for Produbanco."""
    credit_id = card_service.create_card(
        name="Visa Produbanco", bank_id=produbanco_bank.id, last4="3733", card_type="credit"
    )
    debit_id = card_service.create_card(
        name="Débito Produbanco", bank_id=produbanco_bank.id, last4="5521", card_type="Débito"
    )
    return {"credit": credit_id, "debit": debit_id}


@pytest.fixture
def cli_runner():
    """Create a CLI runner for testing."""
    return CliRunner()
