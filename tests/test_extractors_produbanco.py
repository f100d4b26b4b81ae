"""Tests for Produbanco extractors."""

import pytest

from conftest import PRODUBANCO_CREDIT_BODY, PRODUBANCO_CREDIT_SUBJECT, RECEIVED_AT
from expensify.domain.entities import CardType, TransactionType
from expensify.extractors import produbanco


def html(*lines):
    return "<html><body>\n" + "\n".join(f"<p>{line}</p>" for line in lines) + "\n</body></html>"


def test_credit_consumption(make_message):
    """Test the credit card consumption notice end to end."""
    message = make_message(body=PRODUBANCO_CREDIT_BODY, subject=PRODUBANCO_CREDIT_SUBJECT)

    data = produbanco.extract_consumo_tarjeta_credito(message)

    assert data is not None
    assert data.type == TransactionType.EXPENSE
    assert data.amount == 1.54
    assert data.description == "DIDI RIDES EC KS"
    assert data.card_last4 == "3733"
    assert data.occurred_at == "2026-01-30T15:03:00.000Z"


def test_credit_consumption_defaults(make_message):
    """Test fallback description and date when the body omits them."""
    message = make_message(body=html("Valor: USD 7.00"), subject=PRODUBANCO_CREDIT_SUBJECT)

    data = produbanco.extract_consumo_tarjeta_credito(message)

    assert data.description == "Produbanco - Consumo Tarjeta de Crédito"
    assert data.occurred_at == RECEIVED_AT
    assert data.card_last4 is None


@pytest.mark.parametrize(
    "body, subject",
    [
        ("", PRODUBANCO_CREDIT_SUBJECT),
        ("   \n ", PRODUBANCO_CREDIT_SUBJECT),
        (PRODUBANCO_CREDIT_BODY, "Estado de cuenta"),
        (html("Establecimiento: DIDI", "Tarjeta: XXX3733"), PRODUBANCO_CREDIT_SUBJECT),
    ],
)
def test_credit_consumption_not_applicable(make_message, body, subject):
    """Test None for blank body, other subject or missing amount."""
    assert produbanco.extract_consumo_tarjeta_credito(make_message(body=body, subject=subject)) is None


def test_debit_consumption(make_message):
    """Test the debit card notice reports the account tail and prefers debit cards."""
    body = html(
        "Valor: USD 2.88",
        "Establecimiento: TIENDAS TIA",
        "Cuenta Débito: CNA XXXXXX90214",
        "Fecha y Hora: 16/01/2026 13:23:21",
    )
    message = make_message(body=body, subject="Consumo tarjeta de débito por USD 2.88")

    data = produbanco.extract_consumo_tarjeta_debito(message)

    assert data.type == TransactionType.EXPENSE
    assert data.amount == 2.88
    assert data.description == "TIENDAS TIA"
    assert data.card_last4 == "0214"
    assert data.prefer_card_type == CardType.DEBIT
    assert data.occurred_at == "2026-01-16T18:23:21.000Z"


def test_debit_reversal_reads_month_first_dates(make_message):
    """Test the debit reversal is income and its dates are month first."""
    body = html(
        "Valor: USD 4.25",
        "Establecimiento: UBER",
        "Tarjeta: XXXXXXXXXXXX4321",
        "Fecha y Hora: 01/02/2026 10:00:00",
    )
    message = make_message(body=body, subject="Notificación Reverso Consumo Tarjeta de Débito Produbanco")

    data = produbanco.extract_reverso_debito(message)

    assert data.type == TransactionType.INCOME
    assert data.amount == 4.25
    assert data.description == "UBER"
    assert data.card_last4 == "4321"
    assert data.occurred_at == "2026-01-02T15:00:00.000Z"


def test_credit_reversal(make_message):
    """Test the credit reversal is income."""
    body = html(
        "Valor: USD 10.50",
        "Establecimiento: AMAZON",
        "Tarjeta: XXX3733",
        "Fecha y Hora: 20/01/2026 08:00",
    )
    message = make_message(body=body, subject="Reverso Consumo Tarjeta de Crédito Produbanco")

    data = produbanco.extract_reverso_credito(message)

    assert data.type == TransactionType.INCOME
    assert data.amount == 10.5
    assert data.card_last4 == "3733"
    assert data.occurred_at == "2026-01-20T13:00:00.000Z"


def test_transfer_received(make_message):
    """Test an incoming transfer."""
    body = html(
        "Monto: $150.00",
        "Descripción: Pago arriendo enero",
        "Cuenta Contacto: XXXXX12345",
        "Fecha y Hora: 15/01/2026 09:30:00",
    )
    message = make_message(body=body, subject="Transferencia recibida desde Produbanco")

    data = produbanco.extract_transferencia_recibida(message)

    assert data.type == TransactionType.INCOME
    assert data.amount == 150.0
    assert data.description == "Pago arriendo enero"
    assert data.card_last4 == "2345"
    assert data.occurred_at == "2026-01-15T14:30:00.000Z"


def test_transfer_sent_keeps_audit_trail_in_comment(make_message):
    """Test an outgoing transfer."""
    body = html(
        "Monto: $9.00",
        "Contacto: PEDRO RUIZ",
        "Banco Contacto: BANCO PICHINCHA",
        "Cuenta Contacto: XXXXX88802",
        "Canal: Banca Móvil",
        "Fecha y Hora: 29/01/2026 15:13:45",
    )
    message = make_message(body=body, subject="Transferencia enviada por $9.00 desde Produbanco")

    data = produbanco.extract_transferencia_enviada(message)

    assert data.type == TransactionType.EXPENSE
    assert data.amount == 9.0
    assert data.description == "Transferencia a PEDRO RUIZ"
    assert data.card_last4 == "8802"
    assert data.comment == (
        "Contacto: PEDRO RUIZ. Banco Contacto: BANCO PICHINCHA. "
        "Cuenta Contacto: XXXXX88802. Canal: Banca Móvil"
    )
    assert data.occurred_at == "2026-01-29T20:13:45.000Z"


def test_transfer_sent_without_contact(make_message):
    """Test the generic description when the contact is missing."""
    message = make_message(body=html("Monto: $20.00"), subject="Transferencia enviada")

    data = produbanco.extract_transferencia_enviada(message)

    assert data.description == "Transferencia a contacto"
    assert data.comment is None


def test_zero_amount_is_declined(make_message):
    """Test None when the notice reports a zero value."""
    message = make_message(body=html("Valor: USD 0.00", "Establecimiento: DIDI"), subject=PRODUBANCO_CREDIT_SUBJECT)
    assert produbanco.extract_consumo_tarjeta_credito(message) is None


def test_merchant_containing_label_words(make_message):
    """Test merchants with words such as Cuenta or Tarjeta are kept whole."""
    debit = make_message(
        body=html(
            "Valor: USD 12.00",
            "Establecimiento: LA CUENTA BAR",
            "Cuenta Débito: CNA XXXXXX90214",
            "Fecha y Hora: 16/01/2026 13:23:21",
        ),
        subject="Consumo tarjeta de débito por USD 12.00",
    )
    credit = make_message(
        body=html(
            "Valor: USD 3.10",
            "Establecimiento: FARMACIA TARJETAS Y FECHAS",
            "Tarjeta de Crédito: XXX3733",
        ),
        subject=PRODUBANCO_CREDIT_SUBJECT,
    )

    assert produbanco.extract_consumo_tarjeta_debito(debit).description == "LA CUENTA BAR"
    assert produbanco.extract_consumo_tarjeta_credito(credit).description == "FARMACIA TARJETAS Y FECHAS"


def test_merchant_on_a_single_line_body(make_message):
    """Test a following label still ends the merchant when the body has no line breaks."""
    body = (
        "<p>Valor: USD 12.00 Establecimiento: LA CUENTA BAR Cuenta Débito: CNA XXXXXX90214 "
        "Fecha y Hora: 16/01/2026 13:23:21</p>"
    )
    message = make_message(body=body, subject="Consumo tarjeta de débito por USD 12.00")

    data = produbanco.extract_consumo_tarjeta_debito(message)

    assert data.description == "LA CUENTA BAR"
    assert data.card_last4 == "0214"
    assert data.occurred_at == "2026-01-16T18:23:21.000Z"
