"""Tests for Banco Pichincha extractors."""

from expensify.domain.entities import PaymentMethod, TransactionType
from expensify.extractors import pichincha

SENDER = "bancavirtual@pichincha.com"


def table(*rows, preamble=""):
    cells = "\n".join(f"<tr><td>{label}</td><td>{value}</td></tr>" for label, value in rows)
    return f"<html><body>{preamble}\n<table>\n{cells}\n</table></body></html>"


def test_consumption(make_message):
    """Test the card consumption table with comma decimals."""
    body = table(
        ("Valor", "$ 35,93"),
        ("Establecimiento", "KFC MALL EL JARDIN"),
        ("Tarjeta usada", "015"),
        ("Fecha", "2026-01-19 17:51"),
    )
    message = make_message(body=body, subject="NOTIFICACIÓN DE CONSUMOS", sender=SENDER)

    data = pichincha.extract_notificacion_consumos(message)

    assert data.type == TransactionType.EXPENSE
    assert data.amount == 35.93
    assert data.description == "KFC MALL EL JARDIN"
    assert data.card_last4 == "0015"
    assert data.payment_method == PaymentMethod.CARD
    assert data.comment == "Tarjeta: 015"
    assert data.occurred_at == "2026-01-19T22:51:00.000Z"


def test_consumption_without_amount(make_message):
    """Test None when the Valor row is missing."""
    body = table(("Establecimiento", "KFC"))
    assert pichincha.extract_notificacion_consumos(make_message(body=body, subject="Notificación de consumos")) is None


def test_online_transfer(make_message):
    """Test the online banking transfer with a date-only field."""
    body = table(
        ("Cuenta de origen:", "XXXXXX2801"),
        ("Monto:", "USD 8.75"),
        ("Fecha:", "19/01/2026"),
        ("Nombre del beneficiario:", "MARIA LOPEZ"),
        ("Concepto:", "Almuerzo"),
        ("Cuenta acreditada:", "XXXXXX5566"),
    )
    message = make_message(
        body=body,
        subject="Transferencia Banca Electronica Banco Pichincha",
        sender=SENDER,
        received_at="2026-01-19T20:00:00.000Z",
    )

    data = pichincha.extract_transferencia(message)

    assert data.type == TransactionType.EXPENSE
    assert data.amount == 8.75
    assert data.description == "Almuerzo"
    assert data.payment_method == PaymentMethod.TRANSFER
    assert data.card_last4 == "2801"
    assert data.comment == (
        "Beneficiario: MARIA LOPEZ | Cuenta origen: XXXXXX2801 | Cuenta acreditada: XXXXXX5566"
    )
    assert data.occurred_at == "2026-01-19T20:00:00.000Z"


def test_online_transfer_describes_beneficiary_without_concept(make_message):
    """Test the description falls back to the beneficiary."""
    body = table(("Monto:", "USD 8.75"), ("Nombre del beneficiario:", "MARIA LOPEZ"))
    message = make_message(body=body, subject="Transferencia Banca Electronica Banco Pichincha")

    assert pichincha.extract_transferencia(message).description == "Transferencia a MARIA LOPEZ"


def test_interbank_notification(make_message):
    """Test the Transferencia Interbancaria template of the generic notice."""
    body = table(
        ("Cuenta de origen:", "XXXXXX2801"),
        ("Banco destino:", "PRODUBANCO"),
        ("Cuenta acreditada:", "XXXXXX7777"),
        ("Nombre del beneficiario:", "CARLOS MENA"),
        ("Descripción:", "Cuota viaje"),
        ("Documento:", "123456"),
        ("Monto:", "$ 1.250,00"),
        ("Fecha:", "21/01/2026 11:45"),
        preamble="<h1>Transferencia Interbancaria</h1>",
    )
    message = make_message(body=body, subject="NOTIFICACION BANCO PICHINCHA", sender=SENDER)

    data = pichincha.extract_notificacion_banco(message)

    assert data.amount == 1250.0
    assert data.description == "Cuota viaje"
    assert data.card_last4 == "2801"
    assert data.comment == (
        "Beneficiario: CARLOS MENA | Banco destino: PRODUBANCO | Cuenta origen: XXXXXX2801 | "
        "Cuenta acreditada: XXXXXX7777 | Documento: 123456"
    )
    assert data.occurred_at == "2026-01-21T16:45:00.000Z"


def test_generic_notification(make_message):
    """Test the generic notice without interbank rows."""
    body = table(("Monto:", "$ 15,00"), ("Nombre del beneficiario:", "CNT EP"))
    message = make_message(body=body, subject="Notificación Banco Pichincha")

    data = pichincha.extract_notificacion_banco(message)

    assert data.amount == 15.0
    assert data.description == "CNT EP"
    assert data.card_last4 is None
    assert data.comment == "Beneficiario: CNT EP"


def test_consumption_with_negative_amount(make_message):
    """Test None when the Valor row is negative or zero."""
    for value in ("-$ 35,93", "$ 0,00"):
        body = table(("Valor", value), ("Establecimiento", "KFC"))
        message = make_message(body=body, subject="NOTIFICACIÓN DE CONSUMOS", sender=SENDER)
        assert pichincha.extract_notificacion_consumos(message) is None
