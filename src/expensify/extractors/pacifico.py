"""Banco del Pacífico (PacifiCard) extractors.

All PacifiCard notices share the same free-text body: the card is written as
"tarjeta PacifiCard TITULAR MASTERCARD 554574XXXXXXX439", followed by
"Establecimiento:", "Fecha de la transacción" and "Monto $ 26.09". Only three
card digits are revealed, so the last4 is padded ("439" -> "0439").
"""

from typing import Optional

from expensify.domain.entities import (
    ExtractedTransactionData,
    PaymentMethod,
    RawMessage,
    TransactionType,
)
from expensify.extractors.base import (
    body_text,
    has_body,
    occurred_at,
    positive_amount,
    search,
    subject_has,
)
from expensify.utils.text import extract_last4, fold, pad_last4

SUBJECT_PAYMENT_CONFIRMATION = "Confirmacion de Pago"
SUBJECT_CONSUMPTION = "PacifiCard: Consumos"
SUBJECT_REFUND_REQUEST = "Solicitud de Transaccion de Devolucion"

_CARD = r"tarjeta\s+PacifiCard\s+[\s\S]*?(\d{6,}\s*X+\s*\d{3,4})"
_MERCHANT = r"(?:en el )?Establecimiento:\s*([^\n]+?)(?=\s+(?-i:Fecha)[^:\n]{0,40}:|\s*\n|\s*$)"
_DATE_WITH_TIME = r"Fecha de la transacci[oó?]n(?:\s*NO\s+exitosa)?\s*:?\s*(\d{4}-\d{2}-\d{2}\s+a\s+las\s+\d{1,2}:\d{2})"
_DATE_ONLY = r"Fecha de la transacci[oó?]n\s*:?\s*(\d{4}-\d{2}-\d{2})"
_AMOUNT = r"Monto\s*:?\s*\$?\s*([\d.,]+)"


def _card_last4(text: str) -> Optional[str]:
    card = search(_CARD, text)
    if not card:
        return None
    return pad_last4(extract_last4(card.replace(" ", "")))


def _amount(text: str) -> Optional[float]:
    raw = search(_AMOUNT, text)
    if not raw:
        return None
    # "Monto $ 26.09." ends the sentence
    return positive_amount(raw.rstrip("."))


def _extract(
    message: RawMessage,
    date_pattern: str,
    transaction_type: TransactionType,
    default_description: str,
) -> Optional[ExtractedTransactionData]:
    text = body_text(message.body)

    amount = _amount(text)
    if amount is None:
        return None

    return ExtractedTransactionData(
        type=transaction_type,
        description=search(_MERCHANT, text) or default_description,
        amount=amount,
        occurred_at=occurred_at(message, search(date_pattern, text)),
        payment_method=PaymentMethod.CARD,
        card_last4=_card_last4(text),
    )


def extract_confirmacion_pago(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Monthly debit confirmation ("Confirmacion de Pago"), an expense.

    The transaction date carries no time of day; the receive time is used.
    """
    if not has_body(message) or not subject_has(message, SUBJECT_PAYMENT_CONFIRMATION):
        return None
    return _extract(
        message,
        _DATE_ONLY,
        TransactionType.EXPENSE,
        "Banco del Pacífico - Confirmación de Pago",
    )


def extract_consumos(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Card consumption ("PacifiCard: Consumos"), an expense."""
    if not has_body(message) or not subject_has(message, SUBJECT_CONSUMPTION):
        return None
    return _extract(
        message,
        _DATE_WITH_TIME,
        TransactionType.EXPENSE,
        "BANCO DEL PACÍFICO - PacifiCard Consumo",
    )


def extract_solicitud_devolucion(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Refund request ("Solicitud de Transacción de Devolución"), an income."""
    if not has_body(message):
        return None
    subject = fold(message.subject)
    if "solicitud" not in subject or "devolucion" not in subject:
        return None
    return _extract(
        message,
        _DATE_WITH_TIME,
        TransactionType.INCOME,
        "BANCO DEL PACÍFICO - Solicitud de Devolución",
    )
