"""Produbanco extractors.

Produbanco sends one email layout per transaction kind:

1. Credit card consumption, subject "Consumo Tarjeta de Crédito por USD 1.54".
   Body: Valor, Establecimiento, Tarjeta XXX3733, Fecha y Hora.
2. Debit card consumption, subject "Consumo tarjeta de débito por USD 2.88".
   Body: Valor, Establecimiento, Cuenta Débito CNA XXXXXX90214, Fecha y Hora.
3. Debit reversal, subject "Notificación Reverso Consumo Tarjeta de Débito
   Produbanco". Dates are written month first (MM/DD/YYYY HH:mm:ss).
4. Credit reversal, subject "Reverso Consumo Tarjeta de Crédito Produbanco".
5. Transfer received, subject "Transferencia recibida desde Produbanco".
6. Transfer sent, subject "Transferencia enviada por $9.00 desde Produbanco".

Reversals are refunds and are recorded as income. Cards and accounts are
stored with four digit last4 values.
"""

from typing import Optional

from expensify.domain.entities import (
    CardType,
    ExtractedTransactionData,
    RawMessage,
    TransactionType,
)
from expensify.extractors.base import (
    body_text,
    has_body,
    join_comment,
    labeled,
    occurred_at,
    positive_amount,
    search,
    subject_has,
)
from expensify.utils.text import pad_last4

SUBJECT_CREDIT = "Consumo Tarjeta de Crédito"
SUBJECT_DEBIT = "Consumo tarjeta de débito"
SUBJECT_DEBIT_REVERSAL = "Notificación Reverso Consumo Tarjeta de Débito Produbanco"
SUBJECT_CREDIT_REVERSAL = "Reverso Consumo Tarjeta de Crédito"
SUBJECT_TRANSFER_RECEIVED = "Transferencia recibida desde Produbanco"
SUBJECT_TRANSFER_SENT = "Transferencia enviada"

_VALUE = r"Valor:\s*(?:USD\s*)?([\d.,]+)"
_AMOUNT = r"Monto:\s*\$?\s*([\d.,]+)"
_DATE_STOPS = r"Transacci[oó]n"


def _amount(pattern: str, text: str) -> Optional[float]:
    raw = search(pattern, text)
    return positive_amount(raw)


def _date_text(text: str) -> Optional[str]:
    return labeled(text, r"Fecha\s+y\s+Hora", _DATE_STOPS)


def _masked_tail(pattern: str, text: str) -> Optional[str]:
    """Last four digits of a masked card/account, e.g. XXX3733 or XXXXX88802."""
    raw = search(pattern, text, flags=0)
    return pad_last4(raw[-4:]) if raw else None


def extract_consumo_tarjeta_credito(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Credit card consumption notice."""
    if not has_body(message) or not subject_has(message, SUBJECT_CREDIT):
        return None

    text = body_text(message.body)
    amount = _amount(_VALUE, text)
    if amount is None:
        return None

    merchant = labeled(text, "Establecimiento", r"Tarjeta|Fecha")
    return ExtractedTransactionData(
        type=TransactionType.EXPENSE,
        description=merchant or "Produbanco - Consumo Tarjeta de Crédito",
        amount=amount,
        occurred_at=occurred_at(message, _date_text(text)),
        card_last4=_masked_tail(r"XXX\s*(\d{3,4})", text),
    )


def extract_consumo_tarjeta_debito(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Debit card consumption notice.

    The email shows the debited account, not the card, so the debit card of
    the bank is preferred when the account digits do not match a card.
    """
    if not has_body(message) or not subject_has(message, SUBJECT_DEBIT):
        return None

    text = body_text(message.body)
    amount = _amount(_VALUE, text)
    if amount is None:
        return None

    merchant = labeled(text, "Establecimiento", r"Cuenta|Fecha")
    # Cuenta Débito: CNA XXXXXX90214 -> 0214
    account_tail = search(r"Cuenta\s+D[ée]bito:\s*[\s\S]*?X+(\d{4,5})", text)
    return ExtractedTransactionData(
        type=TransactionType.EXPENSE,
        description=merchant or "Produbanco - Consumo Tarjeta de Débito",
        amount=amount,
        occurred_at=occurred_at(message, _date_text(text)),
        card_last4=account_tail[-4:] if account_tail else None,
        prefer_card_type=CardType.DEBIT,
    )


def extract_reverso_debito(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Debit card reversal, recorded as income."""
    if not has_body(message) or not subject_has(message, SUBJECT_DEBIT_REVERSAL):
        return None

    text = body_text(message.body)
    amount = _amount(_VALUE, text)
    if amount is None:
        return None

    merchant = labeled(text, "Establecimiento", r"Tarjeta|Fecha")
    return ExtractedTransactionData(
        type=TransactionType.INCOME,
        description=merchant or "Produbanco - Reverso Consumo Tarjeta de Débito",
        amount=amount,
        # This template writes dates month first
        occurred_at=occurred_at(message, _date_text(text), date_order="mdy"),
        card_last4=search(r"X+(\d{4})", text, flags=0),
    )


def extract_reverso_credito(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Credit card reversal, recorded as income."""
    if not has_body(message) or not subject_has(message, SUBJECT_CREDIT_REVERSAL):
        return None

    text = body_text(message.body)
    amount = _amount(_VALUE, text)
    if amount is None:
        return None

    merchant = labeled(text, "Establecimiento", r"Tarjeta|Fecha")
    return ExtractedTransactionData(
        type=TransactionType.INCOME,
        description=merchant or "Produbanco - Reverso Consumo Tarjeta de Crédito",
        amount=amount,
        occurred_at=occurred_at(message, _date_text(text)),
        card_last4=_masked_tail(r"XXX\s*(\d{3,4})", text),
    )


def extract_transferencia_recibida(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Incoming transfer."""
    if not has_body(message) or not subject_has(message, SUBJECT_TRANSFER_RECEIVED):
        return None

    text = body_text(message.body)
    amount = _amount(_AMOUNT, text)
    if amount is None:
        return None

    concept = labeled(text, "Descripci[oó]n", r"Referencia|Enviada|Cuenta|Fecha")
    account_tail = search(r"Cuenta\s+Contacto:\s*X+(\d{4,5})", text)
    return ExtractedTransactionData(
        type=TransactionType.INCOME,
        description=concept or "Produbanco - Transferencia recibida",
        amount=amount,
        occurred_at=occurred_at(message, _date_text(text)),
        card_last4=account_tail[-4:] if account_tail else None,
    )


def extract_transferencia_enviada(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Outgoing transfer.

    The contact, destination bank, account and channel are kept in the
    comment since they have no structured column.
    """
    if not has_body(message) or not subject_has(message, SUBJECT_TRANSFER_SENT):
        return None

    text = body_text(message.body)
    amount = _amount(_AMOUNT, text)
    if amount is None:
        return None

    contact = labeled(text, r"(?<!Cuenta )(?<!Banco )Contacto", r"Banco|Cuenta|Canal|Fecha")
    contact_bank = labeled(text, r"Banco\s+Contacto", r"Cuenta|Canal|Fecha")
    account = search(r"Cuenta\s+Contacto:\s*(X+\d{4,5})", text)
    channel = labeled(text, "Canal", r"Referencia|Fecha")

    comment = join_comment(
        [
            f"Contacto: {contact}" if contact else None,
            f"Banco Contacto: {contact_bank}" if contact_bank else None,
            f"Cuenta Contacto: {account}" if account else None,
            f"Canal: {channel}" if channel else None,
        ],
        separator=". ",
    )
    return ExtractedTransactionData(
        type=TransactionType.EXPENSE,
        description=f"Transferencia a {contact}" if contact else "Transferencia a contacto",
        amount=amount,
        occurred_at=occurred_at(message, _date_text(text)),
        card_last4=account[-4:] if account else None,
        comment=comment,
    )
