"""Banco Pichincha extractors.

Pichincha emails are HTML tables with the label in the first cell and the
value in the second one, e.g. | Valor | $ 35,93 |. Amounts use comma decimals.
"""

import re
from typing import Optional

from expensify.domain.entities import (
    ExtractedTransactionData,
    PaymentMethod,
    RawMessage,
    TransactionType,
)
from expensify.extractors.base import (
    has_body,
    join_comment,
    occurred_at,
    pair_value,
    positive_amount,
    subject_has,
    table_pairs,
)
from expensify.utils.text import extract_last4, pad_last4

SUBJECT_CONSUMPTION = "notificación de consumos"
SUBJECT_ONLINE_TRANSFER = "transferencia banca electronica banco pichincha"
SUBJECT_NOTIFICATION = "notificación banco pichincha"


def _amount(raw: Optional[str]) -> Optional[float]:
    return positive_amount(raw)


def _account_last4(account: Optional[str]) -> Optional[str]:
    return pad_last4(extract_last4(account)) if account else None


def extract_notificacion_consumos(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Card consumption notice.

    Body rows: Valor, Establecimiento, Tarjeta usada (e.g. "015"), Fecha
    ("2026-01-19 17:51").
    """
    if not has_body(message) or not subject_has(message, SUBJECT_CONSUMPTION):
        return None

    pairs = table_pairs(message.body)
    amount = _amount(pair_value(pairs, "Valor"))
    if amount is None:
        return None

    merchant = pair_value(pairs, "Establecimiento")
    card = pair_value(pairs, "Tarjeta usada")

    card_digits = re.sub(r"\D", "", card or "")[-4:]
    return ExtractedTransactionData(
        type=TransactionType.EXPENSE,
        description=merchant or "BANCO PICHINCHA - Notificación de Consumos",
        amount=amount,
        occurred_at=occurred_at(message, pair_value(pairs, "Fecha")),
        payment_method=PaymentMethod.CARD,
        card_last4=pad_last4(card_digits) if len(card_digits) >= 3 else None,
        comment=f"Tarjeta: {card}" if card else None,
    )


def extract_transferencia(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Online banking transfer.

    Body rows: Cuenta de origen XXXXXX2801, Monto USD 8.75, Fecha 19/01/2026,
    Nombre del beneficiario, Concepto, Cuenta acreditada.
    """
    if not has_body(message) or not subject_has(message, SUBJECT_ONLINE_TRANSFER):
        return None

    pairs = table_pairs(message.body)
    amount = _amount(pair_value(pairs, "Monto:"))
    if amount is None:
        return None

    beneficiary = pair_value(pairs, "Nombre del beneficiario:")
    concept = pair_value(pairs, "Concepto:")
    source_account = pair_value(pairs, "Cuenta de origen:")
    credited_account = pair_value(pairs, "Cuenta acreditada:")

    description = (
        concept
        or (f"Transferencia a {beneficiary}" if beneficiary else None)
        or "BANCO PICHINCHA - Transferencia"
    )
    return ExtractedTransactionData(
        type=TransactionType.EXPENSE,
        description=description,
        amount=amount,
        occurred_at=occurred_at(message, pair_value(pairs, "Fecha:")),
        payment_method=PaymentMethod.TRANSFER,
        card_last4=_account_last4(source_account),
        comment=join_comment(
            [
                f"Beneficiario: {beneficiary}" if beneficiary else None,
                f"Cuenta origen: {source_account}" if source_account else None,
                f"Cuenta acreditada: {credited_account}" if credited_account else None,
            ]
        ),
    )


def extract_notificacion_banco(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Generic "NOTIFICACION BANCO PICHINCHA" notice.

    Used for several templates. The "Transferencia Interbancaria" template
    carries Cuenta de origen, Banco destino, Cuenta acreditada, Nombre del
    beneficiario, Descripción and Documento rows, which are kept in the comment.
    """
    if not has_body(message) or not subject_has(message, SUBJECT_NOTIFICATION):
        return None

    pairs = table_pairs(message.body)
    amount = _amount(pair_value(pairs, "Monto:"))
    if amount is None:
        return None

    source_account = pair_value(pairs, "Cuenta de origen:")
    destination_bank = pair_value(pairs, "Banco destino:")
    credited_account = pair_value(pairs, "Cuenta acreditada:")
    beneficiary = pair_value(pairs, "Nombre del beneficiario:")
    concept = pair_value(pairs, "Descripción:")
    document = pair_value(pairs, "Documento:")

    interbank = "Transferencia Interbancaria" in message.body and (
        destination_bank is not None or source_account is not None
    )

    if interbank:
        description = concept or (
            f"Transferencia a {beneficiary}" if beneficiary else "Transferencia Interbancaria"
        )
        comment = join_comment(
            [
                f"Beneficiario: {beneficiary}" if beneficiary else None,
                f"Banco destino: {destination_bank}" if destination_bank else None,
                f"Cuenta origen: {source_account}" if source_account else None,
                f"Cuenta acreditada: {credited_account}" if credited_account else None,
                f"Documento: {document}" if document else None,
            ]
        )
        card_last4 = _account_last4(source_account)
    else:
        description = concept or beneficiary or "BANCO PICHINCHA - Notificación"
        comment = f"Beneficiario: {beneficiary}" if beneficiary else None
        card_last4 = None

    return ExtractedTransactionData(
        type=TransactionType.EXPENSE,
        description=description,
        amount=amount,
        occurred_at=occurred_at(message, pair_value(pairs, "Fecha:")),
        payment_method=PaymentMethod.TRANSFER,
        card_last4=card_last4,
        comment=comment,
    )
