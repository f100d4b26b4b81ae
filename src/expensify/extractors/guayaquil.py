"""Banco Guayaquil extractors.

Guayaquil vouchers are generated HTML pages whose values sit in elements with
stable ids (#txtTotalDebitado, #lblTotal_Pagado, ...). The footer carries the
timestamp as DD/MM/YYYY HH:mm:ss.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup

from expensify.domain.entities import (
    CardType,
    ExtractedTransactionData,
    RawMessage,
    TransactionType,
)
from expensify.extractors.base import (
    element_text,
    has_body,
    heading_pairs,
    join_comment,
    occurred_at,
    positive_amount,
    subject_has,
)
from expensify.utils.text import clean, extract_last4, load_html, pad_last4

SUBJECT_INTERNAL_TRANSFER = "TRANSFERENCIAS INTERNAS"
SUBJECT_SERVICE_PAYMENT = "PAGO EXITOSO"
SUBJECT_CREDIT_NOTE = "Nota de Crédito"
SUBJECT_CONSUMPTION = "Consumo por"

_FOOTER_TIMESTAMP = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})\s+(\d{1,2}):(\d{2}):(\d{2})")
_CONSUMPTION_TIMESTAMP = re.compile(
    r"(\d{4})/(\d{2})/(\d{2})\s+A LAS\s+(\d{1,2}):(\d{2})(?::(\d{2}))?", re.IGNORECASE
)
_MASKED_CARD = re.compile(r"\d{6,}-X+-\d{4}")


def _amount(raw: str) -> Optional[float]:
    return positive_amount(raw)


def _footer_timestamp(soup: BeautifulSoup) -> Optional[str]:
    match = _FOOTER_TIMESTAMP.search(soup.get_text())
    if not match:
        return None
    day, month, year, hour, minute, second = match.groups()
    return f"{day}/{month}/{year} {hour}:{minute}:{second}"


def _account_last4(account: str) -> Optional[str]:
    return pad_last4(extract_last4(account)) if account else None


def extract_transferencias_internas(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Internal transfer voucher (Banca Móvil Personas)."""
    if not has_body(message) or not subject_has(message, SUBJECT_INTERNAL_TRANSFER):
        return None

    soup = load_html(message.body)
    amount = _amount(element_text(soup, "#txtTotalDebitado") or element_text(soup, "#txtValorTransferidoUSD"))
    if amount is None:
        return None

    beneficiary = element_text(soup, "#txtNombreDeLaCuentaB")
    concept = element_text(soup, "span#txtConcepto")
    source_account = element_text(soup, "#txtNumerodeCuentaO")
    destination_account = element_text(soup, "#txtNumerodeCuentaB")

    description = (
        (f"Transferencia a {beneficiary}" if beneficiary else None)
        or concept
        or "BANCO GUAYAQUIL - Transferencia interna"
    )
    return ExtractedTransactionData(
        type=TransactionType.EXPENSE,
        description=description,
        amount=amount,
        occurred_at=occurred_at(message, _footer_timestamp(soup)),
        card_last4=_account_last4(source_account),
        comment=join_comment(
            [
                f"Beneficiario: {beneficiary}" if beneficiary else None,
                f"Cuenta origen: {source_account}" if source_account else None,
                f"Cuenta destino: {destination_account}" if destination_account else None,
            ]
        ),
    )


def extract_pago_exitoso(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Utility payment voucher ("PAGO EXITOSO <EMPRESA>")."""
    if not has_body(message) or not subject_has(message, SUBJECT_SERVICE_PAYMENT):
        return None

    soup = load_html(message.body)
    amount = _amount(element_text(soup, "#lblTotal_Pagado"))
    if amount is None:
        return None

    company = element_text(soup, "#lblNombreEmpresa")
    category = element_text(soup, "#lblCategoria")
    reference = element_text(soup, "#lblReferencia")
    account = element_text(soup, "#lblNumeroCT")
    voucher = element_text(soup, "#lblNumeroComprobante")

    description = (
        " - ".join(part for part in (company, reference) if part)
        or (f"Pago {category}" if category else None)
        or "BANCO GUAYAQUIL - Pago de servicio"
    )
    return ExtractedTransactionData(
        type=TransactionType.EXPENSE,
        description=description,
        amount=amount,
        occurred_at=occurred_at(message, _footer_timestamp(soup)),
        card_last4=_account_last4(account),
        comment=join_comment(
            [
                f"Categoría: {category}" if category else None,
                f"Ref: {reference}" if reference else None,
                f"Comprobante: {voucher}" if voucher else None,
            ]
        ),
    )


def extract_nota_credito(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Credit note for a failed consumption, recorded as income.

    Body is a list of h4 labels each followed by a p value: Valor devuelto,
    Cuenta, Local, Fecha.
    """
    if not has_body(message) or not subject_has(message, SUBJECT_CREDIT_NOTE):
        return None

    pairs = heading_pairs(load_html(message.body))
    amount = _amount(pairs.get("valor devuelto", ""))
    if amount is None:
        return None

    account = pairs.get("cuenta", "")
    return ExtractedTransactionData(
        type=TransactionType.INCOME,
        description=pairs.get("local") or "BANCO GUAYAQUIL - Nota de crédito",
        amount=amount,
        occurred_at=occurred_at(message, pairs.get("fecha") or None),
        card_last4=_account_last4(account.replace("-", "")),
        comment=f"Cuenta: {account}" if account else None,
    )


def extract_consumo(message: RawMessage) -> Optional[ExtractedTransactionData]:
    """Card consumption, subject "Consumo por $ 33.47 en ATIMASA PLAZA DANIN".

    Amount and merchant come from the subject, falling back to the body's h2
    and first descriptive paragraph. The card is "MASTERCARD DEBIT –
    514440-XXXXXX-4008" and the date "Consumo nacional 2026/01/30 A LAS 10:03:00".
    """
    if not has_body(message) or not subject_has(message, SUBJECT_CONSUMPTION):
        return None

    subject = clean(message.subject)
    soup = load_html(message.body)

    amount = None
    subject_amount = re.search(r"Consumo por\s*\$?\s*([\d.,]+)", subject, re.IGNORECASE)
    if subject_amount:
        amount = positive_amount(subject_amount.group(1))
    if amount is None:
        amount = _amount(element_text(soup, "h2"))
    if amount is None:
        return None

    merchant = ""
    subject_merchant = re.search(r"\s+en\s+(.+)$", subject, re.IGNORECASE)
    if subject_merchant:
        merchant = clean(subject_merchant.group(1))
    if not merchant:
        container = soup.select_one(".container.post")
        for paragraph in container.find_all("p") if container else []:
            text = clean(paragraph.get_text())
            if text and not text.startswith("$") and not text[0].isdigit() and len(text) > 2:
                merchant = text
                break

    full_text = soup.get_text()
    card = _MASKED_CARD.search(full_text)

    date_text = None
    stamp = _CONSUMPTION_TIMESTAMP.search(full_text)
    if stamp:
        year, month, day, hour, minute, second = stamp.groups()
        date_text = f"{year}-{month}-{day} {hour}:{minute}:{second or '00'}"

    return ExtractedTransactionData(
        type=TransactionType.EXPENSE,
        description=merchant or "BANCO GUAYAQUIL - Consumo",
        amount=amount,
        occurred_at=occurred_at(message, date_text),
        card_last4=pad_last4(extract_last4(card.group(0).replace("-", ""))) if card else None,
        prefer_card_type=CardType.DEBIT,
    )
