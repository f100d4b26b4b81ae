"""Extractor registry.

Maps a bank slug and an email subject to the extractor that parses it. Rules
are evaluated in order and the first match wins, so a rule whose subject is
contained in another rule's subject must come after it: the reversal rules
of a bank precede its consumption rules ("Reverso Consumo Tarjeta de
Crédito" contains "Consumo Tarjeta de Crédito").
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from expensify.extractors import guayaquil, pacifico, pichincha, produbanco
from expensify.extractors.base import Extractor
from expensify.utils.text import fold


@dataclass(frozen=True)
class RegistryEntry:
    """A bank slug, a subject substring and the extractor they select."""

    bank_slug: str
    subject_contains: str
    extractor: Extractor


REGISTRY: tuple[RegistryEntry, ...] = (
    RegistryEntry("pacifico", pacifico.SUBJECT_PAYMENT_CONFIRMATION, pacifico.extract_confirmacion_pago),
    RegistryEntry("pacifico", pacifico.SUBJECT_CONSUMPTION, pacifico.extract_consumos),
    RegistryEntry("pacifico", pacifico.SUBJECT_REFUND_REQUEST, pacifico.extract_solicitud_devolucion),
    RegistryEntry("produbanco", produbanco.SUBJECT_CREDIT_REVERSAL, produbanco.extract_reverso_credito),
    RegistryEntry("produbanco", produbanco.SUBJECT_CREDIT, produbanco.extract_consumo_tarjeta_credito),
    RegistryEntry("produbanco", produbanco.SUBJECT_DEBIT_REVERSAL, produbanco.extract_reverso_debito),
    RegistryEntry("produbanco", produbanco.SUBJECT_DEBIT, produbanco.extract_consumo_tarjeta_debito),
    RegistryEntry(
        "produbanco", produbanco.SUBJECT_TRANSFER_RECEIVED, produbanco.extract_transferencia_recibida
    ),
    RegistryEntry("produbanco", produbanco.SUBJECT_TRANSFER_SENT, produbanco.extract_transferencia_enviada),
    RegistryEntry("pichincha", pichincha.SUBJECT_CONSUMPTION, pichincha.extract_notificacion_consumos),
    RegistryEntry("pichincha", pichincha.SUBJECT_ONLINE_TRANSFER, pichincha.extract_transferencia),
    RegistryEntry("pichincha", pichincha.SUBJECT_NOTIFICATION, pichincha.extract_notificacion_banco),
    RegistryEntry(
        "guayaquil", guayaquil.SUBJECT_INTERNAL_TRANSFER, guayaquil.extract_transferencias_internas
    ),
    RegistryEntry("guayaquil", guayaquil.SUBJECT_SERVICE_PAYMENT, guayaquil.extract_pago_exitoso),
    RegistryEntry("guayaquil", guayaquil.SUBJECT_CREDIT_NOTE, guayaquil.extract_nota_credito),
    RegistryEntry("guayaquil", guayaquil.SUBJECT_CONSUMPTION, guayaquil.extract_consumo),
)

# Canonical slug for any slug containing the key, so directory data such as
# "banco-pacifico" or "Banco del Pacífico" still resolves.
_CANONICAL_SLUGS = ("pacifico", "produbanco", "pichincha", "guayaquil")

# Sender address fragments identifying each bank.
_SENDER_FRAGMENTS = (
    ("infopacificard", "pacifico"),
    ("pacificard", "pacifico"),
    ("produbanco", "produbanco"),
    ("pichincha", "pichincha"),
    ("bancoguayaquil", "guayaquil"),
)


def normalize_bank_slug(slug: str) -> str:
    """Map slug variants to the canonical registry slug."""
    folded = fold(slug)
    for canonical in _CANONICAL_SLUGS:
        if canonical in folded:
            return canonical
    return folded or (slug or "").lower().strip()


def normalize_subject(subject: str) -> str:
    """Lowercase, accent-free, whitespace-collapsed subject."""
    return fold(subject or "")


def get_registry_slug_from_bank_emails(emails: Optional[Iterable[str]]) -> Optional[str]:
    """Infer the registry slug from whitelisted sender addresses.

    Used when a bank's own slug does not resolve to any registry rule.

    Args:
        emails: Sender addresses, e.g. the bank's whitelist or the message sender

    Returns:
        Canonical slug, or None if no address is recognized
    """
    for email in emails or ():
        address = (email or "").lower()
        for fragment, slug in _SENDER_FRAGMENTS:
            if fragment in address:
                return slug
    return None


def find_entry(bank_slug: Optional[str], subject: str) -> Optional[RegistryEntry]:
    """Return the first registry rule matching the bank and subject."""
    if not bank_slug:
        return None
    slug = normalize_bank_slug(bank_slug)
    subject_norm = normalize_subject(subject)
    for entry in REGISTRY:
        if normalize_bank_slug(entry.bank_slug) == slug and fold(entry.subject_contains) in subject_norm:
            return entry
    return None


def get_extractor(bank_slug: Optional[str], subject: str) -> Optional[Extractor]:
    """Return the extractor for a bank slug and subject, or None."""
    entry = find_entry(bank_slug, subject)
    return entry.extractor if entry else None
