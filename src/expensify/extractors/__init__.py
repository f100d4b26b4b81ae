"""Bank-specific email extractors and the registry selecting them."""

from expensify.extractors.base import Extractor
from expensify.extractors.registry import (
    REGISTRY,
    RegistryEntry,
    get_extractor,
    get_registry_slug_from_bank_emails,
    normalize_bank_slug,
    normalize_subject,
)

__all__ = [
    "Extractor",
    "REGISTRY",
    "RegistryEntry",
    "get_extractor",
    "get_registry_slug_from_bank_emails",
    "normalize_bank_slug",
    "normalize_subject",
]
