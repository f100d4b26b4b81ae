"""Domain layer for expensify application."""

# Services import the database layer, which imports domain entities; resolve
# them lazily to avoid circular imports.
_SERVICES = {
    "BankService": "expensify.domain.bank",
    "CardService": "expensify.domain.card",
    "ExtractionService": "expensify.domain.extraction",
    "EmailIngestionService": "expensify.domain.ingestion",
    "TransactionService": "expensify.domain.transaction",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
