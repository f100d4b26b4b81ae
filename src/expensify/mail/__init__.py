"""Mail provider access for expensify."""

from expensify.mail.base import MailClient
from expensify.mail.fallback import FallbackExtractor, FallbackTransaction
from expensify.mail.graph import GraphMailClient
from expensify.mail.tokens import InMemoryTokenStore, TokenStore

__all__ = [
    "MailClient",
    "GraphMailClient",
    "TokenStore",
    "InMemoryTokenStore",
    "FallbackExtractor",
    "FallbackTransaction",
]
