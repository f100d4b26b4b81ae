"""Token cache used to hand access tokens to mail clients."""

from abc import ABC, abstractmethod
from typing import Optional


class TokenStore(ABC):
    """Key/value store for provider tokens."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class InMemoryTokenStore(TokenStore):
    """Process-local token store."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
