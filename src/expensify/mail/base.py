"""Abstract mail provider interface."""

from abc import ABC, abstractmethod
from typing import Optional

from expensify.domain.entities import RawMessage


class MailClient(ABC):
    """Read access to the mailbox bank notifications arrive in."""

    @abstractmethod
    def get_message_by_id(self, message_id: str) -> Optional[RawMessage]:
        """Fetch one message.

        Returns:
            The message, or None if the provider does not know the id

        Raises:
            MailProviderError: If the provider could not be reached
        """
        pass
