"""Microsoft Graph mail client."""

from datetime import datetime, UTC
from typing import Any, Optional

import requests
import structlog

from expensify.domain.entities import RawMessage
from expensify.domain.errors import MailProviderError
from expensify.mail.base import MailClient
from expensify.mail.tokens import TokenStore

logger = structlog.get_logger()

GRAPH_MESSAGES_URL = "https://graph.microsoft.com/v1.0/me/messages"
MESSAGE_FIELDS = "from,receivedDateTime,body,subject"
ACCESS_TOKEN_KEY = "access_token"


def message_from_graph(message_id: str, payload: dict[str, Any]) -> RawMessage:
    """Build a RawMessage from a Graph message resource.

    Single messages carry the sender in "from", listings in "sender".
    """
    sender = (payload.get("from") or {}).get("emailAddress") or (
        payload.get("sender") or {}
    ).get("emailAddress") or {}
    received_at = payload.get("receivedDateTime") or datetime.now(UTC).strftime(
        "%Y-%m-%dT%H:%M:%S.000Z"
    )
    return RawMessage(
        id=message_id,
        sender=(sender.get("address") or "").lower(),
        sender_name=sender.get("name") or "",
        subject=payload.get("subject") or "",
        received_at=received_at,
        body=(payload.get("body") or {}).get("content") or "",
    )


class GraphMailClient(MailClient):
    """Reads messages of the signed-in user through Microsoft Graph v1.0."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        token_store: Optional[TokenStore] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        """Initialize Graph client.

        Args:
            access_token: Bearer token; if None it is read from token_store
            token_store: Store holding the token under "access_token"
            session: requests session, mainly for tests
            timeout: Request timeout in seconds
        """
        self.access_token = access_token
        self.token_store = token_store
        self.session = session or requests.Session()
        self.timeout = timeout

    def _token(self) -> str:
        token = self.access_token
        if token is None and self.token_store is not None:
            token = self.token_store.get(ACCESS_TOKEN_KEY)
        if not token:
            raise MailProviderError("No access token available")
        return token

    def get_message_by_id(self, message_id: str) -> Optional[RawMessage]:
        """Fetch a message by ID.

        Returns:
            The message, or None when Graph answers 404

        Raises:
            MailProviderError: On connection errors or any other error status
        """
        url = f"{GRAPH_MESSAGES_URL}/{message_id}"
        logger.debug("graph_message_requested", message_id=message_id)
        try:
            resp = self.session.get(
                url,
                params={"$select": MESSAGE_FIELDS},
                headers={"Authorization": f"Bearer {self._token()}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("graph_request_failed", message_id=message_id, error=str(e))
            raise MailProviderError(f"Could not reach Microsoft Graph: {e}") from e

        if resp.status_code == 404:
            logger.info("graph_message_not_found", message_id=message_id)
            return None
        if resp.status_code != 200:
            logger.error(
                "graph_request_failed",
                message_id=message_id,
                status=resp.status_code,
                body=resp.text[:200],
            )
            raise MailProviderError(
                f"Microsoft Graph returned {resp.status_code} for message '{message_id}'"
            )

        return message_from_graph(message_id, resp.json())
