"""High-level async client for the Space Email service."""

from __future__ import annotations

import structlog

from . import endpoints
from .config import ClientConfig
from .errors import InvalidParameterError, RequiresLoginError
from .models import Category, EmailId, MessageContents, MessageRecord, RangeSelector
from .parser import ResponseParser
from .stream import StarredStream
from .styles import to_wire_code
from .transport import SessionTransport

logger = structlog.get_logger(__name__)

Identifier = int | EmailId | MessageRecord


class SpaceEmailClient:
    """Sends and downloads space emails and manages an account's stars.

    Use :func:`create_client` or construct directly, and close with
    :meth:`aclose` (or ``async with``).
    """

    def __init__(self, config: ClientConfig | None = None) -> None:
        self._config = config or ClientConfig()
        self._transport = SessionTransport(self._config)
        self._parser = ResponseParser()

    @property
    def logged_in(self) -> bool:
        return self._transport.logged_in

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> SpaceEmailClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> None:
        await self._transport.login(email, password)

    async def logout(self) -> None:
        await self._transport.logout()

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    async def get_random(self) -> MessageRecord:
        return await self.get_random_in_range(RangeSelector.ALL)

    async def get_random_in_range(self, selector: RangeSelector) -> MessageRecord:
        """Download a random message sent within *selector*.

        Anything other than :attr:`RangeSelector.ALL` requires login.
        """
        if not self.logged_in and selector != RangeSelector.ALL:
            raise RequiresLoginError(f"Range {selector.name} requires login")

        body = await self._transport.request(endpoints.GET, [("range", int(selector))])
        email_id = self._parser.parse_first_row(body)
        return await self.get_by_id(email_id)

    async def get_by_id(self, identifier: Identifier) -> MessageRecord:
        """Download the message with the given id.

        The view endpoint does not expose the colour, so the record's
        category is whatever *identifier* carries, and
        :attr:`Category.DEFAULT` for a bare ``int`` even when the message
        is actually coloured.
        """
        email_id = EmailId.of(identifier)
        body = await self._transport.request(endpoints.VIEW, [("id", email_id.id)])
        return self._parser.parse_detail(body, email_id)

    def stream_starred(self) -> StarredStream:
        """Return a stream of the logged-in user's starred messages."""
        return StarredStream(self._transport, self._parser)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def send(self, contents: MessageContents) -> None:
        """Send a new message.

        Raises :class:`InvalidParameterError` for an empty field, the admin
        category, a colour while logged out, or a rejection by the service.
        """
        if not contents.sender or not contents.subject or not contents.body:
            raise InvalidParameterError("Sender, subject and body must be non-empty")
        if contents.category is Category.ADMIN:
            raise InvalidParameterError("Admin messages cannot be sent")
        if not self.logged_in and contents.category is not Category.DEFAULT:
            raise InvalidParameterError("Coloured messages can only be sent while logged in")

        fields = [
            ("sender", contents.sender),
            ("subject", contents.subject),
            ("body", contents.body),
            ("type", to_wire_code(contents.category)),
        ]
        body = await self._transport.request(endpoints.SEND, fields)
        if body != endpoints.SEND_SUCCESS:
            logger.info("message_rejected", response=body[:200])
            raise InvalidParameterError("Message rejected by the service")
        logger.info("message_sent", category=contents.category.value)

    async def star(self, identifier: Identifier) -> None:
        email_id = self._require_login(identifier)
        await self._transport.request(endpoints.STAR, [("id", email_id.id)])
        logger.debug("message_starred", id=email_id.id)

    async def unstar(self, identifier: Identifier) -> None:
        email_id = self._require_login(identifier)
        await self._transport.request(endpoints.UNSTAR, [("id", email_id.id)])
        logger.debug("message_unstarred", id=email_id.id)

    def _require_login(self, identifier: Identifier) -> EmailId:
        if not self.logged_in:
            raise RequiresLoginError("Starring requires login")
        return EmailId.of(identifier)


def create_client(config: ClientConfig | None = None) -> SpaceEmailClient:
    """Build a client.

    Raises :class:`ClientInitError` if the HTTP client cannot be created.
    """
    return SpaceEmailClient(config)
