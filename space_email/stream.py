"""Resumable stream over the logged-in user's starred messages."""

from __future__ import annotations

from collections import deque
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

import structlog

from . import endpoints
from .errors import RequiresLoginError
from .models import EmailId, MessageRecord
from .parser import ResponseParser
from .transport import SessionTransport

logger = structlog.get_logger(__name__)

Resolver = Callable[[EmailId], Awaitable[MessageRecord]]


class StreamState(str, Enum):
    DRAINING = "draining"
    BUFFERING = "buffering"
    GETTING = "getting"


class StarredStream:
    """Async iterator yielding every starred :class:`MessageRecord`.

    Pages of ids are listed from the paginate endpoint and each id is then
    resolved through the view endpoint.  The first empty page ends the
    stream for good.

    Each ``__anext__`` raises whatever error its request raised but leaves
    the stream in the same state with the same pending request, so calling
    it again repeats that request (same page, same id).  The login state is
    checked on every advance.

    Yielded records always carry the category seen in the listing row;
    the view endpoint cannot report it.
    """

    def __init__(
        self,
        transport: SessionTransport,
        parser: ResponseParser,
        resolve: Resolver | None = None,
    ) -> None:
        if not transport.logged_in:
            raise RequiresLoginError("Starred messages require login")
        self._transport = transport
        self._parser = parser
        self._resolve = resolve or self._view
        self._state = StreamState.DRAINING
        self._buffer: deque[EmailId] = deque()
        self._page = 1
        self._pending: Callable[[], Awaitable[Any]] | None = None
        self._finished = False

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def page(self) -> int:
        """Number of the next page to be listed."""
        return self._page

    @property
    def finished(self) -> bool:
        return self._finished

    def __aiter__(self) -> StarredStream:
        return self

    async def __anext__(self) -> MessageRecord:
        if self._finished:
            raise StopAsyncIteration
        if not self._transport.logged_in:
            raise RequiresLoginError("Starred messages require login")

        while not self._finished:
            record = await self._step()
            if record is not None:
                return record
        raise StopAsyncIteration

    async def _step(self) -> MessageRecord | None:
        if self._state is StreamState.DRAINING:
            if not self._buffer:
                page = self._page
                self._pending = lambda: self._list_page(page)
                self._state = StreamState.BUFFERING
            else:
                head = self._buffer[0]
                self._pending = lambda: self._resolve(head)
                self._state = StreamState.GETTING
            return None

        if self._pending is None:
            raise AssertionError(f"No pending request in state {self._state.value}")
        # On failure the exception escapes here with state and _pending intact
        result = await self._pending()
        self._pending = None

        if self._state is StreamState.BUFFERING:
            self._state = StreamState.DRAINING
            if not result:
                self._finished = True
                logger.info("starred_stream_finished", pages=self._page - 1)
                return None
            self._buffer = deque(result)
            self._page += 1
            return None

        head = self._buffer.popleft()
        self._state = StreamState.DRAINING
        return result.with_category(head.category)

    async def _list_page(self, page: int) -> list[EmailId]:
        body = await self._transport.request(endpoints.PAGINATE_STARRED, [("page", page)])
        ids = self._parser.parse_listing(body)
        logger.debug("starred_page_listed", page=page, count=len(ids))
        return ids

    async def _view(self, email_id: EmailId) -> MessageRecord:
        body = await self._transport.request(endpoints.VIEW, [("id", email_id.id)])
        return self._parser.parse_detail(body, EmailId(id=email_id.id))
