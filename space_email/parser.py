"""Scrapers for the two response shapes the service produces.

Listing fragments (random pick, starred pages) carry ``.row-message``
markers with a ``data-id`` attribute.  Detail responses are a JSON array
``[html, reserved, share_id]`` whose HTML holds the message fields under
fixed element ids.
"""

from __future__ import annotations

import json
from typing import Any

from bs4 import BeautifulSoup, Tag

from .errors import MalformedResponseError
from .models import EmailId, MessageContents, MessageRecord
from .styles import classify_classes
from .timestamps import parse_timestamp

ROW_MARKER_CLASS = "row-message"

SUBJECT_ANCHOR = "msgSubject"
SENDER_ANCHOR = "msgSender"
BODY_ANCHOR = "msgBody"
DATE_ANCHOR = "msgDate"


class ResponseParser:
    """Stateless parser: response text -> ids or :class:`MessageRecord`."""

    def parse_listing(self, html: str) -> list[EmailId]:
        """Return every row marker in document order.

        A fragment without rows is an empty listing, not an error.
        """
        return [self._row_to_id(row) for row in self._rows(html)]

    def parse_first_row(self, html: str) -> EmailId:
        rows = self._rows(html)
        if not rows:
            raise MalformedResponseError("No message row found in listing response")
        return self._row_to_id(rows[0])

    def parse_detail(self, body: str, email_id: EmailId) -> MessageRecord:
        """Build a record from a view response.

        The view markup never shows the colour, so the category comes from
        *email_id* and is :attr:`Category.DEFAULT` unless the caller knew it.
        """
        fragment, share_id = self._unpack_envelope(body)
        soup = BeautifulSoup(fragment, "html.parser")

        subject = self._anchor_text(soup, SUBJECT_ANCHOR, "Subject")
        sender = self._anchor_text(soup, SENDER_ANCHOR, "Sender")
        message_body = self._anchor_text(soup, BODY_ANCHOR, "Body")
        timestamp = parse_timestamp(self._anchor_text(soup, DATE_ANCHOR, "Timestamp"))

        return MessageRecord(
            id=email_id.id,
            share_id=share_id,
            timestamp=timestamp,
            contents=MessageContents(
                subject=subject,
                sender=sender,
                body=message_body,
                category=email_id.category,
            ),
        )

    # ------------------------------------------------------------------
    # Shared primitives
    # ------------------------------------------------------------------

    def _rows(self, html: str) -> list[Tag]:
        soup = BeautifulSoup(html, "html.parser")
        return soup.find_all(class_=ROW_MARKER_CLASS)

    def _row_to_id(self, row: Tag) -> EmailId:
        raw_id = row.get("data-id")
        if not isinstance(raw_id, str) or not raw_id.strip().isdecimal():
            raise MalformedResponseError(f"Row marker has no numeric data-id: {raw_id!r}")
        return EmailId(id=int(raw_id), category=classify_classes(row.get("class")))

    def _anchor_text(self, soup: BeautifulSoup, anchor: str, label: str) -> str:
        node = soup.find(id=anchor)
        if node is None:
            raise MalformedResponseError(f"{label} not found")
        return node.get_text().strip()

    def _unpack_envelope(self, body: str) -> tuple[str, str]:
        try:
            data: Any = json.loads(body)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(
                f"Unable to parse view response to JSON: {body[:200]!r}"
            ) from exc

        if not isinstance(data, list) or len(data) != 3:
            raise MalformedResponseError("View response is not a 3-element array")
        fragment, _reserved, share_id = data
        if not isinstance(fragment, str) or not isinstance(share_id, str):
            raise MalformedResponseError("View response fields are not strings")
        return fragment, share_id
