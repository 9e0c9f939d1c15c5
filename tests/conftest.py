"""Shared test fixtures for the Space Email client test suite."""

from __future__ import annotations

import json

import pytest

from space_email.client import SpaceEmailClient
from space_email.config import ClientConfig
from space_email.parser import ResponseParser
from space_email.transport import SessionTransport

BASE_URL = "http://space.test"

TEST_ID = 139244
TEST_SENDER = "Homura Akemi"
TEST_SUBJECT = "Something to Remember"
TEST_BODY = "Always, somewhere, someone is fighting for you."
TEST_DATE = "Saturday, Jun 28th, 2014 at 4:05pm"
TEST_SHARE_ID = "a1b2c3d4"


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL)


@pytest.fixture
def parser() -> ResponseParser:
    return ResponseParser()


@pytest.fixture
async def transport(config: ClientConfig):
    transport = SessionTransport(config)
    yield transport
    await transport.aclose()


@pytest.fixture
async def client(config: ClientConfig):
    client = SpaceEmailClient(config)
    yield client
    await client.aclose()


# ------------------------------------------------------------------
# Response builders
# ------------------------------------------------------------------


def build_detail_html(
    *,
    subject: str | None = TEST_SUBJECT,
    sender: str | None = TEST_SENDER,
    body: str | None = TEST_BODY,
    date: str | None = TEST_DATE,
) -> str:
    """Build the HTML half of a view response; ``None`` omits that anchor."""
    parts = ['<div class="msg-view">']
    if subject is not None:
        parts.append(f'<h2 id="msgSubject"> {subject} </h2>')
    if sender is not None:
        parts.append(f'<span class="from">From: <b id="msgSender">{sender}</b></span>')
    if date is not None:
        parts.append(f'<span id="msgDate">\n  {date}\n</span>')
    if body is not None:
        parts.append(f'<div id="msgBody"><p>{body}</p></div>')
    parts.append("</div>")
    return "".join(parts)


def build_detail_response(*, share_id: str = TEST_SHARE_ID, **anchors: str | None) -> str:
    return json.dumps([build_detail_html(**anchors), "", share_id])


def build_listing(rows: list[tuple[int, str | None]]) -> str:
    """Build a listing fragment from ``(id, css_token)`` pairs."""
    html = ['<table class="messages">']
    for message_id, token in rows:
        classes = "row-message" + (f" {token}" if token else "")
        html.append(
            f'<tr class="{classes}" data-id="{message_id}">'
            f"<td>Subject {message_id}</td></tr>"
        )
    html.append("</table>")
    return "".join(html)
