"""Async client for the Space Email message service.

Public API re-exported here for convenience::

    from space_email import create_client, MessageContents, RangeSelector
"""

from .client import SpaceEmailClient, create_client
from .config import ClientConfig
from .errors import (
    ClientInitError,
    InvalidParameterError,
    MalformedResponseError,
    NetworkError,
    RequiresLoginError,
    SpaceEmailError,
)
from .logging import setup_logging
from .models import Category, EmailId, MessageContents, MessageRecord, RangeSelector
from .parser import ResponseParser
from .stream import StarredStream, StreamState
from .styles import classify, classify_classes, css_token, to_wire_code
from .timestamps import parse_timestamp
from .transport import SessionTransport

__all__ = [
    "Category",
    "ClientConfig",
    "ClientInitError",
    "EmailId",
    "InvalidParameterError",
    "MalformedResponseError",
    "MessageContents",
    "MessageRecord",
    "NetworkError",
    "RangeSelector",
    "RequiresLoginError",
    "ResponseParser",
    "SessionTransport",
    "SpaceEmailClient",
    "SpaceEmailError",
    "StarredStream",
    "StreamState",
    "classify",
    "classify_classes",
    "create_client",
    "css_token",
    "parse_timestamp",
    "setup_logging",
    "to_wire_code",
]
