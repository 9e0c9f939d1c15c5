"""Domain models for Space Email records."""

from __future__ import annotations

from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SHARE_URL_TEMPLATE = "https://space.galaxybuster.net/shv.php?id={share_id}"


class Category(str, Enum):
    """Display colour of a message, or the admin marker."""

    DEFAULT = "default"
    RED = "red"
    LIME = "lime"
    CYAN = "cyan"
    BLUE = "blue"
    WHITE = "white"
    PINK = "pink"
    ADMIN = "admin"


class RangeSelector(IntEnum):
    """Time window for random retrieval; the value is the wire code."""

    ALL = 0
    TODAY = 1
    WEEK = 2
    MONTH = 3


class MessageContents(BaseModel):
    """The user-authored part of a message."""

    model_config = ConfigDict(frozen=True)

    subject: str = Field(description="Message subject line")
    sender: str = Field(description="Free-text sender name")
    body: str = Field(description="Message body")
    category: Category = Field(default=Category.DEFAULT, description="Display colour")

    def same_text(self, other: MessageContents) -> bool:
        """Compare subject, sender and body, ignoring the category."""
        return (self.subject, self.sender, self.body) == (
            other.subject,
            other.sender,
            other.body,
        )

    def with_category(self, category: Category) -> MessageContents:
        return self.model_copy(update={"category": category})


class EmailId(BaseModel):
    """A message id together with the category seen alongside it, if any."""

    model_config = ConfigDict(frozen=True)

    id: int
    category: Category = Category.DEFAULT

    @classmethod
    def of(cls, value: int | EmailId | MessageRecord) -> EmailId:
        if isinstance(value, EmailId):
            return value
        if isinstance(value, MessageRecord):
            return value.email_id
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(id=value)
        raise TypeError(f"Cannot build an EmailId from {type(value).__name__}")


class MessageRecord(BaseModel):
    """A fully resolved message.

    Two records are equal when their ids are equal, whatever their contents.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Numeric message id")
    share_id: str = Field(description="Opaque id used in the public share URL")
    timestamp: datetime = Field(description="Creation time as displayed by the service")
    contents: MessageContents

    @property
    def share_url(self) -> str:
        return SHARE_URL_TEMPLATE.format(share_id=self.share_id)

    @property
    def email_id(self) -> EmailId:
        return EmailId(id=self.id, category=self.contents.category)

    def with_category(self, category: Category) -> MessageRecord:
        return self.model_copy(update={"contents": self.contents.with_category(category)})

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, MessageRecord):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
