"""Mapping between CSS class tokens, categories and send wire codes."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import InvalidParameterError
from .models import Category

_TOKEN_TO_CATEGORY: dict[str, Category] = {
    "msg-red": Category.RED,
    "msg-lime": Category.LIME,
    "msg-cyan": Category.CYAN,
    "msg-blue": Category.BLUE,
    "msg-white": Category.WHITE,
    "msg-pink": Category.PINK,
    "admin": Category.ADMIN,
}

_CATEGORY_TO_TOKEN: dict[Category, str] = {v: k for k, v in _TOKEN_TO_CATEGORY.items()}

_WIRE_CODES: dict[Category, int] = {
    Category.DEFAULT: 0,
    Category.RED: 1,
    Category.LIME: 2,
    Category.CYAN: 3,
    Category.BLUE: 4,
    Category.WHITE: 5,
    Category.PINK: 6,
}


def classify(css_token: str | None) -> Category:
    """Map a style token to a category.

    Unknown or missing tokens are :attr:`Category.DEFAULT`; the service
    leaves the marker off default-coloured rows.
    """
    if css_token is None:
        return Category.DEFAULT
    return _TOKEN_TO_CATEGORY.get(css_token, Category.DEFAULT)


def classify_classes(class_attr: str | Iterable[str] | None) -> Category:
    """Classify a whole ``class`` attribute (string or BeautifulSoup list)."""
    if class_attr is None:
        return Category.DEFAULT
    classes = class_attr.split() if isinstance(class_attr, str) else class_attr
    token = next((c for c in classes if c.startswith("msg-") or c == "admin"), None)
    return classify(token)


def css_token(category: Category) -> str | None:
    return _CATEGORY_TO_TOKEN.get(category)


def to_wire_code(category: Category) -> int:
    """Return the ``type`` value the send endpoint expects.

    Raises :class:`InvalidParameterError` for :attr:`Category.ADMIN`.
    """
    try:
        return _WIRE_CODES[category]
    except KeyError:
        raise InvalidParameterError(f"Category {category.value!r} cannot be sent") from None
