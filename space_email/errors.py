"""Exception hierarchy raised by the Space Email client."""

from __future__ import annotations


class SpaceEmailError(Exception):
    """Base class for every error raised by this package."""


class NetworkError(SpaceEmailError):
    """A transport-level failure (DNS, TLS, connection reset, timeout).

    The underlying exception is kept on :attr:`cause` and chained as
    ``__cause__``.  Requests are never retried.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class MalformedResponseError(SpaceEmailError):
    """The markup or JSON returned by the service did not have the expected shape."""


class InvalidParameterError(SpaceEmailError):
    """Caller-supplied data was rejected, locally or by the service."""


class RequiresLoginError(SpaceEmailError):
    """The operation needs an authenticated session."""


class ClientInitError(SpaceEmailError):
    """The underlying HTTP client could not be constructed."""
