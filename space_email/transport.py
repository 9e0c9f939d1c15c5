"""Session-authenticated form POST transport over httpx."""

from __future__ import annotations

import re
import ssl
from collections.abc import Iterable
from typing import Any
from urllib.parse import urlencode

import httpx
import structlog

from . import endpoints
from .config import ClientConfig
from .errors import ClientInitError, InvalidParameterError, NetworkError

logger = structlog.get_logger(__name__)

FormFields = Iterable[tuple[str, str | int]]


class SessionTransport:
    """Issues form-encoded POSTs and tracks the session cookie by hand.

    The session token and the logged-in flag are the only mutable state.
    Neither is locked: concurrent requests on one instance must be
    serialised by the caller.
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._token: str | None = None
        self._logged_in = False
        self._token_pattern = re.compile(
            rf"\s*{re.escape(config.session_cookie_name)}=([^;\s]+)"
        )

        client_kwargs: dict[str, Any] = {}
        if config.timeout_seconds is not None:
            client_kwargs["timeout"] = httpx.Timeout(config.timeout_seconds)

        try:
            if config.ca_bundle_path:
                client_kwargs["verify"] = ssl.create_default_context(cafile=config.ca_bundle_path)
            self._client = httpx.AsyncClient(
                base_url=config.base_url,
                headers={"User-Agent": config.user_agent},
                **client_kwargs,
            )
        except (httpx.InvalidURL, ValueError, OSError) as exc:
            raise ClientInitError(f"Unable to create HTTP client: {exc}") from exc

    @property
    def logged_in(self) -> bool:
        return self._logged_in

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> SessionTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def request(self, endpoint: str, fields: FormFields = ()) -> str:
        """POST *fields* (in the given order) to *endpoint* and return the body text.

        Raises :class:`NetworkError` on any transport failure.  HTTP status
        codes are not checked; the service reports errors in the body.
        """
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        if self._token is not None:
            headers["Cookie"] = f"{self._config.session_cookie_name}={self._token}"

        try:
            response = await self._client.post(
                endpoint,
                content=urlencode([(name, str(value)) for name, value in fields]),
                headers=headers,
            )
        except httpx.TransportError as exc:
            logger.warning("space_email_network_error", endpoint=endpoint, error=str(exc))
            raise NetworkError(f"Request to {endpoint} failed: {exc}", cause=exc) from exc

        self._update_token(response)
        logger.debug(
            "space_email_request",
            endpoint=endpoint,
            status_code=response.status_code,
        )
        return response.text

    def _update_token(self, response: httpx.Response) -> None:
        # httpx would otherwise replay its own jar alongside our header
        self._client.cookies.clear()

        token: str | None = None
        for header in response.headers.get_list("set-cookie"):
            match = self._token_pattern.match(header)
            if match:
                token = match.group(1)
        if token is not None and token != self._token:
            self._token = token
            logger.debug("session_token_updated")

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login(self, email: str, password: str) -> None:
        """Log in; the service answers a successful login with an empty body.

        Raises :class:`InvalidParameterError` when the credentials are rejected.
        """
        body = await self.request(endpoints.LOGIN, [("email", email), ("password", password)])
        if body != "":
            logger.info("login_rejected")
            raise InvalidParameterError("Login rejected by the service")
        self._logged_in = True
        logger.info("login_succeeded")

    async def logout(self) -> None:
        """Log out.  Always leaves the transport logged out, even if the POST fails."""
        try:
            await self.request(endpoints.LOGOUT)
        except NetworkError as exc:
            logger.warning("logout_network_error", error=str(exc))
        finally:
            self._logged_in = False
