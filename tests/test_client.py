"""Tests for space_email.client."""

from __future__ import annotations

import httpx
import pytest
import respx

from space_email.client import SpaceEmailClient, create_client
from space_email.config import ClientConfig
from space_email.errors import (
    ClientInitError,
    InvalidParameterError,
    MalformedResponseError,
    NetworkError,
    RequiresLoginError,
)
from space_email.models import Category, EmailId, MessageContents, RangeSelector
from space_email.stream import StarredStream
from tests.conftest import (
    BASE_URL,
    TEST_BODY,
    TEST_ID,
    TEST_SENDER,
    TEST_SUBJECT,
    build_detail_response,
    build_listing,
)


async def _login(client: SpaceEmailClient) -> None:
    respx.post(f"{BASE_URL}/login.php").respond(200, text="")
    await client.login("user@example.com", "pw")


def _contents(**overrides) -> MessageContents:
    fields = {"subject": "Hello", "sender": "Captain", "body": "Anyone out there?"}
    fields.update(overrides)
    return MessageContents(**fields)


class TestCreateClient:
    @pytest.mark.asyncio
    async def test_defaults(self):
        client = create_client()
        try:
            assert isinstance(client, SpaceEmailClient)
            assert client.logged_in is False
        finally:
            await client.aclose()

    def test_init_error(self):
        with pytest.raises(ClientInitError):
            create_client(ClientConfig(ca_bundle_path="/nonexistent/ca.pem"))

    @pytest.mark.asyncio
    async def test_context_manager(self, config: ClientConfig):
        async with create_client(config) as client:
            assert client.logged_in is False


class TestGetById:
    @pytest.mark.asyncio
    @respx.mock
    async def test_known_record(self, client: SpaceEmailClient):
        route = respx.post(f"{BASE_URL}/lib/view.php").respond(200, text=build_detail_response())

        email = await client.get_by_id(TEST_ID)

        assert route.calls[0].request.content == f"id={TEST_ID}".encode()
        assert email.contents.sender == TEST_SENDER
        assert email.contents.subject == TEST_SUBJECT
        assert email.contents.body == TEST_BODY
        assert email.timestamp.strftime("%Y-%m-%d %H:%M") == "2014-06-28 16:05"

    @pytest.mark.asyncio
    @respx.mock
    async def test_bare_id_defaults_category(self, client: SpaceEmailClient):
        respx.post(f"{BASE_URL}/lib/view.php").respond(200, text=build_detail_response())
        email = await client.get_by_id(TEST_ID)
        assert email.contents.category is Category.DEFAULT

    @pytest.mark.asyncio
    @respx.mock
    async def test_email_id_carries_category(self, client: SpaceEmailClient):
        respx.post(f"{BASE_URL}/lib/view.php").respond(200, text=build_detail_response())
        email = await client.get_by_id(EmailId(id=TEST_ID, category=Category.LIME))
        assert email.contents.category is Category.LIME

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed(self, client: SpaceEmailClient):
        respx.post(f"{BASE_URL}/lib/view.php").respond(200, text="null")
        with pytest.raises(MalformedResponseError):
            await client.get_by_id(1)


class TestGetRandom:
    @pytest.mark.asyncio
    @respx.mock
    async def test_get_random_uses_all_range(self, client: SpaceEmailClient):
        get_route = respx.post(f"{BASE_URL}/lib/get.php").respond(
            200, text=build_listing([(TEST_ID, "msg-red")])
        )
        view_route = respx.post(f"{BASE_URL}/lib/view.php").respond(
            200, text=build_detail_response()
        )

        email = await client.get_random()

        assert get_route.calls[0].request.content == b"range=0"
        assert view_route.calls[0].request.content == f"id={TEST_ID}".encode()
        assert email.id == TEST_ID
        assert email.contents.category is Category.RED

    @pytest.mark.asyncio
    async def test_range_requires_login(self, client: SpaceEmailClient):
        with pytest.raises(RequiresLoginError):
            await client.get_random_in_range(RangeSelector.TODAY)

    @pytest.mark.asyncio
    @respx.mock
    async def test_all_range_allowed_logged_out(self, client: SpaceEmailClient):
        respx.post(f"{BASE_URL}/lib/get.php").respond(200, text=build_listing([(4, None)]))
        respx.post(f"{BASE_URL}/lib/view.php").respond(200, text=build_detail_response())

        email = await client.get_random_in_range(RangeSelector.ALL)
        assert email.id == 4

    @pytest.mark.asyncio
    @respx.mock
    async def test_range_when_logged_in(self, client: SpaceEmailClient):
        await _login(client)
        get_route = respx.post(f"{BASE_URL}/lib/get.php").respond(
            200, text=build_listing([(4, None)])
        )
        respx.post(f"{BASE_URL}/lib/view.php").respond(200, text=build_detail_response())

        await client.get_random_in_range(selector=RangeSelector.WEEK)
        assert get_route.calls[0].request.content == b"range=2"

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_row_is_malformed(self, client: SpaceEmailClient):
        respx.post(f"{BASE_URL}/lib/get.php").respond(200, text="<p>nothing</p>")
        with pytest.raises(MalformedResponseError):
            await client.get_random()


class TestSend:
    @pytest.mark.asyncio
    @respx.mock
    async def test_send_success(self, client: SpaceEmailClient):
        route = respx.post(f"{BASE_URL}/lib/send.php").respond(200, text="wrap success")

        await client.send(_contents())

        assert route.calls[0].request.content == (
            b"sender=Captain&subject=Hello&body=Anyone+out+there%3F&type=0"
        )

    @pytest.mark.asyncio
    @respx.mock
    async def test_send_rejected(self, client: SpaceEmailClient):
        respx.post(f"{BASE_URL}/lib/send.php").respond(200, text="Slow down!")
        with pytest.raises(InvalidParameterError):
            await client.send(_contents())

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["subject", "sender", "body"])
    async def test_empty_field_rejected_before_request(self, client: SpaceEmailClient, field: str):
        # No route is mocked, so any request would fail the test
        with respx.mock:
            with pytest.raises(InvalidParameterError):
                await client.send(_contents(**{field: ""}))

    @pytest.mark.asyncio
    @respx.mock
    async def test_admin_rejected_before_request(self, client: SpaceEmailClient):
        await _login(client)
        with pytest.raises(InvalidParameterError):
            await client.send(_contents(category=Category.ADMIN))

    @pytest.mark.asyncio
    @respx.mock
    async def test_colour_requires_login(self, client: SpaceEmailClient):
        with pytest.raises(InvalidParameterError):
            await client.send(_contents(category=Category.BLUE))

    @pytest.mark.asyncio
    @respx.mock
    async def test_colour_when_logged_in(self, client: SpaceEmailClient):
        await _login(client)
        route = respx.post(f"{BASE_URL}/lib/send.php").respond(200, text="wrap success")
        await client.send(_contents(category=Category.PINK))
        assert route.calls[0].request.content.endswith(b"&type=6")


class TestStars:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["star", "unstar"])
    async def test_requires_login(self, client: SpaceEmailClient, method: str):
        with pytest.raises(RequiresLoginError):
            await getattr(client, method)(5)

    @pytest.mark.asyncio
    @respx.mock
    async def test_star_and_unstar(self, client: SpaceEmailClient):
        await _login(client)
        star = respx.post(f"{BASE_URL}/lib/star.php").respond(200, text="")
        unstar = respx.post(f"{BASE_URL}/lib/unstar.php").respond(200, text="")

        await client.star(EmailId(id=17, category=Category.RED))
        await client.unstar(17)

        assert star.calls[0].request.content == b"id=17"
        assert unstar.calls[0].request.content == b"id=17"

    @pytest.mark.asyncio
    @respx.mock
    async def test_star_network_error(self, client: SpaceEmailClient):
        await _login(client)
        respx.post(f"{BASE_URL}/lib/star.php").mock(side_effect=httpx.ConnectError("down"))
        with pytest.raises(NetworkError):
            await client.star(1)


class TestSession:
    @pytest.mark.asyncio
    @respx.mock
    async def test_login_logout(self, client: SpaceEmailClient):
        await _login(client)
        assert client.logged_in is True

        respx.post(f"{BASE_URL}/logout.php").respond(200, text="")
        await client.logout()
        assert client.logged_in is False

    @pytest.mark.asyncio
    async def test_stream_requires_login(self, client: SpaceEmailClient):
        with pytest.raises(RequiresLoginError):
            client.stream_starred()

    @pytest.mark.asyncio
    @respx.mock
    async def test_stream_when_logged_in(self, client: SpaceEmailClient):
        await _login(client)
        assert isinstance(client.stream_starred(), StarredStream)
