"""Tests for the httpx transport, driven through httpx.MockTransport."""

import httpx
import pytest

from httplan import CombinedEndpoint, Endpoint, Env, HttplanSettings, HttpxTransport, load
from httplan.runtime.transports import build_async_client
from fakes import (
    BIRTH_URL,
    EXAMPLE_BIRTH_JSON,
    EXAMPLE_PHONE_JSON,
    PHONE_URL,
    Birth,
    Info,
    Person,
    Phone,
    birth_of,
    phone_of,
)


def mock_transport(seen: list[httpx.Request]) -> httpx.MockTransport:
    routes = {PHONE_URL: EXAMPLE_PHONE_JSON, BIRTH_URL: EXAMPLE_BIRTH_JSON}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        url = str(request.url)
        if url in routes:
            return httpx.Response(200, text=routes[url], headers={"Content-Type": "application/json"})
        if request.method == "POST":
            return httpx.Response(201, content=request.content)
        return httpx.Response(404, text="not here")

    return httpx.MockTransport(handler)


def make_transport(seen: list[httpx.Request]) -> HttpxTransport:
    settings = HttplanSettings(user_agent="test-agent")
    return HttpxTransport(build_async_client(settings, transport=mock_transport(seen)))


@pytest.mark.asyncio
async def test_send_forwards_request() -> None:
    seen: list[httpx.Request] = []
    transport = make_transport(seen)
    endpoint = Endpoint.json(
        "POST",
        "http://api.example.com/people",
        Person,
        body=Person(name="Alice"),
        headers={"X-Request-Id": "42"},
        timeout=2.5,
    )

    response = await transport.send(endpoint.request)

    (sent,) = seen
    assert sent.method == "POST"
    assert str(sent.url) == "http://api.example.com/people"
    assert sent.headers["content-type"] == "application/json"
    assert sent.headers["accept"] == "application/json"
    assert sent.headers["x-request-id"] == "42"
    assert sent.headers["user-agent"] == "test-agent"
    assert sent.content == b'{"name":"Alice"}'
    assert sent.extensions["timeout"]["read"] == 2.5

    assert response.status_code == 201
    assert response.body == b'{"name":"Alice"}'
    assert response.url == "http://api.example.com/people"
    await transport.client.aclose()


@pytest.mark.asyncio
async def test_status_is_checked_by_loader() -> None:
    transport = make_transport([])
    result = await load(Endpoint.json("GET", "http://api.example.com/missing", Person), Env(transport))

    assert result.is_failure
    assert result.error.status_code == 404
    assert result.error.response.text == "not here"
    await transport.client.aclose()


@pytest.mark.asyncio
async def test_connection_errors_pass_through() -> None:
    refused = httpx.ConnectError("connection refused")

    def handler(request: httpx.Request) -> httpx.Response:
        raise refused

    transport = HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    result = await load(Endpoint.empty("GET", "http://down.example.com/"), Env(transport))

    assert result.error is refused
    await transport.client.aclose()


@pytest.mark.asyncio
async def test_zip_over_httpx() -> None:
    seen: list[httpx.Request] = []
    alice = Person(name="Alice")
    tree = CombinedEndpoint.zipped(phone_of(alice), birth_of(alice), Info)

    async with make_transport(seen) as transport:
        result = await load(tree, Env(transport))

    assert result.value == Info(phone=Phone(phone="0987654321"), birth=Birth(birth="2000-01-01"))
    assert sorted(str(r.url) for r in seen) == sorted([PHONE_URL, BIRTH_URL])
    assert all(r.method == "GET" and r.content == b"" for r in seen)


@pytest.mark.asyncio
async def test_owned_client_is_closed() -> None:
    transport = HttpxTransport(settings=HttplanSettings())
    async with transport:
        assert not transport.client.is_closed
    assert transport.client.is_closed


@pytest.mark.asyncio
async def test_external_client_stays_open() -> None:
    client = httpx.AsyncClient(transport=mock_transport([]))
    async with HttpxTransport(client) as transport:
        assert transport.client is client
    assert not client.is_closed
    await client.aclose()


def test_build_async_client_from_settings() -> None:
    settings = HttplanSettings(request_timeout_seconds=3.0, follow_redirects=False, user_agent="ua")
    client = build_async_client(settings, extra_headers={"X-Env": "test"})

    assert client.timeout.read == 3.0
    assert client.follow_redirects is False
    assert client.headers["user-agent"] == "ua"
    assert client.headers["x-env"] == "test"
