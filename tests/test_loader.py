"""Tests for loading single endpoints."""

import asyncio

import pytest

from httplan import (
    CallableDecoder,
    DecodeError,
    Endpoint,
    NoDataError,
    Trace,
    UnknownError,
    WrongStatusCodeError,
    load,
    load_endpoint,
)
from fakes import EXAMPLE_JSON, EXAMPLE_URL, Person, StubTransport, make_stub_env


def test_data_task_request() -> None:
    transport = StubTransport()
    transport.stub(EXAMPLE_URL, EXAMPLE_JSON)
    endpoint = Endpoint.json("GET", EXAMPLE_URL, list[Person])

    result = asyncio.run(load_endpoint(endpoint, make_stub_env(transport)))

    assert result.is_success
    assert result.value == [Person(name="Alice"), Person(name="Bob")]
    assert transport.sent == [endpoint.request]


def test_run_shorthand() -> None:
    transport = StubTransport()
    transport.stub(EXAMPLE_URL, EXAMPLE_JSON)
    endpoint = Endpoint.json("GET", EXAMPLE_URL, list[Person]).map(len)

    result = asyncio.run(endpoint.run(make_stub_env(transport)))
    assert result.value == 2


def test_wrong_status_code_even_with_valid_body() -> None:
    transport = StubTransport()
    transport.stub(EXAMPLE_URL, EXAMPLE_JSON, status=404)
    endpoint = Endpoint.json("GET", EXAMPLE_URL, list[Person])

    result = asyncio.run(load(endpoint, make_stub_env(transport)))

    assert result.is_failure
    assert isinstance(result.error, WrongStatusCodeError)
    assert result.error.status_code == 404
    assert result.error.response is not None
    assert result.error.response.text == EXAMPLE_JSON


def test_missing_body_is_no_data_error_without_decoding() -> None:
    decoded: list[object] = []

    def remember(document: object) -> object:
        decoded.append(document)
        return document

    transport = StubTransport()
    transport.stub(EXAMPLE_URL, b"")
    endpoint = Endpoint.json("GET", EXAMPLE_URL, decoder=CallableDecoder(remember))

    result = asyncio.run(load(endpoint, make_stub_env(transport)))

    assert isinstance(result.error, NoDataError)
    assert decoded == []


def test_absent_body_is_no_data_error() -> None:
    transport = StubTransport()
    transport.stub(EXAMPLE_URL, None)
    endpoint = Endpoint.json("GET", EXAMPLE_URL, list[Person])

    result = asyncio.run(load(endpoint, make_stub_env(transport)))
    assert isinstance(result.error, NoDataError)


def test_malformed_json_is_decode_error() -> None:
    transport = StubTransport()
    transport.stub(EXAMPLE_URL, "{not json")
    endpoint = Endpoint.json("GET", EXAMPLE_URL, list[Person])

    result = asyncio.run(load(endpoint, make_stub_env(transport)))

    assert isinstance(result.error, DecodeError)
    assert result.error.raw_value == b"{not json"


def test_missing_status_is_unknown_error() -> None:
    transport = StubTransport()
    transport.stub(EXAMPLE_URL, EXAMPLE_JSON, status=None)
    endpoint = Endpoint.json("GET", EXAMPLE_URL, list[Person])

    result = asyncio.run(load(endpoint, make_stub_env(transport)))
    assert isinstance(result.error, UnknownError)


def test_transport_error_passes_through() -> None:
    boom = ConnectionResetError("boom")
    transport = StubTransport()
    transport.fail(EXAMPLE_URL, boom)
    endpoint = Endpoint.json("GET", EXAMPLE_URL, list[Person])

    result = asyncio.run(load(endpoint, make_stub_env(transport)))
    assert result.error is boom


def test_custom_expected_status() -> None:
    transport = StubTransport()
    transport.stub(EXAMPLE_URL, None, status=204)

    accepted = Endpoint.empty("DELETE", EXAMPLE_URL, expected_status=lambda code: code == 204)
    rejected = Endpoint.empty("DELETE", EXAMPLE_URL, expected_status=lambda code: code == 200)
    env = make_stub_env(transport)

    assert asyncio.run(load(accepted, env)).is_success
    assert isinstance(asyncio.run(load(rejected, env)).error, WrongStatusCodeError)


def test_exception_in_map_becomes_failure() -> None:
    transport = StubTransport()
    transport.stub(EXAMPLE_URL, "[]")
    endpoint = Endpoint.json("GET", EXAMPLE_URL, list[Person]).map(lambda people: people[0])

    result = asyncio.run(load(endpoint, make_stub_env(transport)))
    assert isinstance(result.error, IndexError)


@pytest.mark.asyncio
async def test_trace_records_request() -> None:
    transport = StubTransport()
    transport.stub(EXAMPLE_URL, EXAMPLE_JSON, status=500)
    trace = Trace()

    await load(Endpoint.json("GET", EXAMPLE_URL, list[Person]), make_stub_env(transport, trace))

    begin, end = trace.get_events()
    assert begin.action == "request_begin"
    assert begin.info == {"method": "GET", "url": EXAMPLE_URL}
    assert end.action == "request_end"
    assert end.parent_id == begin.id
    assert end.info == {"status": 500, "outcome": "failure"}
    assert end.duration_ms is not None


@pytest.mark.asyncio
async def test_disabled_trace_records_nothing() -> None:
    transport = StubTransport()
    transport.stub(EXAMPLE_URL, EXAMPLE_JSON)
    trace = Trace(enabled=False)

    result = await load(Endpoint.json("GET", EXAMPLE_URL, list[Person]), make_stub_env(transport, trace))
    assert result.is_success
    assert len(trace) == 0
