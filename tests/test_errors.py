"""Tests for error types and Result."""

import pytest

from httplan import (
    AggregatedError,
    HttplanError,
    NoDataError,
    RawResponse,
    Result,
    UnknownError,
    WrongStatusCodeError,
)


def test_aggregated_error_keeps_order() -> None:
    first = ValueError("first")
    second = KeyError("second")
    error = AggregatedError([first, second])

    assert error.errors == (first, second)
    assert list(error) == [first, second]
    assert len(error) == 2
    assert "2 errors" in str(error)


def test_aggregated_error_flattens_nested_aggregates() -> None:
    a, b, c, d = (ValueError(name) for name in "abcd")
    error = AggregatedError([AggregatedError([a, AggregatedError([b, c])]), d])

    assert error.errors == (a, b, c, d)
    assert not any(isinstance(e, AggregatedError) for e in error)


def test_wrong_status_code_error_keeps_response() -> None:
    response = RawResponse(status_code=422, headers={}, body=b'{"detail":"bad"}', url="http://x.test/")
    error = WrongStatusCodeError(422, response)

    assert error.status_code == 422
    assert error.response is response
    assert "422" in str(error)
    assert repr(error) == "WrongStatusCodeError(status_code=422)"


def test_error_hierarchy() -> None:
    for error in (NoDataError(), UnknownError(), WrongStatusCodeError(500), AggregatedError([])):
        assert isinstance(error, HttplanError)
    assert str(NoDataError()) == "Response has no data"


def test_result_map_and_flat_map() -> None:
    assert Result.Success(2).map(lambda n: n * 3) == Result.Success(6)
    assert Result.Success(2).flat_map(lambda n: Result.Success(n + 1)) == Result.Success(3)

    failure = Result.Failure(NoDataError())
    assert failure.map(lambda n: n * 3) is failure
    assert failure.flat_map(lambda n: Result.Success(n)) is failure


def test_result_success_may_hold_none() -> None:
    result = Result.Success(None)
    assert result.is_success
    assert result.unwrap() is None


def test_result_unwrap_raises_stored_error() -> None:
    error = UnknownError()
    with pytest.raises(UnknownError) as exc_info:
        Result.Failure(error).unwrap()
    assert exc_info.value is error


def test_result_unwrap_failure_without_error() -> None:
    with pytest.raises(ValueError, match="no error"):
        Result(kind="failure").unwrap()
