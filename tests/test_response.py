import pytest

from cqrs_dispatch.cqrs.response import CommandResponse, QueryResponse
from cqrs_dispatch.cqrs.result import OkResult, Result, UnknownErrorResult
from cqrs_dispatch.primitives.exceptions import RequestFailedError


def test_command_response_success() -> None:
    ok = Result.ok()
    response = CommandResponse.from_result(ok)

    assert response.is_success
    assert response.error is None
    assert response.result is ok
    response.ensure_success()


def test_command_response_failure() -> None:
    error = Result.error()
    response = CommandResponse.from_result(error)

    assert not response.is_success
    assert response.error is error
    assert response.result is None
    with pytest.raises(RequestFailedError, match="unknown error"):
        response.ensure_success()


def test_query_response_exposes_data() -> None:
    response = QueryResponse.from_result(Result.data(42))

    assert response.is_success
    assert response.error is None
    assert response.result == 42
    assert response.unwrap() == 42


def test_query_response_from_plain_ok_has_no_data() -> None:
    response = QueryResponse.from_result(OkResult())
    assert response.is_success
    assert response.result is None


def test_query_response_unwrap_raises_original_exception() -> None:
    original = ValueError("x")
    response = QueryResponse.from_result(Result.from_exception(original))

    assert not response.is_success
    assert response.result is None
    with pytest.raises(ValueError, match="x") as exc_info:
        response.unwrap()
    assert exc_info.value is original


def test_query_response_unwrap_raises_request_failed() -> None:
    response = QueryResponse.from_result(Result.cancelled())
    with pytest.raises(RequestFailedError, match="cancelled"):
        response.unwrap()


def test_failed_response_without_error_raises_unknown() -> None:
    response = CommandResponse(is_success=False)
    with pytest.raises(RequestFailedError) as exc_info:
        response.ensure_success()
    assert isinstance(exc_info.value.error, UnknownErrorResult)


def test_responses_are_immutable() -> None:
    response = QueryResponse.from_result(Result.data(1))
    with pytest.raises(Exception, match="cannot assign|frozen"):
        response.result = 2  # type: ignore[misc]
