import pytest

from cqrs_dispatch.cqrs.result import (
    CancelledResult,
    DataResult,
    ExceptionResult,
    NoHandlerResult,
    OkResult,
    Result,
    UnknownErrorResult,
)
from cqrs_dispatch.primitives.exceptions import RequestFailedError


def test_factories_build_each_variant() -> None:
    assert isinstance(Result.ok(), OkResult)
    assert Result.data(3) == DataResult(3)
    assert isinstance(Result.error(), UnknownErrorResult)
    assert isinstance(Result.cancelled(), CancelledResult)
    assert isinstance(Result.no_handler(), NoHandlerResult)
    assert isinstance(Result.from_exception(ValueError("x")), ExceptionResult)


def test_is_error_only_for_error_variants() -> None:
    assert not Result.ok().is_error
    assert not Result.data("payload").is_error
    assert Result.error().is_error
    assert Result.cancelled().is_error


def test_coerce() -> None:
    """Verifies raw handler return values are turned into results."""
    cancelled = Result.cancelled()
    assert Result.coerce(cancelled) is cancelled
    assert isinstance(Result.coerce(None), OkResult)
    assert Result.coerce(0) == DataResult(0)
    assert Result.coerce([1, 2]) == DataResult([1, 2])


def test_builtin_error_messages() -> None:
    assert str(UnknownErrorResult()) == "An unknown error occurred."
    assert str(NoHandlerResult()) == "No handler found."
    assert str(CancelledResult()) == "The request was cancelled."


def test_builtin_errors_convert_to_request_failed() -> None:
    error = CancelledResult()
    exc = error.to_exception()
    assert isinstance(exc, RequestFailedError)
    assert exc.error is error
    assert str(exc) == "The request was cancelled."


def test_exception_result_wraps_original() -> None:
    original = ValueError("boom")
    error = ExceptionResult(original)

    assert error.message == "boom"
    assert error.exception is original
    assert error.to_exception() is original


def test_exception_result_str_renders_traceback() -> None:
    try:
        raise KeyError("missing")
    except KeyError as exc:
        error = ExceptionResult(exc)

    rendered = str(error)
    assert rendered.startswith("Traceback")
    assert "KeyError: 'missing'" in rendered


def test_results_are_immutable() -> None:
    result = Result.data(1)
    with pytest.raises(Exception, match="cannot assign|frozen"):
        result.value = 2  # type: ignore[misc]


def test_data_factory_stores_value_field() -> None:
    result = Result.data("payload")

    assert isinstance(result, DataResult)
    assert result.value == "payload"
    assert [f for f in DataResult.__dataclass_fields__] == ["value"]


def test_from_exception_factory_keeps_original() -> None:
    original = LookupError("gone")

    result = Result.from_exception(original)

    assert isinstance(result, ExceptionResult)
    assert result.exception is original
    assert result.message == "gone"
    assert result.to_exception() is original
