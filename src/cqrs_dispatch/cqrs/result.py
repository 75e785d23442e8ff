"""Result: the raw outcome produced by handler logic."""

from __future__ import annotations

import traceback
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ..primitives.exceptions import RequestFailedError

T = TypeVar("T")


class Result(ABC):
    """Base of every handler outcome.

    A result is exactly one variant: :class:`OkResult`, :class:`DataResult`
    or one of the :class:`ErrorResult` subclasses. Data and error are
    mutually exclusive by construction.

    Usage::

        return Result.ok()
        return Result.data(order)
        return Result.error()
    """

    __slots__ = ()

    @property
    def is_error(self) -> bool:
        return False

    # ── Factory methods ──────────────────────────────────────────

    @staticmethod
    def ok() -> OkResult:
        return OkResult()

    @staticmethod
    def data(value: T) -> DataResult[T]:
        return DataResult(value)

    @staticmethod
    def error() -> UnknownErrorResult:
        return UnknownErrorResult()

    @staticmethod
    def cancelled() -> CancelledResult:
        return CancelledResult()

    @staticmethod
    def no_handler() -> NoHandlerResult:
        return NoHandlerResult()

    @staticmethod
    def from_exception(exc: BaseException) -> ExceptionResult:
        return ExceptionResult(exc)

    @staticmethod
    def coerce(value: Any) -> Result:
        """Turn a handler's raw return value into a result.

        Results pass through, ``None`` means plain success and anything
        else is wrapped as data.
        """
        if isinstance(value, Result):
            return value
        if value is None:
            return OkResult()
        return DataResult(value)


@dataclass(frozen=True)
class OkResult(Result):
    """Success without data."""


@dataclass(frozen=True)
class DataResult(Result, Generic[T]):
    """Success carrying data."""

    value: T


@dataclass(frozen=True)
class ErrorResult(Result):
    """Failure with a human readable message."""

    message: str

    @property
    def is_error(self) -> bool:
        return True

    @abstractmethod
    def to_exception(self) -> BaseException:
        """Return the terminal failure object for this error."""
        ...

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class UnknownErrorResult(ErrorResult):
    message: str = "An unknown error occurred."

    def to_exception(self) -> BaseException:
        return RequestFailedError(self)


@dataclass(frozen=True)
class NoHandlerResult(ErrorResult):
    message: str = "No handler found."

    def to_exception(self) -> BaseException:
        return RequestFailedError(self)


@dataclass(frozen=True)
class CancelledResult(ErrorResult):
    message: str = "The request was cancelled."

    def to_exception(self) -> BaseException:
        return RequestFailedError(self)


@dataclass(frozen=True, init=False)
class ExceptionResult(ErrorResult):
    """Wraps an unexpected exception raised by handler logic."""

    exception: BaseException = field(compare=False)

    def __init__(self, exception: BaseException) -> None:
        object.__setattr__(self, "message", str(exception))
        object.__setattr__(self, "exception", exception)

    def to_exception(self) -> BaseException:
        return self.exception

    def __str__(self) -> str:
        return "".join(traceback.format_exception(self.exception)).rstrip()


__all__ = [
    "CancelledResult",
    "DataResult",
    "ErrorResult",
    "ExceptionResult",
    "NoHandlerResult",
    "OkResult",
    "Result",
    "UnknownErrorResult",
]
