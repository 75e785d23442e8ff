"""Response wrappers surfaced to the caller of a command or query."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from ..primitives.exceptions import RequestFailedError
from .result import DataResult, ErrorResult, Result, UnknownErrorResult

T = TypeVar("T")


@dataclass(frozen=True)
class Response:
    """Common surface of every response.

    ``is_success`` and ``error`` can always be inspected without guarding;
    a response never raises on its own unless explicitly asked to via
    :meth:`ensure_success`.
    """

    is_success: bool
    error: ErrorResult | None = None

    def ensure_success(self) -> None:
        """Raise the failure carried by this response, if any."""
        if self.is_success:
            return
        if self.error is None:
            raise RequestFailedError(UnknownErrorResult())
        raise self.error.to_exception()


@dataclass(frozen=True)
class CommandResponse(Response):
    """Response of a command: success or failure, plus the success result."""

    result: Result | None = None

    @classmethod
    def from_result(cls, result: Result) -> CommandResponse:
        if isinstance(result, ErrorResult):
            return cls(is_success=False, error=result, result=None)
        return cls(is_success=True, error=None, result=result)


@dataclass(frozen=True)
class QueryResponse(Response, Generic[T]):
    """Response of a query, exposing the returned data directly."""

    result: T | None = None

    @classmethod
    def from_result(cls, result: Result) -> QueryResponse[T]:
        if isinstance(result, ErrorResult):
            return cls(is_success=False, error=result, result=None)
        if isinstance(result, DataResult):
            return cls(is_success=True, error=None, result=result.value)
        return cls(is_success=True, error=None, result=None)

    def unwrap(self) -> T:
        """Return the data, or raise the failure when unsuccessful.

        Raises
        ------
        RequestFailedError
            For cancelled, unknown and no-handler errors.
        Exception
            The original exception for an
            :class:`~cqrs_dispatch.cqrs.result.ExceptionResult`.
        """
        self.ensure_success()
        return self.result  # type: ignore[return-value]


__all__ = ["CommandResponse", "QueryResponse", "Response"]
