"""Dispatch and handler exceptions for cqrs-dispatch."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..cqrs.result import ErrorResult


class CQRSError(Exception):
    """Root exception for the entire cqrs-dispatch package."""


class HandlerError(CQRSError):
    """Base class for all handler related errors (registration, lookup, activation)."""


class NoHandlerFoundError(HandlerError):
    """Raised when no eligible handler exists for a request type.

    Usage: HandlerRegistry raises this from ``select_handler``; the request
    send entry point converts it into a response carrying
    :class:`~cqrs_dispatch.cqrs.result.NoHandlerResult`.
    """

    def __init__(self, request_type: type[Any]) -> None:
        self.request_type = request_type
        super().__init__(f"No handler found for request {request_type.__qualname__}")


class HandlerActivationError(HandlerError):
    """Raised when the activator cannot produce a usable handler instance.

    Covers an activator returning ``None``, returning an object that is not
    a handler for the request, or raising. In the latter case the original
    exception is chained as ``__cause__``.
    """

    def __init__(self, handler_type: type[Any]) -> None:
        self.handler_type = handler_type
        super().__init__(
            f"Failed to activate the handler "
            f"'{handler_type.__module__}.{handler_type.__qualname__}'."
        )


class NotAHandlerError(HandlerError, TypeError):
    """Raised when manually registering a type with no resolvable request type."""

    def __init__(self, obj: object) -> None:
        self.obj = obj
        name = getattr(obj, "__qualname__", repr(obj))
        super().__init__(f"The type {name} is not a handler.")


class RequestFailedError(CQRSError):
    """Terminal failure object of a non-exception error result.

    Raised by :meth:`~cqrs_dispatch.cqrs.response.Response.ensure_success`
    and :meth:`~cqrs_dispatch.cqrs.response.QueryResponse.unwrap`.
    """

    def __init__(self, error: ErrorResult) -> None:
        self.error = error
        super().__init__(error.message)
