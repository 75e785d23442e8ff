"""Handler base classes."""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from ..primitives.cancellation import CancellationToken
from .response import CommandResponse, QueryResponse, Response
from .result import CancelledResult, ExceptionResult, Result

if TYPE_CHECKING:
    from .request import Request

logger = logging.getLogger(__name__)

TResponse = TypeVar("TResponse", bound=Response)
TData = TypeVar("TData")

_current_request: ContextVar[Any] = ContextVar("current_request", default=None)


class RequestHandler(ABC, Generic[TResponse]):
    """Contract every handler satisfies.

    ``request_type`` names the request class the handler implements. It is
    normally inherited from the generated ``<Request>.Handler`` base rather
    than set by hand.
    """

    request_type: ClassVar[type[Request] | None] = None

    @abstractmethod
    async def handle(
        self, request: Any, cancellation_token: CancellationToken | None = None
    ) -> TResponse:
        """Handle *request* and return its response."""
        ...


class GuardedRequestHandler(RequestHandler[TResponse]):
    """Runs :meth:`execute` under the shared outcome policy.

    1. A token already cancelled short-circuits to ``CancelledResult``;
       ``execute`` is not called.
    2. The value returned by ``execute`` is coerced into a result.
    3. Any ``Exception`` raised by ``execute`` becomes ``ExceptionResult``.
    4. The result is wrapped into :attr:`response_type`.

    No exception escapes :meth:`handle`; task cancellation
    (``asyncio.CancelledError``) is not an ``Exception`` and still
    propagates.

    The request being handled is kept in a context variable rather than on
    the instance, so an activator may hand out one shared handler to
    concurrent dispatches.
    """

    response_type: ClassVar[type[Response]]

    @property
    def request(self) -> Any:
        """The request currently being handled in this context."""
        return _current_request.get()

    @property
    def arguments(self) -> Any:
        """Payload of an argument-bearing request."""
        request = self.request
        try:
            return request.arguments
        except AttributeError:
            msg = f"{type(request).__name__} does not carry arguments"
            raise AttributeError(msg) from None

    async def handle(
        self, request: Any, cancellation_token: CancellationToken | None = None
    ) -> TResponse:
        token = cancellation_token or CancellationToken.none()
        reset_token = _current_request.set(request)
        try:
            result = await self._run(request, token)
        finally:
            _current_request.reset(reset_token)
        return self.response_type.from_result(result)  # type: ignore[attr-defined, no-any-return]

    async def _run(
        self, request: Any, cancellation_token: CancellationToken
    ) -> Result:
        if cancellation_token.is_cancellation_requested:
            logger.debug("%s cancelled before execution", type(request).__name__)
            return CancelledResult()
        try:
            outcome = self.execute(cancellation_token)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            return Result.coerce(outcome)
        except Exception as exc:
            logger.warning(
                "%s raised while handling %s",
                type(self).__name__,
                type(request).__name__,
                exc_info=True,
            )
            return ExceptionResult(exc)

    @abstractmethod
    async def execute(self, cancellation_token: CancellationToken) -> Any:
        """Run the operation and return a result (or bare data)."""
        ...


class CommandHandler(GuardedRequestHandler[CommandResponse]):
    """Base class for command handlers.

    Subclass the command's generated ``Handler`` rather than this class
    directly so the handler is bound to its command.

    Usage::

        class CreateOrder(CommandWithArguments[OrderDraft]):
            pass

        class CreateOrderHandler(CreateOrder.Handler):
            async def execute(self, cancellation_token) -> Result:
                await orders.add(self.arguments)
                return Result.ok()
    """

    response_type: ClassVar[type[Response]] = CommandResponse


class QueryHandler(GuardedRequestHandler[QueryResponse[TData]], Generic[TData]):
    """Base class for query handlers.

    ``execute`` may return a :class:`~cqrs_dispatch.cqrs.result.Result` or
    the bare data, which is wrapped as ``DataResult``.

    Usage::

        class GetOrder(QueryWithArguments[str, OrderDTO]):
            pass

        class GetOrderHandler(GetOrder.Handler):
            async def execute(self, cancellation_token) -> OrderDTO:
                return await orders.get(self.arguments)
    """

    response_type: ClassVar[type[Response]] = QueryResponse


def get_request_type(handler_cls: Any) -> type[Request] | None:
    """Return the request type *handler_cls* implements, if any."""
    if not isinstance(handler_cls, type) or not issubclass(
        handler_cls, RequestHandler
    ):
        return None
    return handler_cls.request_type


__all__ = [
    "CommandHandler",
    "GuardedRequestHandler",
    "QueryHandler",
    "RequestHandler",
    "get_request_type",
]
