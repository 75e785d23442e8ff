"""Request base classes: immutable commands and queries that send themselves."""

from __future__ import annotations

import types
from typing import TYPE_CHECKING, Any, ClassVar, Generic

from pydantic import BaseModel, ConfigDict, SkipValidation
from typing_extensions import TypeVar

from .handler import CommandHandler, GuardedRequestHandler, QueryHandler
from .provider import get_provider
from .response import CommandResponse, QueryResponse, Response

if TYPE_CHECKING:
    from ..primitives.cancellation import CancellationToken
    from .provider import CqrsProvider

TData = TypeVar("TData", default=None)
TArguments = TypeVar("TArguments")


class Request(BaseModel):
    """Base for every request.

    Each concrete subclass is given a nested ``Handler`` class: the
    abstract handler base bound to that request. A handler declares which
    request it implements by subclassing it::

        class GetGreeting(Query[str]):
            pass

        class GetGreetingHandler(GetGreeting.Handler):
            async def execute(self, cancellation_token) -> str:
                return "Hello, World!"

        response = await GetGreeting.send()
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    response_type: ClassVar[type[Response]]
    handler_base: ClassVar[type[GuardedRequestHandler[Any]]]
    Handler: ClassVar[type[Any]]

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        # Library bases and parametrized aliases such as ``Query[int]`` are
        # not requests a handler can bind to.
        if (
            cls.__module__ == __name__
            or cls.__pydantic_generic_metadata__["origin"] is not None
        ):
            return
        cls.Handler = _bind_handler(cls)


def _bind_handler(request_cls: type[Request]) -> type[Any]:
    def body(ns: dict[str, Any]) -> None:
        ns["request_type"] = request_cls
        ns["__module__"] = request_cls.__module__
        ns["__qualname__"] = f"{request_cls.__qualname__}.Handler"
        ns["__doc__"] = f"Handler base bound to {request_cls.__qualname__}."

    return types.new_class("Handler", (request_cls.handler_base,), exec_body=body)


async def _send(
    request: Request,
    cancellation_token: CancellationToken | None,
    provider: CqrsProvider | None,
) -> Any:
    return await (provider or get_provider()).send(request, cancellation_token)


class Command(Request):
    """Argument-less request that performs an effect and returns no data."""

    response_type: ClassVar[type[Response]] = CommandResponse
    handler_base: ClassVar[type[GuardedRequestHandler[Any]]] = CommandHandler

    @classmethod
    async def send(
        cls,
        cancellation_token: CancellationToken | None = None,
        *,
        provider: CqrsProvider | None = None,
    ) -> CommandResponse:
        """Send the command. Never raises for a missing handler."""
        return await _send(cls(), cancellation_token, provider)  # type: ignore[no-any-return]


class Query(Request, Generic[TData]):
    """Argument-less request returning data of type ``TData``."""

    response_type: ClassVar[type[Response]] = QueryResponse
    handler_base: ClassVar[type[GuardedRequestHandler[Any]]] = QueryHandler

    @classmethod
    async def send(
        cls,
        cancellation_token: CancellationToken | None = None,
        *,
        provider: CqrsProvider | None = None,
    ) -> QueryResponse[TData]:
        """Send the query. Never raises for a missing handler."""
        return await _send(cls(), cancellation_token, provider)  # type: ignore[no-any-return]


class CommandWithArguments(Request, Generic[TArguments]):
    """Command carrying a single payload of type ``TArguments``.

    The payload is opaque: it reaches the handler as the same object the
    caller passed, without validation or copying.
    """

    response_type: ClassVar[type[Response]] = CommandResponse
    handler_base: ClassVar[type[GuardedRequestHandler[Any]]] = CommandHandler

    arguments: SkipValidation[TArguments]

    @classmethod
    async def send(
        cls,
        arguments: TArguments,
        cancellation_token: CancellationToken | None = None,
        *,
        provider: CqrsProvider | None = None,
    ) -> CommandResponse:
        """Send the command with *arguments*. Never raises for a missing handler."""
        request = cls(arguments=arguments)
        return await _send(request, cancellation_token, provider)  # type: ignore[no-any-return]


class QueryWithArguments(Request, Generic[TArguments, TData]):
    """Query carrying a single opaque payload of type ``TArguments``."""

    response_type: ClassVar[type[Response]] = QueryResponse
    handler_base: ClassVar[type[GuardedRequestHandler[Any]]] = QueryHandler

    arguments: SkipValidation[TArguments]

    @classmethod
    async def send(
        cls,
        arguments: TArguments,
        cancellation_token: CancellationToken | None = None,
        *,
        provider: CqrsProvider | None = None,
    ) -> QueryResponse[TData]:
        """Send the query with *arguments*. Never raises for a missing handler."""
        request = cls(arguments=arguments)
        return await _send(request, cancellation_token, provider)  # type: ignore[no-any-return]


__all__ = [
    "Command",
    "CommandWithArguments",
    "Query",
    "QueryWithArguments",
    "Request",
]
