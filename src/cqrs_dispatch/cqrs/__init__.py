"""CQRS primitives: requests, handlers, results, responses, dispatching."""

from __future__ import annotations

from .handler import (
    CommandHandler,
    GuardedRequestHandler,
    QueryHandler,
    RequestHandler,
    get_request_type,
)
from .provider import CqrsProvider, configure, get_provider, register, set_provider
from .registry import HandlerRegistry, default_activator
from .request import Command, CommandWithArguments, Query, QueryWithArguments, Request
from .response import CommandResponse, QueryResponse, Response
from .result import (
    CancelledResult,
    DataResult,
    ErrorResult,
    ExceptionResult,
    NoHandlerResult,
    OkResult,
    Result,
    UnknownErrorResult,
)
from .selection import (
    CallableSelection,
    EnvironmentSelection,
    HandlerSelection,
    get_selections,
    select_when,
)

__all__ = [
    "CallableSelection",
    "CancelledResult",
    "Command",
    "CommandHandler",
    "CommandResponse",
    "CommandWithArguments",
    "CqrsProvider",
    "DataResult",
    "EnvironmentSelection",
    "ErrorResult",
    "ExceptionResult",
    "GuardedRequestHandler",
    "HandlerRegistry",
    "HandlerSelection",
    "NoHandlerResult",
    "OkResult",
    "Query",
    "QueryHandler",
    "QueryResponse",
    "QueryWithArguments",
    "Request",
    "RequestHandler",
    "Response",
    "Result",
    "UnknownErrorResult",
    "configure",
    "default_activator",
    "get_provider",
    "get_request_type",
    "get_selections",
    "register",
    "select_when",
    "set_provider",
]
