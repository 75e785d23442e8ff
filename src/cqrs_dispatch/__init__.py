"""cqrs-dispatch: in-process request dispatch for commands and queries.

Requests send themselves through a :class:`CqrsProvider`, which resolves
the handler bound to the request type, activates it and returns a
:class:`CommandResponse` or :class:`QueryResponse`.
"""

from __future__ import annotations

# ── CQRS ─────────────────────────────────────────────────────────
from .cqrs import (
    CallableSelection,
    CancelledResult,
    Command,
    CommandHandler,
    CommandResponse,
    CommandWithArguments,
    CqrsProvider,
    DataResult,
    EnvironmentSelection,
    ErrorResult,
    ExceptionResult,
    HandlerRegistry,
    HandlerSelection,
    NoHandlerResult,
    OkResult,
    Query,
    QueryHandler,
    QueryResponse,
    QueryWithArguments,
    Request,
    RequestHandler,
    Response,
    Result,
    UnknownErrorResult,
    configure,
    get_provider,
    register,
    select_when,
    set_provider,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import IHandlerActivator, IRequestBus

# ── Primitives ──────────────────────────────────────────────────
from .primitives import (
    CancellationToken,
    CQRSError,
    HandlerActivationError,
    HandlerError,
    NoHandlerFoundError,
    NotAHandlerError,
    RequestFailedError,
)

__all__: list[str] = [
    # Requests
    "Command",
    "CommandWithArguments",
    "Query",
    "QueryWithArguments",
    "Request",
    # Handlers
    "CommandHandler",
    "QueryHandler",
    "RequestHandler",
    # Selection
    "CallableSelection",
    "EnvironmentSelection",
    "HandlerSelection",
    "select_when",
    # Results & responses
    "CancelledResult",
    "CommandResponse",
    "DataResult",
    "ErrorResult",
    "ExceptionResult",
    "NoHandlerResult",
    "OkResult",
    "QueryResponse",
    "Response",
    "Result",
    "UnknownErrorResult",
    # Dispatch
    "CqrsProvider",
    "HandlerRegistry",
    "configure",
    "get_provider",
    "register",
    "set_provider",
    # Ports
    "IHandlerActivator",
    "IRequestBus",
    # Primitives
    "CancellationToken",
    "CQRSError",
    "HandlerActivationError",
    "HandlerError",
    "NoHandlerFoundError",
    "NotAHandlerError",
    "RequestFailedError",
]
