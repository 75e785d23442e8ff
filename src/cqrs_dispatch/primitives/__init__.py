"""Primitives: exceptions, cancellation."""

from __future__ import annotations

from .cancellation import CancellationToken
from .exceptions import (
    CQRSError,
    HandlerActivationError,
    HandlerError,
    NoHandlerFoundError,
    NotAHandlerError,
    RequestFailedError,
)

__all__ = [
    "CancellationToken",
    "CQRSError",
    "HandlerActivationError",
    "HandlerError",
    "NoHandlerFoundError",
    "NotAHandlerError",
    "RequestFailedError",
]
