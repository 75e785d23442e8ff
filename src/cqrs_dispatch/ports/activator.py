"""Activator protocol: how handler instances are constructed."""

from __future__ import annotations

from typing import Any, Protocol


class IHandlerActivator(Protocol):
    """
    Callable turning a handler type into an instance.

    May return ``None`` or raise; the registry reports both as a
    :class:`~cqrs_dispatch.primitives.exceptions.HandlerActivationError`.
    A dependency injection container is plugged in by passing a function
    that resolves the type from it.
    """

    def __call__(self, handler_type: type[Any], /) -> Any: ...
