"""CqrsProvider: the dispatch point connecting requests with their handlers."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, TypeVar

from ..ports.bus import IRequestBus
from ..primitives.exceptions import NoHandlerFoundError
from .registry import HandlerRegistry
from .result import NoHandlerResult

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import ModuleType

    from ..ports.activator import IHandlerActivator
    from ..primitives.cancellation import CancellationToken
    from .response import Response

logger = logging.getLogger(__name__)

THandler = TypeVar("THandler", bound=type)


class CqrsProvider(IRequestBus):
    """Resolves, activates and invokes handlers for requests.

    Holds exactly one :class:`~cqrs_dispatch.cqrs.registry.HandlerRegistry`.
    :meth:`configure` swaps it for a fresh one in a single assignment, so a
    dispatch in flight keeps using the registry it started with and never
    sees new scopes paired with an old activator (or the reverse).

    Parameters
    ----------
    search_scopes:
        Modules (or dotted module names) containing handler classes.
        Empty means "the module declaring the request, plus ``__main__``".
    activator:
        Optional callable ``(handler_cls) -> handler_instance``.
        Defaults to simple ``handler_cls()`` construction.
    """

    def __init__(
        self,
        search_scopes: Sequence[ModuleType | str] = (),
        activator: IHandlerActivator | None = None,
    ) -> None:
        self._registry = HandlerRegistry(search_scopes, activator)

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    # ── Configuration ────────────────────────────────────────────

    def configure(
        self,
        search_scopes: Sequence[ModuleType | str] = (),
        activator: IHandlerActivator | None = None,
    ) -> None:
        """Replace scopes and activator, discarding every cached mapping."""
        self._registry = HandlerRegistry(search_scopes, activator)
        logger.debug(
            "Provider configured (%d search scopes, activator=%s)",
            len(search_scopes),
            getattr(activator, "__qualname__", None) or "default",
        )

    def register(self, handler_type: THandler) -> THandler:
        """Pre-register *handler_type*; usable as a class decorator."""
        self._registry.register_handler_type(handler_type)
        return handler_type

    # ── Dispatch ─────────────────────────────────────────────────

    async def dispatch(
        self, request: Any, cancellation_token: CancellationToken | None = None
    ) -> Any:
        """Invoke the handler selected for *request* and return its response.

        Raises
        ------
        NoHandlerFoundError
            No candidate is eligible for the request type.
        HandlerActivationError
            The activator failed to produce a handler.
        """
        registry = self._registry
        request_type = type(request)
        logger.debug("Dispatching %s", request_type.__name__)
        handler = registry.get_handler(request_type)
        return await handler.handle(request, cancellation_token)

    async def send(
        self, request: Any, cancellation_token: CancellationToken | None = None
    ) -> Any:
        """Dispatch *request*, answering a missing handler with a response.

        Activation errors still propagate: they mean the provider is
        misconfigured.
        """
        try:
            return await self.dispatch(request, cancellation_token)
        except NoHandlerFoundError:
            response_type: type[Response] = type(request).response_type
            return response_type.from_result(NoHandlerResult())  # type: ignore[attr-defined]


_default_provider: CqrsProvider | None = None
_default_lock = threading.Lock()


def get_provider() -> CqrsProvider:
    """Return the process default provider, creating it on first access."""
    global _default_provider
    provider = _default_provider
    if provider is None:
        with _default_lock:
            if _default_provider is None:
                _default_provider = CqrsProvider()
            provider = _default_provider
    return provider


def set_provider(provider: CqrsProvider) -> None:
    """Install *provider* as the process default."""
    global _default_provider
    _default_provider = provider


def configure(
    search_scopes: Sequence[ModuleType | str] = (),
    activator: IHandlerActivator | None = None,
) -> None:
    """Configure the process default provider."""
    get_provider().configure(search_scopes, activator)


def register(handler_type: THandler) -> THandler:
    """Pre-register *handler_type* on the process default provider."""
    return get_provider().register(handler_type)


__all__ = [
    "CqrsProvider",
    "configure",
    "get_provider",
    "register",
    "set_provider",
]
