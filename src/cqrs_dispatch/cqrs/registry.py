"""Handler registry with module scanning, selection and activation."""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
import sys
import threading
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import (
    HandlerActivationError,
    NoHandlerFoundError,
    NotAHandlerError,
)
from .handler import RequestHandler, get_request_type
from .selection import get_selections, matches

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence
    from types import ModuleType

    from ..ports.activator import IHandlerActivator

logger = logging.getLogger(__name__)


def default_activator(handler_type: type[Any]) -> Any:
    """Construct *handler_type* with no arguments."""
    return handler_type()


def _qualified_name(cls: type[Any]) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class HandlerRegistry:
    """Maps request types to candidate handler types and activates them.

    The search scopes and the activator are fixed for the lifetime of a
    registry. Reconfiguring means building a new registry, which starts
    with an empty cache (see
    :meth:`~cqrs_dispatch.cqrs.provider.CqrsProvider.configure`).

    **Discovery:** the first lookup of a request type scans the search
    scopes for concrete handler classes bound to it. Without configured
    scopes, the top-level package declaring the request (``app`` for a
    request defined in ``app.requests``) and the ``__main__`` module are
    scanned, so handlers in sibling modules such as ``app.handlers`` are
    found. Package scopes include all of their submodules, which are
    imported by the scan. A request
    type that was pre-registered through :meth:`register_handler_type` is
    never scanned.

    **Selection:** candidates with more selection predicates are preferred;
    among equally specific candidates the lexically first fully qualified
    name wins.
    """

    def __init__(
        self,
        search_scopes: Sequence[ModuleType | str] = (),
        activator: IHandlerActivator | None = None,
    ) -> None:
        self._search_scopes: tuple[ModuleType | str, ...] = tuple(search_scopes)
        self._activator: IHandlerActivator = activator or default_activator
        self._candidates: dict[type[Any], tuple[type[Any], ...]] = {}
        self._lock = threading.Lock()

    @property
    def search_scopes(self) -> tuple[ModuleType | str, ...]:
        return self._search_scopes

    @property
    def activator(self) -> IHandlerActivator:
        return self._activator

    # ── Registration ─────────────────────────────────────────────

    def register_handler_type(self, handler_type: type[Any]) -> None:
        """Append *handler_type* to the candidates of its request type.

        Creates the cache entry when absent, which means the request type
        will not be scanned afterwards.
        """
        request_type = get_request_type(handler_type)
        if request_type is None:
            raise NotAHandlerError(handler_type)
        with self._lock:
            existing = self._candidates.get(request_type, ())
            self._candidates[request_type] = (*existing, handler_type)
        logger.debug(
            "Registered handler %s -> %s",
            request_type.__name__,
            handler_type.__name__,
        )

    # ── Lookup ───────────────────────────────────────────────────

    def resolve_candidates(self, request_type: type[Any]) -> tuple[type[Any], ...]:
        """Return every candidate handler type for *request_type*.

        Cached after the first call. Two threads racing on an uncached type
        may both scan; the first stored result wins.
        """
        cached = self._candidates.get(request_type)
        if cached is not None:
            return cached

        found = self._scan(request_type)
        with self._lock:
            return self._candidates.setdefault(request_type, found)

    def select_handler(self, request_type: type[Any]) -> type[Any]:
        """Return the most specific candidate whose selections all match."""
        candidates = self.resolve_candidates(request_type)
        ranked = sorted(
            ((handler_type, get_selections(handler_type)) for handler_type in candidates),
            key=lambda item: (-len(item[1]), _qualified_name(item[0])),
        )
        for handler_type, selections in ranked:
            if matches(selections):
                logger.debug(
                    "Selected handler %s for %s",
                    handler_type.__name__,
                    request_type.__name__,
                )
                return handler_type

        logger.warning(
            "No eligible handler for %s (%d candidates)",
            request_type.__name__,
            len(candidates),
        )
        raise NoHandlerFoundError(request_type)

    def activate(self, handler_type: type[Any], request_type: type[Any]) -> Any:
        """Create a handler instance through the configured activator."""
        try:
            handler = self._activator(handler_type)
        except Exception as exc:
            logger.error(
                "Activator raised for %s", _qualified_name(handler_type), exc_info=True
            )
            raise HandlerActivationError(handler_type) from exc

        if (
            not isinstance(handler, RequestHandler)
            or handler.request_type is not request_type
        ):
            logger.error(
                "Activator returned %r for %s",
                type(handler).__name__,
                _qualified_name(handler_type),
            )
            raise HandlerActivationError(handler_type)
        return handler

    def get_handler(self, request_type: type[Any]) -> Any:
        """Select and activate the handler for *request_type*."""
        handler_type = self.select_handler(request_type)
        return self.activate(handler_type, request_type)

    # ── Scanning ─────────────────────────────────────────────────

    def _scan(self, request_type: type[Any]) -> tuple[type[Any], ...]:
        logger.debug("Scanning for handlers of %s", request_type.__name__)
        found: dict[type[Any], None] = {}
        for module in self._iter_modules(self._scopes_for(request_type)):
            for obj in list(vars(module).values()):
                if (
                    isinstance(obj, type)
                    and obj.__module__ == module.__name__
                    and not inspect.isabstract(obj)
                    and get_request_type(obj) is request_type
                ):
                    found.setdefault(obj, None)

        logger.debug(
            "Scanned handlers for %s: %d found", request_type.__name__, len(found)
        )
        return tuple(found)

    def _scopes_for(self, request_type: type[Any]) -> list[ModuleType | str]:
        if self._search_scopes:
            return list(self._search_scopes)
        scopes: list[ModuleType | str] = []
        root_package = request_type.__module__.partition(".")[0]
        for name in (root_package, request_type.__module__, "__main__"):
            module = sys.modules.get(name)
            if module is not None and module not in scopes:
                scopes.append(module)
        return scopes

    @staticmethod
    def _iter_modules(scopes: Iterable[ModuleType | str]) -> Iterator[ModuleType]:
        seen: set[str] = set()
        for scope in scopes:
            module = importlib.import_module(scope) if isinstance(scope, str) else scope
            modules = [module]
            package_path = getattr(module, "__path__", None)
            if package_path is not None:
                modules.extend(
                    importlib.import_module(info.name)
                    for info in pkgutil.walk_packages(
                        package_path, prefix=f"{module.__name__}."
                    )
                )
            for candidate in modules:
                if candidate.__name__ not in seen:
                    seen.add(candidate.__name__)
                    yield candidate

    # ── Introspection ────────────────────────────────────────────

    def get_registered_handlers(self) -> dict[str, list[str]]:
        """Return a snapshot of cached candidates (for debugging)."""
        with self._lock:
            items = list(self._candidates.items())
        return {
            request_type.__name__: [h.__name__ for h in handlers]
            for request_type, handlers in items
        }


__all__ = ["HandlerRegistry", "default_activator"]
