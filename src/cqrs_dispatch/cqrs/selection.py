"""Handler selection predicates: declarative disambiguation of handlers."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")

_SELECTIONS_ATTR = "__handler_selections__"


class HandlerSelection(ABC):
    """A condition attached to a handler class.

    Evaluated at resolution time against ambient state only. A handler is
    eligible when *all* of its selections match; a handler with no
    selections always matches. When several handlers are eligible the one
    with the most selections wins.

    Usage::

        class FeatureFlag(HandlerSelection):
            def __init__(self, name: str) -> None:
                self.name = name

            def is_match(self) -> bool:
                return self.name in ENABLED_FLAGS

        @select_when(FeatureFlag("new-pricing"))
        class NewPricingHandler(GetPrice.Handler):
            ...
    """

    @abstractmethod
    def is_match(self) -> bool:
        """Return ``True`` if the ambient state selects this handler."""
        ...


class CallableSelection(HandlerSelection):
    """Selection backed by a zero-argument callable."""

    def __init__(self, predicate: Callable[[], bool]) -> None:
        self.predicate = predicate

    def is_match(self) -> bool:
        return bool(self.predicate())

    def __repr__(self) -> str:
        name = getattr(self.predicate, "__qualname__", repr(self.predicate))
        return f"CallableSelection({name})"


class EnvironmentSelection(HandlerSelection):
    """Matches when an environment variable is set to one of *values*.

    With no values, matches whenever the variable is set at all.
    """

    def __init__(self, name: str, *values: str) -> None:
        self.name = name
        self.values = frozenset(values)

    def is_match(self) -> bool:
        current = os.environ.get(self.name)
        if current is None:
            return False
        return not self.values or current in self.values

    def __repr__(self) -> str:
        return f"EnvironmentSelection({self.name!r}, {sorted(self.values)!r})"


def select_when(*selections: HandlerSelection | Callable[[], bool]) -> Any:
    """Class decorator attaching selection predicates to a handler.

    Plain callables are wrapped in :class:`CallableSelection`. Decorators
    can be stacked; attachments belong to the decorated class only and are
    not inherited by its subclasses.

    Usage::

        @select_when(EnvironmentSelection("APP_ENV", "test"))
        class FakeClockHandler(GetTime.Handler):
            ...
    """
    wrapped = tuple(
        s if isinstance(s, HandlerSelection) else CallableSelection(s)
        for s in selections
    )

    def decorator(cls: T) -> T:
        existing = cls.__dict__.get(_SELECTIONS_ATTR, ())  # type: ignore[attr-defined]
        setattr(cls, _SELECTIONS_ATTR, (*existing, *wrapped))
        return cls

    return decorator


def get_selections(handler_cls: type[Any]) -> tuple[HandlerSelection, ...]:
    """Return the selections attached directly to *handler_cls*."""
    return handler_cls.__dict__.get(_SELECTIONS_ATTR, ())


def matches(selections: tuple[HandlerSelection, ...]) -> bool:
    return all(selection.is_match() for selection in selections)


__all__ = [
    "CallableSelection",
    "EnvironmentSelection",
    "HandlerSelection",
    "get_selections",
    "matches",
    "select_when",
]
