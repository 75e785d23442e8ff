"""Ports: protocols the dispatcher consumes and exposes."""

from __future__ import annotations

from .activator import IHandlerActivator
from .bus import IRequestBus

__all__ = [
    "IHandlerActivator",
    "IRequestBus",
]
