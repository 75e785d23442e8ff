"""Bus protocol: IRequestBus."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ..primitives.cancellation import CancellationToken


class IRequestBus(Protocol):
    """
    Interface for sending requests to their respective handlers.
    """

    async def send(
        self, request: Any, cancellation_token: CancellationToken | None = None
    ) -> Any: ...
