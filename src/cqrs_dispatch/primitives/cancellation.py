"""CancellationToken: cooperative, thread-safe cancellation signal."""

from __future__ import annotations

import threading


class CancellationToken:
    """Advisory cancellation signal passed to every handler invocation.

    The dispatcher checks it once before running handler logic; handlers
    are expected to poll :attr:`is_cancellation_requested` at their own
    suspension points. Nothing is pre-empted.

    Usage::

        token = CancellationToken()
        task = asyncio.create_task(LongQuery.send(token))
        token.cancel()
    """

    __slots__ = ("_event",)

    def __init__(self, *, cancelled: bool = False) -> None:
        self._event = threading.Event()
        if cancelled:
            self._event.set()

    @classmethod
    def none(cls) -> CancellationToken:
        """Return a fresh token that nobody holds a reference to cancel."""
        return cls()

    @classmethod
    def cancelled(cls) -> CancellationToken:
        """Return a token that is already tripped."""
        return cls(cancelled=True)

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Trip the token. Idempotent."""
        self._event.set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancellation_requested})"
