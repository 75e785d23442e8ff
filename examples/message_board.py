"""
Handlers with injected dependencies.

The activator plays the role of a dependency injection container: it
builds each handler with the shared session store.
"""

import asyncio
from typing import Any

from cqrs_dispatch import (
    CommandWithArguments,
    Query,
    Result,
    configure,
)


class SessionStore:
    """Stand-in for a session backend."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    async def load(self) -> None:
        await asyncio.sleep(0)

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


# ── Requests ─────────────────────────────────────────────────────


class SetMessage(CommandWithArguments[str]):
    pass


class GetMessage(Query[str]):
    pass


# ── Handlers ─────────────────────────────────────────────────────


class SetMessageHandler(SetMessage.Handler):
    def __init__(self, session: SessionStore | None) -> None:
        self.session = session

    async def execute(self, cancellation_token) -> Result:
        if self.session is None:
            return Result.error()
        await self.session.load()
        self.session.set("Message", self.arguments)
        return Result.ok()


class GetMessageHandler(GetMessage.Handler):
    def __init__(self, session: SessionStore | None) -> None:
        self.session = session

    async def execute(self, cancellation_token) -> str | Result:
        if self.session is None:
            return Result.error()
        await self.session.load()
        return self.session.get("Message") or ""


async def main() -> None:
    session = SessionStore()

    def activator(handler_type: type[Any]) -> Any:
        return handler_type(session)

    configure([__name__], activator)

    await SetMessage.send("Hello from the message board")
    response = await GetMessage.send()
    print(response.unwrap())


if __name__ == "__main__":
    asyncio.run(main())
