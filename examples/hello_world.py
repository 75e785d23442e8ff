"""
Sends a query to a handler living in the same module.

Run with ``python examples/hello_world.py``; the default provider scans
``__main__`` so no configuration is needed.
"""

import asyncio
import logging

from cqrs_dispatch import Query


class GetHelloWorld(Query[str]):
    pass


class GetHelloWorldHandler(GetHelloWorld.Handler):
    async def execute(self, cancellation_token) -> str:
        # Do something async
        await asyncio.sleep(0.1)
        return "Hello, World!"


async def main() -> None:
    response = await GetHelloWorld.send()
    if response.is_success:
        print(response.result)
    else:
        print(response.error)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
