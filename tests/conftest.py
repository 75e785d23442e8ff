from collections.abc import Iterator

import pytest

from cqrs_dispatch.cqrs.provider import CqrsProvider, get_provider, set_provider


@pytest.fixture(autouse=True)
def provider() -> Iterator[CqrsProvider]:
    """Install a fresh default provider for every test."""
    previous = get_provider()
    fresh = CqrsProvider()
    set_provider(fresh)
    yield fresh
    set_provider(previous)
