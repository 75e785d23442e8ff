from unittest.mock import MagicMock

import pytest

import cqrs_dispatch
from cqrs_dispatch.cqrs.provider import (
    CqrsProvider,
    configure,
    get_provider,
    set_provider,
)
from cqrs_dispatch.cqrs.request import Query
from cqrs_dispatch.cqrs.result import NoHandlerResult
from cqrs_dispatch.primitives.cancellation import CancellationToken
from cqrs_dispatch.primitives.exceptions import (
    HandlerActivationError,
    NoHandlerFoundError,
)

# --- Test Models ---


class StatusQuery(Query[str]):
    pass


class StatusQueryHandler(StatusQuery.Handler):
    async def execute(self, cancellation_token: CancellationToken) -> str:
        return "up"


class OrphanQuery(Query[str]):
    pass


# --- Tests ---


def test_get_provider_returns_installed_default(provider: CqrsProvider) -> None:
    assert get_provider() is provider
    assert cqrs_dispatch.get_provider() is provider


def test_set_provider_replaces_default() -> None:
    replacement = CqrsProvider()
    set_provider(replacement)

    assert get_provider() is replacement


def test_module_configure_acts_on_default(provider: CqrsProvider) -> None:
    activator = MagicMock(side_effect=lambda cls: cls())
    before = provider.registry

    configure([__name__], activator)

    assert provider.registry is not before
    assert provider.registry.search_scopes == (__name__,)
    assert provider.registry.activator is activator


@pytest.mark.asyncio
async def test_send_uses_explicit_provider_over_default(
    provider: CqrsProvider,
) -> None:
    failing = MagicMock(side_effect=RuntimeError("boom"))
    provider.configure(activator=failing)
    other = CqrsProvider()

    response = await StatusQuery.send(provider=other)

    assert response.unwrap() == "up"
    failing.assert_not_called()


@pytest.mark.asyncio
async def test_dispatch_raises_where_send_answers(provider: CqrsProvider) -> None:
    with pytest.raises(NoHandlerFoundError) as excinfo:
        await provider.dispatch(OrphanQuery())
    assert excinfo.value.request_type is OrphanQuery

    response = await provider.send(OrphanQuery())
    assert not response.is_success
    assert isinstance(response.error, NoHandlerResult)


@pytest.mark.asyncio
async def test_send_propagates_activation_errors(provider: CqrsProvider) -> None:
    provider.configure(activator=MagicMock(return_value=None))

    with pytest.raises(HandlerActivationError):
        await StatusQuery.send()


def test_register_is_usable_as_decorator(provider: CqrsProvider) -> None:
    class LateStatusQueryHandler(StatusQuery.Handler):
        async def execute(self, cancellation_token: CancellationToken) -> str:
            return "late"

    assert provider.register(LateStatusQueryHandler) is LateStatusQueryHandler
    assert provider.registry.resolve_candidates(StatusQuery) == (
        LateStatusQueryHandler,
    )
