from unittest.mock import MagicMock

import pytest

from cqrs_dispatch.cqrs.provider import CqrsProvider, register
from cqrs_dispatch.cqrs.registry import HandlerRegistry
from cqrs_dispatch.cqrs.request import Command
from cqrs_dispatch.cqrs.result import OkResult, Result, UnknownErrorResult
from cqrs_dispatch.cqrs.selection import HandlerSelection, select_when
from cqrs_dispatch.primitives.cancellation import CancellationToken
from cqrs_dispatch.primitives.exceptions import NotAHandlerError

# --- Test Models ---


class PreregisterSelection(HandlerSelection):
    def is_match(self) -> bool:
        return True


class PreregisterCommand(Command):
    pass


@select_when(PreregisterSelection())
class UnregisteredPreregisterCommandHandler(PreregisterCommand.Handler):
    async def execute(self, cancellation_token: CancellationToken) -> Result:
        return Result.error()


class PreregisteredPreregisterCommandHandler(PreregisterCommand.Handler):
    async def execute(self, cancellation_token: CancellationToken) -> Result:
        return Result.ok()


class NotAHandler:
    pass


# --- Tests ---


@pytest.mark.asyncio
async def test_preregistered_successful_returns_ok(provider: CqrsProvider) -> None:
    provider.register(PreregisteredPreregisterCommandHandler)

    response = await PreregisterCommand.send()

    assert response.is_success
    assert isinstance(response.result, OkResult)


@pytest.mark.asyncio
async def test_unregistered_scan_prefers_more_specific_handler() -> None:
    response = await PreregisterCommand.send()

    assert not response.is_success
    assert isinstance(response.error, UnknownErrorResult)


@pytest.mark.asyncio
async def test_preregistration_skips_scan(
    provider: CqrsProvider, monkeypatch: pytest.MonkeyPatch
) -> None:
    scan = MagicMock(return_value=())
    monkeypatch.setattr(HandlerRegistry, "_scan", scan)

    register(PreregisteredPreregisterCommandHandler)
    await PreregisterCommand.send()

    scan.assert_not_called()


@pytest.mark.asyncio
async def test_register_appends_to_existing_entry(provider: CqrsProvider) -> None:
    provider.register(PreregisteredPreregisterCommandHandler)
    provider.register(UnregisteredPreregisterCommandHandler)

    snapshot = provider.registry.get_registered_handlers()
    assert snapshot["PreregisterCommand"] == [
        "PreregisteredPreregisterCommandHandler",
        "UnregisteredPreregisterCommandHandler",
    ]

    response = await PreregisterCommand.send()
    assert isinstance(response.error, UnknownErrorResult)


def test_register_works_as_decorator(provider: CqrsProvider) -> None:
    @provider.register
    class LateHandler(PreregisterCommand.Handler):
        async def execute(self, cancellation_token: CancellationToken) -> Result:
            return Result.ok()

    assert provider.registry.resolve_candidates(PreregisterCommand) == (LateHandler,)


@pytest.mark.parametrize("target", [NotAHandler, int, PreregisterCommand, "handler"])
def test_register_not_a_handler_raises(provider: CqrsProvider, target: object) -> None:
    with pytest.raises(NotAHandlerError, match="is not a handler"):
        provider.register(target)  # type: ignore[arg-type]


def test_not_a_handler_is_a_type_error(provider: CqrsProvider) -> None:
    with pytest.raises(TypeError):
        provider.register(NotAHandler)


def test_reconfigure_drops_preregistrations(provider: CqrsProvider) -> None:
    provider.register(PreregisteredPreregisterCommandHandler)
    provider.configure()

    assert provider.registry.get_registered_handlers() == {}
