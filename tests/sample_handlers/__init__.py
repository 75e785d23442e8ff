"""Handlers split across submodules, used to exercise package scanning."""

from cqrs_dispatch.cqrs.request import QueryWithArguments


class GreetQuery(QueryWithArguments[str, str]):
    pass
