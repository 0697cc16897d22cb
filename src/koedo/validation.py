"""
Structural checks on a parsed query.
"""

from __future__ import annotations

from typing import Sequence

from src.koedo.arguments import (
    ArgumentItem,
    DayArgument,
    MalformedArgument,
    UnknownArgument,
)
from src.koedo.errors import EmptyQuery, InvalidQuery, UnknownArguments
from src.koedo.models import WEEK, DayScope, Scope


def validate_query(items: Sequence[ArgumentItem]) -> None:
    """
    Raise a `QueryError` if the query cannot be dispatched.

    Checks run in order: the query is not empty, has no unknown tokens, has
    no malformed flag, uses --help/--order alone, and carries at most one
    of --today/--week.
    """
    if not items:
        raise EmptyQuery()

    unknown = [item for item in items if isinstance(item, UnknownArgument)]
    if unknown:
        raise UnknownArguments(unknown)

    malformed = [item for item in items if isinstance(item, MalformedArgument)]
    if malformed:
        raise InvalidQuery(malformed[0].reason)

    if any(item.is_standalone for item in items) and len(items) != 1:
        raise InvalidQuery("--help and --order cannot be combined with other arguments")

    if sum(1 for item in items if item.is_temporal) > 1:
        raise InvalidQuery("Only one of --today and --week can be given")


def resolve_scope(items: Sequence[ArgumentItem]) -> Scope:
    """Scope of the query's meal searches. Defaults to the whole week."""
    for item in items:
        if isinstance(item, DayArgument):
            return DayScope(item.day)
    return WEEK
