"""
Error taxonomy for the menu client.

Fetch errors abort the run. Query errors additionally ask the CLI to print
the usage text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence, Tuple

if TYPE_CHECKING:
    from src.koedo.arguments import UnknownArgument


class KoedoError(Exception):
    """Base class for every error raised while answering a query."""
    pass


class InvalidURL(KoedoError):
    """Raised when a configured URL cannot be used for a request."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL: {url!r}")


class InvalidSourceFormat(KoedoError):
    """Raised when the menu page cannot be retrieved or is not UTF-8 text."""
    pass


class QueryError(KoedoError):
    """Raised when the command-line query is rejected."""
    pass


class EmptyQuery(QueryError):
    def __init__(self) -> None:
        super().__init__("No argument given")


class UnknownArguments(QueryError):
    def __init__(self, items: Sequence["UnknownArgument"]):
        self.items: Tuple["UnknownArgument", ...] = tuple(items)
        tokens = ", ".join(item.token for item in self.items)
        super().__init__(f"Unknown arguments: {tokens}")


class InvalidQuery(QueryError):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
