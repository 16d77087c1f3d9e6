"""
Errors raised while building a query.

Both are ``ValueError`` subclasses so callers that only care about "bad
input" can catch ``ValueError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dbquery.engines.sql.placeholders import PlaceholderKind


class QueryBuildError(ValueError):
    """Base class for query construction failures."""

    pass


class ArgumentCountError(QueryBuildError):
    """Raised when the template placeholder count differs from the argument count."""

    def __init__(self, expected: int, got: int) -> None:
        self.expected = expected
        self.got = got
        super().__init__(f"Wrong arguments count, expect: {expected}, got: {got}")


class ConversionError(QueryBuildError):
    """Raised when an argument cannot be rendered for its placeholder kind."""

    def __init__(
        self,
        message: str,
        *,
        kind: PlaceholderKind | None = None,
        index: int | None = None,
    ) -> None:
        self.kind = kind
        self.index = index
        super().__init__(message)
