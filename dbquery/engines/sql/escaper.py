"""
Quote string literals and identifiers around a raw-escape primitive.

The raw-escape callable does all character escaping (quotes, backslashes,
NUL, newlines...). This module only adds the surrounding ``'...'`` or
```...``` and calls it once per value, without caching.
"""

from collections.abc import Callable
from typing import Any

from dbquery.core.connect import mysql_escape

# (connection, text) -> escaped text, safe to put between quotes
RawEscape = Callable[[Any, str], str]


class Escaper:
    """Binds a connection (or None) to a raw-escape primitive."""

    def __init__(self, connection: Any = None, raw_escape: RawEscape | None = None) -> None:
        self.connection = connection
        self.raw_escape: RawEscape = raw_escape or mysql_escape

    def escape(self, raw: str) -> str:
        """Return *raw* escaped by the raw-escape primitive, without quotes."""
        return self.raw_escape(self.connection, raw)

    def escape_string(self, raw: str) -> str:
        """Return *raw* as a quoted SQL string literal: ``'...'``."""
        return f"'{self.escape(raw)}'"

    def escape_identifier(self, raw: str) -> str:
        """Return *raw* as a backtick-quoted identifier: ```...```."""
        return f"`{self.escape(raw)}`"
