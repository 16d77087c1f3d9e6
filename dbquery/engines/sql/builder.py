"""
Build a final SQL string from a placeholder template and positional args.

    build_query("SELECT ?# FROM users WHERE id = ?d{ AND block = ?d}", [["name"], 5, SKIP])
    -> "SELECT `name` FROM users WHERE id = 5"

Steps: scan placeholders, check the argument count, convert each argument
for its placeholder, splice the values in left to right, then resolve
``{ ... }`` fragments. Any failure aborts the whole call.

Values are spliced at the scanned offsets, so text inserted for one
placeholder (e.g. a string containing ``?``) is never matched again.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from dbquery.engines.sql.conditional import SKIP_MARKER, resolve_conditionals, skip_value
from dbquery.engines.sql.converter import convert_value
from dbquery.engines.sql.errors import ArgumentCountError, ConversionError
from dbquery.engines.sql.escaper import Escaper, RawEscape
from dbquery.engines.sql.parser import find_placeholders

_log = logging.getLogger(__name__)


def _positional(args: Sequence[Any] | Mapping[Any, Any] | None) -> list[Any]:
    """Drop mapping keys; only the order of values matters."""
    if args is None:
        return []
    if isinstance(args, Mapping):
        return list(args.values())
    if isinstance(args, (str, bytes)):
        raise TypeError("args must be a sequence of values, not a string")
    return list(args)


def _substitute(template: str, args: list[Any], escaper: Escaper) -> tuple[str, list[tuple[int, int]]]:
    """Return the substituted SQL and the ``(start, end)`` offsets of every inserted value."""
    placeholders = find_placeholders(template)
    if len(placeholders) != len(args):
        raise ArgumentCountError(len(placeholders), len(args))

    parts: list[str] = []
    spans: list[tuple[int, int]] = []
    size = 0
    pos = 0
    for index, (ph, arg) in enumerate(zip(placeholders, args)):
        try:
            value = convert_value(ph.kind, arg, escaper)
        except ConversionError as e:
            e.index = index
            raise
        text = template[pos : ph.start]
        parts.append(text)
        size += len(text)
        parts.append(value)
        spans.append((size, size + len(value)))
        size += len(value)
        pos = ph.end
    parts.append(template[pos:])
    return "".join(parts), spans


def build_query(
    template: str,
    args: Sequence[Any] | Mapping[Any, Any] | None = (),
    *,
    escaper: Escaper | None = None,
) -> str:
    """
    Substitute *args* into *template* and resolve conditional fragments.

    - escaper: Escaper bound to a connection; defaults to the connectionless
      pymysql escaper.

    Raises ArgumentCountError when the placeholder and argument counts differ,
    ConversionError when an argument does not fit its placeholder or SKIP is
    used outside a ``{ ... }`` block.
    """
    _escaper = escaper or Escaper()
    try:
        substituted, values = _substitute(template, _positional(args), _escaper)
        sql = resolve_conditionals(substituted, values)
        if SKIP_MARKER in sql:
            raise ConversionError("Skip value is only allowed inside a conditional block { ... }")
    except (ArgumentCountError, ConversionError) as e:
        _log.debug("Query build failed: %s", e)
        raise
    _log.debug("Built SQL: %s", sql)
    return sql


class Database:
    """
    Query builder bound to a database connection.

    The connection is only used to escape strings and identifiers; nothing
    is executed. A pymysql connection is not thread-safe, so share one
    Database across threads only if access to it is serialised.
    """

    def __init__(self, connection: Any = None, *, raw_escape: RawEscape | None = None) -> None:
        self.connection = connection
        self.escaper = Escaper(connection, raw_escape)

    def build_query(
        self,
        template: str,
        args: Sequence[Any] | Mapping[Any, Any] | None = (),
    ) -> str:
        """Build *template* with *args* using this connection's escaping rules."""
        return build_query(template, args, escaper=self.escaper)

    def skip(self) -> Any:
        """Return the value that drops its ``{ ... }`` block when passed as an argument."""
        return skip_value()
