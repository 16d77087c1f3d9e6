"""
Find placeholders in a query template.

Every ``?`` is a placeholder: ``?d``, ``?f``, ``?a`` and ``?#`` are matched
first, anything else starting with ``?`` is a bare (auto-typed) ``?``.
There is no escape syntax for a literal question mark.
"""

from typing import NamedTuple

from dbquery.engines.sql.placeholders import PLACEHOLDER_PATTERN, PlaceholderKind


class PlaceholderMatch(NamedTuple):
    kind: PlaceholderKind
    start: int
    end: int


def find_placeholders(template: str) -> list[PlaceholderMatch]:
    """Return every placeholder occurrence in *template* with its offsets, left to right."""
    found: list[PlaceholderMatch] = []
    for m in PLACEHOLDER_PATTERN.finditer(template):
        kind = PlaceholderKind.from_token(m.group(0))
        if kind is not None:
            found.append(PlaceholderMatch(kind, m.start(), m.end()))
    return found


def parse_placeholders(template: str) -> list[PlaceholderKind]:
    """
    Extract placeholder kinds used in *template*, in order, duplicates included.

    The length of the result is the number of arguments build_query() expects.
    """
    return [m.kind for m in find_placeholders(template)]
