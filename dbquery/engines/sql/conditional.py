"""
Conditional fragments: ``{ ... }`` blocks in a query template.

After substitution, every top-level balanced ``{ ... }`` span is either

* removed (braces and contents) when one of its arguments was ``SKIP``, or
* unwrapped: the ``{`` / ``}`` characters are dropped, contents stay.

Every brace that came from the template is a delimiter, wherever it sits
(inside a quoted literal or a comment too). Braces inside substituted
values are plain text: build_query passes the value offsets as *values*,
so a string argument such as ``'{x}'`` is never treated as a fragment.
Nested braces inside a fragment are not fragments of their own: the
outermost pair decides, and all braces inside a kept fragment are dropped.
Unbalanced braces are left as they are.
"""

import uuid
from collections.abc import Iterable


class _Skip:
    """Type of the SKIP sentinel. There is exactly one instance."""

    __slots__ = ()
    _instance: "_Skip | None" = None

    def __new__(cls) -> "_Skip":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SKIP"

    def __copy__(self) -> "_Skip":
        return self

    def __deepcopy__(self, memo: dict) -> "_Skip":
        return self


SKIP = _Skip()

# Text stand-in for SKIP inside the assembled query. Escaped values cannot
# contain it: the raw escaper rewrites NUL bytes.
SKIP_MARKER = f"\x00skip:{uuid.uuid4().hex}\x00"


def skip_value() -> _Skip:
    """Return the sentinel that drops the enclosing ``{ ... }`` fragment when passed as an argument."""
    return SKIP


def _brace_positions(sql: str, values: Iterable[tuple[int, int]]) -> list[int]:
    """Offsets of ``{`` and ``}`` in *sql* outside the ``(start, end)`` value spans."""
    positions: list[int] = []
    pos = 0
    for start, end in [*sorted(values), (len(sql), len(sql))]:
        for i in range(pos, start):
            if sql[i] in "{}":
                positions.append(i)
        pos = max(pos, end)
    return positions


def _match_fragments(sql: str, braces: list[int]) -> list[tuple[int, int]]:
    spans: list[tuple[int, int]] = []
    depth = 0
    start = -1
    for i in braces:
        if sql[i] == "{":
            if depth == 0:
                start = i
            depth += 1
        elif depth > 0:
            depth -= 1
            if depth == 0:
                spans.append((start, i + 1))
    return spans


def find_fragments(sql: str, values: Iterable[tuple[int, int]] = ()) -> list[tuple[int, int]]:
    """Return ``(start, end)`` of every top-level balanced ``{ ... }`` span; *end* is exclusive.

    Braces inside the *values* spans (substituted arguments) are ignored.
    """
    return _match_fragments(sql, _brace_positions(sql, values))


def resolve_conditionals(sql: str, values: Iterable[tuple[int, int]] = ()) -> str:
    """Remove fragments that contain SKIP_MARKER and unwrap all others.

    - values: ``(start, end)`` offsets of substituted arguments in *sql*;
      braces inside them are kept as text.
    """
    braces = _brace_positions(sql, values)
    spans = _match_fragments(sql, braces)
    if not spans:
        return sql

    parts: list[str] = []
    pos = 0
    for start, end in spans:
        parts.append(sql[pos:start])
        if SKIP_MARKER not in sql[start:end]:
            cut = start
            for b in braces:
                if start <= b < end:
                    parts.append(sql[cut:b])
                    cut = b + 1
            parts.append(sql[cut:end])
        pos = end
    parts.append(sql[pos:])
    return "".join(parts)
