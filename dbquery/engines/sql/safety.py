"""
Static analysis for query templates: detect likely mistakes before build.

Flags:

* placeholders inside a quoted literal, e.g. ``WHERE note = 'why?'``. They
  are still substituted (there is no escape for a literal ``?``), which is
  rarely what the author meant;
* braces inside a quoted literal, e.g. ``WHERE a = '{'``. Every template
  brace delimits a conditional block, quoted or not;
* ``{`` nested inside a conditional fragment (only the outermost pair is a
  fragment);
* unbalanced ``{`` or ``}`` (left in the output as plain text).

Quotes inside ``-- ...`` and ``/* ... */`` comments do not open a literal.

Usage::

    warnings = check_query_template_safety(template)
    # [{"line": 1, "column": 24, "token": "?", "message": "..."}]
"""

from typing import Any

from dbquery.engines.sql.parser import find_placeholders

_QUOTES = ("'", '"', "`")


def _quoted_end(sql: str, i: int) -> int:
    """Return the index just past the quoted region that starts at *sql[i]*."""
    quote = sql[i]
    length = len(sql)
    i += 1
    while i < length:
        c = sql[i]
        if c == "\\" and quote != "`" and i + 1 < length:
            i += 2
            continue
        if c == quote:
            if i + 1 < length and sql[i + 1] == quote:
                i += 2
                continue
            return i + 1
        i += 1
    return length


def _quoted_regions(template: str) -> list[tuple[int, int]]:
    """``(start, end)`` of every quoted literal outside SQL comments."""
    regions: list[tuple[int, int]] = []
    i = 0
    length = len(template)

    while i < length:
        ch = template[i]
        if ch == "-" and template.startswith("--", i) and (i + 2 >= length or template[i + 2].isspace()):
            end = template.find("\n", i)
            i = length if end == -1 else end + 1
            continue
        if ch == "/" and template.startswith("/*", i):
            end = template.find("*/", i + 2)
            i = length if end == -1 else end + 2
            continue
        if ch in _QUOTES:
            end = _quoted_end(template, i)
            regions.append((i, end))
            i = end
            continue
        i += 1

    return regions


def _line_col(template: str, offset: int) -> tuple[int, int]:
    """1-based line and column of *offset*."""
    line = template.count("\n", 0, offset) + 1
    column = offset - (template.rfind("\n", 0, offset) + 1) + 1
    return line, column


def _warning(template: str, offset: int, message: str, **extra: Any) -> dict[str, Any]:
    line, column = _line_col(template, offset)
    return {"line": line, "column": column, **extra, "message": message}


def check_query_template_safety(template: str) -> list[dict[str, Any]]:
    """Analyse a query template and return warnings ordered by position.

    Each warning is a dict with ``line``, ``column`` and ``message`` keys
    (plus ``token`` for placeholder warnings). An empty list means no
    issues detected.
    """
    found: list[tuple[int, dict[str, Any]]] = []
    quoted = _quoted_regions(template)
    open_braces: list[int] = []

    def in_quotes(offset: int) -> bool:
        return any(start <= offset < end for start, end in quoted)

    for i, ch in enumerate(template):
        if ch not in "{}":
            continue
        if in_quotes(i):
            found.append(
                (i, _warning(template, i, f"'{ch}' inside a quoted literal still delimits a conditional block."))
            )
        if ch == "{":
            if open_braces:
                found.append(
                    (i, _warning(template, i, "Nested '{' inside a conditional block is treated as plain text."))
                )
            open_braces.append(i)
        elif open_braces:
            open_braces.pop()
        else:
            found.append((i, _warning(template, i, "Unmatched '}' is left in the query as is.")))

    for pos in open_braces:
        found.append((pos, _warning(template, pos, "Unmatched '{' is left in the query as is.")))

    for ph in find_placeholders(template):
        if in_quotes(ph.start):
            found.append(
                (
                    ph.start,
                    _warning(
                        template,
                        ph.start,
                        f"Placeholder '{ph.kind.token}' inside a quoted literal will still be substituted "
                        f"and consumes an argument.",
                        token=ph.kind.token,
                    ),
                )
            )

    found.sort(key=lambda item: item[0])
    return [w for _, w in found]
