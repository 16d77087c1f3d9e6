"""
Convert an argument to SQL text for its placeholder kind.

    ?d  bool -> 1/0, numeric-looking -> truncated integer
    ?f  bool -> 1/0, numeric-looking -> float
    ?a  list/tuple -> "v1, v2"; mapping -> "`k1` = v1, `k2` = v2"
    ?#  scalar, list or mapping of scalars -> "`a`, `b`"
    ?   None / int / float / str, detected at runtime

Values inside ``?a`` collections are converted as ``?``. Strings and
identifiers go through the Escaper; numbers are rendered by Python.
"""

import math
import re
from collections.abc import Callable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from dbquery.engines.sql.conditional import SKIP, SKIP_MARKER
from dbquery.engines.sql.errors import ConversionError
from dbquery.engines.sql.escaper import Escaper
from dbquery.engines.sql.placeholders import PlaceholderKind

# Decimal notation with optional sign, fraction and exponent, surrounding
# whitespace allowed. No hex, no underscores, no inf/nan.
_NUMERIC_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*")

# Python's default int <-> str conversion limit.
_MAX_INT_DIGITS = 4300

_KIND_NAMES = {
    PlaceholderKind.INT: "int",
    PlaceholderKind.IDENTIFIER: "identifier",
    PlaceholderKind.ARRAY: "array",
}


def is_numeric(value: Any) -> bool:
    """True for finite int/float/Decimal (not bool) and strings in decimal notation."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, str):
        return _NUMERIC_RE.fullmatch(value) is not None
    return False


def _int_text(value: int, kind: PlaceholderKind) -> str:
    try:
        return str(value)
    except ValueError as e:  # more digits than the interpreter's int->str limit
        raise ConversionError(f"Wrong {_KIND_NAMES[kind]} arg value", kind=kind) from e


def _int_value(arg: Any, escaper: Escaper) -> str:
    if isinstance(arg, bool):
        return "1" if arg else "0"
    if not is_numeric(arg):
        raise ConversionError("Wrong int arg value", kind=PlaceholderKind.INT)
    if isinstance(arg, int):
        return _int_text(arg, PlaceholderKind.INT)

    value = Decimal(arg.strip()) if isinstance(arg, str) else Decimal(arg)
    magnitude = value.adjusted()
    if magnitude < 0:
        return "0"
    # Checked before int() so "1e999999999" never expands into a huge integer.
    if magnitude >= _MAX_INT_DIGITS:
        raise ConversionError("Wrong int arg value", kind=PlaceholderKind.INT)
    try:
        number = int(value)
    except (OverflowError, ValueError, InvalidOperation) as e:
        raise ConversionError("Wrong int arg value", kind=PlaceholderKind.INT) from e
    return _int_text(number, PlaceholderKind.INT)


def _float_value(arg: Any, escaper: Escaper) -> str:
    if isinstance(arg, bool):
        return "1" if arg else "0"
    if not is_numeric(arg):
        raise ConversionError("Wrong float arg value", kind=PlaceholderKind.FLOAT)
    try:
        value = float(arg)
    except (OverflowError, ValueError, InvalidOperation) as e:
        raise ConversionError("Wrong float arg value", kind=PlaceholderKind.FLOAT) from e
    if not math.isfinite(value):
        raise ConversionError("Wrong float arg value", kind=PlaceholderKind.FLOAT)
    return repr(value)


def _is_list_like(arg: Mapping) -> bool:
    """A mapping whose keys are exactly 0..n-1 in order is a list."""
    return all(
        isinstance(key, int) and not isinstance(key, bool) and key == i
        for i, key in enumerate(arg)
    )


def _array_value(arg: Any, escaper: Escaper) -> str:
    if isinstance(arg, (list, tuple)):
        return ", ".join(_auto_value(item, escaper) for item in arg)
    if not isinstance(arg, Mapping):
        raise ConversionError("Wrong array arg value", kind=PlaceholderKind.ARRAY)
    if _is_list_like(arg):
        return ", ".join(_auto_value(item, escaper) for item in arg.values())

    parts = []
    for key, item in arg.items():
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            raise ConversionError("Wrong array arg value", kind=PlaceholderKind.ARRAY)
        name = escaper.escape_identifier(_name_text(key, PlaceholderKind.ARRAY))
        parts.append(f"{name} = {_auto_value(item, escaper)}")
    return ", ".join(parts)


def _name_text(name: str | int, kind: PlaceholderKind) -> str:
    return name if isinstance(name, str) else _int_text(name, kind)


def _identifier(arg: Any, escaper: Escaper) -> str:
    if isinstance(arg, bool) or not isinstance(arg, (str, int)):
        raise ConversionError("Wrong identifier arg value", kind=PlaceholderKind.IDENTIFIER)
    return escaper.escape_identifier(_name_text(arg, PlaceholderKind.IDENTIFIER))


def _identifier_value(arg: Any, escaper: Escaper) -> str:
    if isinstance(arg, Mapping):
        arg = list(arg.values())
    if isinstance(arg, (list, tuple)):
        return ", ".join(_identifier(item, escaper) for item in arg)
    return _identifier(arg, escaper)


def _auto_value(arg: Any, escaper: Escaper) -> str:
    if arg is None:
        return "NULL"
    if isinstance(arg, bool):
        raise ConversionError("Wrong arg value", kind=PlaceholderKind.AUTO)
    if isinstance(arg, int):
        return _int_value(arg, escaper)
    if isinstance(arg, float):
        return _float_value(arg, escaper)
    if isinstance(arg, str):
        return escaper.escape_string(arg)
    raise ConversionError("Wrong arg value", kind=PlaceholderKind.AUTO)


_CONVERTERS: dict[PlaceholderKind, Callable[[Any, Escaper], str]] = {
    PlaceholderKind.INT: _int_value,
    PlaceholderKind.FLOAT: _float_value,
    PlaceholderKind.ARRAY: _array_value,
    PlaceholderKind.IDENTIFIER: _identifier_value,
    PlaceholderKind.AUTO: _auto_value,
}


def convert_value(kind: PlaceholderKind, arg: Any, escaper: Escaper) -> str:
    """
    Render *arg* as SQL text for a *kind* placeholder.

    ``None`` gives ``NULL`` for nullable kinds. ``SKIP`` gives the skip
    marker, which the conditional resolver removes together with its
    fragment. Raises ConversionError on a type mismatch.
    """
    if arg is None:
        if kind.nullable:
            return "NULL"
        raise ConversionError(f"NULL is not allowed for {kind.token} placeholder", kind=kind)
    if arg is SKIP:
        return SKIP_MARKER
    return _CONVERTERS[kind](arg, escaper)
