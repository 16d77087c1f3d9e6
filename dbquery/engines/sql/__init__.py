"""
Placeholder query builder.

Exports: build_query, skip_value, SKIP, Database, parse_placeholders,
PlaceholderKind and the error types.
"""

from dbquery.engines.sql.builder import Database, build_query
from dbquery.engines.sql.conditional import SKIP, resolve_conditionals, skip_value
from dbquery.engines.sql.converter import convert_value
from dbquery.engines.sql.errors import ArgumentCountError, ConversionError, QueryBuildError
from dbquery.engines.sql.escaper import Escaper
from dbquery.engines.sql.parser import parse_placeholders
from dbquery.engines.sql.placeholders import PlaceholderKind
from dbquery.engines.sql.safety import check_query_template_safety

__all__ = [
    "build_query",
    "skip_value",
    "SKIP",
    "Database",
    "Escaper",
    "PlaceholderKind",
    "parse_placeholders",
    "convert_value",
    "resolve_conditionals",
    "check_query_template_safety",
    "QueryBuildError",
    "ArgumentCountError",
    "ConversionError",
]
