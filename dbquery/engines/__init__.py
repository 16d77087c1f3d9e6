"""
Engines: SQL placeholder query builder.
"""

from dbquery.engines.sql import Database, build_query, parse_placeholders, skip_value

__all__ = [
    "Database",
    "build_query",
    "skip_value",
    "parse_placeholders",
]
