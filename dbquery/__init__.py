"""
pydbquery: build MySQL queries from ``?d``/``?f``/``?a``/``?#``/``?`` templates.
"""

from dbquery.engines.sql import (
    SKIP,
    ArgumentCountError,
    ConversionError,
    Database,
    QueryBuildError,
    build_query,
    skip_value,
)

__all__ = [
    "build_query",
    "skip_value",
    "SKIP",
    "Database",
    "QueryBuildError",
    "ArgumentCountError",
    "ConversionError",
]
