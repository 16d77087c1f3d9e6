"""
MySQL connection helpers.

The query builder itself never executes SQL; it only needs a connection to
escape raw strings with the server's rules (charset, NO_BACKSLASH_ESCAPES).
Without a connection, pymysql's module-level escaper is used.
"""

from typing import Any

import pymysql
from pymysql.converters import escape_string

from dbquery.core.config import settings


def _get(datasource: Any, key: str) -> Any:
    """Get attribute or dict key from a dict or settings-like object."""
    if datasource is None:
        return None
    if isinstance(datasource, dict):
        return datasource.get(key)
    return getattr(datasource, key, None)


def connect(datasource: Any = None) -> pymysql.connections.Connection:
    """
    Open a MySQL connection.

    - datasource: dict or object with host, port, database, username, password
      (and optionally charset). Missing keys fall back to settings.MYSQL_*.
    """
    host = _get(datasource, "host") or settings.MYSQL_HOST
    port = _get(datasource, "port") or settings.MYSQL_PORT
    database = _get(datasource, "database") or settings.MYSQL_DATABASE
    username = _get(datasource, "username") or settings.MYSQL_USER
    password = _get(datasource, "password")
    password = password if password is not None else settings.MYSQL_PASSWORD
    charset = _get(datasource, "charset") or settings.MYSQL_CHARSET

    return pymysql.connect(
        host=host,
        port=int(port),
        database=database,
        user=username,
        password=password,
        charset=charset,
        connect_timeout=settings.EXTERNAL_DB_CONNECT_TIMEOUT,
    )


def mysql_escape(conn: Any, text: str) -> str:
    """
    Escape *text* for use inside a quoted MySQL literal (no quotes added).

    Uses ``conn.escape_string`` when a connection is given so the server's
    sql_mode is honoured; otherwise the connectionless pymysql escaper.
    """
    if conn is None:
        return escape_string(text)
    return conn.escape_string(text)
