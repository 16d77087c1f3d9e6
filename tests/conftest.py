from unittest.mock import MagicMock

import pytest

from dbquery.engines.sql.escaper import Escaper


@pytest.fixture
def escaper() -> Escaper:
    """Connectionless pymysql escaper."""
    return Escaper()


@pytest.fixture
def mock_connection() -> MagicMock:
    """Connection whose escape_string doubles single quotes (NO_BACKSLASH_ESCAPES style)."""
    conn = MagicMock()
    conn.escape_string.side_effect = lambda s: s.replace("'", "''")
    return conn
