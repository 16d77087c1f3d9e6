"""
Settings and MySQL connection helpers.
"""

from .connect import connect, mysql_escape

__all__ = [
    "connect",
    "mysql_escape",
]
