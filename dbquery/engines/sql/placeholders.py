"""
Placeholder vocabulary for query templates.

    ?d  integer        (NULL allowed)
    ?f  float          (NULL allowed)
    ?a  array / set    (NULL rejected)
    ?#  identifier     (NULL rejected)
    ?   auto-typed     (NULL allowed)
"""

import re
from enum import Enum


class PlaceholderKind(Enum):
    """Closed set of placeholder tokens. The value is the literal token text."""

    INT = "?d"
    FLOAT = "?f"
    ARRAY = "?a"
    IDENTIFIER = "?#"
    AUTO = "?"

    @property
    def token(self) -> str:
        return self.value

    @property
    def nullable(self) -> bool:
        """True when ``None`` renders as ``NULL`` instead of failing."""
        return self in _NULLABLE

    @classmethod
    def from_token(cls, token: str) -> "PlaceholderKind | None":
        """Return the kind for *token*, or None if it is not a placeholder."""
        try:
            return cls(token)
        except ValueError:
            return None


_NULLABLE = frozenset({PlaceholderKind.AUTO, PlaceholderKind.INT, PlaceholderKind.FLOAT})

# Longest tokens first so "?d" never matches as a bare "?".
PLACEHOLDER_PATTERN = re.compile(
    "|".join(
        re.escape(k.token)
        for k in sorted(PlaceholderKind, key=lambda k: len(k.token), reverse=True)
    )
)
