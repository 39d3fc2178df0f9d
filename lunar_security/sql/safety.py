from __future__ import annotations

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

SQL_INJECTION_PATTERNS = [
    r";\s*drop", r";\s*delete", r";\s*insert", r";\s*update",
    r";\s*alter", r";\s*create", r";\s*truncate", r";\s*exec",
    r"--", r"/\*",
    r"'\s*;", r"'\s*or\s+", r"'\s*and\s+", r"\bunion\s+(?:all\s+)?select\b",
    r"\bexec(?:ute)?\s*\(", r"\bxp_\w+", r"\bsp_executesql\b",
    r"\bwaitfor\s+delay\b", r"\bsleep\s*\(\s*\d",
]

# Operator keys of document-store query languages (MongoDB style).
NOSQL_INJECTION_PATTERNS = [
    r"\$(?:where|ne|eq|gt|gte|lt|lte|in|nin|or|and|not|nor|regex|exists|expr)\b",
    r"\{\s*['\"]?\$\w+['\"]?\s*:",
]

_SQL_RES = [re.compile(p, re.IGNORECASE) for p in SQL_INJECTION_PATTERNS]
_NOSQL_RES = [re.compile(p, re.IGNORECASE) for p in NOSQL_INJECTION_PATTERNS]


def _first_match(compiled, text: Optional[str]) -> Optional[str]:
    t = text or ""
    if not t:
        return None
    for rx in compiled:
        if rx.search(t):
            return rx.pattern
    return None


def find_sql_injection(user_input: Optional[str]) -> Optional[str]:
    """Return the first SQL injection pattern found in the input, or None."""
    return _first_match(_SQL_RES, user_input)


def find_nosql_injection(user_input: Optional[str]) -> Optional[str]:
    """Return the first NoSQL operator pattern found in the input, or None."""
    return _first_match(_NOSQL_RES, user_input)


def detect_sql_injection(user_input: Optional[str]) -> bool:
    """Heuristic detection of common SQL injection patterns."""
    pattern = find_sql_injection(user_input)
    if pattern is not None:
        logger.debug(f"SQL injection pattern matched: {pattern}")
        return True
    return False


def detect_nosql_injection(user_input: Optional[str]) -> bool:
    """Heuristic detection of NoSQL operator injection ($where, $ne, $gt, ...)."""
    pattern = find_nosql_injection(user_input)
    if pattern is not None:
        logger.debug(f"NoSQL injection pattern matched: {pattern}")
        return True
    return False


def is_valid(user_input: Optional[str]) -> bool:
    """
    Accept or reject free-form input.

    Rejection is an ordinary False result, never an exception. Empty input
    is valid since there is nothing to exploit.
    """
    return not (detect_sql_injection(user_input) or detect_nosql_injection(user_input))


# Names used by the host-facing boundary.
validate_input = is_valid
is_sql_injection = detect_sql_injection
is_nosql_injection = detect_nosql_injection
