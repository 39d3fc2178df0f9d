r"""
Escaping for text that must be embedded literally in a query.

Prefer PreparedStatement: it quotes and escapes every bound value itself.
sanitize() is for call sites that cannot bind parameters. It is not
idempotent, so raw input must be sanitized exactly once.

Quotes are doubled ('') as in standard SQL. Backslash, double quote, NUL,
semicolon and comment starts get MySQL-style backslash escapes, so the
escaped text is safe on backslash-escaping engines (MySQL) and on
standard-string engines (SQLite, PostgreSQL). The round trip is lossy on
the latter: they store the backslashes, so 'say "hi"; ok' is stored as
say \"hi\"\; ok. Text without special characters is stored unchanged.
"""
from __future__ import annotations

import re
from typing import Optional

ESCAPE_TABLE = {
    "/*": "/\\*",
    "\\": "\\\\",
    "'": "''",
    '"': '\\"',
    "\x00": "\\0",
    ";": "\\;",
}

# Every dash in a run of two or more is escaped, so "---" cannot leave "--" behind.
_ESCAPE_RE = re.compile(r"-{2,}|/\*|[\\'\"\x00;]")


def _escape(match: re.Match) -> str:
    s = match.group(0)
    if s[0] == "-":
        return "\\-" * len(s)
    return ESCAPE_TABLE[s]


def sanitize(text: Optional[str]) -> str:
    """Return an escaped copy of text. Text without special characters is returned unchanged."""
    if not text:
        return ""
    return _ESCAPE_RE.sub(_escape, text)


def quote_literal(text: Optional[str]) -> str:
    """Render text as a single-quoted SQL string literal."""
    return f"'{sanitize(text)}'"
