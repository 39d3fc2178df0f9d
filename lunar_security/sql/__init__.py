"""Query-facing helpers: injection classifier, sanitizer, prepared statements."""
from .safety import (
    detect_sql_injection,
    detect_nosql_injection,
    is_valid,
    validate_input,
    is_sql_injection,
    is_nosql_injection,
)
from .sanitize import sanitize, quote_literal
from .builder import PreparedStatement, count_placeholders

__all__ = [
    "detect_sql_injection",
    "detect_nosql_injection",
    "is_valid",
    "validate_input",
    "is_sql_injection",
    "is_nosql_injection",
    "sanitize",
    "quote_literal",
    "PreparedStatement",
    "count_placeholders",
]
