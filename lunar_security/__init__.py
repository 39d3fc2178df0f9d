# Lunar Security - injection checks, rate limiting, prepared statements
"""
Lunar Security - embeddable security primitives for hosts that accept
untrusted text and issue database queries.
"""

__version__ = "0.1.0"

from .sql import (
    detect_sql_injection,
    detect_nosql_injection,
    is_valid,
    validate_input,
    is_sql_injection,
    is_nosql_injection,
    sanitize,
    PreparedStatement,
)
from .rate_limit import RateLimiter
from .config import Settings, get_settings, get_cached_settings, clear_settings_cache
from .exceptions import (
    LunarSecurityError,
    ConfigurationError,
    BindingError,
    TemplateError,
    BindOverflowError,
    IncompleteBindingError,
    ClosedHandleError,
)

__all__ = [
    "__version__",
    "detect_sql_injection",
    "detect_nosql_injection",
    "is_valid",
    "validate_input",
    "is_sql_injection",
    "is_nosql_injection",
    "sanitize",
    "PreparedStatement",
    "RateLimiter",
    "Settings",
    "get_settings",
    "get_cached_settings",
    "clear_settings_cache",
    "LunarSecurityError",
    "ConfigurationError",
    "BindingError",
    "TemplateError",
    "BindOverflowError",
    "IncompleteBindingError",
    "ClosedHandleError",
]
