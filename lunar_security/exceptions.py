"""Exceptions for lunar_security.

Classifier, sanitizer and rate-limit results are plain return values.
The exceptions here signal misuse by the host application.
"""

from __future__ import annotations


class LunarSecurityError(Exception):
    """Base class for all library errors."""

    pass


class ConfigurationError(LunarSecurityError, ValueError):
    """Raised when a limiter or settings value is out of range."""

    pass


class BindingError(LunarSecurityError):
    """Raised when a prepared statement is bound incorrectly."""

    pass


class BindOverflowError(BindingError):
    """Raised when more parameters are bound than the template has placeholders."""

    def __init__(self, placeholders: int):
        super().__init__(f"Template has {placeholders} placeholder(s); no slot left to bind.")
        self.placeholders = placeholders


class IncompleteBindingError(BindingError):
    """Raised when finalize is called before every placeholder is bound."""

    def __init__(self, bound: int, placeholders: int):
        super().__init__(f"Only {bound} of {placeholders} placeholder(s) bound.")
        self.bound = bound
        self.placeholders = placeholders


class ClosedHandleError(LunarSecurityError):
    """Raised when a closed limiter or statement is used."""

    pass


class TemplateError(LunarSecurityError, ValueError):
    """Raised when a query template has an unterminated literal or comment."""

    pass
