from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

from ..exceptions import (
    BindOverflowError,
    ClosedHandleError,
    IncompleteBindingError,
    TemplateError,
)
from .sanitize import quote_literal

logger = logging.getLogger(__name__)

PLACEHOLDER = "?"


def _split_template(template: str) -> List[str]:
    """
    Split a template on placeholders that sit outside quoted text and comments.

    A '?' inside '...', "...", a -- line comment or a /* */ block belongs to
    the template, not to a parameter. Doubled quotes ('it''s') close and
    reopen the literal and need no special case. An unterminated literal or
    block comment raises TemplateError.
    """
    segments: List[str] = []
    start = 0
    i = 0
    n = len(template)
    while i < n:
        ch = template[i]
        if ch in ("'", '"'):
            end = template.find(ch, i + 1)
            if end == -1:
                raise TemplateError(f"Unterminated {ch} literal at position {i}.")
            i = end + 1
        elif template.startswith("--", i):
            end = template.find("\n", i)
            i = n if end == -1 else end + 1
        elif template.startswith("/*", i):
            end = template.find("*/", i + 2)
            if end == -1:
                raise TemplateError(f"Unterminated /* comment at position {i}.")
            i = end + 2
        elif ch == PLACEHOLDER:
            segments.append(template[start:i])
            i += 1
            start = i
        else:
            i += 1
    segments.append(template[start:])
    return segments


def count_placeholders(template: str) -> int:
    return len(_split_template(template)) - 1


def _param_to_str(value: Union[str, bytes]) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        # Invalid UTF-8 becomes \xNN text, which the escaping then treats as data.
        return bytes(value).decode("utf-8", errors="backslashreplace")
    raise TypeError("bound parameters must be str or bytes")


class PreparedStatement:
    """
    A query template with positional '?' placeholders and bound values.

    Every bound value is rendered as an escaped single-quoted literal on
    finalize, whatever its content and whether or not the caller already
    sanitized it. A statement binds once: after finalize() it only returns
    the same string.

    Not thread-safe. Callers sharing one statement serialize access.
    """

    def __init__(self, template: str):
        if not isinstance(template, str):
            raise TypeError("template must be a str")
        self._template = template
        self._segments = _split_template(template)
        self._params: List[str] = []
        self._finalized: Optional[str] = None
        self._closed = False

    def __repr__(self) -> str:
        return (
            f"PreparedStatement(placeholders={self.placeholder_count}, "
            f"bound={self.bound_count}, finalized={self.finalized})"
        )

    def __enter__(self) -> "PreparedStatement":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def template(self) -> str:
        return self._template

    @property
    def placeholder_count(self) -> int:
        return len(self._segments) - 1

    @property
    def bound_count(self) -> int:
        return len(self._params)

    @property
    def params(self) -> Tuple[str, ...]:
        return tuple(self._params)

    @property
    def is_complete(self) -> bool:
        return self.bound_count == self.placeholder_count

    @property
    def finalized(self) -> bool:
        return self._finalized is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClosedHandleError("PreparedStatement is closed.")

    def bind(self, value: Union[str, bytes]) -> "PreparedStatement":
        """Append a parameter value in call order. Returns self for chaining."""
        self._ensure_open()
        if self._finalized is not None:
            raise ClosedHandleError("PreparedStatement already finalized; create a new one to rebind.")
        text = _param_to_str(value)
        if self.bound_count >= self.placeholder_count:
            raise BindOverflowError(self.placeholder_count)
        self._params.append(text)
        return self

    def bind_all(self, *values: Union[str, bytes]) -> "PreparedStatement":
        for v in values:
            self.bind(v)
        return self

    def finalize(self) -> str:
        """
        Produce the executable query string.

        Raises IncompleteBindingError if any placeholder is unbound; no
        partial query is ever returned.
        """
        self._ensure_open()
        if self._finalized is not None:
            return self._finalized
        if not self.is_complete:
            raise IncompleteBindingError(self.bound_count, self.placeholder_count)

        parts = [self._segments[0]]
        for value, segment in zip(self._params, self._segments[1:]):
            parts.append(quote_literal(value))
            parts.append(segment)
        self._finalized = "".join(parts)
        logger.debug(f"Finalized statement with {self.placeholder_count} parameter(s)")
        return self._finalized

    # Hosts may call this step execute; no query is run here.
    execute = finalize

    def close(self) -> None:
        """Release bound values. Further use raises ClosedHandleError."""
        self._params.clear()
        self._finalized = None
        self._closed = True
