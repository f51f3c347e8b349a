from __future__ import annotations

from typing import Any, Optional


class CalendarError(Exception):
    """Base error."""


class DateOutOfRangeError(CalendarError, ValueError):
    """A field value lies outside the range the chronology defines for it."""

    def __init__(self, message: str, *, field: Any = None, value: Optional[int] = None):
        super().__init__(message)
        self.field = field
        self.value = value


class DateResolutionError(CalendarError):
    """
    Two derivable values for the same field disagree, a STRICT check found the
    resolved date drifted, or an era / year-of-era combination is invalid.
    """

    def __init__(
        self,
        message: str,
        *,
        field: Any = None,
        existing: Optional[int] = None,
        value: Optional[int] = None,
    ):
        super().__init__(message)
        self.field = field
        self.existing = existing
        self.value = value


class UnsupportedFieldError(CalendarError):
    """Raised when a chronology does not support a field or unit."""


class CalendarArithmeticError(CalendarError, ArithmeticError):
    """Raised when a date/time carry leaves the signed 64-bit range."""


class CalendarConfigError(CalendarError):
    """Raised when a calendar configuration resource is missing or malformed."""

    def __init__(self, message: str, *, resource: Optional[str] = None, key: Optional[str] = None):
        super().__init__(message)
        self.resource = resource
        self.key = key
