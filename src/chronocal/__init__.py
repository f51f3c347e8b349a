"""chronocal public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    chronology,
    chronology_info,
    convert,
    date,
    date_epoch_day,
    date_era,
    eras,
    get_registry,
    list_chronologies,
    make_chronology,
    register_chronology,
    resolve,
    set_registry,
    today,
)
from .core.date import CalendarDate
from .core.datetime import ChronoLocalDateTime, ChronoZonedDateTime
from .core.errors import (
    CalendarArithmeticError,
    CalendarConfigError,
    CalendarError,
    DateOutOfRangeError,
    DateResolutionError,
    UnsupportedFieldError,
)
from .core.fields import ChronoField, ResolverStyle, Unit, ValueRange
from .core.period import ChronoPeriod
from .core.types import Era
from .engines.chronology import Chronology

__all__ = [
    "chronology",
    "chronology_info",
    "convert",
    "date",
    "date_epoch_day",
    "date_era",
    "eras",
    "get_registry",
    "list_chronologies",
    "make_chronology",
    "register_chronology",
    "resolve",
    "set_registry",
    "today",
    "CalendarDate",
    "ChronoLocalDateTime",
    "ChronoZonedDateTime",
    "ChronoPeriod",
    "Chronology",
    "ChronoField",
    "ResolverStyle",
    "Unit",
    "ValueRange",
    "Era",
    "CalendarError",
    "DateOutOfRangeError",
    "DateResolutionError",
    "UnsupportedFieldError",
    "CalendarArithmeticError",
    "CalendarConfigError",
]
