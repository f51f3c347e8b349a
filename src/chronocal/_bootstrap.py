from __future__ import annotations

import logging
from typing import Optional

from chronocal.core.config import CalendarConfig
from chronocal.core.errors import CalendarConfigError
from chronocal.core.registry import ChronologyRegistry
from chronocal.engines.factory import make_chronology
from chronocal.engines.specs import HIJRAH_ALIASES, builtin_specs, hijrah_specs

logger = logging.getLogger(__name__)


def build_registry(config: Optional[CalendarConfig] = None) -> ChronologyRegistry:
    """
    Built-in chronologies plus every Hijrah variant whose table loads.
    Hijrah tables are built here, eagerly; a variant that fails is logged
    and left out.
    """
    cfg = config if config is not None else CalendarConfig.from_env()
    reg = ChronologyRegistry()
    for spec in builtin_specs(cfg):
        reg.register(make_chronology(spec))

    try:
        variants = hijrah_specs(cfg)
    except CalendarConfigError as e:
        logger.error("no Hijrah calendars registered: %s", e)
        variants = []

    first = None
    for spec in variants:
        chrono = make_chronology(spec)
        try:
            chrono.backend.table()
        except CalendarConfigError as e:
            logger.error("Hijrah calendar %s not registered: %s", spec.id, e)
            continue
        reg.register(chrono)
        if first is None:
            first = chrono
    if first is not None:
        for alias in HIJRAH_ALIASES:
            reg.register(first, alias)
    return reg
