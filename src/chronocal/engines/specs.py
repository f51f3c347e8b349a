"""
chronocal.engines.specs
-----------------------
Pure data descriptions of the built-in chronologies, plus the Hijrah
variants listed in calendars.properties.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..core.config import CalendarConfig
from ..core.errors import CalendarConfigError
from ..core.types import ChronologySpec
from .eras import JapaneseParams
from .hijrah_backend import HijrahParams
from .iso_backend import IsoLikeParams
from .properties import load_properties

logger = logging.getLogger(__name__)

CALENDARS_RESOURCE = "calendars.properties"
HIJRAH_PREFIX = "calendar.hijrah."

# Aliases under which the first configured Hijrah variant is also registered.
HIJRAH_ALIASES = ("Hijrah", "islamic")


# ============================================================
# ISO AND ITS AFFINE DERIVATIVES
# ============================================================

ISO = ChronologySpec(
    id="ISO",
    calendar_type="iso8601",
    payload=IsoLikeParams(),
)

# Republic of China calendar: year 1 = 1912.
MINGUO = ChronologySpec(
    id="Minguo",
    calendar_type="roc",
    payload=IsoLikeParams(year_offset=1911, prior_era="BEFORE_ROC", current_era="ROC"),
)

# Buddhist era: year 2543 = 2000.
THAI_BUDDHIST = ChronologySpec(
    id="ThaiBuddhist",
    calendar_type="buddhist",
    payload=IsoLikeParams(year_offset=-543, prior_era="BEFORE_BE", current_era="BE"),
)

JAPANESE = ChronologySpec(
    id="Japanese",
    calendar_type="japanese",
    payload=JapaneseParams(),
)

ALL_SPECS: Dict[str, ChronologySpec] = {
    s.id: s for s in (ISO, MINGUO, THAI_BUDDHIST, JAPANESE)
}


def builtin_specs(config: Optional[CalendarConfig] = None) -> List[ChronologySpec]:
    cfg = config or CalendarConfig()
    out = []
    for spec in ALL_SPECS.values():
        if spec is JAPANESE and cfg.japanese_supplemental_era:
            spec = spec.tweak(supplemental_era=cfg.japanese_supplemental_era)
        out.append(spec)
    return out


# ============================================================
# HIJRAH VARIANTS
# ============================================================

def hijrah_specs(config: Optional[CalendarConfig] = None) -> List[ChronologySpec]:
    """
    One spec per `calendar.hijrah.<id>=<resource>` entry, in file order.
    Each entry needs a matching `calendar.hijrah.<id>.type`.
    """
    cfg = config or CalendarConfig()
    props = load_properties(CALENDARS_RESOURCE, cfg)

    out: List[ChronologySpec] = []
    for key, resource in props.items():
        if not key.startswith(HIJRAH_PREFIX) or key.endswith(".type"):
            continue
        variant = key[len(HIJRAH_PREFIX):]
        if not variant:
            raise CalendarConfigError("calendar id is empty", resource=CALENDARS_RESOURCE, key=key)
        cal_type = props.get(key + ".type", "")
        if not cal_type:
            raise CalendarConfigError(
                f"calendarType is missing or empty for: {key}", resource=CALENDARS_RESOURCE, key=key + ".type"
            )
        out.append(ChronologySpec(
            id=variant,
            calendar_type=cal_type,
            payload=HijrahParams(variant_id=variant, calendar_type=cal_type, resource=resource, config=cfg),
        ))
    logger.debug("calendars.properties lists Hijrah variants: %s", [s.id for s in out])
    return out
