"""
chronocal.engines.factory
-------------------------
Transforms pure data specifications into live Chronology objects.
"""

from __future__ import annotations

from ..core.types import ChronologySpec
from .chronology import Chronology
from .eras import MEIJI_6, JapaneseEraSystem, JapaneseParams, SingleEraSystem, TwoEraSystem
from .hijrah_backend import HijrahBackend, HijrahParams
from .iso_backend import IsoBackend, IsoLikeParams
from .resolver import FieldResolver, IsoFieldResolver, JapaneseFieldResolver


def make_chronology(spec: ChronologySpec) -> Chronology:
    """The universal entry point."""
    p = spec.payload

    if isinstance(p, IsoLikeParams):
        resolver = IsoFieldResolver if p.year_offset == 0 and p.floor is None else FieldResolver
        return Chronology(
            spec.id, spec.calendar_type,
            backend=IsoBackend(p),
            eras=TwoEraSystem(p.prior_era, p.current_era),
            resolver=resolver,
        )

    if isinstance(p, HijrahParams):
        return Chronology(
            spec.id, spec.calendar_type,
            backend=HijrahBackend(p),
            eras=SingleEraSystem("AH"),
        )

    if isinstance(p, JapaneseParams):
        backend = IsoBackend(IsoLikeParams(
            floor=MEIJI_6, floor_message="JapaneseDate before Meiji 6 is not supported",
        ))
        return Chronology(
            spec.id, spec.calendar_type,
            backend=backend,
            eras=JapaneseEraSystem(p.supplemental_era),
            resolver=JapaneseFieldResolver,
        )

    raise TypeError(f"Unknown chronology params type: {type(p)}")
