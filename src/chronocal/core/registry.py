from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from ..engines.chronology import Chronology

logger = logging.getLogger(__name__)


@dataclass
class ChronologyRegistry:
    """
    Chronologies by id, with a secondary lookup by calendar type.
    The first registration of an id wins.
    """
    _by_id: Dict[str, "Chronology"] = field(default_factory=dict)
    _by_type: Dict[str, "Chronology"] = field(default_factory=dict)

    def register(self, chrono: "Chronology", id: Optional[str] = None) -> Optional["Chronology"]:
        """
        Register under `id` (default chrono.id). Returns the chronology
        already registered under that id, leaving it in place, or None.
        """
        key = id or chrono.id
        prev = self._by_id.get(key)
        if prev is not None:
            if prev is not chrono:
                logger.warning("chronology id %r already registered; keeping %r", key, prev)
            return prev
        self._by_id[key] = chrono
        if chrono.calendar_type:
            self._by_type.setdefault(chrono.calendar_type, chrono)
        return None

    def get(self, name: str) -> "Chronology":
        """Look up by id, then by calendar type."""
        if name in self._by_id:
            return self._by_id[name]
        if name in self._by_type:
            return self._by_type[name]
        raise KeyError(f"Unknown chronology '{name}'. Available: {self.list()}")

    def list(self) -> List[str]:
        return sorted(self._by_id.keys())

    def available(self) -> List["Chronology"]:
        """Distinct chronologies (aliases collapsed), ordered by id."""
        seen: Dict[int, "Chronology"] = {}
        for c in self._by_id.values():
            seen.setdefault(id(c), c)
        return sorted(seen.values(), key=lambda c: c.id)

    def __contains__(self, name: object) -> bool:
        return name in self._by_id or name in self._by_type
