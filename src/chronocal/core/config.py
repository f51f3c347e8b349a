"""
chronocal.core.config
---------------------
Process-level configuration, read from the environment once at bootstrap.

  CHRONOCAL_CALENDARS_DIR              directory searched first for calendar resources
  XDG_CACHE_HOME                       user cache root (default ~/.cache); chronocal/ below it
  CHRONOCAL_JAPANESE_SUPPLEMENTAL_ERA  name=...,abbr=...,since=yyyy-MM-dd
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

ENV_CALENDARS_DIR = "CHRONOCAL_CALENDARS_DIR"
ENV_SUPPLEMENTAL_ERA = "CHRONOCAL_JAPANESE_SUPPLEMENTAL_ERA"


@dataclass(frozen=True)
class CalendarConfig:
    calendars_dir: Optional[Path] = None
    cache_dir: Optional[Path] = None
    japanese_supplemental_era: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CalendarConfig":
        env = os.environ if environ is None else environ

        p = env.get(ENV_CALENDARS_DIR, "").strip()
        calendars_dir = Path(p).expanduser() if p else None

        xdg = env.get("XDG_CACHE_HOME", "").strip()
        cache_dir = (Path(xdg).expanduser() / "chronocal") if xdg else (Path.home() / ".cache" / "chronocal")

        era = env.get(ENV_SUPPLEMENTAL_ERA, "").strip() or None
        return cls(calendars_dir=calendars_dir, cache_dir=cache_dir, japanese_supplemental_era=era)

    def search_dirs(self) -> Tuple[Path, ...]:
        """Directories consulted before the packaged data, in order."""
        return tuple(d for d in (self.calendars_dir, self.cache_dir) if d is not None)
