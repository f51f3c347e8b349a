"""
chronocal.engines.properties
----------------------------
Reader for the `key=value` resources that describe calendar variants
(calendars.properties and the per-variant Hijrah tables).

Search order for a resource name:
  1) CalendarConfig.calendars_dir (CHRONOCAL_CALENDARS_DIR)
  2) user cache ($XDG_CACHE_HOME/chronocal or ~/.cache/chronocal)
  3) packaged data (chronocal.engines.data)
"""

from __future__ import annotations

import importlib.resources
import logging
from typing import Dict, Iterable, Optional

from ..core.config import CalendarConfig
from ..core.errors import CalendarConfigError

logger = logging.getLogger(__name__)

DATA_PACKAGE = "chronocal.engines.data"


def parse_properties(lines: Iterable[str], *, resource: str = "<string>") -> Dict[str, str]:
    """
    Minimal .properties grammar: `#`/`!` comments, blank lines, and
    `key=value` or `key:value` pairs with surrounding whitespace stripped.
    """
    out: Dict[str, str] = {}
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        cut = min((i for i in (line.find("="), line.find(":")) if i >= 0), default=-1)
        if cut <= 0:
            raise CalendarConfigError(
                f"{resource}:{lineno}: expected key=value, got {raw.rstrip()!r}", resource=resource
            )
        out[line[:cut].strip()] = line[cut + 1:].strip()
    return out


def read_resource_text(name: str, config: Optional[CalendarConfig] = None) -> str:
    cfg = config or CalendarConfig()

    for d in cfg.search_dirs():
        path = d / name
        if path.is_file():
            logger.debug("reading %s from %s", name, path)
            try:
                return path.read_text(encoding="utf-8")
            except OSError as e:
                raise CalendarConfigError(f"cannot read {path}: {e}", resource=str(path)) from e

    res = importlib.resources.files(DATA_PACKAGE).joinpath(name)
    if not res.is_file():
        raise CalendarConfigError(f"calendar resource not found: {name}", resource=name)
    logger.debug("reading %s from packaged data", name)
    return res.read_text(encoding="utf-8")


def load_properties(name: str, config: Optional[CalendarConfig] = None) -> Dict[str, str]:
    return parse_properties(read_resource_text(name, config).splitlines(), resource=name)
