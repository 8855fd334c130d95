"""Stat result model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True, frozen=True)
class NodeStat:
    """File-system style attributes derived from a cached node."""

    is_directory: bool
    is_file: bool
    size: int
    mtime: Optional[datetime]
    ctime: Optional[datetime]
