"""Mirror tree resolution for gdrivefs."""

from __future__ import annotations

from .resolver import PathResolver

__all__ = ["PathResolver"]
