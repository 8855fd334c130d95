"""Search criteria model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True, frozen=True)
class SearchOptions:
    """
    Conjunctive search criteria scoped to one parent folder.

    Notes:
        - `name` is a substring match; `mime_type` is exact.
        - `min_size`/`max_size` are inclusive and applied to the listing
          client-side (Drive queries cannot filter on size).
        - `modified_after`/`modified_before` are strict and must be
          timezone-aware.
    """

    name: Optional[str] = None
    mime_type: Optional[str] = None
    min_size: Optional[int] = None
    max_size: Optional[int] = None
    modified_after: Optional[datetime] = None
    modified_before: Optional[datetime] = None
    order_by: str = "modifiedTime desc"
    limit: int = 100

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ValueError("SearchOptions.limit must be positive")
        for key in ("min_size", "max_size"):
            value = getattr(self, key)
            if value is not None and value < 0:
                raise ValueError(f"SearchOptions.{key} must not be negative")

    def size_matches(self, size: Optional[int]) -> bool:
        """Check `size` against the bounds; entries without a size count as 0."""
        value = size or 0
        if self.min_size is not None and value < self.min_size:
            return False
        if self.max_size is not None and value > self.max_size:
            return False
        return True
