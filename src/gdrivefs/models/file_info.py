"""Data model for remote Drive entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from gdrivefs.util.mime import is_folder


@dataclass(slots=True)
class FileInfo:
    """
    One Drive entry as returned by the remote store.

    Notes:
        - `size` is None for folders and Google-apps documents (Drive does not
          report a byte size for them).
    """

    file_id: str
    name: str
    mime_type: str

    modified_time: Optional[datetime] = None
    created_time: Optional[datetime] = None
    size: Optional[int] = None

    @property
    def is_folder(self) -> bool:
        return is_folder(self.mime_type)
