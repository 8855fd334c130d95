"""Field definitions for Google Drive API responses."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "modifiedTime,"
    "createdTime,"
    "size"
)

LIST_FIELDS: str = f"nextPageToken,files({FILE_FIELDS})"

# Drive rejects larger page sizes for files.list.
MAX_PAGE_SIZE: int = 1000
