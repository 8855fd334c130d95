"""Drive `q` query builders."""

from __future__ import annotations

from typing import Optional

from gdrivefs.models import SearchOptions
from gdrivefs.util.time import to_rfc3339


def quote(value: str) -> str:
    """Quote a string literal for a Drive query."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def build_parent_query(
    parent_id: str,
    *,
    name: Optional[str] = None,
    include_trashed: bool = False,
) -> str:
    parts = [f"{quote(parent_id)} in parents"]
    if name is not None:
        parts.append(f"name = {quote(name)}")
    if not include_trashed:
        parts.append("trashed = false")
    return " and ".join(parts)


def build_search_query(parent_id: str, options: SearchOptions) -> str:
    """
    Conjunction of the server-side criteria in `options`, scoped to `parent_id`.

    Size bounds are not part of the Drive query grammar; see
    `SearchOptions.size_matches`.
    """
    parts = [f"{quote(parent_id)} in parents", "trashed = false"]

    if options.name:
        parts.append(f"name contains {quote(options.name)}")
    if options.mime_type:
        parts.append(f"mimeType = {quote(options.mime_type)}")
    if options.modified_after is not None:
        parts.append(f"modifiedTime > {quote(to_rfc3339(options.modified_after))}")
    if options.modified_before is not None:
        parts.append(f"modifiedTime < {quote(to_rfc3339(options.modified_before))}")

    return " and ".join(parts)
