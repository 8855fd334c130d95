"""Slash-separated path helpers."""

from __future__ import annotations


def split_path(path: str) -> list[str]:
    """
    Split `path` into segments, discarding empty ones.

    `/`, `` and trailing slashes all denote the root (empty list).
    """
    return [part for part in (path or "").split("/") if part]


def join_path(parts: list[str]) -> str:
    """Join segments into an absolute path (`/` for no segments)."""
    return "/" + "/".join(parts)


def split_parent(path: str) -> tuple[str, str]:
    """
    Split `path` into (parent path, leaf name).

    The root has no leaf: `split_parent("/")` returns `("/", "")`.
    """
    parts = split_path(path)
    if not parts:
        return "/", ""
    return join_path(parts[:-1]), parts[-1]
