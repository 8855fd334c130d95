"""Public model exports for gdrivefs."""

from __future__ import annotations

from .file_info import FileInfo
from .node import Node
from .search import SearchOptions
from .stat import NodeStat

__all__ = [
    "FileInfo",
    "Node",
    "NodeStat",
    "SearchOptions",
]
