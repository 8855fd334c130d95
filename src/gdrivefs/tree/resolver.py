"""Path resolution over the lazily built mirror tree."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from gdrivefs.errors import NotADirectoryError, PathNotFoundError
from gdrivefs.models import FileInfo, Node
from gdrivefs.util.paths import join_path, split_path

logger = logging.getLogger(__name__)


class ChildLister(Protocol):
    def list_children(self, parent_id: str, *, name: str | None = None) -> list[FileInfo]:
        ...


class PathResolver:
    """
    Map slash-separated paths to mirror nodes, fetching on cache miss.

    Each unresolved segment costs one name-filtered listing of its parent.
    Only the matched child is cached; the parent is not marked populated,
    so a later readdir still lists it in full.

    Tasks that miss on the same segment concurrently share one node: the
    fetched entry is attached only if its id is not already cached.
    """

    def __init__(self, controller: ChildLister, root: Node) -> None:
        self._controller = controller
        self._root = root

    @property
    def root(self) -> Node:
        return self._root

    async def resolve(self, path: str) -> Node:
        parts = split_path(path)
        current = self._root

        for index, segment in enumerate(parts):
            parent_path = join_path(parts[:index])
            if not current.is_directory():
                raise NotADirectoryError(
                    f"{parent_path} is not a directory",
                    details={"path": path, "parent_path": parent_path},
                )

            child = current.find_child(segment)
            if child is None:
                child = await self._fetch_child(current, segment, path, parent_path)
            else:
                logger.debug("Cache hit: %r in %s", segment, parent_path)
            current = child

        return current

    async def _fetch_child(
        self,
        parent: Node,
        segment: str,
        path: str,
        parent_path: str,
    ) -> Node:
        logger.debug("Cache miss: looking up %r in %s", segment, parent_path)
        infos = await asyncio.to_thread(
            self._controller.list_children,
            parent.id,
            name=segment,
        )
        if not infos:
            raise PathNotFoundError(
                f"Path not found: {path} (no {segment!r} in {parent_path})",
                details={"path": path, "segment": segment, "parent_path": parent_path},
            )

        # Siblings may share a name; the first entry returned wins.
        info = infos[0]
        existing = parent.get_child(info.file_id)
        if existing is not None:
            return existing

        child = Node.from_file_info(info)
        parent.add_child(child)
        return child
