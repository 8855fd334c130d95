"""Mirror node: one remote object and its locally known relationships."""

from __future__ import annotations

import weakref
from datetime import datetime
from typing import Iterable, Optional

from gdrivefs.util.mime import is_folder

from .file_info import FileInfo


class Node:
    """
    A file or folder of the mirror tree.

    `children` is None until something about the folder's contents is known.
    `populated` is True only once a full listing has been merged; children
    attached by path resolution alone leave it False.

    The parent link is a weak reference: a node is owned by its parent's
    `children` list only.
    """

    def __init__(
        self,
        id: str,
        name: str,
        mime_type: str,
        *,
        size: int = 0,
        modified_time: Optional[datetime] = None,
        created_time: Optional[datetime] = None,
    ) -> None:
        self.id = id
        self.name = name
        self.mime_type = mime_type
        self.size = size
        self.modified_time = modified_time
        self.created_time = created_time
        self.children: Optional[list[Node]] = None
        self.populated = False
        self._parent: Optional[weakref.ref[Node]] = None

    @classmethod
    def from_file_info(cls, info: FileInfo) -> Node:
        return cls(
            info.file_id,
            info.name,
            info.mime_type,
            size=info.size or 0,
            modified_time=info.modified_time,
            created_time=info.created_time,
        )

    def __repr__(self) -> str:
        kind = "Folder" if self.is_directory() else "File"
        return f"<{kind} id={self.id!r} name={self.name!r}>"

    @property
    def parent(self) -> Optional[Node]:
        if self._parent is None:
            return None
        return self._parent()

    @parent.setter
    def parent(self, node: Optional[Node]) -> None:
        self._parent = weakref.ref(node) if node is not None else None

    def is_directory(self) -> bool:
        return is_folder(self.mime_type)

    def is_file(self) -> bool:
        return not self.is_directory()

    # ----------------------------
    # Children
    # ----------------------------
    def add_child(self, child: Node) -> None:
        """
        Append `child` and point its parent link here.

        No-op on files. Duplicates are not detected; callers must not add a
        node that is already present.
        """
        if not self.is_directory():
            return
        if self.children is None:
            self.children = []
        self.children.append(child)
        child.parent = self

    def remove_child(self, child_id: str) -> bool:
        """Remove the first child with `child_id`. Returns whether one was removed."""
        if self.children is None:
            return False
        for index, child in enumerate(self.children):
            if child.id == child_id:
                del self.children[index]
                if child.parent is self:
                    child.parent = None
                return True
        return False

    def find_child(self, name: str) -> Optional[Node]:
        """First cached child named `name` (siblings may share a name)."""
        for child in self.children or ():
            if child.name == name:
                return child
        return None

    def get_child(self, child_id: str) -> Optional[Node]:
        for child in self.children or ():
            if child.id == child_id:
                return child
        return None

    def populate(self, infos: Iterable[FileInfo]) -> list[Node]:
        """
        Replace the child set with a complete listing and mark it populated.

        Children already cached under the same id are kept (and refreshed) so
        their own subtrees survive; children missing from the listing are
        detached.
        """
        known = {child.id: child for child in self.children or ()}
        fresh: list[Node] = []
        for info in infos:
            child = known.pop(info.file_id, None)
            if child is None:
                child = Node.from_file_info(info)
            else:
                child.refresh(info)
            child.parent = self
            fresh.append(child)

        for stale in known.values():
            if stale.parent is self:
                stale.parent = None

        self.children = fresh
        self.populated = True
        return list(fresh)

    def refresh(self, info: FileInfo) -> None:
        """Update metadata in place; identity and children are kept."""
        self.name = info.name
        self.mime_type = info.mime_type
        self.size = info.size or 0
        self.modified_time = info.modified_time
        self.created_time = info.created_time

    # ----------------------------
    # Derived attributes
    # ----------------------------
    def get_size(self) -> int:
        """
        Byte size of a file, or the sum over cached children of a folder.

        Unlisted subtrees count as empty.
        """
        if self.is_file():
            return self.size
        return sum(child.get_size() for child in self.children or ())

    def get_last_modified(self) -> Optional[datetime]:
        if self.is_file():
            return self.modified_time
        dates = [
            dt
            for dt in (child.get_last_modified() for child in self.children or ())
            if dt is not None
        ]
        return max(dates) if dates else None

    def get_path(self) -> str:
        """
        Slash-separated path from the mirror root (the root itself is `/`).

        The path is built from parent links, so it is only meaningful while
        the node is attached. A detached node (a search result, or one removed
        by unlink or readdir) yields `/` like the root, and its descendants
        yield paths relative to it.
        """
        parts: list[str] = []
        node: Optional[Node] = self
        while node is not None and node.parent is not None:
            parts.append(node.name)
            node = node.parent
        return "/" + "/".join(reversed(parts))

    def is_ancestor_of(self, other: Node) -> bool:
        node = other.parent
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False
