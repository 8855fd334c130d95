"""GoogleDriveFS: path-addressed file-system operations over Google Drive."""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from datetime import datetime, timedelta
from functools import partial
from typing import Any, Callable, Iterator, Optional, TypeVar, Union

from gdrivefs.controller import GoogleDriveController
from gdrivefs.errors import (
    DriveFSError,
    InvalidArgumentError,
    IsADirectoryError,
    NotADirectoryError,
    NotInitializedError,
    RemoteFailureError,
    annotate_error,
)
from gdrivefs.models import Node, NodeStat, SearchOptions
from gdrivefs.options import DEFAULT_CONNECTION_TIMEOUT, DriveFSOptions
from gdrivefs.tree import PathResolver
from gdrivefs.util.mime import DEFAULT_FILE_MIME, is_google_app
from gdrivefs.util.paths import split_parent
from gdrivefs.util.time import now_utc

T = TypeVar("T")

logger = logging.getLogger(__name__)

_OPERATION_MESSAGES: dict[str, str] = {
    "connect": "Failed to connect to Google Drive",
    "resolve": "Failed to resolve path",
    "readdir": "Failed to read directory",
    "mkdir": "Failed to create directory",
    "write_file": "Failed to write file",
    "read_file": "Failed to read file",
    "unlink": "Failed to delete file/directory",
    "rename": "Failed to rename/move",
    "stat": "Failed to get file stats",
    "search": "Failed to search",
    "copy": "Failed to copy file",
}


@contextmanager
def _operation_scope(operation: str, **details: Any) -> Iterator[None]:
    """Re-raise any failure once, annotated with the operation and its paths."""
    message = _OPERATION_MESSAGES[operation]
    try:
        yield
    except DriveFSError as exc:
        raise annotate_error(exc, message, operation=operation, **details) from exc
    except Exception as exc:
        raise RemoteFailureError(
            f"{message}: {exc}",
            details={"operation": operation, **details},
            cause=exc,
        ) from exc


class GoogleDriveFS:
    """
    File-system style API over a Drive folder.

    Paths are resolved through an in-memory mirror of the Drive hierarchy
    that is filled lazily: nothing is fetched until first referenced.

    Notes:
        - Overlapping operations may run concurrently: remote requests are
          serialized by the controller and the mirror tree is only touched on
          the event loop. Mutations of the same path from concurrent tasks are
          not ordered.
        - The session is reconnected lazily when older than
          `connection_timeout`. Reconnecting rebuilds the mirror tree.
    """

    def __init__(
        self,
        options: DriveFSOptions,
        *,
        controller_factory: Optional[Callable[[], GoogleDriveController]] = None,
    ) -> None:
        if controller_factory is None:
            controller_factory = partial(
                GoogleDriveController,
                options.auth_info,
                scopes=options.scopes,
                supports_all_drives=options.supports_all_drives,
                max_retries=options.max_retries,
            )

        self._init_state(
            root_id=options.root_id,
            controller_factory=controller_factory,
            connection_timeout=options.connection_timeout,
            default_mime_type=options.default_mime_type,
        )

    @classmethod
    def from_controller(
        cls,
        controller: Any,
        root_id: str,
        *,
        connection_timeout: timedelta = DEFAULT_CONNECTION_TIMEOUT,
        default_mime_type: str = DEFAULT_FILE_MIME,
    ) -> "GoogleDriveFS":
        """Create an instance around an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._init_state(
            root_id=root_id,
            controller_factory=lambda: controller,
            connection_timeout=connection_timeout,
            default_mime_type=default_mime_type,
        )
        return obj

    def _init_state(
        self,
        *,
        root_id: str,
        controller_factory: Callable[[], Any],
        connection_timeout: timedelta,
        default_mime_type: str,
    ) -> None:
        self._root_id = root_id
        self._controller_factory = controller_factory
        self._connection_timeout = connection_timeout
        self._default_mime_type = default_mime_type
        self._controller: Optional[Any] = None
        self._resolver: Optional[PathResolver] = None
        self._last_connect: Optional[datetime] = None
        self._connect_lock = asyncio.Lock()

    # ----------------------------
    # Session
    # ----------------------------
    @property
    def root(self) -> Optional[Node]:
        return self._resolver.root if self._resolver is not None else None

    @property
    def is_connected(self) -> bool:
        return self._controller is not None

    @property
    def last_connect(self) -> Optional[datetime]:
        return self._last_connect

    @property
    def resolver(self) -> PathResolver:
        """Return the current path resolver. Requires connect() first."""
        if self._resolver is None:
            raise NotInitializedError("Root node not initialized. Call connect() first.")
        return self._resolver

    async def connect(self) -> Any:
        """
        Build the Drive client, fetch the root folder and reset the mirror tree.

        Returns:
            The controller used for remote calls.

        Raises:
            InvalidCredentialsError: if credentials cannot be loaded.
            InvalidArgumentError: if the configured root is not a folder.
        """
        with _operation_scope("connect", root_id=self._root_id):
            controller = await asyncio.to_thread(self._controller_factory)
            info = await asyncio.to_thread(controller.get, self._root_id)
            if not info.is_folder:
                raise InvalidArgumentError(
                    "Root must be a folder",
                    details={"root_id": self._root_id, "mime_type": info.mime_type},
                )

            self._controller = controller
            self._resolver = PathResolver(controller, Node.from_file_info(info))
            self._last_connect = now_utc()

        logger.info("Connected to Google Drive root %s (%s)", info.name, self._root_id)
        return controller

    async def _auto_connect(self) -> None:
        # Overlapping operations share one connect.
        async with self._connect_lock:
            if self._controller is None or self._last_connect is None:
                await self.connect()
                return

            if now_utc() - self._last_connect > self._connection_timeout:
                logger.info("Session older than %s, reconnecting", self._connection_timeout)
                await self.connect()

    # ----------------------------
    # Public API
    # ----------------------------
    async def resolve(self, path: str) -> Node:
        """Return the mirror node for `path`, fetching missing segments."""
        await self._auto_connect()
        with _operation_scope("resolve", path=path):
            return await self.resolver.resolve(path)

    async def readdir(self, path: str = "/") -> list[Node]:
        """List a folder and mark it populated in the mirror tree."""
        await self._auto_connect()
        with _operation_scope("readdir", path=path):
            node = await self.resolver.resolve(path)
            if not node.is_directory():
                raise NotADirectoryError("Not a directory", details={"path": path})

            infos = await self._call(self._controller.list_children, node.id)
            logger.debug("Listed %d entries in %s", len(infos), path)
            return node.populate(infos)

    async def mkdir(self, path: str) -> Node:
        await self._auto_connect()
        with _operation_scope("mkdir", path=path):
            parent, name = await self._resolve_parent(path)
            info = await self._call(self._controller.create_folder, name, parent.id)

            node = Node.from_file_info(info)
            parent.add_child(node)
            logger.debug("Created folder %s (%s)", path, node.id)
            return node

    async def write_file(
        self,
        path: str,
        content: Union[str, bytes],
        *,
        mime_type: Optional[str] = None,
    ) -> Node:
        """
        Create `path`, or replace its content if a same-named file exists.

        `str` content is encoded as UTF-8.
        """
        await self._auto_connect()
        with _operation_scope("write_file", path=path):
            data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
            use_mime = mime_type or self._default_mime_type
            parent, name = await self._resolve_parent(path)

            existing = await self._call(
                self._controller.list_children,
                parent.id,
                name=name,
            )
            if not existing:
                info = await self._call(
                    self._controller.create_file,
                    name,
                    parent.id,
                    data,
                    mime_type=use_mime,
                )
                node = Node.from_file_info(info)
                parent.add_child(node)
                logger.debug("Created file %s (%s)", path, node.id)
                return node

            target = existing[0]
            if target.is_folder:
                raise IsADirectoryError("Is a directory", details={"path": path})

            info = await self._call(
                self._controller.update_file,
                target.file_id,
                data,
                name=name,
                mime_type=use_mime,
            )
            node = parent.get_child(info.file_id)
            if node is None:
                node = Node.from_file_info(info)
                parent.add_child(node)
            else:
                node.refresh(info)
            logger.debug("Updated file %s (%s)", path, node.id)
            return node

    async def read_file(
        self,
        path: str,
        *,
        encoding: Optional[str] = "utf-8",
    ) -> Union[str, bytes]:
        """Return the content of `path`, decoded unless `encoding` is None."""
        await self._auto_connect()
        with _operation_scope("read_file", path=path):
            node = await self.resolver.resolve(path)
            if node.is_directory():
                raise IsADirectoryError(
                    "Cannot read a directory as a file",
                    details={"path": path},
                )
            if is_google_app(node.mime_type):
                raise InvalidArgumentError(
                    "Google Apps documents have no downloadable content",
                    details={"path": path, "mime_type": node.mime_type},
                )

            data = await self._call(self._controller.read_content, node.id)
            if encoding is None:
                return data
            try:
                return data.decode(encoding)
            except UnicodeDecodeError as exc:
                raise InvalidArgumentError(
                    f"Content is not valid {encoding} text",
                    details={"path": path, "encoding": encoding},
                    cause=exc,
                ) from exc

    async def unlink(self, path: str) -> None:
        """Delete a file or folder and detach it from the mirror tree."""
        await self._auto_connect()
        with _operation_scope("unlink", path=path):
            node = await self.resolver.resolve(path)
            if node is self.resolver.root:
                raise InvalidArgumentError("Root is protected: cannot delete root")

            await self._call(self._controller.delete, node.id)

            parent = node.parent
            if parent is not None:
                parent.remove_child(node.id)
            logger.debug("Deleted %s (%s)", path, node.id)

    async def rename(self, old_path: str, new_path: str) -> Node:
        """
        Rename and/or move a node.

        The node keeps its id; only its name and parent change.
        """
        await self._auto_connect()
        with _operation_scope("rename", path=old_path, destination=new_path):
            node = await self.resolver.resolve(old_path)
            if node is self.resolver.root:
                raise InvalidArgumentError("Root is protected: cannot move root")

            new_parent, new_name = await self._resolve_parent(new_path)
            if new_parent is node or node.is_ancestor_of(new_parent):
                raise InvalidArgumentError(
                    "Cannot move a folder into itself",
                    details={"path": old_path, "destination": new_path},
                )

            old_parent = node.parent
            moving = old_parent is None or old_parent.id != new_parent.id
            info = await self._call(
                self._controller.update,
                node.id,
                name=new_name,
                add_parents=new_parent.id if moving else None,
                remove_parents=old_parent.id if moving and old_parent is not None else None,
            )

            if old_parent is not None:
                old_parent.remove_child(node.id)
            node.refresh(info)
            node.name = new_name
            new_parent.add_child(node)
            logger.debug("Renamed %s -> %s (%s)", old_path, new_path, node.id)
            return node

    async def stat(self, path: str) -> NodeStat:
        """Attributes derived from the cached node; no listing is issued."""
        await self._auto_connect()
        with _operation_scope("stat", path=path):
            node = await self.resolver.resolve(path)
            if node.is_directory():
                mtime = node.get_last_modified() or node.modified_time
            else:
                mtime = node.modified_time

            return NodeStat(
                is_directory=node.is_directory(),
                is_file=node.is_file(),
                size=node.get_size(),
                mtime=mtime,
                ctime=node.created_time,
            )

    async def search(
        self,
        options: Optional[SearchOptions] = None,
        path: str = "/",
    ) -> list[Node]:
        """
        Search the children of `path` with `options`.

        Results are detached nodes; they are not merged into the mirror tree.
        """
        await self._auto_connect()
        criteria = options if options is not None else SearchOptions()
        with _operation_scope("search", path=path):
            parent = await self.resolver.resolve(path)
            if not parent.is_directory():
                raise NotADirectoryError("Not a directory", details={"path": path})

            infos = await self._call(self._controller.search, parent.id, criteria)
            return [Node.from_file_info(info) for info in infos]

    async def copy(self, source_path: str, dest_path: str) -> Node:
        """Server-side copy of a file to `dest_path`."""
        await self._auto_connect()
        with _operation_scope("copy", path=source_path, destination=dest_path):
            source = await self.resolver.resolve(source_path)
            if source.is_directory():
                raise InvalidArgumentError(
                    "Folders cannot be copied",
                    details={"path": source_path},
                )

            dest_parent, name = await self._resolve_parent(dest_path)
            info = await self._call(
                self._controller.copy,
                source.id,
                dest_parent.id,
                new_name=name,
            )

            node = Node.from_file_info(info)
            dest_parent.add_child(node)
            logger.debug("Copied %s -> %s (%s)", source_path, dest_path, node.id)
            return node

    # ----------------------------
    # Internals
    # ----------------------------
    async def _resolve_parent(self, path: str) -> tuple[Node, str]:
        parent_path, name = split_parent(path)
        if not name:
            raise InvalidArgumentError("Path has no name component", details={"path": path})

        parent = await self.resolver.resolve(parent_path)
        if not parent.is_directory():
            raise NotADirectoryError(
                f"{parent_path} is not a directory",
                details={"path": path, "parent_path": parent_path},
            )
        return parent, name

    async def _call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        return await asyncio.to_thread(func, *args, **kwargs)
