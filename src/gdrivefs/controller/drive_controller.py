"""Google Drive API controller (internal use only)."""

from __future__ import annotations

import io
import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, TypeVar

from gdrivefs.auth import AuthInfo, client_for
from gdrivefs.errors import (
    ApiError,
    HttpErrorInfo,
    NetworkError,
    RateLimitError,
    map_http_error,
)
from gdrivefs.models import FileInfo, SearchOptions
from gdrivefs.util.mime import FOLDER_MIME
from gdrivefs.util.time import parse_rfc3339

from .fields import FILE_FIELDS, LIST_FIELDS, MAX_PAGE_SIZE
from .query import build_parent_query, build_search_query

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class GoogleDriveController:
    """
    Drive API controller (internal only).

    Notes:
        - The Drive `service` object is NOT exposed.
        - `supports_all_drives` is applied to all requests consistently.
        - Transient failures (429, network, 5xx) are retried here; callers
          above this layer never retry.
        - Requests are serialized per controller: the underlying `httplib2.Http`
          is not thread-safe and callers run requests on worker threads.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
        max_retries: int = 3,
    ) -> None:
        self._supports_all_drives = supports_all_drives
        self._retry_policy = _RetryPolicy(max_retries=max_retries)
        self._request_lock = threading.Lock()

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = client_for(auth_info)
        self._service = client.build_drive_service(use_scopes, ensure_valid=True)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
        max_retries: int = 3,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._retry_policy = _RetryPolicy(max_retries=max_retries)
        obj._request_lock = threading.Lock()
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def get(self, file_id: str) -> FileInfo:
        req = self._service.files().get(
            fileId=file_id,
            fields=FILE_FIELDS,
            **self._common_get_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_file_info(data)

    def list_children(
        self,
        parent_id: str,
        *,
        name: Optional[str] = None,
    ) -> list[FileInfo]:
        """All non-trashed children of `parent_id`, optionally with exact `name`."""
        q = build_parent_query(parent_id, name=name)
        return self._find_by_query(q)

    def search(self, parent_id: str, options: SearchOptions) -> list[FileInfo]:
        """
        Children of `parent_id` matching `options`, server-ordered, at most `limit`.

        Size bounds are applied to each page as it arrives; paging continues
        until `limit` entries match or the listing is exhausted.
        """
        q = build_search_query(parent_id, options)
        return self._find_by_query(
            q,
            order_by=options.order_by,
            limit=options.limit,
            keep=lambda info: options.size_matches(info.size),
        )

    def create_folder(self, name: str, parent_id: str) -> FileInfo:
        body = {"name": name, "mimeType": FOLDER_MIME, "parents": [parent_id]}
        req = self._service.files().create(
            body=body,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_file_info(data)

    def create_file(
        self,
        name: str,
        parent_id: str,
        content: bytes,
        *,
        mime_type: str,
    ) -> FileInfo:
        body = {"name": name, "parents": [parent_id]}
        req = self._service.files().create(
            body=body,
            media_body=_media_upload(content, mime_type),
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_file_info(data)

    def update_file(
        self,
        file_id: str,
        content: bytes,
        *,
        name: Optional[str] = None,
        mime_type: str,
    ) -> FileInfo:
        """Replace the content of `file_id` (and optionally its name)."""
        body: dict[str, Any] = {}
        if name is not None:
            body["name"] = name

        req = self._service.files().update(
            fileId=file_id,
            body=body,
            media_body=_media_upload(content, mime_type),
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_file_info(data)

    def update(
        self,
        file_id: str,
        *,
        name: Optional[str] = None,
        add_parents: Optional[str] = None,
        remove_parents: Optional[str] = None,
    ) -> FileInfo:
        """
        Rename and/or re-parent `file_id` in one request.

        Note:
            The parent swap is atomic at Drive; `add_parents`/`remove_parents`
            are comma-separated id lists as Drive expects.
        """
        body: dict[str, Any] = {}
        if name is not None:
            body["name"] = name

        kwargs: dict[str, Any] = {}
        if add_parents:
            kwargs["addParents"] = add_parents
        if remove_parents:
            kwargs["removeParents"] = remove_parents

        req = self._service.files().update(
            fileId=file_id,
            body=body,
            fields=FILE_FIELDS,
            **kwargs,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_file_info(data)

    def copy(
        self,
        file_id: str,
        new_parent_id: str,
        *,
        new_name: Optional[str] = None,
    ) -> FileInfo:
        body: dict[str, Any] = {"parents": [new_parent_id]}
        if new_name is not None:
            body["name"] = new_name

        req = self._service.files().copy(
            fileId=file_id,
            body=body,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_file_info(data)

    def delete(self, file_id: str) -> None:
        req = self._service.files().delete(
            fileId=file_id,
            **self._common_write_kwargs(),
        )
        self._execute(req.execute)

    def read_content(self, file_id: str) -> bytes:
        """Download the raw content of `file_id` into memory."""
        from googleapiclient.http import MediaIoBaseDownload

        req = self._service.files().get_media(
            fileId=file_id,
            **self._common_get_kwargs(),
        )

        buffer = io.BytesIO()
        downloader = MediaIoBaseDownload(buffer, req)
        done = False
        while not done:
            _status, done = self._execute(downloader.next_chunk)
        return buffer.getvalue()

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_get_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _common_write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _find_by_query(
        self,
        q: str,
        *,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        keep: Optional[Callable[[FileInfo], bool]] = None,
    ) -> list[FileInfo]:
        all_files: list[FileInfo] = []
        page_token: Optional[str] = None

        extra: dict[str, Any] = {}
        if order_by:
            extra["orderBy"] = order_by
        if limit is not None:
            extra["pageSize"] = min(limit, MAX_PAGE_SIZE)

        while True:
            req = self._service.files().list(
                q=q,
                fields=LIST_FIELDS,
                pageToken=page_token,
                **extra,
                **self._common_list_kwargs(),
            )
            data = self._execute(req.execute)
            for f in data.get("files", []):
                info = _file_dict_to_file_info(f)
                if keep is None or keep(info):
                    all_files.append(info)

            if limit is not None and len(all_files) >= limit:
                return all_files[:limit]

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return all_files

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                with self._request_lock:
                    return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    logger.warning(
                        "Drive request failed (%s), retrying in %.1fs (attempt %d/%d)",
                        mapped,
                        delay,
                        attempt + 1,
                        self._retry_policy.max_retries,
                    )
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, RateLimitError):
            return True
        if isinstance(exc, NetworkError):
            return True
        if isinstance(exc, ApiError):
            status_code = getattr(exc, "details", {}).get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        from googleapiclient.errors import HttpError

        if isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError(f"Network error: {exc}", cause=exc)

        return ApiError(f"Drive API error: {exc}", cause=exc)


def _media_upload(content: bytes, mime_type: str):
    from googleapiclient.http import MediaIoBaseUpload

    return MediaIoBaseUpload(io.BytesIO(content), mimetype=mime_type, resumable=False)


def _file_dict_to_file_info(data: dict[str, Any]) -> FileInfo:
    file_id = data.get("id")
    name = data.get("name", "")
    mime_type = data.get("mimeType", "")

    modified_time = None
    created_time = None

    if isinstance(data.get("modifiedTime"), str):
        try:
            modified_time = parse_rfc3339(data["modifiedTime"])
        except ValueError:
            modified_time = None

    if isinstance(data.get("createdTime"), str):
        try:
            created_time = parse_rfc3339(data["createdTime"])
        except ValueError:
            created_time = None

    size = None
    if isinstance(data.get("size"), str) and data["size"].isdigit():
        size = int(data["size"])
    elif isinstance(data.get("size"), int):
        size = data["size"]

    return FileInfo(
        file_id=file_id if isinstance(file_id, str) else "",
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
        modified_time=modified_time,
        created_time=created_time,
        size=size,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
