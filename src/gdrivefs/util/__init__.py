from .mime import (
    DEFAULT_FILE_MIME,
    FOLDER_MIME,
    GOOGLE_APP_MIMES,
    is_folder,
    is_google_app,
)
from .paths import join_path, split_parent, split_path
from .time import now_utc, parse_rfc3339, to_rfc3339

__all__ = [
    "DEFAULT_FILE_MIME",
    "FOLDER_MIME",
    "GOOGLE_APP_MIMES",
    "is_folder",
    "is_google_app",
    "split_path",
    "split_parent",
    "join_path",
    "now_utc",
    "parse_rfc3339",
    "to_rfc3339",
]
