"""Move the files of a directory into subdirectories by extension."""

from .admin_config import (
    CONFIG_ENCODING,
    CONFIG_FILE_NAME,
    AdminConfig,
    SubdirRule,
)
from .errors import (
    ConfigMalformedError,
    ConfigNotFoundError,
    DirectoryCreateFailedError,
    FileMoveFailedError,
    FolderAdminError,
)
from .folder_admin import FolderAdministrator, MoveRecord, MoveReport

__all__ = (
    "CONFIG_ENCODING",
    "CONFIG_FILE_NAME",
    "AdminConfig",
    "ConfigMalformedError",
    "ConfigNotFoundError",
    "DirectoryCreateFailedError",
    "FileMoveFailedError",
    "FolderAdminError",
    "FolderAdministrator",
    "MoveRecord",
    "MoveReport",
    "SubdirRule",
)
