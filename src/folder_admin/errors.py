"""Exceptions raised by the folder administrator."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .folder_admin import MoveReport

__all__ = (
    "ConfigMalformedError",
    "ConfigNotFoundError",
    "DirectoryCreateFailedError",
    "FileMoveFailedError",
    "FolderAdminError",
)


class FolderAdminError(Exception): ...


class ConfigNotFoundError(FolderAdminError, FileNotFoundError):
    """Raised when the configuration file is missing or cannot be read."""


class ConfigMalformedError(FolderAdminError, ValueError):
    """Raised when the configuration file does not follow the schema."""


class DirectoryCreateFailedError(FolderAdminError, OSError):
    """Raised when a rule's directory cannot be created."""


class FileMoveFailedError(FolderAdminError, OSError):
    """Raised when moving a file into its directory fails.

    Attributes:
        src: The file that could not be moved.
        dst: The path it was being moved to.
        report: The moves completed before the failure.
    """

    def __init__(
        self, msg: str, src: Path, dst: Path, report: MoveReport
    ) -> None:
        super().__init__(msg)
        self.src = src
        self.dst = dst
        self.report = report
