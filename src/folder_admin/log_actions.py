"""Prefixes of the log messages, e.g. `MOVED: File 'a.pdf' to 'docs/'.`"""

from enum import StrEnum, unique

__all__ = ("LogActions",)


@unique
class LogActions(StrEnum):
    # Configuration
    CONFIG = "CONFIG"
    INIT = "INIT"

    # Scan boundaries
    STARTED = "STARTED"
    FINISHED = "FINISHED"

    # Per directory or file
    CREATED = "CREATED"
    MOVED = "MOVED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"
