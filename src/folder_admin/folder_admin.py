import logging
import os
import sys
from collections.abc import Collection
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, NamedTuple, TextIO

from .admin_config import CONFIG_FILE_NAME, AdminConfig, SubdirRule
from .errors import DirectoryCreateFailedError, FileMoveFailedError
from .log_actions import LogActions

__all__ = ("FILE_SEP", "FolderAdministrator", "MoveRecord", "MoveReport")


FILE_SEP: Final = os.sep
"""Platform-dependent file separator."""

logger = logging.getLogger(__name__)


class MoveRecord(NamedTuple):
    src: Path
    dst: Path
    rule: SubdirRule


@dataclass
class MoveReport:
    """What a single scan did to the working directory.

    Attributes:
        moved: The completed moves, in scan order.
        skipped: `(name, reason)` pairs for entries left in place.
        created_dirs: The rule directories created before scanning.
    """

    moved: list[MoveRecord] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)
    created_dirs: list[Path] = field(default_factory=list)


class FolderAdministrator:
    """Moves the files of a working directory into subdirectories by extension.

    The rules are read once, during construction, from the configuration file
    in the working directory. The configuration file itself is never moved.

    Progress goes through the `folder_admin` logger and nothing is printed.
    Callers that want to see verbose output have to attach a handler to that
    logger, as `python -m folder_admin` does.

    Attributes:
        config (AdminConfig): The loaded rules.
        verbose (bool): Whether successful steps are logged at `INFO` instead
            of `DEBUG`.
        root_dir (pathlib.Path): The working directory.
        ignore_names (frozenset[str]): Entry names that are never moved.
    """

    # Magic methods

    def __init__(
        self,
        verbose: bool = False,
        *,
        root_dir: Path | None = None,
        config_name: str = CONFIG_FILE_NAME,
        ignore_names: Collection[str] = (),
    ) -> None:
        """Load the configuration of `root_dir`.

        Args:
            verbose: Log progress for each successful step.
            root_dir: The directory to organize. Defaults to the current
                working directory.
            config_name: The configuration file's name inside `root_dir`.
            ignore_names: Additional entry names to leave in place.

        Raises:
            ConfigNotFoundError: If the configuration file cannot be read.
            ConfigMalformedError: If the configuration file is invalid.
        """

        self.verbose: Final = verbose
        self.root_dir: Final = Path.cwd() if root_dir is None else root_dir
        self._step_level: Final = logging.INFO if verbose else logging.DEBUG

        self._log_step(f"{LogActions.INIT}: Loading '{config_name}'.")
        self.config: Final = AdminConfig.from_json(self.root_dir / config_name)
        self.ignore_names: Final = frozenset({config_name, *ignore_names})

    # Public methods

    def create_dirs(self) -> list[Path]:
        """Create each rule's directory if it does not exist yet.

        Directories are created one level at a time, so a rule's parent
        directory has to exist already.

        Returns:
            The directories created by this call.

        Raises:
            DirectoryCreateFailedError: If a directory cannot be created.
        """

        self._log_step(f"{LogActions.STARTED}: Looking for directories.")

        created: list[Path] = []
        for rule in self.config.rules:
            path = self.root_dir / rule.name
            if path.exists():
                continue

            try:
                path.mkdir()

            except FileExistsError:
                continue

            except OSError as e:
                msg = f"{LogActions.FAILED}: Creating '{rule.name}{FILE_SEP}'"
                msg += f": {e}"
                raise DirectoryCreateFailedError(msg) from e

            created.append(path)
            self._log_step(
                f"{LogActions.CREATED}: Directory '{rule.name}{FILE_SEP}'."
            )

        return created

    def move_files_to_dirs(self) -> MoveReport:
        """Move every matching file of `root_dir` into its rule's directory.

        The directory is listed once, before anything is moved. Entries in
        `ignore_names`, symlinks, non-regular files, extensionless files, and
        files no rule claims are left in place. A file claimed by several rules
        goes to the first one.

        Returns:
            The moves performed and the entries skipped.

        Raises:
            DirectoryCreateFailedError: If a rule's directory cannot be
                created.
            FileMoveFailedError: If a move fails. The moves performed so far
                are kept in its `report` and are not rolled back.
        """

        report: Final = MoveReport(created_dirs=self.create_dirs())

        msg = f"{LogActions.STARTED}: Processing entries in "
        msg += f"'{self.root_dir.name}{FILE_SEP}'."
        self._log_step(msg)

        for entry in sorted(self.root_dir.iterdir()):
            if (rule := self._get_rule(entry, report)) is None:
                continue

            dst = self.root_dir / rule.name / entry.name
            try:
                entry.rename(dst)

            except OSError as e:
                msg = f"{LogActions.FAILED}: Moving '{entry.name}' to "
                msg += f"'{rule.name}{FILE_SEP}': {e}"
                raise FileMoveFailedError(msg, entry, dst, report) from e

            report.moved.append(MoveRecord(entry, dst, rule))
            self._log_step(
                f"{LogActions.MOVED}: File '{entry.name}' to "
                f"'{rule.name}{FILE_SEP}'."
            )

        msg = f"{LogActions.FINISHED}: Moved {len(report.moved)} files in "
        msg += f"'{self.root_dir.name}{FILE_SEP}'."
        self._log_step(msg)
        return report

    def print_config(self, file: TextIO | None = None) -> str:
        """Print the loaded rules to `file`, or stdout, and return the text."""

        text: Final = self.config.describe()
        print(text, file=sys.stdout if file is None else file)
        return text

    # Private methods

    def _get_rule(self, entry: Path, report: MoveReport) -> SubdirRule | None:
        """Determine the rule whose directory `entry` belongs in.

        Args:
            entry: A directory entry of `root_dir`.
            report: Receives the reason when `entry` is skipped.

        Returns:
            `None` if `entry` should stay in place, its rule otherwise.
        """

        name: Final = entry.name

        # Reported like a successful step, other skips stay at DEBUG.
        if name in self.ignore_names:
            level: Final = self._step_level
            return self._skip(report, name, "ignored name", level)

        if entry.is_symlink():
            return self._skip(report, name, "symlink")

        if not entry.is_file():
            return self._skip(report, name, "not a regular file")

        if not (ext := entry.suffix.lstrip(".").lower()):
            return self._skip(report, name, "no extension")

        if (rule := self.config.rule_for(ext)) is None:
            return self._skip(report, name, f"no rule for '{ext}'")

        return rule

    @staticmethod
    def _skip(
        report: MoveReport, name: str, reason: str, level: int = logging.DEBUG
    ) -> None:
        report.skipped.append((name, reason))
        logger.log(level, f"{LogActions.SKIPPED}: '{name}', {reason}.")

    def _log_step(self, msg: str) -> None:
        logger.log(self._step_level, msg)
