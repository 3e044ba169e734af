"""
Example JSON schema:
[
    {"dirname": "Documents", "extensions": ["pdf", "docx", "txt"]},
    {"dirname": "Images", "extensions": ["jpg", "png"]},
    {"dirname": "Images/Raw", "extensions": ["dng"]}
]

Rules are matched in file order. When an extension appears in more than one
rule, the first rule claiming it wins.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from .errors import ConfigMalformedError, ConfigNotFoundError
from .log_actions import LogActions

__all__ = (
    "CONFIG_ENCODING",
    "CONFIG_FILE_NAME",
    "AdminConfig",
    "SubdirRule",
)


CONFIG_FILE_NAME: Final = "FolderAdministratorConfig.json"
"""Name of the configuration file looked up in the working directory."""

CONFIG_ENCODING: Final = "utf-8"
"""File encoding used for configuration files."""

_REQUIRED_RULE_FIELDS: Final = ("dirname", "extensions")


logger = logging.getLogger(__name__)


def sanitize_ext(ext: str) -> str:
    """Strip spaces and dots from `ext`, then lowercase it.

    Args:
        ext: The extension to sanitize.

    Returns:
        The sanitized extension without a leading dot, or an empty string.
    """

    return ext.strip(" .").lower()


@dataclass(frozen=True, slots=True)
class SubdirRule:
    """A target subdirectory and the extensions routed to it.

    Attributes:
        name: The directory name, relative to the working directory.
        extensions: The extensions exactly as written in the configuration.
    """

    name: str
    extensions: tuple[str, ...]

    def matches(self, ext: str) -> bool:
        """Whether `ext` belongs to this rule, ignoring case.

        `ext` is the text after a filename's last dot and is only lowercased.
        The configured extensions are sanitized before comparing.
        """

        if not (ext := ext.lower()):
            return False
        return any(sanitize_ext(e) == ext for e in self.extensions)

    def to_dict(self) -> dict[str, Any]:
        return {"dirname": self.name, "extensions": list(self.extensions)}


class AdminConfig:
    """The ordered rule set of a folder administrator.

    Attributes:
        rules (tuple[SubdirRule, ...]): The rules in configuration order.
        source (pathlib.Path | None): The file the rules were loaded from.
    """

    # Class methods

    @classmethod
    def from_json(cls, config_path: Path) -> AdminConfig:
        """Load the rules from a JSON configuration file.

        Args:
            config_path: The path to the configuration file.

        Returns:
            An instance holding one rule per array element, in file order.

        Raises:
            ConfigNotFoundError: If `config_path` is missing or unreadable.
            ConfigMalformedError: If the content does not follow the schema.
        """

        try:
            text = config_path.read_text(encoding=CONFIG_ENCODING)

        except UnicodeDecodeError as e:
            msg = f"{LogActions.FAILED}: '{config_path.name}' is not valid "
            msg += f"{CONFIG_ENCODING}."
            raise ConfigMalformedError(msg) from e

        except OSError as e:
            msg = f"{LogActions.FAILED}: Cannot read '{config_path.name}': {e}"
            raise ConfigNotFoundError(msg) from e

        try:
            content = json.loads(text)

        except json.JSONDecodeError as e:
            msg = f"{LogActions.FAILED}: Invalid JSON in '{config_path.name}'"
            msg += f": {e}"
            raise ConfigMalformedError(msg) from e

        config = cls.from_rules(cls._parse_rules(content), source=config_path)

        msg = f"{LogActions.CONFIG}: Loaded {len(config.rules)} rules from "
        msg += f"'{config_path.name}'."
        logger.info(msg)
        return config

    @classmethod
    def from_rules(
        cls, rules: Iterable[SubdirRule], *, source: Path | None = None
    ) -> AdminConfig:
        return cls(tuple(rules), source)

    # Magic methods

    def __init__(
        self, rules: tuple[SubdirRule, ...], source: Path | None = None
    ) -> None:
        self.rules: Final = rules
        self.source: Final = source

        for rule in rules:
            for ext in rule.extensions:
                if not sanitize_ext(ext):
                    msg = f"{LogActions.INIT}: Sanitized '{ext}' in "
                    msg += f"'{rule.name}' is empty, it will never match."
                    logger.warning(msg)

        for ext, names in self.overlapping_extensions().items():
            msg = f"{LogActions.CONFIG}: '{ext}' is claimed by "
            msg += f"{', '.join(repr(n) for n in names)}. "
            msg += f"Using '{names[0]}'."
            logger.warning(msg)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AdminConfig):
            return NotImplemented
        return self.rules == other.rules

    def __hash__(self) -> int:
        return hash(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rules!r})"

    # Public methods

    def rule_for(self, ext: str) -> SubdirRule | None:
        """Return the first rule claiming `ext`, or `None`."""

        for rule in self.rules:
            if rule.matches(ext):
                return rule
        return None

    def overlapping_extensions(self) -> Mapping[str, tuple[str, ...]]:
        """Map each extension claimed by several rules to those rules' names.

        Rule names are listed in configuration order, so the first one is the
        rule that wins.
        """

        claims: dict[str, list[str]] = {}
        for rule in self.rules:
            seen: set[str] = set()
            for ext in rule.extensions:
                if (sanitized := sanitize_ext(ext)) and sanitized not in seen:
                    seen.add(sanitized)
                    claims.setdefault(sanitized, []).append(rule.name)

        return {
            ext: tuple(names) for ext, names in claims.items() if len(names) > 1
        }

    def to_json(self) -> str:
        """Render the rules in the configuration file format."""

        return json.dumps([r.to_dict() for r in self.rules], indent=4) + "\n"

    def dump(self, config_path: Path) -> None:
        """Write the rules to `config_path`."""

        config_path.write_text(self.to_json(), encoding=CONFIG_ENCODING)

        msg = f"{LogActions.CONFIG}: Wrote {len(self.rules)} rules to "
        msg += f"'{config_path.name}'."
        logger.info(msg)

    def describe(self) -> str:
        """Render the rules for a human reader."""

        if not self.rules:
            return "No rules configured."

        width: Final = max(len(r.name) for r in self.rules)
        lines = [
            f"{r.name:<{width}} <- {', '.join(r.extensions) or '(none)'}"
            for r in self.rules
        ]
        return "\n".join(lines)

    # Private methods

    @staticmethod
    def _parse_rules(content: Any) -> list[SubdirRule]:
        """Validate decoded JSON and convert it into rules.

        Raises:
            ConfigMalformedError: If `content` is not an array of rule
                objects.
        """

        if not isinstance(content, list):
            msg = f"{LogActions.FAILED}: Expected an array of rules, got "
            msg += f"{type(content).__name__}."
            raise ConfigMalformedError(msg)

        rules: list[SubdirRule] = []
        for n, item in enumerate(content):
            if not isinstance(item, dict):
                msg = f"{LogActions.FAILED}: Rule {n} is not an object."
                raise ConfigMalformedError(msg)

            if missing := [f for f in _REQUIRED_RULE_FIELDS if f not in item]:
                msg = f"{LogActions.FAILED}: Rule {n} is missing fields: "
                msg += f"{', '.join(missing)}."
                raise ConfigMalformedError(msg)

            name = item["dirname"]
            if not isinstance(name, str) or not name:
                msg = f"{LogActions.FAILED}: Rule {n} `dirname` must be a "
                msg += "non-empty string."
                raise ConfigMalformedError(msg)

            extensions = item["extensions"]
            if not isinstance(extensions, list) or not all(
                isinstance(e, str) for e in extensions
            ):
                msg = f"{LogActions.FAILED}: Rule {n} `extensions` must be an "
                msg += "array of strings."
                raise ConfigMalformedError(msg)

            rules.append(SubdirRule(name, tuple(extensions)))

        return rules
