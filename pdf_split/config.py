"""Run configuration for pdf_split.

Defaults match the command-line defaults. A JSON config file may set any
subset of the fields; command-line arguments override it.

Example config.json::

    {
        "directory": "statements",
        "capture_prefix": "employee: ",
        "delimiter": "net pay",
        "keep_going": true
    }
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path

from pdf_split.line_splitter import (
    DEFAULT_CAPTURE_PREFIX,
    DEFAULT_DELIMITER,
    DEFAULT_NEWLINE,
)

logger = logging.getLogger(__name__)

NEWLINES = {"lf": "\n", "crlf": "\r\n"}


class ConfigError(ValueError):
    """The config file is unreadable, not valid JSON, or holds bad keys or values."""


@dataclass(frozen=True)
class SplitConfig:
    directory: str = "."
    capture_prefix: str = DEFAULT_CAPTURE_PREFIX
    delimiter: str = DEFAULT_DELIMITER
    newline: str = DEFAULT_NEWLINE
    keep_going: bool = False

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            expected = bool if f.name == "keep_going" else str
            if type(value) is not expected:
                raise ConfigError(
                    f"Config field '{f.name}' must be {expected.__name__}, "
                    f"got {type(value).__name__}: {value!r}"
                )
        if not self.newline:
            raise ConfigError("Config field 'newline' must not be empty")

    def merged(self, **overrides) -> "SplitConfig":
        """Copy with every override that is not None applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)


def _field_names() -> set[str]:
    return {f.name for f in fields(SplitConfig)}


def load_config(path: Path) -> SplitConfig:
    """Load a SplitConfig from a JSON object file.

    ``newline`` may be given literally or as one of ``lf`` / ``crlf``.
    Raises ConfigError for an unreadable file, invalid JSON, unknown keys
    or values of the wrong type.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")

    unknown = set(data) - _field_names()
    if unknown:
        raise ConfigError(
            f"Unknown config key(s) in {path}: {', '.join(sorted(unknown))}"
        )

    if isinstance(data.get("newline"), str):
        data["newline"] = NEWLINES.get(data["newline"], data["newline"])

    logger.debug("Loaded config from %s: %s", path, data)
    return SplitConfig(**data)
