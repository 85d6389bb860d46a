"""Typed configuration loading and access.

Configuration lives in an optional `gv.toml` next to the `.git` directory:

    [publish]
    remote = "origin"
    branch = "main"
    target_directory = "src"
    search = "recursive"
    author_email = "ci@example.com"
    tag_prefix = "v"

    [hints]
    minor = ["feat"]
    patch = ["fix", "perf"]

Every key is optional; CLI options take precedence over file values.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_raw_str, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "Config",
    "ConfigError",
    "HintsConfig",
    "PublishConfig",
    "SEARCH_MODES",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "gv.toml"

SEARCH_MODES = ("recursive", "top-level")

DEFAULT_MINOR_TYPES = ("feat",)
DEFAULT_PATCH_TYPES = ("fix", "perf", "refactor", "revert", "build")
DEFAULT_NONE_TYPES = ("docs", "style", "test", "chore", "ci")
DEFAULT_EXIT_PRERELEASE_MARKERS = ("[exit beta]",)


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class PublishConfig:
    """Defaults for the publish workflow."""

    remote: str = "origin"
    branch: str | None = None
    target_directory: str | None = None
    search: str = "recursive"
    author_email: str | None = None
    tag_prefix: str = ""
    tag_suffix: str = ""


@dataclass(frozen=True, slots=True)
class HintsConfig:
    """Mapping from conventional commit types to version increments."""

    major: tuple[str, ...] = ()
    minor: tuple[str, ...] = DEFAULT_MINOR_TYPES
    patch: tuple[str, ...] = DEFAULT_PATCH_TYPES
    none: tuple[str, ...] = DEFAULT_NONE_TYPES
    exit_prerelease: tuple[str, ...] = DEFAULT_EXIT_PRERELEASE_MARKERS


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    publish: PublishConfig = field(default_factory=PublishConfig)
    hints: HintsConfig = field(default_factory=HintsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If `publish.search` is not a known search mode.
        """
        publish: StrDict = get_table(data, "publish") or {}
        hints: StrDict = get_table(data, "hints") or {}

        search = get_str(publish, "search") or "recursive"
        if search not in SEARCH_MODES:
            raise ValueError(f"publish.search must be one of {', '.join(SEARCH_MODES)}: {search}")

        def types(key: str, default: tuple[str, ...]) -> tuple[str, ...]:
            values = get_str_list(hints, key)
            if values is None:
                return default
            return tuple(v.lower() for v in values)

        return cls(
            publish=PublishConfig(
                remote=get_str(publish, "remote") or "origin",
                branch=get_str(publish, "branch"),
                target_directory=get_str(publish, "target_directory"),
                search=search,
                author_email=get_str(publish, "author_email"),
                tag_prefix=get_raw_str(publish, "tag_prefix") or "",
                tag_suffix=get_raw_str(publish, "tag_suffix") or "",
            ),
            hints=HintsConfig(
                major=types("major", ()),
                minor=types("minor", DEFAULT_MINOR_TYPES),
                patch=types("patch", DEFAULT_PATCH_TYPES),
                none=types("none", DEFAULT_NONE_TYPES),
                exit_prerelease=types("exit_prerelease", DEFAULT_EXIT_PRERELEASE_MARKERS),
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to gv.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config from file, or return the default config if it doesn't exist.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
