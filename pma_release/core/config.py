"""Typed release configuration loading.

The configuration file is optional. When absent, the defaults below reproduce
the historical phpMyAdmin release layout exactly.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "Config",
    "ConfigError",
    "CONFIG_FILENAME",
    "DEFAULT_COMPRESSIONS",
    "DEFAULT_KITS",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "release.toml"

DEFAULT_KITS = ("all-languages", "english")
DEFAULT_COMPRESSIONS = ("zip-7z", "tbz", "txz", "tgz", "7z")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Release settings.

    Attributes:
        product: Prefix of the working directory and archive names.
        output_dir: Directory (relative to the repository) receiving all outputs.
        remote: Remote that local tracking branches follow.
        main_branch: Branch checked out again after updating the stable branch.
        stable_branch: Long-lived branch tracking the latest release.
        kits: Distribution kits to build.
        compressions: Archive formats to produce for every kit.
    """

    product: str = "phpMyAdmin"
    output_dir: str = "release"
    remote: str = "origin"
    main_branch: str = "master"
    stable_branch: str = "STABLE"
    kits: tuple[str, ...] = DEFAULT_KITS
    compressions: tuple[str, ...] = DEFAULT_COMPRESSIONS

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        release: StrDict = get_table(data, "release") or {}
        defaults = cls()

        return cls(
            product=get_str(release, "product") or defaults.product,
            output_dir=get_str(release, "output_dir") or defaults.output_dir,
            remote=get_str(release, "remote") or defaults.remote,
            main_branch=get_str(release, "main_branch") or defaults.main_branch,
            stable_branch=get_str(release, "stable_branch") or defaults.stable_branch,
            kits=get_str_list(release, "kits") or defaults.kits,
            compressions=get_str_list(release, "compressions") or defaults.compressions,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling import and parse errors."""
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
    """Load and parse release configuration from a TOML file.

    Args:
        path: Path to release.toml

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
    """Load config from file, or return the defaults if the file doesn't exist.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
