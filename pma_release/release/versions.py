"""Version string checks inside the release tree.

All matching is literal: `5.2.1` never matches `5.2.10` or `5x2x1`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from pma_release.core.result import Err, Ok, Result
from pma_release.release.errors import ReleaseError

DOC_CONF = "doc/conf.py"
README = "README"


@dataclass(frozen=True, slots=True)
class VersionCheck:
    path: str
    matches: Callable[[str, str], bool]


def _contains(template: str) -> Callable[[str, str], bool]:
    def check(text: str, version: str) -> bool:
        return template.format(version=version) in text

    return check


def _line_ends_with(template: str) -> Callable[[str, str], bool]:
    def check(text: str, version: str) -> bool:
        needle = template.format(version=version)
        return any(line.rstrip("\r").endswith(needle) for line in text.split("\n"))

    return check


def version_checks(config_lib: str) -> tuple[VersionCheck, ...]:
    return (
        VersionCheck(config_lib, _contains("'PMA_VERSION', '{version}'")),
        VersionCheck(DOC_CONF, _contains("version = '{version}'")),
        VersionCheck(README, _line_ends_with("Version {version}")),
    )


def check_versions(tree: Path, version: str, config_lib: str) -> Result[None, ReleaseError]:
    """Fail on the first tracked file that does not carry `version`."""
    for check in version_checks(config_lib):
        path = tree / check.path
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            text = ""
        if not check.matches(text, version):
            return Err(
                ReleaseError(
                    kind="version_mismatch",
                    message=f"There seems to be wrong version in {check.path}!",
                    stage="versions",
                )
            )
    return Ok(None)
