"""Tests for output/errors.py."""

from __future__ import annotations

import pytest

from pma_release.output.console import MockConsole, Style
from pma_release.output.errors import print_release_error, release_exit_code
from pma_release.release.errors import ReleaseError


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        ("usage", 65),
        ("invalid_arguments", 1),
        ("invalid_config", 1),
        ("workdir_exists", 1),
        ("output_exists", 1),
        ("version_mismatch", 2),
        ("user_abort", 100),
        ("tool_failed", 3),
    ],
)
def test_exit_codes(kind: str, expected: int) -> None:
    error = ReleaseError(kind=kind, message="x")  # type: ignore[arg-type]
    assert release_exit_code(error) == expected


def test_tool_exit_code_passes_through() -> None:
    error = ReleaseError(kind="tool_failed", message="x", stage="sign a.zip", returncode=2)
    assert release_exit_code(error) == 2


def test_tool_not_started_maps_to_tool_error() -> None:
    error = ReleaseError(kind="tool_failed", message="x", returncode=-1)
    assert release_exit_code(error) == 3


class TestPrintReleaseError:
    def test_usage_prints_help_text(self) -> None:
        console = MockConsole()
        print_release_error(
            ReleaseError(kind="usage", message="missing", hint="Usage: create-release ..."),
            console,
        )

        assert console.messages == ["Usage: create-release ..."]
        assert not console.has_error()

    def test_abort_is_quiet(self) -> None:
        console = MockConsole()
        print_release_error(ReleaseError(kind="user_abort", message="Aborted."), console)

        assert console.count(Style.DIM) == 1
        assert not console.has_error()

    def test_tool_failure_names_stage(self) -> None:
        console = MockConsole()
        print_release_error(
            ReleaseError(
                kind="tool_failed",
                message="gpg --detach-sign --armor ... failed (exit 2)",
                hint="gpg: no default secret key",
                stage="sign a.zip",
                returncode=2,
            ),
            console,
        )

        assert console.messages == [
            "error: [sign a.zip] gpg --detach-sign --armor ... failed (exit 2)",
            "hint: gpg: no default secret key",
        ]
