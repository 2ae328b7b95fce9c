"""Tests for pma_release.release.promote."""

from __future__ import annotations

from pathlib import Path

import pytest

from pma_release.core.result import Err, Ok
from pma_release.output.console import MockConsole
from pma_release.release.promote import mark_as_stable, tag_name, tag_release

from .fakes import FakeVcs, make_context


@pytest.mark.parametrize(
    ("version", "expected"),
    [
        ("2.9.0-rc1", "RELEASE_2_9_0RC1"),
        ("2.7.0", "RELEASE_2_7_0"),
        ("2.7.1-rc1", "RELEASE_2_7_1RC1"),
        ("5.2.0-beta2", "RELEASE_5_2_0BETA2"),
    ],
)
def test_tag_name(version: str, expected: str) -> None:
    assert tag_name(version) == expected


class TestTagRelease:
    def test_creates_annotated_tag_on_branch(self, tmp_path: Path) -> None:
        vcs = FakeVcs()
        console = MockConsole()
        ctx = make_context(tmp_path, version="2.9.0-rc1", branch="QA_2_9", tag=True)

        result = tag_release(ctx, vcs=vcs, console=console)

        assert result == Ok("RELEASE_2_9_0RC1")
        assert vcs.tags == {"RELEASE_2_9_0RC1": ("Released 2.9.0-rc1", "QA_2_9")}
        assert console.find("git push --tags")

    def test_tag_failure(self, tmp_path: Path) -> None:
        vcs = FakeVcs(fail_on={"tag"})

        result = tag_release(make_context(tmp_path), vcs=vcs, console=MockConsole())

        assert isinstance(result, Err)
        assert result.error.kind == "tool_failed"
        assert result.error.stage == "tag"
        assert result.error.returncode == 128


class TestMarkAsStable:
    def test_merges_into_stable_and_returns_to_master(self, tmp_path: Path) -> None:
        vcs = FakeVcs()
        ctx = make_context(tmp_path, branch="MAINT_2_9_0", stable=True)

        result = mark_as_stable(ctx, vcs=vcs, console=MockConsole())

        assert result == Ok(None)
        assert "STABLE" in vcs.branches
        assert vcs.calls == [
            ("ensure_local_branch", "STABLE", "origin"),
            ("checkout", "STABLE"),
            ("merge_theirs", "MAINT_2_9_0"),
            ("checkout", "master"),
        ]
        assert vcs.current == "master"

    def test_existing_stable_branch_is_reused(self, tmp_path: Path) -> None:
        vcs = FakeVcs(branches={"master", "STABLE"})

        mark_as_stable(make_context(tmp_path), vcs=vcs, console=MockConsole())

        assert vcs.branches == {"master", "STABLE"}

    def test_merge_failure_stops_before_returning_to_master(self, tmp_path: Path) -> None:
        vcs = FakeVcs(fail_on={"merge"})

        result = mark_as_stable(make_context(tmp_path), vcs=vcs, console=MockConsole())

        assert isinstance(result, Err)
        assert result.error.stage == "stable"
        assert vcs.current == "STABLE"
