"""Tests for the subprocess-backed tools in pma_release.release.tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from pma_release.core.result import Err, Ok, Result
from pma_release.output.console import MockConsole, Style
from pma_release.platform.process import ProcessError
from pma_release.release import tools as tools_mod
from pma_release.release.tools import (
    GpgSigner,
    MakeDocBuilder,
    SubprocessArchiver,
    SubprocessScriptRunner,
)


@dataclass
class Call:
    cmd: list[str]
    cwd: Path
    env: dict[str, str] | None = None
    out_path: Path | None = None


@dataclass
class FakeProcess:
    """Records what would have been started; fails with `returncode` if set."""

    calls: list[Call] = field(default_factory=lambda: [])
    returncode: int | None = None

    def _result(self, cmd: list[str]) -> Result[None, ProcessError]:
        if self.returncode is not None:
            return Err(ProcessError(tuple(cmd), self.returncode, "", "boom"))
        return Ok(None)

    def run_silent(
        self, cmd: list[str], cwd: Path, env: dict[str, str] | None = None
    ) -> Result[None, ProcessError]:
        self.calls.append(Call(cmd, cwd, env=env))
        return self._result(cmd)

    def run_to_file(self, cmd: list[str], cwd: Path, out_path: Path) -> Result[None, ProcessError]:
        self.calls.append(Call(cmd, cwd, out_path=out_path))
        return self._result(cmd)


@pytest.fixture
def proc(monkeypatch: pytest.MonkeyPatch) -> FakeProcess:
    fake = FakeProcess()
    monkeypatch.setattr(tools_mod, "run_silent", fake.run_silent)
    monkeypatch.setattr(tools_mod, "run_to_file", fake.run_to_file)
    return fake


class TestMakeDocBuilder:
    def test_builds_html_in_c_locale(self, tmp_path: Path, proc: FakeProcess) -> None:
        console = MockConsole()

        assert MakeDocBuilder(console=console).build_html(tmp_path) == Ok(None)

        (call,) = proc.calls
        assert call.cmd == ["make", "-C", "doc", "html"]
        assert call.cwd == tmp_path
        assert call.env is not None
        assert call.env["LC_ALL"] == "C"
        assert console.count(Style.DIM) == 1


def test_script_runner_runs_relative_script(tmp_path: Path, proc: FakeProcess) -> None:
    runner = SubprocessScriptRunner(console=MockConsole())

    assert runner.run_script(tmp_path, "scripts/lang-cleanup.sh", "english") == Ok(None)

    (call,) = proc.calls
    assert call.cmd == ["./scripts/lang-cleanup.sh", "english"]
    assert call.cwd == tmp_path


class TestSubprocessArchiver:
    NAME = "phpMyAdmin-5.2.1-english"

    def _archiver(self) -> SubprocessArchiver:
        return SubprocessArchiver(console=MockConsole())

    def test_tar(self, tmp_path: Path, proc: FakeProcess) -> None:
        result = self._archiver().tar(tmp_path, self.NAME)

        assert result == Ok(tmp_path / f"{self.NAME}.tar")
        assert proc.calls[0].cmd == ["tar", "cf", f"{self.NAME}.tar", self.NAME]
        assert proc.calls[0].cwd == tmp_path

    @pytest.mark.parametrize(
        ("method", "argv", "suffix"),
        [
            ("bzip2", ["bzip2", "-9k"], ".tar.bz2"),
            ("xz", ["xz", "-9k"], ".tar.xz"),
        ],
    )
    def test_keep_tar_compressors(
        self, tmp_path: Path, proc: FakeProcess, method: str, argv: list[str], suffix: str
    ) -> None:
        tar = tmp_path / f"{self.NAME}.tar"

        result = getattr(self._archiver(), method)(tar)

        assert result == Ok(tmp_path / f"{self.NAME}{suffix}")
        assert proc.calls[0].cmd == [*argv, tar.name]
        assert proc.calls[0].cwd == tmp_path

    def test_gzip_writes_stdout_to_archive(self, tmp_path: Path, proc: FakeProcess) -> None:
        tar = tmp_path / f"{self.NAME}.tar"

        result = self._archiver().gzip(tar)

        out = tmp_path / f"{self.NAME}.tar.gz"
        assert result == Ok(out)
        (call,) = proc.calls
        assert call.cmd == ["gzip", "-9c", tar.name]
        assert call.cwd == tmp_path
        assert call.out_path == out

    def test_plain_zip(self, tmp_path: Path, proc: FakeProcess) -> None:
        result = self._archiver().zip(tmp_path, self.NAME)

        assert result == Ok(tmp_path / f"{self.NAME}.zip")
        assert proc.calls[0].cmd == ["zip", "-q", "-9", "-r", f"{self.NAME}.zip", self.NAME]

    def test_zip_via_7za(self, tmp_path: Path, proc: FakeProcess) -> None:
        result = self._archiver().zip_7z(tmp_path, self.NAME)

        assert result == Ok(tmp_path / f"{self.NAME}.zip")
        assert proc.calls[0].cmd == [
            "7za",
            "a",
            "-bd",
            "-tzip",
            "-mx=9",
            f"{self.NAME}.zip",
            self.NAME,
        ]

    def test_seven_zip(self, tmp_path: Path, proc: FakeProcess) -> None:
        result = self._archiver().seven_zip(tmp_path, self.NAME)

        assert result == Ok(tmp_path / f"{self.NAME}.7z")
        assert proc.calls[0].cmd == ["7za", "a", "-bd", "-mx=9", f"{self.NAME}.7z", self.NAME]
        assert proc.calls[0].cwd == tmp_path

    def test_failure_is_returned(self, tmp_path: Path, proc: FakeProcess) -> None:
        proc.returncode = 2

        result = self._archiver().seven_zip(tmp_path, self.NAME)

        assert isinstance(result, Err)
        assert result.error.returncode == 2

    def test_gzip_failure_is_returned(self, tmp_path: Path, proc: FakeProcess) -> None:
        proc.returncode = 1

        result = self._archiver().gzip(tmp_path / f"{self.NAME}.tar")

        assert isinstance(result, Err)


class TestGpgSigner:
    def test_detached_armored_signature(self, tmp_path: Path, proc: FakeProcess) -> None:
        archive = tmp_path / "phpMyAdmin-5.2.1-english.zip"

        result = GpgSigner(console=MockConsole()).sign(archive)

        assert result == Ok(tmp_path / "phpMyAdmin-5.2.1-english.zip.asc")
        (call,) = proc.calls
        assert call.cmd == ["gpg", "--detach-sign", "--armor", archive.name]
        assert call.cwd == tmp_path

    def test_gpg_failure(self, tmp_path: Path, proc: FakeProcess) -> None:
        proc.returncode = 2

        result = GpgSigner(console=MockConsole()).sign(tmp_path / "a.7z")

        assert isinstance(result, Err)
        assert result.error.returncode == 2
