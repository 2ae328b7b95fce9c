"""Tests for output/console.py."""

from __future__ import annotations

from pma_release.output.console import MockConsole, Style


def test_style_str() -> None:
    assert str(Style.STEP) == "step"
    assert str(Style.WARNING) == "warning"


class TestMockConsole:
    def test_records_prefixes(self) -> None:
        console = MockConsole()

        console.step("Generating documentation")
        console.warning("ignoring compression 'rar', not known!")
        console.success("done")
        console.info("note")
        console.error("broken")
        console.newline()

        assert console.messages == [
            "* Generating documentation",
            "WARNING: ignoring compression 'rar', not known!",
            "OK done",
            "info: note",
            "error: broken",
            "",
        ]

    def test_helpers(self) -> None:
        console = MockConsole()
        console.print("Files:", Style.BOLD)
        console.print("phpMyAdmin-1.0.0-english.zip 1024")
        console.warning("careful")

        assert console.has_warning()
        assert not console.has_error()
        assert console.count(Style.BOLD) == 1
        assert [o.message for o in console.find("english")] == [
            "phpMyAdmin-1.0.0-english.zip 1024"
        ]
        assert console.text.startswith("Files:\n")
