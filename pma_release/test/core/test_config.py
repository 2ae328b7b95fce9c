"""Tests for pma_release.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from pma_release.core.config import (
    DEFAULT_COMPRESSIONS,
    DEFAULT_KITS,
    Config,
    load_config,
    load_config_or_default,
)
from pma_release.core.result import Err, Ok


class TestConfig:
    def test_defaults_match_historical_layout(self) -> None:
        config = Config()
        assert config.product == "phpMyAdmin"
        assert config.output_dir == "release"
        assert config.remote == "origin"
        assert config.main_branch == "master"
        assert config.stable_branch == "STABLE"
        assert config.kits == ("all-languages", "english")
        assert config.compressions == ("zip-7z", "tbz", "txz", "tgz", "7z")

    def test_frozen(self) -> None:
        config = Config()
        with pytest.raises(AttributeError):
            config.product = "other"  # type: ignore[misc]

    def test_from_empty_dict(self) -> None:
        assert Config.from_dict({}) == Config()

    def test_from_dict_partial(self) -> None:
        config = Config.from_dict({"release": {"stable_branch": " LATEST ", "kits": ["english"]}})
        assert config.stable_branch == "LATEST"
        assert config.kits == ("english",)
        assert config.compressions == DEFAULT_COMPRESSIONS

    def test_empty_lists_fall_back_to_defaults(self) -> None:
        config = Config.from_dict({"release": {"kits": [], "compressions": []}})
        assert config.kits == DEFAULT_KITS
        assert config.compressions == DEFAULT_COMPRESSIONS


class TestLoadConfig:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "release.toml"
        path.write_text(
            '[release]\nproduct = "pma"\ncompressions = ["tgz", "7z"]\n',
            encoding="utf-8",
        )

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.product == "pma"
        assert result.value.compressions == ("tgz", "7z")

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nope.toml")

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "release.toml"
        path.write_text("[release\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_wrong_list_type(self, tmp_path: Path) -> None:
        path = tmp_path / "release.toml"
        path.write_text('[release]\nkits = "english"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "kits must be a list of strings" in result.error.message


class TestLoadConfigOrDefault:
    def test_absent_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config_or_default(tmp_path / "release.toml") == Ok(Config())

    def test_broken_file_is_still_an_error(self, tmp_path: Path) -> None:
        path = tmp_path / "release.toml"
        path.write_text("not toml at all [", encoding="utf-8")

        assert isinstance(load_config_or_default(path), Err)


class TestWrongScalarTypes:
    @pytest.mark.parametrize(
        ("body", "key"),
        [
            ("product = 42", "product"),
            ('output_dir = ["x"]', "output_dir"),
            ("stable_branch = true", "stable_branch"),
        ],
    )
    def test_non_string_value_is_an_error(self, tmp_path: Path, body: str, key: str) -> None:
        path = tmp_path / "release.toml"
        path.write_text(f"[release]\n{body}\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert f"{key} must be a string" in result.error.message

    def test_release_must_be_a_table(self, tmp_path: Path) -> None:
        path = tmp_path / "release.toml"
        path.write_text('release = "phpMyAdmin"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "release must be a table" in result.error.message

    def test_blank_string_falls_back_to_default(self) -> None:
        assert Config.from_dict({"release": {"product": "  "}}).product == "phpMyAdmin"
