"""Tests for firattr.toml loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from firattr.core.config import CONFIG_FILENAME, ErrorPolicy, FirattrConfig, load_config
from firattr.core.errors import ConfigError


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    assert config == FirattrConfig()
    assert config.actions == {}
    assert config.compile.on_error is ErrorPolicy.RAISE


def test_load_from_directory(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(
        """
[actions]
doSave = "save()"

[compile]
on_error = "skip"
"""
    )
    config = load_config(tmp_path)
    assert config.actions == {"doSave": "save()"}
    assert config.compile.on_error is ErrorPolicy.SKIP


def test_load_from_file(tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    path.write_text('[actions]\nload = "$fir.replace()"\n')
    assert load_config(path).actions == {"load": "$fir.replace()"}


def test_invalid_toml(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("[actions\n")
    with pytest.raises(ConfigError, match="invalid TOML"):
        load_config(tmp_path)


def test_invalid_policy(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text('[compile]\non_error = "ignore"\n')
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_compile_key(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("[compile]\nstrict = true\n")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_actions_with_overrides() -> None:
    config = FirattrConfig(actions={"a": "1", "b": "2"})
    assert config.actions_with({"b": "3"}) == {"a": "1", "b": "3"}
    assert config.actions == {"a": "1", "b": "2"}
