"""CLI tests for configuration commands."""

import os
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from sitepager.cli import cli
from sitepager.config import ConfigManager


def _env_with_home(tmp_path: Path) -> dict[str, Any]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("SITEPAGER_")}
    env["HOME"] = str(tmp_path)
    return env


def _manager(tmp_path: Path) -> ConfigManager:
    return ConfigManager(config_path=tmp_path / ".sitepager" / "config.yaml", env={})


def test_config_view_displays_effective_settings(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    env["SITEPAGER_PER_PAGE"] = "3"

    result = runner.invoke(cli, ["config", "view"], env=env)

    assert result.exit_code == 0, result.output
    assert "pagination:" in result.output
    assert "per_page: 3" in result.output

    ignored = runner.invoke(cli, ["config", "view", "--no-env"], env=env)
    assert "per_page: 10" in ignored.output


def test_config_set_updates_value(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(cli, ["config", "set", "perPage", "4"], env=env)

    assert result.exit_code == 0, result.output
    assert "Updated perPage: 10 -> 4." in result.output
    assert _manager(tmp_path).load().pagination.per_page == 4

    again = runner.invoke(cli, ["config", "set", "pagination.per_page", "4"], env=env)
    assert again.exit_code == 0
    assert "already 4" in again.output


def test_config_set_rejects_invalid_value(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(cli, ["config", "set", "per_page", "0"], env=env)

    assert result.exit_code != 0
    assert "Invalid configuration values" in result.output


def test_config_set_rejects_unknown_key(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "set", "pageSize", "4"], env=_env_with_home(tmp_path))

    assert result.exit_code != 0
    assert "Unknown configuration key" in result.output


def test_config_edit_applies_changes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    manager = _manager(tmp_path)
    manager.ensure_exists()

    def _mock_edit(text: str, **_: Any) -> str:
        return text.replace("per_page: 10", "per_page: 6")

    monkeypatch.setattr("sitepager.cli.click.edit", _mock_edit)

    result = runner.invoke(cli, ["config", "edit"], env=env)

    assert result.exit_code == 0, result.output
    assert "updated successfully" in result.output
    assert manager.load().pagination.per_page == 6


def test_config_edit_rejects_invalid_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    manager = _manager(tmp_path)
    manager.ensure_exists()
    before = manager.read_text()

    monkeypatch.setattr("sitepager.cli.click.edit", lambda text, **_: text + "extra: 1\n")

    result = runner.invoke(cli, ["config", "edit"], env=env)

    assert result.exit_code != 0
    assert manager.read_text() == before
