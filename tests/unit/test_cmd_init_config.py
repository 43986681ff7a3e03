"""Tests for the example config and the init-config command."""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from tagdeck.cli import cli
from tagdeck.commands.init_config import _load_example_config
from tagdeck.config import Config, load_config


def _init(*args: str) -> Result:
    return CliRunner().invoke(cli, args)


# ---------------------------------------------------------------------------
# Example config
# ---------------------------------------------------------------------------


class TestExampleConfig:
    @pytest.fixture
    def data(self) -> dict:
        return tomllib.loads(_load_example_config())

    def test_sections(self, data: dict) -> None:
        assert set(data) == {"paths", "display", "tags"}

    def test_paths_section(self, data: dict) -> None:
        assert data["paths"] == {"library_db": "~/.local/share/tagdeck/library.db"}

    def test_display_section(self, data: dict) -> None:
        defaults = Config()
        assert data["display"] == {
            "colored_output": defaults.colored_output,
            "columns": defaults.columns,
        }

    def test_tags_section(self, data: dict) -> None:
        assert data["tags"] == {"capitalize": Config().capitalize_tags}

    def test_loads_as_defaults(self, temp_dir: Path) -> None:
        path = temp_dir / "config.toml"
        path.write_text(_load_example_config())
        config, _warnings = load_config(path)

        defaults = Config()
        assert config.library_db == defaults.library_db.expanduser().resolve()
        assert config.columns == defaults.columns
        assert config.colored_output is defaults.colored_output
        assert config.capitalize_tags is defaults.capitalize_tags


# ---------------------------------------------------------------------------
# init-config command
# ---------------------------------------------------------------------------


class TestInitConfigCommand:
    def test_writes_to_config_option(self, temp_dir: Path) -> None:
        path = temp_dir / "tagdeck.toml"
        result = _init("--config", str(path), "init-config")

        assert result.exit_code == 0, result.output
        assert path.read_text() == _load_example_config()
        assert "Created config file" in result.output

    def test_output_option_wins(self, temp_dir: Path) -> None:
        target = temp_dir / "other.toml"
        result = _init("--config", str(temp_dir / "tagdeck.toml"), "init-config", "-o", str(target))

        assert result.exit_code == 0, result.output
        assert target.exists()
        assert not (temp_dir / "tagdeck.toml").exists()

    def test_default_location(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(temp_dir))
        result = _init("init-config")

        assert result.exit_code == 0, result.output
        assert (temp_dir / ".config" / "tagdeck" / "config.toml").exists()

    def test_reports_library_location(self, temp_dir: Path) -> None:
        result = _init("--config", str(temp_dir / "tagdeck.toml"), "init-config")
        assert "Library database:" in result.output
        assert "tagdeck import" in result.output

    def test_quiet(self, temp_dir: Path) -> None:
        path = temp_dir / "tagdeck.toml"
        result = _init("-q", "--config", str(path), "init-config")

        assert result.exit_code == 0, result.output
        assert result.output == ""
        assert path.exists()

    def test_keeps_existing_file(self, temp_dir: Path) -> None:
        path = temp_dir / "tagdeck.toml"
        path.write_text('[tags]\ncapitalize = false\n')
        result = _init("--config", str(path), "init-config")

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert "--force" in result.output
        assert path.read_text() == '[tags]\ncapitalize = false\n'

    def test_force_replaces_sections(self, temp_dir: Path) -> None:
        path = temp_dir / "tagdeck.toml"
        path.write_text('[tags]\ncapitalize = false\n')
        result = _init("--config", str(path), "init-config", "--force")

        assert result.exit_code == 0, result.output
        config, _warnings = load_config(path)
        assert config.capitalize_tags is True
        assert config.columns == "id,artist,title,album,bpm,tags"

    def test_creates_parent_directories(self, temp_dir: Path) -> None:
        path = temp_dir / "deep" / "nested" / "config.toml"
        result = _init("--config", str(path), "init-config")

        assert result.exit_code == 0, result.output
        assert path.exists()

    def test_edits_survive_reload(self, temp_dir: Path) -> None:
        path = temp_dir / "tagdeck.toml"
        _init("--config", str(path), "init-config")
        path.write_text(path.read_text().replace("capitalize = true", "capitalize = false"))

        config, _warnings = load_config(path)
        assert config.capitalize_tags is False
