"""CLI tests for the tags command group."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner, Result

from tagdeck.cli import cli
from tagdeck.library import LibraryStore, get_library_session


def _run(config: Path, *args: str) -> Result:
    return CliRunner().invoke(cli, ["--config", str(config), "tags", *args])


def _comment(db: Path, track_id: int) -> str | None:
    with get_library_session(db) as session:
        (track,) = LibraryStore(session).get_tracks([track_id])
        return track.comment


class TestTagsList:
    def test_list(self, sample_config: Path, library_db: Path) -> None:
        result = _run(sample_config, "list")
        assert result.exit_code == 0, result.output
        assert result.output.split("\n")[:3] == ["Ambient", "Ballad", "Banger"]
        assert "Minimal" in result.output

    def test_list_empty(self, sample_config: Path, temp_dir: Path) -> None:
        result = _run(sample_config, "list")
        assert result.exit_code == 0, result.output
        assert "No tags" in result.output


class TestTagsShow:
    def test_show_one(self, sample_config: Path, library_db: Path) -> None:
        result = _run(sample_config, "show", "2")
        assert result.exit_code == 0, result.output
        assert "Phylyps Trak" in result.output
        assert "dub techno" in result.output
        assert "Minimal; Deep" in result.output

    def test_show_common(self, sample_config: Path, library_db: Path) -> None:
        _run(sample_config, "add", "Deep", "1")
        result = _run(sample_config, "show", "1", "2")
        assert result.exit_code == 0, result.output
        assert "Common tags" in result.output
        assert result.output.rstrip().endswith("Deep")

    def test_show_unknown(self, sample_config: Path, library_db: Path) -> None:
        result = _run(sample_config, "show", "42")
        assert result.exit_code == 1
        assert "Track not found: 42" in result.output


class TestTagsEdit:
    def test_add(self, sample_config: Path, library_db: Path) -> None:
        result = _run(sample_config, "add", "late night", "3", "5")
        assert result.exit_code == 0, result.output
        assert "Tagged 2 of 2 tracks" in result.output
        assert _comment(library_db, 3) == "peak time techno && Banger; Late night"
        assert _comment(library_db, 5) == " && Late night"

    def test_add_respects_capitalize_setting(self, temp_dir: Path, library_db: Path) -> None:
        config = temp_dir / "raw.toml"
        config.write_text(f'[paths]\nlibrary_db = "{library_db}"\n\n[tags]\ncapitalize = false\n')
        result = _run(config, "add", "lofi", "5")
        assert result.exit_code == 0, result.output
        assert _comment(library_db, 5) == " && lofi"

    def test_add_existing(self, sample_config: Path, library_db: Path) -> None:
        result = _run(sample_config, "add", "deep", "2")
        assert "Tagged 0 of 1 tracks" in result.output
        assert _comment(library_db, 2) == "dub techno && Minimal; Deep"

    def test_add_rejects_separator(self, sample_config: Path, library_db: Path) -> None:
        result = _run(sample_config, "add", "a && b", "1")
        assert result.exit_code == 1
        assert "Invalid tag" in result.output
        assert _comment(library_db, 1) == "Stadium closer && Classic; Ballad"

    def test_add_unknown_track_changes_nothing(
        self, sample_config: Path, library_db: Path
    ) -> None:
        result = _run(sample_config, "add", "New", "1", "42")
        assert result.exit_code == 1
        assert _comment(library_db, 1) == "Stadium closer && Classic; Ballad"

    def test_remove(self, sample_config: Path, library_db: Path) -> None:
        result = _run(sample_config, "remove", "DEEP", "1", "2")
        assert result.exit_code == 0, result.output
        assert "Untagged 1 of 2 tracks" in result.output
        assert _comment(library_db, 2) == "dub techno && Minimal"

    def test_toggle(self, sample_config: Path, library_db: Path) -> None:
        result = _run(sample_config, "toggle", "Banger", "3", "2")
        assert result.exit_code == 0, result.output
        assert "Removed 'Banger' on 2 tracks" in result.output
        assert _comment(library_db, 3) == "peak time techno"

        result = _run(sample_config, "toggle", "Banger", "3", "2")
        assert "Added 'Banger' on 2 tracks" in result.output
        assert _comment(library_db, 2) == "dub techno && Minimal; Deep; Banger"

    def test_toggle_primary(self, sample_config: Path, library_db: Path) -> None:
        result = _run(sample_config, "toggle", "Deep", "1", "2", "--primary", "2")
        assert result.exit_code == 0, result.output
        assert _comment(library_db, 2) == "dub techno && Minimal"

    def test_set(self, sample_config: Path, library_db: Path) -> None:
        result = _run(sample_config, "set", "5", "-m", "crate find", "-t", "Rare", "-t", "Dusty")
        assert result.exit_code == 0, result.output
        assert "Updated track 5" in result.output
        assert _comment(library_db, 5) == "crate find && Rare; Dusty"

    def test_set_keeps_comment(self, sample_config: Path, library_db: Path) -> None:
        result = _run(sample_config, "set", "1", "-t", "Anthem")
        assert result.exit_code == 0, result.output
        assert _comment(library_db, 1) == "Stadium closer && Anthem"

    def test_set_clears_tags(self, sample_config: Path, library_db: Path) -> None:
        _run(sample_config, "set", "4")
        assert _comment(library_db, 4) == ""

    def test_set_unchanged(self, sample_config: Path, library_db: Path) -> None:
        result = _run(sample_config, "set", "3", "-t", "Banger")
        assert "Track 3 unchanged" in result.output


class TestTagsQuiet:
    def test_quiet_hides_success(self, sample_config: Path, library_db: Path) -> None:
        result = CliRunner().invoke(
            cli, ["--config", str(sample_config), "-q", "tags", "add", "Deep", "1"]
        )
        assert result.exit_code == 0, result.output
        assert result.output == ""
        assert _comment(library_db, 1) == "Stadium closer && Classic; Ballad; Deep"

    def test_quiet_keeps_tag_list(self, sample_config: Path, library_db: Path) -> None:
        result = CliRunner().invoke(cli, ["--config", str(sample_config), "-q", "tags", "list"])
        assert result.exit_code == 0, result.output
        assert "Minimal" in result.output.split("\n")
