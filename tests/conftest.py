"""Shared pytest fixtures."""

from __future__ import annotations

import json
import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from tagdeck.library import LibraryStore, Track, get_library_session

if TYPE_CHECKING:
    from collections.abc import Generator

    from sqlalchemy.orm import Session


SAMPLE_TRACKS = [
    Track(
        id=1,
        persistent_id="A1B2C3D4",
        file_path="/music/Prince/Purple Rain.m4a",
        artist="Prince",
        title="Purple Rain",
        album="Purple Rain",
        genre="Pop",
        musical_key="Bb",
        comment="Stadium closer && Classic; Ballad",
        grouping="Warner",
        bpm=113.0,
        year=1984,
    ),
    Track(
        id=2,
        file_path="/music/Basic Channel/Phylyps Trak.mp3",
        artist="Basic Channel",
        title="Phylyps Trak",
        album="BCD",
        genre="Techno",
        musical_key="Am",
        comment="dub techno && Minimal; Deep",
        grouping="Basic Channel",
        bpm=128.0,
        year=1993,
    ),
    Track(
        id=3,
        file_path="/music/Jeff Mills/The Bells.mp3",
        artist="Jeff Mills",
        title="The Bells",
        album="Purpose Maker",
        genre="Techno",
        comment="peak time techno && Banger",
        grouping="Purpose Maker",
        bpm=135.0,
        year=1997,
    ),
    Track(
        id=4,
        file_path="/music/Boards of Canada/Roygbiv.flac",
        artist="Boards of Canada",
        title="Roygbiv",
        album="Music Has the Right to Children",
        genre="Electronic",
        comment=" && Ambient; Downtempo",
        grouping="Warp",
        bpm=96.0,
        year=1998,
    ),
    Track(
        id=5,
        file_path="/music/Unknown/untitled.wav",
        title="Untitled",
    ),
]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_tracks() -> list[Track]:
    """Fresh copies of the sample tracks."""
    return [Track(**vars(t)) for t in SAMPLE_TRACKS]


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text(f"""[paths]
library_db = "{temp_dir / "library.db"}"

[display]
colored_output = false
columns = "id,artist,title,tags"

[tags]
capitalize = true
""")
    return config_path


@pytest.fixture
def library_session(sample_tracks: list[Track]) -> Generator[Session, None, None]:
    """In-memory library database loaded with the sample tracks."""
    with get_library_session(None) as session:
        LibraryStore(session).replace_all(sample_tracks)
        session.commit()
        yield session


@pytest.fixture
def library_db(temp_dir: Path, sample_tracks: list[Track]) -> Path:
    """On-disk library database loaded with the sample tracks."""
    db_path = temp_dir / "library.db"
    with get_library_session(db_path) as session:
        LibraryStore(session).replace_all(sample_tracks)
    return db_path


@pytest.fixture
def export_file(temp_dir: Path, sample_tracks: list[Track]) -> Path:
    """JSON library export containing the sample tracks."""
    path = temp_dir / "library.json"
    path.write_text(json.dumps([vars(t) for t in sample_tracks], indent=2))
    return path
