"""Track records and the SQLAlchemy ORM model for the library store."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Float, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


@dataclass
class Track:
    """Plain track record as supplied by a library export.

    Attributes:
        id: Stable numeric id.
        persistent_id: Id used by the external library application.
        file_path: Location of the audio file.
        comment: Raw comment field (user comment plus tag overlay).
        grouping: Grouping/label text.
    """

    id: int
    persistent_id: str = ""
    file_path: str = ""
    artist: str | None = None
    title: str | None = None
    album: str | None = None
    genre: str | None = None
    musical_key: str | None = None
    comment: str | None = None
    grouping: str | None = None
    bpm: float | None = None
    year: int | None = None


class LibraryBase(DeclarativeBase):
    """Base class for library ORM models."""

    pass


class LibraryTrack(LibraryBase):
    """A track row in the local library database."""

    __tablename__ = "tracks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    persistent_id: Mapped[str] = mapped_column(String(64), default="", server_default="")
    file_path: Mapped[str] = mapped_column(Text, default="", server_default="")
    artist: Mapped[str | None] = mapped_column(Text)
    title: Mapped[str | None] = mapped_column(Text)
    album: Mapped[str | None] = mapped_column(Text)
    genre: Mapped[str | None] = mapped_column(Text)
    musical_key: Mapped[str | None] = mapped_column(String(32))
    comment: Mapped[str | None] = mapped_column(Text)
    grouping: Mapped[str | None] = mapped_column(Text)
    bpm: Mapped[float | None] = mapped_column(Float)
    year: Mapped[int | None] = mapped_column(Integer)

    __table_args__ = (
        Index("ix_tracks_bpm", "bpm"),
        Index("ix_tracks_year", "year"),
    )

    @classmethod
    def from_record(cls, track: Track) -> LibraryTrack:
        return cls(
            id=track.id,
            persistent_id=track.persistent_id,
            file_path=track.file_path,
            artist=track.artist,
            title=track.title,
            album=track.album,
            genre=track.genre,
            musical_key=track.musical_key,
            comment=track.comment,
            grouping=track.grouping,
            bpm=track.bpm,
            year=track.year,
        )

    def __repr__(self) -> str:
        return f"<LibraryTrack(id={self.id}, title='{self.title}')>"
