"""Local library store: the backend that owns track records."""

from tagdeck.library.models import LibraryTrack, Track
from tagdeck.library.session import get_library_session
from tagdeck.library.store import LibraryStore, load_tracks

__all__ = [
    "LibraryStore",
    "LibraryTrack",
    "Track",
    "get_library_session",
    "load_tracks",
]
