"""tagdeck: browse, search and tag a music library from the terminal."""

__version__ = "0.1.0"
