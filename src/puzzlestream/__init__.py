"""puzzlestream: Stremio addon resolving puzzle-movies.com HLS streams."""

__version__ = "1.4.0"
