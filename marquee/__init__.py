"""Marquee: search a movie catalog from the terminal."""

from marquee.__version__ import __version__

__all__ = ["__version__"]
