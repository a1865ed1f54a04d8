"""Mocker: GUI mockup documents as plain TSX files."""

__version__ = "0.1.0"
