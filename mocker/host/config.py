"""
Mocker configuration — all environment variables in one place.

Read from environment at runtime.
"""

from __future__ import annotations

import os


class Settings:
    """Host settings from environment variables."""

    # Logging
    LOG_LEVEL: str = os.environ.get("MOCKER_LOG_LEVEL", "WARNING").upper()

    # Generated components
    DEFAULT_COMPONENT_NAME: str = os.environ.get("MOCKER_DEFAULT_COMPONENT_NAME", "MockPage")

    # New files
    DEFAULT_TEMPLATE: str = os.environ.get("MOCKER_DEFAULT_TEMPLATE", "empty")


# Singleton instance
settings = Settings()
