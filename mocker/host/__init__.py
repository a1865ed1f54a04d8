"""
Mocker host layer — configuration, editor payload models and the
document bridge between the visual editor and .moc files.
"""

from mocker.host.bridge import DocumentBridge
from mocker.host.config import settings

__all__ = ["DocumentBridge", "settings"]
