"""Dashboard module: background sampling and web presentation."""

from spreadwatch.dashboard.monitor import SpreadMonitor, SpreadView
from spreadwatch.dashboard.server import create_app


__all__ = [
    "SpreadMonitor",
    "SpreadView",
    "create_app",
]
