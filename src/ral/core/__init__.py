"""Runtime services: settings, logging and provider discovery."""

from .config import RalSettings, load_settings
from .discovery import discover_providers
from .log import configure_logging

__all__ = ["RalSettings", "configure_logging", "discover_providers", "load_settings"]
