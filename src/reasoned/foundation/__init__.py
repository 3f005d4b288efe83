"""Foundation: configuration shared by the rest of the package."""

from .config import CaptureSettings, LoggingSettings, ReasonedSettings, clear_settings_cache, get_settings

__all__ = ["CaptureSettings", "LoggingSettings", "ReasonedSettings", "clear_settings_cache", "get_settings"]
