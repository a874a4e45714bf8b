"""
Configuration resolution for rbexport commands.
"""

from .settings import ExportSettings, resolve_settings, validate_api_key

__all__ = ["ExportSettings", "resolve_settings", "validate_api_key"]
