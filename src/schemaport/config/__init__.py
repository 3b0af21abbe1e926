"""Configuration management for schemaport.

Usage:
    >>> from schemaport.config import get_settings
    >>> get_settings().platform
    'postgresql'
"""

from schemaport.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
