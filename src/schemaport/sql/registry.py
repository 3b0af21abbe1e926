"""Platform registry: one shared Platform instance per registered name."""

from __future__ import annotations

import threading
from typing import Callable, Dict, List, Optional

from schemaport.config import get_settings
from schemaport.exceptions import UnknownPlatform

from .platform import Platform

PlatformFactory = Callable[[], Platform]

_PLATFORM_FACTORIES: Dict[str, PlatformFactory] = {}
_PLATFORM_ALIASES: Dict[str, str] = {}
_PLATFORM_INSTANCES: Dict[str, Platform] = {}
_LOCK = threading.Lock()


def register_platform(name: str, factory: PlatformFactory, aliases: tuple = ()) -> None:
    """Register a platform factory under a name and optional aliases."""
    key = name.lower()
    if key in _PLATFORM_FACTORIES:
        raise ValueError(f"Platform '{name}' is already registered.")
    _PLATFORM_FACTORIES[key] = factory
    for alias in aliases:
        _PLATFORM_ALIASES[alias.lower()] = key


def _load_builtin_platforms() -> None:
    # Importing the dialects package registers the bundled platforms.
    from . import dialects  # noqa: F401


def get_platform(name: Optional[str] = None) -> Platform:
    """
    Get the shared Platform for a name; defaults to the configured platform.

    Raises:
        UnknownPlatform: No platform is registered under the name
    """
    _load_builtin_platforms()
    requested = (name or get_settings().platform).lower()
    key = _PLATFORM_ALIASES.get(requested, requested)
    if key not in _PLATFORM_FACTORIES:
        raise UnknownPlatform(f"Platform '{requested}' not found in registry. Available: {list_platforms()}")
    with _LOCK:
        if key not in _PLATFORM_INSTANCES:
            _PLATFORM_INSTANCES[key] = _PLATFORM_FACTORIES[key]()
        return _PLATFORM_INSTANCES[key]


def list_platforms() -> List[str]:
    """List all registered platform names."""
    _load_builtin_platforms()
    return sorted(_PLATFORM_FACTORIES.keys())


__all__ = ["register_platform", "get_platform", "list_platforms", "PlatformFactory"]
