"""Bundled dialects.

Importing this package registers every bundled platform with the registry.
"""

from . import mysql  # noqa: F401
from . import oracle  # noqa: F401
from . import postgresql  # noqa: F401

__all__ = ["oracle", "postgresql", "mysql"]
