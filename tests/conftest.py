"""Shared fixtures: platforms from the registry and isolated settings."""

from __future__ import annotations

import pytest

from schemaport.config import get_settings
from schemaport.sql.registry import get_platform


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Drop cached settings so environment patches take effect per test."""
    for name in (
        "SCHEMAPORT_PLATFORM",
        "SCHEMAPORT_DETECT_RENAMED_COLUMNS",
        "SCHEMAPORT_DETECT_RENAMED_INDEXES",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def oracle():
    return get_platform("oracle")


@pytest.fixture
def postgresql():
    return get_platform("postgresql")


@pytest.fixture
def mysql():
    return get_platform("mysql")
