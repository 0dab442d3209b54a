"""
Pytest configuration and fixtures for neo-ogm tests.
"""

import pytest

from neo_ogm.core.config import Settings, get_settings
from neo_ogm.graph.schema import Schema


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop the cached Settings so env overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Provide test settings with strict record checking."""
    return Settings(strict_records=True, log_level="DEBUG")


@pytest.fixture
def person_schema() -> Schema:
    """Schema covering every option a descriptor can carry."""
    return Schema(
        {
            "name": {"type": str, "required": True, "index": True},
            "email": {"type": str, "unique": True, "lowercase": True, "match": r"[^@\s]+@[^@\s]+"},
            "country": {"type": str, "uppercase": True, "enum": ["GB", "US", "FR"]},
            "age": int,
            "active": bool,
            "tags": {"type": list[str], "lowercase": True},
        }
    )
