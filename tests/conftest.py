"""
Shared fixtures for the asyncops test suite.
"""

import pytest

from asyncops.config.settings import clear_settings_cache
from tests.fakes import FakeFetchPort


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached process-wide; never leak them between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def sites():
    return ["u1", "u2", "u3"]


@pytest.fixture
def fetch_port():
    return FakeFetchPort(sizes={"u1": 10, "u2": 20, "u3": 5})
