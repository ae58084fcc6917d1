"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from cyprus_invest.main import app
from cyprus_invest.config import Settings, get_settings


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture
def test_settings():
    """Settings with a fixed exchange rate so results are predictable."""
    return Settings(exchange_rate=4.0)


@pytest.fixture
def client(test_settings):
    """Create test client with settings overridden."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
