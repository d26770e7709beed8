"""Pytest configuration and shared fixtures for web2glass tests

This module provides common fixtures and test utilities used across
unit and integration tests.
"""

import pytest
import logging
from pathlib import Path
from typing import Generator

from web2glass.apps.base import AppContext
from web2glass.common.config import Config, ConfigLoader
from web2glass.common.event_log import EventLog
from web2glass.common.settings import settings
from web2glass.surface.factory import simulatorAcquire_create, unavailableAcquire_create
from web2glass.surface.panel import PanelSurface
from web2glass.surface.simulator import SimulatedBridge


@pytest.fixture
def sample_config() -> Config:
    """Load sample configuration for testing

    Returns:
        Config object with repository defaults
    """
    config_path = Path(__file__).parent.parent / "config.yml"
    if not config_path.exists():
        pytest.skip("config.yml not found - required for this test")
    return ConfigLoader.config_load(config_path)


@pytest.fixture
def reset_settings() -> Generator[None, None, None]:
    """Reset settings singleton between tests

    This fixture ensures each test gets a fresh Settings instance.
    """
    # Reset singleton state
    settings._initialized = False
    settings._config = None
    yield
    # Cleanup after test
    settings._initialized = False
    settings._config = None


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)


@pytest.fixture
def bridge() -> SimulatedBridge:
    """Fresh simulator bridge"""
    return SimulatedBridge()


@pytest.fixture
def statuses() -> list[str]:
    """Collected host status lines"""
    return []


@pytest.fixture
def bridge_context(bridge: SimulatedBridge, statuses: list[str]) -> AppContext:
    """App context whose bridge acquisition resolves immediately"""
    return AppContext(
        set_status=statuses.append,
        local=PanelSurface(),
        acquire=simulatorAcquire_create(bridge),
        event_log=EventLog(),
        connect_timeout_ms=500,
    )


@pytest.fixture
def mock_context(statuses: list[str]) -> AppContext:
    """App context whose bridge never appears"""
    return AppContext(
        set_status=statuses.append,
        local=PanelSurface(),
        acquire=unavailableAcquire_create(),
        event_log=EventLog(),
        connect_timeout_ms=20,
    )


# Markers for test organization
def pytest_configure(config) -> None:
    """Register custom pytest markers used by this test suite."""
    config.addinivalue_line(
        "markers", "integration: end-to-end session tests against the simulated bridge"
    )
