"""Pytest configuration and fixtures.

Provides call-recording doubles, log capture and configuration isolation
shared by the sync, async and collection suites.
"""

from __future__ import annotations

import logging

import pytest

from resultflow.config import _active_config
from tests.helpers import AsyncRecorder, Recorder

# =============================================================================
# Test Doubles
# =============================================================================


@pytest.fixture
def recorder() -> Recorder:
    """Return a fresh recorder returning ``None``."""
    return Recorder()


@pytest.fixture
def async_recorder() -> AsyncRecorder:
    """Return a fresh async recorder returning ``None``."""
    return AsyncRecorder()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def debug_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Capture DEBUG records from the resultflow loggers."""
    caplog.set_level(logging.DEBUG, logger="resultflow")
    return caplog


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_config():
    """Start every test on the default config and fail if a scope leaks."""
    token = _active_config.set(None)
    yield
    leaked = _active_config.get()
    _active_config.reset(token)
    assert leaked is None, f"config_scope left {leaked!r} active after the test"
