"""
Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the setup wizard test suite.
"""

from unittest.mock import Mock

import pytest
import requests

import setup_wizard.utils.logging as logging_utils
from setup_wizard.components.status_reporter import CollectingStatusReporter
from setup_wizard.models.config import SetupConfig
from setup_wizard.utils.error_handling import get_error_tracker
from setup_wizard.utils.logging import setup_logging


@pytest.fixture(scope="session", autouse=True)
def configure_logging(tmp_path_factory):
    """Keep log files out of the working tree."""
    return setup_logging(log_dir=str(tmp_path_factory.mktemp("logs")), log_level="DEBUG")

@pytest.fixture(autouse=True)
def reset_error_tracker():
    """Start every test with an empty error tracker."""
    get_error_tracker().clear()
    yield
    get_error_tracker().clear()

@pytest.fixture
def project_root(tmp_path):
    """A fresh project directory."""
    return tmp_path

@pytest.fixture
def setup_config(project_root):
    """Default settings rooted at the temporary project."""
    return SetupConfig(project_root=project_root)

@pytest.fixture
def reporter():
    """Reporter that keeps emitted results in memory."""
    return CollectingStatusReporter()

@pytest.fixture
def bot_payload():
    """A successful getMe body."""
    return {
        "ok": True,
        "result": {
            "id": 42,
            "is_bot": True,
            "first_name": "My Bot",
            "username": "mybot",
        },
    }

@pytest.fixture
def unauthorized_payload():
    """getMe body for a rejected token."""
    return {"ok": False, "error_code": 401, "description": "Unauthorized"}

@pytest.fixture
def make_response():
    """Factory for mock requests.Response objects."""

    def _make(payload=None, status_code=200, json_error=None):
        response = Mock(spec=requests.Response)
        response.status_code = status_code
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = payload
        return response

    return _make

@pytest.fixture
def mock_session():
    """A requests.Session stand-in whose get() tests configure."""
    return Mock(spec=requests.Session)

@pytest.fixture
def restore_logging_manager():
    """Put the session-wide logging manager back after a test replaces it."""
    previous = logging_utils._logging_manager
    yield
    logging_utils._logging_manager = previous
    if previous is not None:
        previous._setup_logging()
