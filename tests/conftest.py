"""
ABOUTME: Pytest configuration and shared fixtures
ABOUTME: Provides isolated environment sources and readers for all tests
"""

import os
from unittest.mock import patch

import pytest

from required_env import EnvReader


@pytest.fixture
def test_env_vars():
    """Provide test environment variables, one well-formed value per supported type."""
    return {
        "APP_DEBUG": "true",
        "APP_SECRET": "s3cr3t",
        "APP_RATIO": "3.14",
        "APP_TIMEOUT": "2h45m",
        "APP_PORT": "8080",
        "APP_NAME": "billing",
        "APP_HOSTS": "a.example.com,b.example.com,c.example.com",
        "APP_URL": "https://api.example.com:8443/v1?region=eu",
        "APP_BIND": "10.0.0.1",
    }


@pytest.fixture
def mock_env_vars(test_env_vars):
    """Mock environment variables for testing."""
    with patch.dict(os.environ, test_env_vars, clear=False):
        yield test_env_vars


@pytest.fixture
def reader(test_env_vars):
    """Provide an EnvReader isolated from the process environment."""
    return EnvReader.from_mapping(test_env_vars)


@pytest.fixture
def empty_reader():
    """Provide an EnvReader over an empty environment."""
    return EnvReader.from_mapping({})
