"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from flux_mcp.config.provider_config import ReplicateConfig  # noqa: E402
from flux_mcp.image.client import ReplicateClient  # noqa: E402


@pytest.fixture
def config():
    return ReplicateConfig(api_token="test-token", base_url="https://api.example.test/v1")


@pytest.fixture
def client(config):
    return ReplicateClient(config)
