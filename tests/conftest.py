"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from infra import GenerationConfig  # noqa: E402


@pytest.fixture
def generation_config() -> GenerationConfig:
    """Configuration independent of the process environment."""
    return GenerationConfig(
        default_endpoint="https://api.openai.com/v1/chat/completions",
        default_model="gpt-4o-mini",
        default_api_key="sk-api",
        default_api_key_secret="",
        secret_backend="env",
        secret_dir="./secrets",
        transport="http",
        connection_timeout_s=10,
        strict_host_check=False,
    )
