"""
StreamHub Test Configuration

Shared fixtures and configuration for all tests.
"""

from typing import Generator

import pytest

# Add project root to path
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamhub.config as config_module
from streamhub.config import AddonConfig, ResolverConfig
from streamhub.resolving.base import Context
from streamhub.resolving.stream_resolver import StreamResolver
from tests.fixtures.factories import FakeRegistry


# ============ Configuration Fixtures ============


@pytest.fixture(autouse=True)
def reset_config() -> Generator[None, None, None]:
    """Make sure no test sees configuration loaded by another."""
    config_module._config = None
    yield
    config_module._config = None


@pytest.fixture
def resolver_config() -> ResolverConfig:
    return ResolverConfig()


@pytest.fixture
def addon_config() -> AddonConfig:
    return AddonConfig(id="streamhub", name="StreamHub")


# ============ Request Fixtures ============


@pytest.fixture
def ctx() -> Context:
    """Request context with every toggle off."""
    return Context(host_url="https://addon.test/", config={}, id="req-1")


@pytest.fixture
def ctx_show_errors() -> Context:
    return Context(host_url="https://addon.test/", config={"showErrors": "on"}, id="req-2")


# ============ Resolver Fixtures ============


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def resolver(registry: FakeRegistry, resolver_config: ResolverConfig, addon_config: AddonConfig) -> StreamResolver:
    return StreamResolver(registry, resolver_config, addon_config)
