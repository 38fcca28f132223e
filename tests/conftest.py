"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from liquidator.config import ConfigurationStore, ManagerConfig
from liquidator.routing.resolver import PathResolver
from tests.helpers import OWNER, Market, make_market
from tests.helpers.mocks import MockPoolRegistry


@pytest.fixture
def market() -> Market:
    """Seeded market with no intermediate assets configured."""
    return make_market()


@pytest.fixture
def hop_market() -> Market:
    """Seeded market with WETH then DAI configured as intermediates."""
    return make_market(intermediates=["WETH", "DAI"])


@pytest.fixture
def config_store() -> ConfigurationStore:
    return ConfigurationStore(ManagerConfig(owner=OWNER))


@pytest.fixture
def mock_registry() -> MockPoolRegistry:
    return MockPoolRegistry()


@pytest.fixture
def resolver(mock_registry: MockPoolRegistry, config_store: ConfigurationStore) -> PathResolver:
    return PathResolver(mock_registry, config_store)
