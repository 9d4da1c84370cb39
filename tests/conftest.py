"""Shared fixtures for fabricmetrics tests.

``make_config`` builds a two-tier fabric with known numbers so tests can
override only the fields they care about:

- 4 spines with 64 x 400G ports, no breakout
- 4 leaves with 48 ports, 100G downlinks, no breakout
- default prices, wattage, latency and rack parameters
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from fabricmetrics.logging import reset_logging
from fabricmetrics.model import LeafConfig, SpineConfig, TopologyConfiguration


def build_config(**overrides: Any) -> TopologyConfiguration:
    """Return the reference configuration with ``overrides`` applied."""
    fields: dict[str, Any] = {
        "num_spines": 4,
        "num_leafs": 4,
        "num_tiers": 2,
        "spine_config": SpineConfig(
            port_count=64, port_speed="400G", breakout_mode="1x400G"
        ),
        "leaf_config": LeafConfig(
            port_count=48, downlink_speed="100G", breakout_mode="1x100G"
        ),
    }
    fields.update(overrides)
    return TopologyConfiguration(**fields)


@pytest.fixture
def make_config() -> Callable[..., TopologyConfiguration]:
    return build_config


@pytest.fixture
def base_config() -> TopologyConfiguration:
    return build_config()


@pytest.fixture
def rail_only_config() -> TopologyConfiguration:
    """Single-tier design that still carries a stale spine count."""
    return build_config(num_tiers=1, num_spines=4, num_leafs=16)


@pytest.fixture
def clean_logging():
    """Reset package logging around a test that inspects handlers or levels."""
    reset_logging()
    yield
    reset_logging()


SMALL_TOPOLOGY_YAML = """
name: Small Fabric
description: two spines, four leaves
configuration:
  numSpines: 2
  numLeafs: 4
  numTiers: 2
  spineConfig: {portCount: 64, portSpeed: 400G, breakoutMode: 1x400G}
  leafConfig: {portCount: 48, downlinkSpeed: 100G, breakoutMode: 1x100G}
"""


@pytest.fixture
def small_topology_yaml() -> str:
    return SMALL_TOPOLOGY_YAML
