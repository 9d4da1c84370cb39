"""Tests for `fabricmetrics.config` and model-level validation."""

import pytest

from fabricmetrics.config import ENGINE_CONFIG, EngineConfig, ScoreScales
from fabricmetrics.errors import ConfigurationError
from fabricmetrics.model import LeafConfig, SpineConfig, TopologyConfiguration
from fabricmetrics.types import ParallelLinksMode, PortSpeed


def test_default_engine_constants() -> None:
    assert ENGINE_CONFIG.downlink_reservation_ratio == 0.5
    assert ENGINE_CONFIG.cable_length_km == 0.01
    assert ENGINE_CONFIG.rack_units_per_rack == 42
    assert ENGINE_CONFIG.rail_only_hops == 0
    assert ENGINE_CONFIG.score_weight == 20.0
    assert ENGINE_CONFIG.score_scales == ScoreScales()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"downlink_reservation_ratio": 1.0},
        {"downlink_reservation_ratio": -0.1},
        {"cable_length_km": -1},
        {"rack_units_per_rack": 0},
        {"rail_only_hops": -1},
        {"rail_only_peer_links": -1},
        {"score_scales": ScoreScales(cost=0)},
    ],
)
def test_engine_config_rejects_bad_values(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        EngineConfig(**kwargs)


def test_configuration_normalizes_labels(base_config) -> None:
    assert base_config.spine_config.port_speed is PortSpeed.G400
    assert base_config.leaf_config.downlink_speed is PortSpeed.G100
    assert base_config.parallel_links_mode is ParallelLinksMode.AUTO
    assert PortSpeed.G400 in base_config.breakout_options


def test_configuration_is_immutable(base_config) -> None:
    with pytest.raises(AttributeError):
        base_config.num_spines = 8  # type: ignore[misc]
    with pytest.raises(TypeError):
        base_config.optics_cost[PortSpeed.G400] = 1.0  # type: ignore[index]


def test_replace_returns_new_configuration(base_config) -> None:
    bigger = base_config.replace(num_spines=8)
    assert bigger.num_spines == 8
    assert base_config.num_spines == 4


def test_parallel_links_mode_parsing() -> None:
    assert ParallelLinksMode.from_string("MANUAL") is ParallelLinksMode.MANUAL
    with pytest.raises(ConfigurationError, match="parallel links mode"):
        ParallelLinksMode.from_string("sometimes")


@pytest.mark.parametrize(
    "overrides",
    [
        {"num_spines": -1},
        {"num_leafs": 2.5},
        {"num_tiers": 0},
        {"parallel_links_per_spine": -2},
        {"num_spines": "abc"},
        {"num_leafs": None},
        {"optics_cost": {"300G": 1.0}},
    ],
)
def test_configuration_rejects_bad_values(make_config, overrides) -> None:
    with pytest.raises(ConfigurationError):
        make_config(**overrides)


def test_port_configs_reject_bad_values() -> None:
    with pytest.raises(ConfigurationError):
        SpineConfig(port_count=0, port_speed="400G", breakout_mode="1x400G")
    with pytest.raises(ConfigurationError):
        LeafConfig(port_count=48, downlink_speed="7G", breakout_mode="1x7G")


def test_port_counts_must_be_integers() -> None:
    """Non-numeric counts are configuration errors, not bare TypeErrors."""
    with pytest.raises(ConfigurationError, match="spine port_count"):
        SpineConfig(port_count=None, port_speed="400G", breakout_mode="1x400G")
    with pytest.raises(ConfigurationError, match="leaf port_count"):
        LeafConfig(port_count="abc", downlink_speed="100G", breakout_mode="1x100G")
    with pytest.raises(ConfigurationError):
        SpineConfig(port_count=float("inf"), port_speed="400G", breakout_mode="1x400G")


def test_is_single_tier(make_config) -> None:
    assert make_config(num_tiers=1).is_single_tier
    assert not make_config().is_single_tier
    assert isinstance(make_config(), TopologyConfiguration)
