"""Latency, rack space and cabling calculators."""

import pytest

from fabricmetrics.calc.cabling import calculate_cabling
from fabricmetrics.calc.latency import calculate_latency, count_hops
from fabricmetrics.calc.rack_space import calculate_rack_space
from fabricmetrics.config import EngineConfig
from fabricmetrics.model import LatencyParameters, LeafConfig, RackSpaceParameters, SpineConfig


# Latency


def test_two_tier_latency(base_config) -> None:
    """Leaf-spine-leaf: 2 hops of switch latency and 2 x 10 m of fiber."""
    latency = calculate_latency(base_config)
    assert latency.hops == 2
    assert latency.switch_latency == pytest.approx(1.0)
    assert latency.fiber_latency == pytest.approx(0.1)
    assert latency.total == pytest.approx(1.1)


def test_hops_grow_with_tiers(make_config) -> None:
    assert count_hops(make_config(num_tiers=3)) == 4
    assert count_hops(make_config(num_tiers=4)) == 6


def test_rail_only_hops_default_zero_and_tunable(rail_only_config) -> None:
    latency = calculate_latency(rail_only_config)
    assert latency.hops == 0
    assert latency.total == 0.0

    engine = EngineConfig(rail_only_hops=1)
    latency = calculate_latency(rail_only_config, engine)
    assert latency.hops == 1
    assert latency.total == pytest.approx(0.5 + 0.05)


def test_latency_parameters_and_cable_length(make_config) -> None:
    config = make_config(
        latency_parameters=LatencyParameters(switch_latency=1.0, fiber_latency=5.0)
    )
    latency = calculate_latency(config, EngineConfig(cable_length_km=0.1))
    assert latency.switch_latency == pytest.approx(2.0)
    assert latency.fiber_latency == pytest.approx(1.0)


# Rack space


def test_rack_space_reference(base_config) -> None:
    rack = calculate_rack_space(base_config)
    assert rack.spine_rack_units == 8
    assert rack.leaf_rack_units == 4
    assert rack.total_rack_units == 12
    assert rack.racks_needed == 1


def test_racks_round_up(make_config) -> None:
    config = make_config(
        num_leafs=40,
        rack_space_parameters=RackSpaceParameters(spine_rack_units=2, leaf_rack_units=1),
    )
    # 8 + 40 = 48 units
    assert calculate_rack_space(config).racks_needed == 2
    assert calculate_rack_space(config, EngineConfig(rack_units_per_rack=48)).racks_needed == 1


def test_rail_only_rack_space(rail_only_config) -> None:
    rack = calculate_rack_space(rail_only_config)
    assert rack.spine_rack_units == 0
    assert rack.total_rack_units == 16


def test_empty_fabric_needs_no_racks(make_config) -> None:
    assert calculate_rack_space(make_config(num_spines=0, num_leafs=0)).racks_needed == 0


# Cabling


def test_standard_cabling(base_config) -> None:
    cabling = calculate_cabling(base_config)
    assert cabling.standard == 16
    assert cabling.breakout == 0
    assert cabling.total == 16
    assert cabling.physical == 16


def test_spine_breakout_moves_all_links_to_breakout(make_config) -> None:
    config = make_config(
        spine_config=SpineConfig(port_count=64, port_speed="800G", breakout_mode="4x200G")
    )
    cabling = calculate_cabling(config)
    assert cabling.standard == 0
    assert cabling.breakout == 16
    assert cabling.total == 16
    assert cabling.physical == 4


def test_links_counted_once_when_both_ends_break_out(make_config) -> None:
    config = make_config(
        spine_config=SpineConfig(port_count=64, port_speed="800G", breakout_mode="2x400G"),
        leaf_config=LeafConfig(port_count=48, downlink_speed="100G", breakout_mode="4x25G"),
    )
    cabling = calculate_cabling(config)
    assert cabling.total == 16
    assert cabling.breakout == 16
    # The larger fan-out decides how many links share a cable
    assert cabling.physical == 4


def test_rail_only_cabling_counts_leaf_links_only(rail_only_config) -> None:
    """Spine breakout is irrelevant without spines."""
    config = rail_only_config.replace(
        spine_config=SpineConfig(port_count=64, port_speed="800G", breakout_mode="8x100G")
    )
    cabling = calculate_cabling(config)
    assert cabling.total == 32
    assert cabling.standard == 32
    assert cabling.breakout == 0


def test_rail_only_mesh_ignores_leaf_downlink_breakout(make_config) -> None:
    """Leaf-leaf links use standard cables even when downlinks break out."""
    config = make_config(
        num_tiers=1,
        num_leafs=8,
        leaf_config=LeafConfig(port_count=48, downlink_speed="100G", breakout_mode="4x25G"),
    )
    cabling = calculate_cabling(config)
    assert cabling.standard == 16
    assert cabling.breakout == 0
    assert cabling.total == 16
    assert cabling.physical == 16
