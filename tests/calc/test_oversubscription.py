import math

import pytest

from fabricmetrics.calc.oversubscription import calculate_oversubscription
from fabricmetrics.model import LeafConfig


def test_reference_fabric_ratio(base_config) -> None:
    """One 400G uplink per spine against 44 x 100G downlinks."""
    over = calculate_oversubscription(base_config)
    assert over.uplink_ports_per_leaf == 4
    assert over.downlink_ports_per_leaf == 44
    assert over.uplink_capacity == 1600.0
    assert over.downlink_capacity == 4400.0
    assert over.ratio == 2.75
    assert over.ratio_label == "2.75:1"


def test_parallel_links_lower_the_ratio(make_config) -> None:
    config = make_config(parallel_links_enabled=True)
    over = calculate_oversubscription(config)
    assert over.uplink_ports_per_leaf == 24
    assert over.ratio == 0.25


def test_ratio_rounded_to_two_decimals(make_config) -> None:
    config = make_config(
        num_spines=3,
        leaf_config=LeafConfig(
            port_count=48, downlink_speed="100G", breakout_mode="1x100G"
        ),
    )
    # 45 x 100G / 3 x 400G = 3.75
    assert calculate_oversubscription(config).ratio == 3.75

    config = make_config(num_spines=7)
    # 41 x 100G / 7 x 400G = 1.4642...
    assert calculate_oversubscription(config).ratio == 1.46


def test_rail_only_ratio_is_not_applicable(rail_only_config) -> None:
    """No uplinks: a defined sentinel instead of inf or NaN."""
    over = calculate_oversubscription(rail_only_config)
    assert over.ratio is None
    assert over.ratio_label == "N/A"
    assert over.uplink_capacity == 0.0
    assert over.downlink_capacity == pytest.approx(48 * 100.0)
    assert not math.isnan(over.downlink_capacity)
    assert over.to_dict()["ratio_label"] == "N/A"


def test_zero_spines_in_clos_is_not_applicable(make_config) -> None:
    over = calculate_oversubscription(make_config(num_spines=0))
    assert over.ratio is None
