import math

import pytest

from fabricmetrics.calc import calculate_all_metrics
from fabricmetrics.errors import ConfigurationError, PortOverflowError
from fabricmetrics.model import LeafConfig, SpineConfig
from fabricmetrics.observer import LoggingObserver, RecordingObserver


def test_all_metrics_reference_fabric(base_config) -> None:
    metrics = calculate_all_metrics(base_config)
    assert metrics.device_count.total == 8
    assert metrics.cost.total == 164000.0
    assert metrics.power.total == pytest.approx(3680.0)
    assert metrics.oversubscription.ratio == 2.75
    assert metrics.latency.total == pytest.approx(1.1)
    assert metrics.rack_space.total_rack_units == 12
    assert metrics.cabling.total == 16


def test_idempotent_on_unchanged_configuration(base_config) -> None:
    """No hidden state: two calls give identical results."""
    first = calculate_all_metrics(base_config)
    second = calculate_all_metrics(base_config)
    assert first == second
    assert first.to_dict() == second.to_dict()


@pytest.mark.parametrize("stored_spines", [0, 2, 16])
def test_single_tier_has_zero_spines_whatever_is_stored(make_config, stored_spines) -> None:
    config = make_config(num_tiers=1, num_spines=stored_spines, num_leafs=8)
    metrics = calculate_all_metrics(config)
    assert metrics.device_count.spines == 0
    assert metrics.cost.switches.spine == 0
    assert metrics.power.switches.spine == 0
    assert metrics.rack_space.spine_rack_units == 0


def test_scenario_d_rail_only_is_fully_defined(rail_only_config) -> None:
    metrics = calculate_all_metrics(rail_only_config)
    assert metrics.oversubscription.ratio is None
    assert metrics.oversubscription.ratio_label == "N/A"
    assert metrics.latency.hops == 0
    assert metrics.rack_space.spine_rack_units == 0
    assert metrics.cabling.total == 32
    assert metrics.cost.optics == 0
    assert metrics.power.optics == 0

    flat = metrics.to_dict()
    for section in flat.values():
        for value in section.values():
            if isinstance(value, float):
                assert math.isfinite(value)


def test_observer_sees_every_step(base_config) -> None:
    observer = RecordingObserver()
    calculate_all_metrics(base_config, observer=observer)
    steps = [name for name, _ in observer.steps]
    assert steps == ["links", "cost", "power", "oversubscription", "latency", "cabling"]
    with pytest.raises(KeyError):
        observer.values_for("rack_space")


def test_logging_observer_writes_debug_records(base_config, caplog) -> None:
    with caplog.at_level("DEBUG", logger="fabricmetrics"):
        calculate_all_metrics(base_config, observer=LoggingObserver())
    assert any("links:" in r.getMessage() for r in caplog.records)
    assert any("total_links=16" in r.getMessage() for r in caplog.records)


def test_invalid_breakout_propagates(make_config) -> None:
    config = make_config(
        spine_config=SpineConfig(port_count=64, port_speed="400G", breakout_mode="4x200G")
    )
    with pytest.raises(ConfigurationError):
        calculate_all_metrics(config)


def test_missing_leaf_breakout_propagates(make_config) -> None:
    """100G downlinks have no 8x25G mode."""
    config = make_config(
        leaf_config=LeafConfig(port_count=48, downlink_speed="100G", breakout_mode="8x25G")
    )
    with pytest.raises(ConfigurationError, match="8x25G"):
        calculate_all_metrics(config)


def test_overflow_propagates(make_config) -> None:
    config = make_config(
        parallel_links_enabled=True,
        parallel_links_mode="manual",
        parallel_links_per_spine=7,
    )
    with pytest.raises(PortOverflowError):
        calculate_all_metrics(config)
