import pytest

from fabricmetrics.calc.cost_power import calculate_cost, calculate_power
from fabricmetrics.errors import ConfigurationError
from fabricmetrics.model import DeviceChoice, DeviceSelection, PowerUsage, SwitchCost
from fabricmetrics.observer import RecordingObserver


def test_cost_of_reference_fabric(base_config) -> None:
    """4+4 switches and 32 x 400G optics at default prices."""
    cost = calculate_cost(base_config)
    assert cost.switches.spine == 60000.0
    assert cost.switches.leaf == 40000.0
    assert cost.switches.total == 100000.0
    assert cost.optics == 32 * 2000.0
    assert cost.total == 164000.0


def test_power_of_reference_fabric(base_config) -> None:
    power = calculate_power(base_config)
    assert power.switches.spine == 2000.0
    assert power.switches.leaf == 1200.0
    assert power.optics == 32 * 15.0
    assert power.total == pytest.approx(3680.0)


def test_doubling_parallel_links_doubles_optics(make_config) -> None:
    """Optics cost and power are proportional to links per spine."""
    one = make_config(
        parallel_links_enabled=True,
        parallel_links_mode="manual",
        parallel_links_per_spine=2,
    )
    two = one.replace(parallel_links_per_spine=4)

    assert calculate_cost(two).optics == 2 * calculate_cost(one).optics
    assert calculate_power(two).optics == 2 * calculate_power(one).optics
    # Switches don't change
    assert calculate_cost(two).switches == calculate_cost(one).switches


def test_single_tier_has_no_spine_cost_or_power(rail_only_config) -> None:
    cost = calculate_cost(rail_only_config)
    power = calculate_power(rail_only_config)
    assert cost.switches.spine == 0
    assert power.switches.spine == 0
    assert cost.switches.leaf == 16 * 10000.0
    # No spine-leaf links, so no optics
    assert cost.optics == 0
    assert power.optics == 0
    assert cost.total == cost.switches.total


def test_custom_prices(make_config) -> None:
    config = make_config(
        switch_cost=SwitchCost(spine=1000.0, leaf=500.0),
        optics_cost={"400G": 10.0},
        power_usage=PowerUsage(spine=100.0, leaf=50.0, optics={"400G": 1.0}),
    )
    assert calculate_cost(config).total == 4 * 1000 + 4 * 500 + 32 * 10
    assert calculate_power(config).total == 4 * 100 + 4 * 50 + 32 * 1


def test_missing_optics_price_raises(make_config) -> None:
    config = make_config(optics_cost={"100G": 500.0})
    with pytest.raises(ConfigurationError, match="400G"):
        calculate_cost(config)


def test_missing_optics_power_raises(make_config) -> None:
    config = make_config(power_usage=PowerUsage(optics={"100G": 5.0}))
    with pytest.raises(ConfigurationError, match="optics power"):
        calculate_power(config)


def test_no_links_needs_no_optics_entry(make_config) -> None:
    """A lone rail-only leaf never looks up an optics price."""
    config = make_config(num_tiers=1, num_leafs=1, optics_cost={})
    assert calculate_cost(config).optics == 0.0


def test_device_overrides_replace_unit_values(make_config) -> None:
    selection = DeviceSelection(
        spine=DeviceChoice("arista-7800r3", cost_override=20000.0),
        leaf=DeviceChoice("arista-7050x4", power_override=250.0),
    )
    config = make_config(device_selection=selection)
    cost = calculate_cost(config)
    power = calculate_power(config)
    assert cost.switches.spine == 4 * 20000.0
    assert cost.switches.leaf == 4 * 10000.0
    assert power.switches.spine == 4 * 500.0
    assert power.switches.leaf == 4 * 250.0


def test_cost_observer_reports_units(base_config) -> None:
    observer = RecordingObserver()
    calculate_cost(base_config, observer=observer)
    values = observer.values_for("cost")
    assert values["spine_unit"] == 15000.0
    assert values["optics_needed"] == 32


def test_calculators_do_not_mutate_input(base_config) -> None:
    before = base_config.replace()
    calculate_cost(base_config)
    calculate_power(base_config)
    assert base_config == before
