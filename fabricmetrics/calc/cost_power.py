"""Capex and power of switches and optics.

Both calculators take their optic count from the same :class:`LinkPlan`, so
cost and power can never disagree about how many links or devices exist.
"""

from __future__ import annotations

from typing import Mapping, Optional, Tuple

from fabricmetrics.calc.links import LinkPlan, plan_links
from fabricmetrics.config import EngineConfig
from fabricmetrics.errors import ConfigurationError
from fabricmetrics.model.metrics import CostBreakdown, PowerBreakdown, SwitchBreakdown
from fabricmetrics.model.topology import TopologyConfiguration
from fabricmetrics.observer import NULL_OBSERVER, MetricsObserver
from fabricmetrics.types import PortSpeed


def _unit_values(
    config: TopologyConfiguration, spine_default: float, leaf_default: float, kind: str
) -> Tuple[float, float]:
    """Return (spine, leaf) unit values honoring per-device overrides."""
    spine_unit, leaf_unit = float(spine_default), float(leaf_default)
    selection = config.device_selection
    if selection is None:
        return spine_unit, leaf_unit
    attr = f"{kind}_override"
    if selection.spine is not None and getattr(selection.spine, attr) is not None:
        spine_unit = float(getattr(selection.spine, attr))
    if selection.leaf is not None and getattr(selection.leaf, attr) is not None:
        leaf_unit = float(getattr(selection.leaf, attr))
    return spine_unit, leaf_unit


def _per_optic(table: Mapping[PortSpeed, float], speed: PortSpeed, what: str) -> float:
    try:
        return float(table[speed])
    except KeyError:
        raise ConfigurationError(
            f"No {what} defined for {speed.value} optics"
        ) from None


def _switches(plan: LinkPlan, spine_unit: float, leaf_unit: float) -> SwitchBreakdown:
    spine = plan.devices.spines * spine_unit
    leaf = plan.devices.leafs * leaf_unit
    return SwitchBreakdown(spine=spine, leaf=leaf, total=spine + leaf)


def calculate_cost(
    config: TopologyConfiguration,
    engine_config: Optional[EngineConfig] = None,
    observer: MetricsObserver = NULL_OBSERVER,
    plan: Optional[LinkPlan] = None,
) -> CostBreakdown:
    """Switch and optics capex.

    Args:
        config: Topology configuration.
        engine_config: Engine tunables (defaults to the global instance).
        observer: Receives the per-step values.
        plan: Precomputed link plan; derived from ``config`` when omitted.

    Raises:
        ConfigurationError: Missing breakout entry or optics price.
        PortOverflowError: Parallel uplinks exceed the leaf budget.
    """
    plan = plan or plan_links(config, engine_config)
    spine_unit, leaf_unit = _unit_values(
        config, config.switch_cost.spine, config.switch_cost.leaf, "cost"
    )
    switches = _switches(plan, spine_unit, leaf_unit)

    optics = 0.0
    if plan.optics_needed:
        per_optic = _per_optic(config.optics_cost, plan.link_speed, "optics cost")
        optics = plan.optics_needed * per_optic

    observer.record(
        "cost",
        {
            "spine_unit": spine_unit,
            "leaf_unit": leaf_unit,
            "optics_needed": plan.optics_needed,
            "optics": optics,
        },
    )
    return CostBreakdown(switches=switches, optics=optics, total=switches.total + optics)


def calculate_power(
    config: TopologyConfiguration,
    engine_config: Optional[EngineConfig] = None,
    observer: MetricsObserver = NULL_OBSERVER,
    plan: Optional[LinkPlan] = None,
) -> PowerBreakdown:
    """Switch and optics power draw in watts; mirrors :func:`calculate_cost`."""
    plan = plan or plan_links(config, engine_config)
    usage = config.power_usage
    spine_unit, leaf_unit = _unit_values(config, usage.spine, usage.leaf, "power")
    switches = _switches(plan, spine_unit, leaf_unit)

    optics = 0.0
    if plan.optics_needed:
        optics = plan.optics_needed * _per_optic(
            usage.optics, plan.link_speed, "optics power"
        )

    observer.record(
        "power",
        {
            "spine_unit": spine_unit,
            "leaf_unit": leaf_unit,
            "optics_needed": plan.optics_needed,
            "optics": optics,
        },
    )
    return PowerBreakdown(
        switches=switches, optics=optics, total=switches.total + optics
    )
