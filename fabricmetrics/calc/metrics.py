"""Aggregate all calculators into one :class:`MetricsResult`."""

from __future__ import annotations

from typing import Optional

from fabricmetrics.calc.cabling import calculate_cabling
from fabricmetrics.calc.cost_power import calculate_cost, calculate_power
from fabricmetrics.calc.latency import calculate_latency
from fabricmetrics.calc.links import plan_links
from fabricmetrics.calc.oversubscription import calculate_oversubscription
from fabricmetrics.calc.rack_space import calculate_rack_space
from fabricmetrics.config import ENGINE_CONFIG, EngineConfig
from fabricmetrics.model.metrics import MetricsResult
from fabricmetrics.model.topology import TopologyConfiguration
from fabricmetrics.observer import NULL_OBSERVER, MetricsObserver


def calculate_all_metrics(
    config: TopologyConfiguration,
    engine_config: Optional[EngineConfig] = None,
    observer: MetricsObserver = NULL_OBSERVER,
) -> MetricsResult:
    """Evaluate every metric of one topology.

    Pure function of its arguments: no I/O, no caching, and ``config`` is
    never modified. Calling it twice on the same configuration returns equal
    results.

    Args:
        config: Fully specified topology configuration.
        engine_config: Heuristic tunables; the global ``ENGINE_CONFIG`` when
            omitted.
        observer: Receives intermediate values of each step.

    Returns:
        MetricsResult with device counts, cost, power, oversubscription,
        latency, rack space and cabling.

    Raises:
        ConfigurationError: A breakout mode, speed, or optics entry is missing.
        PortOverflowError: Parallel uplinks exceed the leaf uplink budget.
    """
    cfg = engine_config or ENGINE_CONFIG
    plan = plan_links(config, cfg, observer)
    return MetricsResult(
        device_count=plan.devices,
        cost=calculate_cost(config, cfg, observer, plan),
        power=calculate_power(config, cfg, observer, plan),
        oversubscription=calculate_oversubscription(config, cfg, observer, plan),
        latency=calculate_latency(config, cfg, observer),
        rack_space=calculate_rack_space(config, cfg),
        cabling=calculate_cabling(config, cfg, observer, plan),
    )
