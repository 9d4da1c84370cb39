"""Closed-form worst-case latency estimate."""

from __future__ import annotations

from typing import Optional

from fabricmetrics.calc.links import resolve_device_count
from fabricmetrics.config import ENGINE_CONFIG, EngineConfig
from fabricmetrics.model.metrics import LatencyMetrics
from fabricmetrics.model.topology import TopologyConfiguration
from fabricmetrics.observer import NULL_OBSERVER, MetricsObserver


def count_hops(
    config: TopologyConfiguration, engine_config: Optional[EngineConfig] = None
) -> int:
    """Worst-case switch hops between two endpoints.

    Clos traffic climbs to the top tier and back down: leaf-spine-leaf is 2
    hops, a 3-tier fabric 4. Designs without a spine layer use the
    ``rail_only_hops`` tunable.
    """
    cfg = engine_config or ENGINE_CONFIG
    if resolve_device_count(config).spines == 0:
        return cfg.rail_only_hops
    return max(2, 2 * (config.num_tiers - 1))


def calculate_latency(
    config: TopologyConfiguration,
    engine_config: Optional[EngineConfig] = None,
    observer: MetricsObserver = NULL_OBSERVER,
) -> LatencyMetrics:
    """Switch and fiber latency along the worst-case path, in microseconds."""
    cfg = engine_config or ENGINE_CONFIG
    params = config.latency_parameters
    hops = count_hops(config, cfg)

    switch_latency = hops * params.switch_latency
    fiber_latency = hops * cfg.cable_length_km * params.fiber_latency

    observer.record(
        "latency",
        {"hops": hops, "cable_length_km": cfg.cable_length_km},
    )
    return LatencyMetrics(
        switch_latency=switch_latency,
        fiber_latency=fiber_latency,
        hops=hops,
        total=switch_latency + fiber_latency,
    )
