"""Per-leaf oversubscription estimate."""

from __future__ import annotations

from typing import Optional

from fabricmetrics.calc.links import LinkPlan, plan_links
from fabricmetrics.config import EngineConfig
from fabricmetrics.model.metrics import OversubscriptionMetrics
from fabricmetrics.model.topology import TopologyConfiguration
from fabricmetrics.observer import NULL_OBSERVER, MetricsObserver


def calculate_oversubscription(
    config: TopologyConfiguration,
    engine_config: Optional[EngineConfig] = None,
    observer: MetricsObserver = NULL_OBSERVER,
    plan: Optional[LinkPlan] = None,
) -> OversubscriptionMetrics:
    """Compare one leaf's downlink capacity with its uplink capacity.

    Uplinks are ``parallel_links_per_spine`` ports to every spine at the
    negotiated link speed; every other leaf port is a downlink at the leaf
    downlink speed. A leaf without uplinks (single-tier designs) reports a
    ratio of ``None`` instead of dividing by zero.
    """
    plan = plan or plan_links(config, engine_config)
    leaf = config.leaf_config

    uplink_ports = plan.parallel_links_per_spine * plan.devices.spines
    downlink_ports = max(0, leaf.port_count - uplink_ports)
    uplink_capacity = uplink_ports * plan.link_speed.gbps if uplink_ports else 0.0
    downlink_capacity = downlink_ports * leaf.downlink_speed.gbps

    ratio: Optional[float] = None
    if uplink_capacity > 0:
        ratio = round(downlink_capacity / uplink_capacity, 2)

    observer.record(
        "oversubscription",
        {
            "uplink_ports_per_leaf": uplink_ports,
            "downlink_ports_per_leaf": downlink_ports,
            "uplink_capacity": uplink_capacity,
            "downlink_capacity": downlink_capacity,
            "ratio": ratio,
        },
    )
    return OversubscriptionMetrics(
        ratio=ratio,
        uplink_capacity=uplink_capacity,
        downlink_capacity=downlink_capacity,
        uplink_ports_per_leaf=uplink_ports,
        downlink_ports_per_leaf=downlink_ports,
    )
