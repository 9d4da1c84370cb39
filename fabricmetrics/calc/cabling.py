"""Fabric cable counts."""

from __future__ import annotations

import math
from typing import Optional

from fabricmetrics.calc.links import LinkPlan, plan_links
from fabricmetrics.config import EngineConfig
from fabricmetrics.model.metrics import CablingMetrics
from fabricmetrics.model.topology import TopologyConfiguration
from fabricmetrics.observer import NULL_OBSERVER, MetricsObserver


def calculate_cabling(
    config: TopologyConfiguration,
    engine_config: Optional[EngineConfig] = None,
    observer: MetricsObserver = NULL_OBSERVER,
    plan: Optional[LinkPlan] = None,
) -> CablingMetrics:
    """Split fabric links into standard and breakout cabling.

    A link rides a breakout cable when either end uses a breakout factor
    above 1. A link is counted once even when both ends break out.

    ``physical`` counts cables rather than links: one breakout cable fans out
    into ``factor`` links, using the larger factor of the two ends.

    The leaf-leaf mesh of a single-tier design is cabled with standard
    cables; the leaf downlink breakout applies to endpoint ports only.
    """
    plan = plan or plan_links(config, engine_config)
    if plan.rail_only:
        spine_factor = leaf_factor = 1
    else:
        spine_factor = plan.spine_breakout.factor
        leaf_factor = plan.leaf_breakout.factor
    factor = max(spine_factor, leaf_factor)

    links = plan.cabled_links
    if factor > 1:
        standard, breakout = 0, links
    else:
        standard, breakout = links, 0
    physical = standard + math.ceil(breakout / factor)

    observer.record(
        "cabling",
        {
            "spine_factor": spine_factor,
            "leaf_factor": leaf_factor,
            "physical": physical,
        },
    )
    return CablingMetrics(
        standard=standard,
        breakout=breakout,
        total=standard + breakout,
        physical=physical,
    )
