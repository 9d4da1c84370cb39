"""Rack units and rack count."""

from __future__ import annotations

import math
from typing import Optional

from fabricmetrics.calc.links import resolve_device_count
from fabricmetrics.config import ENGINE_CONFIG, EngineConfig
from fabricmetrics.model.metrics import RackSpaceMetrics
from fabricmetrics.model.topology import TopologyConfiguration


def calculate_rack_space(
    config: TopologyConfiguration, engine_config: Optional[EngineConfig] = None
) -> RackSpaceMetrics:
    cfg = engine_config or ENGINE_CONFIG
    devices = resolve_device_count(config)
    params = config.rack_space_parameters

    spine_units = devices.spines * params.spine_rack_units
    leaf_units = devices.leafs * params.leaf_rack_units
    total_units = spine_units + leaf_units
    return RackSpaceMetrics(
        spine_rack_units=spine_units,
        leaf_rack_units=leaf_units,
        total_rack_units=total_units,
        racks_needed=math.ceil(total_units / cfg.rack_units_per_rack),
    )
