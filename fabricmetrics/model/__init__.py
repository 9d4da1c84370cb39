"""Input configuration and output metric records."""

from fabricmetrics.model.metrics import (
    CablingMetrics,
    ComparisonResult,
    ComparisonScores,
    CostBreakdown,
    DeviceCount,
    LatencyMetrics,
    MetricsResult,
    OversubscriptionMetrics,
    PowerBreakdown,
    RackSpaceMetrics,
    SwitchBreakdown,
)
from fabricmetrics.model.topology import (
    DeviceChoice,
    DeviceSelection,
    LatencyParameters,
    LeafConfig,
    PowerUsage,
    RackSpaceParameters,
    SpineConfig,
    SwitchCost,
    Topology,
    TopologyConfiguration,
)

__all__ = [
    "CablingMetrics",
    "ComparisonResult",
    "ComparisonScores",
    "CostBreakdown",
    "DeviceChoice",
    "DeviceCount",
    "DeviceSelection",
    "LatencyMetrics",
    "LatencyParameters",
    "LeafConfig",
    "MetricsResult",
    "OversubscriptionMetrics",
    "PowerBreakdown",
    "PowerUsage",
    "RackSpaceMetrics",
    "RackSpaceParameters",
    "SpineConfig",
    "SwitchBreakdown",
    "SwitchCost",
    "Topology",
    "TopologyConfiguration",
]
