"""fabricmetrics: metrics engine for data-center fabric topologies.

Evaluates spine-leaf, multi-tier Clos and rail-only designs and derives device
counts, cost, power, oversubscription, latency, rack space and cabling.

Primary API:
    calculate_all_metrics() - All metrics for one configuration
    compare_topologies() - Metrics plus 0-100 scores for several topologies
    TopologyConfiguration, Topology - Input model
    load_topologies() - Read YAML/JSON topology documents
    get_template() - Built-in starting points

Example:
    from fabricmetrics import calculate_all_metrics, get_template

    config = get_template("Medium Leaf-Spine").configuration
    metrics = calculate_all_metrics(config)
    print(metrics.cost.total, metrics.oversubscription.ratio_label)

    # Compare against a wider variant; the base configuration is untouched
    variant = config.replace(num_spines=8)
    results = compare_topologies([config, variant])
"""

from __future__ import annotations

from fabricmetrics import cli, logging
from fabricmetrics._version import __version__
from fabricmetrics.calc import (
    calculate_all_metrics,
    compare_topologies,
    comparison_frame,
    validate_parallel_links,
)
from fabricmetrics.catalog import Device, DeviceCatalog, apply_device_selection
from fabricmetrics.config import ENGINE_CONFIG, EngineConfig, ScoreScales
from fabricmetrics.errors import (
    ConfigurationError,
    FabricMetricsError,
    PortOverflowError,
)
from fabricmetrics.io import (
    export_topology,
    import_topology,
    load_topologies,
    load_topology_document,
)
from fabricmetrics.model import (
    ComparisonResult,
    LeafConfig,
    MetricsResult,
    SpineConfig,
    Topology,
    TopologyConfiguration,
)
from fabricmetrics.observer import (
    LoggingObserver,
    MetricsObserver,
    NullObserver,
    RecordingObserver,
)
from fabricmetrics.templates import get_template, list_templates
from fabricmetrics.types import ParallelLinksMode, PortSpeed

__all__ = [
    # Version
    "__version__",
    # Model
    "TopologyConfiguration",
    "SpineConfig",
    "LeafConfig",
    "Topology",
    "MetricsResult",
    "ComparisonResult",
    # Types
    "PortSpeed",
    "ParallelLinksMode",
    # Engine
    "calculate_all_metrics",
    "compare_topologies",
    "comparison_frame",
    "validate_parallel_links",
    "EngineConfig",
    "ScoreScales",
    "ENGINE_CONFIG",
    # Observers
    "MetricsObserver",
    "NullObserver",
    "LoggingObserver",
    "RecordingObserver",
    # Errors
    "FabricMetricsError",
    "ConfigurationError",
    "PortOverflowError",
    # Documents, templates, devices
    "load_topologies",
    "load_topology_document",
    "export_topology",
    "import_topology",
    "get_template",
    "list_templates",
    "Device",
    "DeviceCatalog",
    "apply_device_selection",
    # Utilities
    "cli",
    "logging",
]
