"""Metrics engine: pure calculators over a :class:`TopologyConfiguration`.

Data flows one way: breakout resolution and the leaf port budget feed the
device count and link plan, which feed the cost, power, cabling,
oversubscription, latency and rack space calculators. ``calculate_all_metrics``
composes them; ``compare_topologies`` scores several topologies side by side.
"""

from fabricmetrics.calc.breakout import (
    BreakoutResolution,
    negotiate_link_speed,
    resolve_breakout,
)
from fabricmetrics.calc.cabling import calculate_cabling
from fabricmetrics.calc.compare import (
    compare_topologies,
    comparison_frame,
    normalized_score,
    score_metrics,
)
from fabricmetrics.calc.cost_power import calculate_cost, calculate_power
from fabricmetrics.calc.latency import calculate_latency, count_hops
from fabricmetrics.calc.links import (
    LinkPlan,
    ParallelLinksValidation,
    PortBudget,
    allocate_port_budget,
    calculate_auto_parallel_links,
    check_parallel_links,
    get_parallel_links_per_spine,
    plan_links,
    resolve_device_count,
    validate_parallel_links,
)
from fabricmetrics.calc.metrics import calculate_all_metrics
from fabricmetrics.calc.oversubscription import calculate_oversubscription
from fabricmetrics.calc.rack_space import calculate_rack_space

__all__ = [
    "BreakoutResolution",
    "LinkPlan",
    "ParallelLinksValidation",
    "PortBudget",
    "allocate_port_budget",
    "calculate_all_metrics",
    "calculate_auto_parallel_links",
    "calculate_cabling",
    "calculate_cost",
    "calculate_latency",
    "calculate_oversubscription",
    "calculate_power",
    "calculate_rack_space",
    "check_parallel_links",
    "compare_topologies",
    "comparison_frame",
    "count_hops",
    "get_parallel_links_per_spine",
    "negotiate_link_speed",
    "normalized_score",
    "plan_links",
    "resolve_breakout",
    "resolve_device_count",
    "score_metrics",
    "validate_parallel_links",
]
