"""Side-by-side comparison of several topologies.

Besides the raw metrics, each topology gets a 0-100 score per axis for
radar-style charts. Lower raw values are better on every axis, so scores are
inverted: ``score = 100 - raw / scale * weight``, clipped to [0, 100].
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

import pandas as pd

from fabricmetrics.calc.metrics import calculate_all_metrics
from fabricmetrics.config import ENGINE_CONFIG, EngineConfig
from fabricmetrics.model.metrics import (
    ComparisonResult,
    ComparisonScores,
    MetricsResult,
)
from fabricmetrics.model.topology import Topology, TopologyConfiguration
from fabricmetrics.observer import NULL_OBSERVER, MetricsObserver


def normalized_score(raw: float, scale: float, weight: float = 20.0) -> float:
    """Map a lower-is-better raw value onto a higher-is-better 0-100 score.

    Values of ``100 / weight`` scales or more compress to 0 rather than going
    negative.
    """
    score = 100.0 - min(100.0, raw / scale * weight)
    return max(0.0, min(100.0, score))


def score_metrics(
    metrics: MetricsResult, engine_config: Optional[EngineConfig] = None
) -> ComparisonScores:
    """Score one metrics result on all six axes.

    A missing oversubscription ratio (no uplinks) scores as 1:1.
    """
    cfg = engine_config or ENGINE_CONFIG
    scales, weight = cfg.score_scales, cfg.score_weight
    ratio = metrics.oversubscription.ratio
    return ComparisonScores(
        cost_score=normalized_score(metrics.cost.total, scales.cost, weight),
        power_score=normalized_score(metrics.power.total, scales.power, weight),
        latency_score=normalized_score(metrics.latency.total, scales.latency, weight),
        oversubscription_score=normalized_score(
            1.0 if ratio is None else ratio, scales.oversubscription, weight
        ),
        rack_space_score=normalized_score(
            metrics.rack_space.total_rack_units, scales.rack_units, weight
        ),
        cabling_score=normalized_score(metrics.cabling.total, scales.cabling, weight),
    )


def compare_topologies(
    topologies: Iterable[Union[Topology, TopologyConfiguration]],
    engine_config: Optional[EngineConfig] = None,
    observer: MetricsObserver = NULL_OBSERVER,
) -> List[ComparisonResult]:
    """Evaluate and score each topology, preserving input order.

    Bare configurations are named ``"Topology <n>"`` (1-based) and identified
    by their position.

    Raises:
        ConfigurationError: Any topology has an invalid configuration.
        PortOverflowError: Any topology's parallel uplinks don't fit.
    """
    results: List[ComparisonResult] = []
    for index, item in enumerate(topologies):
        if isinstance(item, Topology):
            ident, name, config = item.id, item.name, item.configuration
        else:
            ident, name, config = str(index), f"Topology {index + 1}", item
        metrics = calculate_all_metrics(config, engine_config, observer)
        results.append(
            ComparisonResult(
                id=ident,
                name=name,
                metrics=metrics,
                scores=score_metrics(metrics, engine_config),
            )
        )
    return results


def comparison_frame(results: Iterable[ComparisonResult]) -> pd.DataFrame:
    """Flatten comparison results into one row per topology.

    Columns hold headline metrics followed by the six scores; the index is
    the topology name.
    """
    rows = []
    for result in results:
        m = result.metrics
        row = {
            "name": result.name,
            "spines": m.device_count.spines,
            "leafs": m.device_count.leafs,
            "cost": m.cost.total,
            "power_watts": m.power.total,
            "oversubscription": m.oversubscription.ratio_label,
            "latency_us": m.latency.total,
            "rack_units": m.rack_space.total_rack_units,
            "racks": m.rack_space.racks_needed,
            "cables": m.cabling.total,
        }
        row.update(result.scores.to_dict())
        rows.append(row)
    columns = [
        "name",
        "spines",
        "leafs",
        "cost",
        "power_watts",
        "oversubscription",
        "latency_us",
        "rack_units",
        "racks",
        "cables",
        *ComparisonScores.__dataclass_fields__,
    ]
    return pd.DataFrame(rows, columns=columns).set_index("name")
