"""Result records produced by the metrics engine.

All records are frozen and JSON-friendly through ``to_dict``. A result is
derived fresh on every call and carries no identity beyond that call.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DeviceCount:
    spines: int
    leafs: int
    total: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SwitchBreakdown:
    """Spine/leaf split of a switch-level quantity (cost or watts)."""

    spine: float
    leaf: float
    total: float


@dataclass(frozen=True)
class CostBreakdown:
    switches: SwitchBreakdown
    optics: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PowerBreakdown:
    """Power draw in watts, same shape as :class:`CostBreakdown`."""

    switches: SwitchBreakdown
    optics: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class OversubscriptionMetrics:
    """Per-leaf downlink versus uplink capacity.

    Attributes:
        ratio: Downlink/uplink capacity rounded to two decimals, or ``None``
            when the leaf has no uplink capacity (rail-only designs).
        uplink_capacity: Uplink capacity per leaf in Gbps.
        downlink_capacity: Downlink capacity per leaf in Gbps.
        uplink_ports_per_leaf: Ports per leaf wired to spines.
        downlink_ports_per_leaf: Ports per leaf left for endpoints.
    """

    ratio: Optional[float]
    uplink_capacity: float
    downlink_capacity: float
    uplink_ports_per_leaf: int
    downlink_ports_per_leaf: int

    @property
    def ratio_label(self) -> str:
        """Human-readable ratio, e.g. ``"3.00:1"`` or ``"N/A"``."""
        if self.ratio is None:
            return "N/A"
        return f"{self.ratio:.2f}:1"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["ratio_label"] = self.ratio_label
        return data


@dataclass(frozen=True)
class LatencyMetrics:
    """Worst-case path latency estimate in microseconds."""

    switch_latency: float
    fiber_latency: float
    hops: int
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RackSpaceMetrics:
    spine_rack_units: int
    leaf_rack_units: int
    total_rack_units: int
    racks_needed: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CablingMetrics:
    """Fabric link counts split by cable kind.

    Attributes:
        standard: Links carried on one-to-one cables.
        breakout: Links carried on breakout (fan-out) cables.
        total: ``standard + breakout``.
        physical: Physical cables to pull; a breakout cable carries
            several links.
    """

    standard: int
    breakout: int
    total: int
    physical: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MetricsResult:
    """All derived characteristics of one topology."""

    device_count: DeviceCount
    cost: CostBreakdown
    power: PowerBreakdown
    oversubscription: OversubscriptionMetrics
    latency: LatencyMetrics
    rack_space: RackSpaceMetrics
    cabling: CablingMetrics

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a nested dictionary of JSON primitives."""
        return {
            "device_count": self.device_count.to_dict(),
            "cost": self.cost.to_dict(),
            "power": self.power.to_dict(),
            "oversubscription": self.oversubscription.to_dict(),
            "latency": self.latency.to_dict(),
            "rack_space": self.rack_space.to_dict(),
            "cabling": self.cabling.to_dict(),
        }


@dataclass(frozen=True)
class ComparisonScores:
    """Normalized 0-100 scores; higher is better on every axis."""

    cost_score: float
    power_score: float
    latency_score: float
    oversubscription_score: float
    rack_space_score: float
    cabling_score: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ComparisonResult:
    id: str
    name: str
    metrics: MetricsResult
    scores: ComparisonScores

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "metrics": self.metrics.to_dict(),
            "scores": self.scores.to_dict(),
        }
