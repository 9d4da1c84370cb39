"""Tunable constants of the metrics engine."""

from dataclasses import dataclass, field

from fabricmetrics.errors import ConfigurationError


@dataclass(frozen=True)
class ScoreScales:
    """Raw metric value that maps to a score of 100 - weight on each axis.

    Scores are ``100 - raw / scale * weight`` clipped to [0, 100], so a raw
    value of ``5 * scale`` (with the default weight of 20) scores 0.
    """

    cost: float = 1_000_000.0
    power: float = 10_000.0  # watts
    latency: float = 1.0  # microseconds
    oversubscription: float = 0.8
    rack_units: float = 40.0
    cabling: float = 200.0


@dataclass(frozen=True)
class EngineConfig:
    """Heuristic constants used by the calculators.

    These are engine arguments rather than topology fields; override by
    passing a custom instance to ``calculate_all_metrics``.
    """

    # Share of leaf ports assumed to face endpoints when sizing parallel uplinks
    downlink_reservation_ratio: float = 0.5

    # Assumed fiber run per hop, in kilometres (10 m)
    cable_length_km: float = 0.01

    # Standard rack height
    rack_units_per_rack: int = 42

    # Hops charged to a single-tier design
    rail_only_hops: int = 0

    # Peers each leaf is meshed to in a single-tier design
    rail_only_peer_links: int = 4

    score_weight: float = 20.0
    score_scales: ScoreScales = field(default_factory=ScoreScales)

    def __post_init__(self) -> None:
        if not 0.0 <= self.downlink_reservation_ratio < 1.0:
            raise ConfigurationError(
                "downlink_reservation_ratio must be within [0, 1), got "
                f"{self.downlink_reservation_ratio}"
            )
        if self.cable_length_km < 0:
            raise ConfigurationError("cable_length_km must be >= 0")
        if self.rack_units_per_rack <= 0:
            raise ConfigurationError("rack_units_per_rack must be > 0")
        if self.rail_only_hops < 0:
            raise ConfigurationError("rail_only_hops must be >= 0")
        if self.rail_only_peer_links < 0:
            raise ConfigurationError("rail_only_peer_links must be >= 0")
        for name, value in vars(self.score_scales).items():
            if value <= 0:
                raise ConfigurationError(f"score scale '{name}' must be > 0")


# Global configuration instance
ENGINE_CONFIG = EngineConfig()
