"""Topology configuration records consumed by the metrics engine.

Every record here is a frozen dataclass. Mapping-valued fields are stored as
read-only views so that a configuration cannot be modified after it has been
handed to a calculator; use :func:`dataclasses.replace` (or
:meth:`TopologyConfiguration.replace`) to derive a changed copy.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from fabricmetrics.errors import ConfigurationError
from fabricmetrics.types import (
    STANDARD_BREAKOUT_OPTIONS,
    BreakoutOption,
    ParallelLinksMode,
    PortSpeed,
)

#: Per-unit optics price by link speed.
DEFAULT_OPTICS_COST: Mapping[PortSpeed, float] = MappingProxyType(
    {
        PortSpeed.G10: 100.0,
        PortSpeed.G25: 150.0,
        PortSpeed.G40: 200.0,
        PortSpeed.G50: 300.0,
        PortSpeed.G100: 500.0,
        PortSpeed.G200: 1000.0,
        PortSpeed.G400: 2000.0,
        PortSpeed.G800: 4000.0,
        PortSpeed.T1_6: 8000.0,
    }
)

#: Per-unit optics power draw (watts) by link speed.
DEFAULT_OPTICS_POWER: Mapping[PortSpeed, float] = MappingProxyType(
    {
        PortSpeed.G10: 1.5,
        PortSpeed.G25: 2.0,
        PortSpeed.G40: 3.5,
        PortSpeed.G50: 3.0,
        PortSpeed.G100: 5.0,
        PortSpeed.G200: 10.0,
        PortSpeed.G400: 15.0,
        PortSpeed.G800: 25.0,
        PortSpeed.T1_6: 40.0,
    }
)


def _speed_mapping(values: Mapping[Any, Any], what: str) -> Mapping[PortSpeed, Any]:
    try:
        items = dict(values).items()
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{what} must be a mapping keyed by speed") from exc
    return MappingProxyType({PortSpeed.from_string(k): v for k, v in items})


def _whole_number(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{what} must be an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ConfigurationError(f"{what} must be an integer, got {value!r}") from exc
    if number != value:
        raise ConfigurationError(f"{what} must be an integer, got {value!r}")
    return number


def _require_positive_int(value: Any, what: str) -> int:
    number = _whole_number(value, what)
    if number <= 0:
        raise ConfigurationError(f"{what} must be a positive integer, got {value!r}")
    return number


def _require_non_negative_int(value: Any, what: str) -> int:
    number = _whole_number(value, what)
    if number < 0:
        raise ConfigurationError(
            f"{what} must be a non-negative integer, got {value!r}"
        )
    return number


@dataclass(frozen=True)
class SpineConfig:
    """Port layout of a spine switch.

    Attributes:
        port_count: Physical ports per spine.
        port_speed: Physical port speed.
        breakout_mode: Breakout label, must exist under ``port_speed`` in the
            configuration's breakout table.
    """

    port_count: int
    port_speed: PortSpeed
    breakout_mode: str

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "port_count", _require_positive_int(self.port_count, "spine port_count")
        )
        object.__setattr__(self, "port_speed", PortSpeed.from_string(self.port_speed))


@dataclass(frozen=True)
class LeafConfig:
    """Port layout of a leaf switch.

    Attributes:
        port_count: Physical ports per leaf, shared by uplinks and downlinks.
        downlink_speed: Endpoint-facing port speed.
        breakout_mode: Breakout label for downlink ports, looked up under
            ``downlink_speed``.
        port_speed: Uplink port speed. ``None`` means the leaf matches the
            spine's effective speed.
    """

    port_count: int
    downlink_speed: PortSpeed
    breakout_mode: str
    port_speed: Optional[PortSpeed] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "port_count", _require_positive_int(self.port_count, "leaf port_count")
        )
        object.__setattr__(
            self, "downlink_speed", PortSpeed.from_string(self.downlink_speed)
        )
        if self.port_speed is not None:
            object.__setattr__(self, "port_speed", PortSpeed.from_string(self.port_speed))


@dataclass(frozen=True)
class SwitchCost:
    spine: float = 15000.0
    leaf: float = 10000.0


@dataclass(frozen=True)
class PowerUsage:
    """Per-device switch wattage and per-optic wattage by link speed."""

    spine: float = 500.0
    leaf: float = 300.0
    optics: Mapping[PortSpeed, float] = field(
        default_factory=lambda: DEFAULT_OPTICS_POWER
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "optics", _speed_mapping(self.optics, "power optics"))


@dataclass(frozen=True)
class LatencyParameters:
    """Latency model inputs.

    Attributes:
        switch_latency: Microseconds per switch hop.
        fiber_latency: Microseconds per kilometre of fiber.
    """

    switch_latency: float = 0.5
    fiber_latency: float = 5.0


@dataclass(frozen=True)
class RackSpaceParameters:
    spine_rack_units: int = 2
    leaf_rack_units: int = 1


@dataclass(frozen=True)
class DeviceChoice:
    """A catalog device picked for one switch role.

    Attributes:
        device_id: Catalog identifier.
        use_default_config: True when the device's catalog port layout is used.
        cost_override: Unit cost replacing ``switch_cost`` for this role.
        power_override: Unit wattage replacing ``power_usage`` for this role.
    """

    device_id: str
    use_default_config: bool = True
    cost_override: Optional[float] = None
    power_override: Optional[float] = None


@dataclass(frozen=True)
class DeviceSelection:
    spine: Optional[DeviceChoice] = None
    leaf: Optional[DeviceChoice] = None


@dataclass(frozen=True)
class TopologyConfiguration:
    """Structural and economic description of one fabric design.

    ``num_tiers == 1`` marks a single-tier (rail-only) design; the tier flag is
    authoritative and spine quantities resolve to zero whatever
    ``num_spines`` holds.
    """

    num_spines: int
    num_leafs: int
    num_tiers: int
    spine_config: SpineConfig
    leaf_config: LeafConfig
    breakout_options: Mapping[PortSpeed, Tuple[BreakoutOption, ...]] = field(
        default_factory=lambda: STANDARD_BREAKOUT_OPTIONS
    )
    switch_cost: SwitchCost = field(default_factory=SwitchCost)
    optics_cost: Mapping[PortSpeed, float] = field(
        default_factory=lambda: DEFAULT_OPTICS_COST
    )
    power_usage: PowerUsage = field(default_factory=PowerUsage)
    latency_parameters: LatencyParameters = field(default_factory=LatencyParameters)
    rack_space_parameters: RackSpaceParameters = field(
        default_factory=RackSpaceParameters
    )
    parallel_links_enabled: bool = False
    parallel_links_mode: ParallelLinksMode = ParallelLinksMode.AUTO
    parallel_links_per_spine: Optional[int] = None
    disjointed_spines: bool = False
    rail_optimized: bool = False
    device_selection: Optional[DeviceSelection] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "num_spines", _require_non_negative_int(self.num_spines, "num_spines")
        )
        object.__setattr__(
            self, "num_leafs", _require_non_negative_int(self.num_leafs, "num_leafs")
        )
        object.__setattr__(
            self, "num_tiers", _require_positive_int(self.num_tiers, "num_tiers")
        )
        object.__setattr__(
            self,
            "parallel_links_mode",
            ParallelLinksMode.from_string(self.parallel_links_mode),
        )
        if self.parallel_links_per_spine is not None:
            object.__setattr__(
                self,
                "parallel_links_per_spine",
                _require_non_negative_int(
                    self.parallel_links_per_spine, "parallel_links_per_spine"
                ),
            )

        table = _speed_mapping(self.breakout_options, "breakout_options")
        object.__setattr__(
            self,
            "breakout_options",
            MappingProxyType({speed: tuple(opts) for speed, opts in table.items()}),
        )
        object.__setattr__(
            self, "optics_cost", _speed_mapping(self.optics_cost, "optics_cost")
        )

    @property
    def is_single_tier(self) -> bool:
        return self.num_tiers == 1

    def replace(self, **changes: Any) -> "TopologyConfiguration":
        """Return a copy with ``changes`` applied; the original is untouched."""
        return replace(self, **changes)


@dataclass(frozen=True)
class Topology:
    """A named configuration plus bookkeeping metadata."""

    id: str
    name: str
    configuration: TopologyConfiguration
    description: str = ""
    created_at: str = ""
    updated_at: str = ""
    imported_at: Optional[str] = None
    exported_at: Optional[str] = None
    export_version: Optional[str] = None
