"""Device counts, leaf port budget, parallel uplinks, and the fabric link plan.

Every calculator derives spine and leaf quantities from
:func:`resolve_device_count`, so the single-tier rule (no spines when
``num_tiers == 1``) lives in exactly one place. Link and optic counts come
from :func:`plan_links`, which cost, power, and cabling share.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fabricmetrics.calc.breakout import (
    BreakoutResolution,
    negotiate_link_speed,
    resolve_breakout,
)
from fabricmetrics.config import ENGINE_CONFIG, EngineConfig
from fabricmetrics.errors import PortOverflowError
from fabricmetrics.model.metrics import DeviceCount
from fabricmetrics.model.topology import TopologyConfiguration
from fabricmetrics.observer import NULL_OBSERVER, MetricsObserver
from fabricmetrics.types import ParallelLinksMode, PortSpeed


def resolve_device_count(config: TopologyConfiguration) -> DeviceCount:
    """Count spines and leaves, zeroing spines for single-tier designs."""
    spines = 0 if config.num_tiers == 1 else config.num_spines
    leafs = config.num_leafs
    return DeviceCount(spines=spines, leafs=leafs, total=spines + leafs)


@dataclass(frozen=True)
class PortBudget:
    """Split of one leaf's ports into reserved downlinks and usable uplinks."""

    leaf_port_count: int
    estimated_downlink_ports: int
    available_uplink_ports: int


def allocate_port_budget(
    config: TopologyConfiguration, engine_config: Optional[EngineConfig] = None
) -> PortBudget:
    """Reserve a fixed share of leaf ports for endpoints; the rest may uplink."""
    cfg = engine_config or ENGINE_CONFIG
    ports = config.leaf_config.port_count
    downlinks = int(ports * cfg.downlink_reservation_ratio)
    return PortBudget(
        leaf_port_count=ports,
        estimated_downlink_ports=downlinks,
        available_uplink_ports=ports - downlinks,
    )


def calculate_auto_parallel_links(
    config: TopologyConfiguration, engine_config: Optional[EngineConfig] = None
) -> int:
    """Spread the leaf uplink budget evenly over the spines, at least 1 each."""
    spines = resolve_device_count(config).spines
    if spines == 0:
        return 1
    budget = allocate_port_budget(config, engine_config)
    return max(1, budget.available_uplink_ports // spines)


def get_parallel_links_per_spine(
    config: TopologyConfiguration, engine_config: Optional[EngineConfig] = None
) -> int:
    """Return the uplinks each leaf runs to each spine.

    1 when the feature is off. Manual mode returns the configured count
    verbatim; manual mode without a count behaves like auto mode.
    """
    if not config.parallel_links_enabled:
        return 1
    if (
        config.parallel_links_mode is ParallelLinksMode.MANUAL
        and config.parallel_links_per_spine
    ):
        return int(config.parallel_links_per_spine)
    return calculate_auto_parallel_links(config, engine_config)


@dataclass(frozen=True)
class ParallelLinksValidation:
    """Outcome of checking parallel uplinks against the leaf port budget.

    Attributes:
        valid: False when the uplinks don't fit.
        requested: Uplink ports per leaf the configuration needs.
        available: Uplink ports per leaf in the budget.
        overflow: Ports over budget (0 when valid).
        reason: Message for invalid results, else None.
    """

    valid: bool
    requested: int
    available: int
    overflow: int = 0
    reason: Optional[str] = None


def validate_parallel_links(
    config: TopologyConfiguration, engine_config: Optional[EngineConfig] = None
) -> ParallelLinksValidation:
    """Check that parallel uplinks fit the leaf's uplink budget.

    Invalid exactly when ``parallel_links_per_spine * spines`` exceeds the
    available uplink ports; using the whole budget is valid. A disabled
    feature or a single-tier design is not checked and reports
    ``requested=0``.
    """
    budget = allocate_port_budget(config, engine_config)
    spines = resolve_device_count(config).spines
    if not config.parallel_links_enabled or spines == 0:
        return ParallelLinksValidation(
            valid=True, requested=0, available=budget.available_uplink_ports
        )

    requested = get_parallel_links_per_spine(config, engine_config) * spines
    available = budget.available_uplink_ports
    if requested > available:
        error = PortOverflowError(requested, available)
        return ParallelLinksValidation(
            valid=False,
            requested=requested,
            available=available,
            overflow=error.overflow,
            reason=str(error),
        )
    return ParallelLinksValidation(valid=True, requested=requested, available=available)


def check_parallel_links(
    config: TopologyConfiguration, engine_config: Optional[EngineConfig] = None
) -> None:
    """Raise :class:`PortOverflowError` when parallel uplinks don't fit."""
    result = validate_parallel_links(config, engine_config)
    if not result.valid:
        raise PortOverflowError(result.requested, result.available)


@dataclass(frozen=True)
class LinkPlan:
    """Fabric links implied by a configuration.

    Attributes:
        devices: Resolved device counts.
        rail_only: True when there is no spine layer.
        parallel_links_per_spine: Uplinks per leaf per spine.
        total_links: Spine-leaf links; zero when rail-only.
        peer_links: Leaf-leaf mesh links of a rail-only design.
        optics_needed: Two optics per spine-leaf link.
        link_speed: Speed of every fabric link.
        spine_breakout: Breakout applied to spine ports.
        leaf_breakout: Breakout applied to leaf downlink ports.
    """

    devices: DeviceCount
    rail_only: bool
    parallel_links_per_spine: int
    total_links: int
    optics_needed: int
    link_speed: PortSpeed
    spine_breakout: BreakoutResolution
    leaf_breakout: BreakoutResolution
    peer_links: int = 0

    @property
    def cabled_links(self) -> int:
        return self.total_links + self.peer_links


def plan_links(
    config: TopologyConfiguration,
    engine_config: Optional[EngineConfig] = None,
    observer: MetricsObserver = NULL_OBSERVER,
) -> LinkPlan:
    """Work out how many fabric links exist and at what speed.

    In a Clos fabric every leaf runs ``parallel_links_per_spine`` links to
    every spine. A single-tier design has no spine-leaf links and needs no
    optics; its leaves are meshed with up to ``rail_only_peer_links`` peers
    at the leaf downlink speed, and those links only count toward cabling.

    Raises:
        ConfigurationError: A referenced breakout mode is missing.
        PortOverflowError: Parallel uplinks exceed the leaf uplink budget.
    """
    cfg = engine_config or ENGINE_CONFIG
    spine, leaf = config.spine_config, config.leaf_config
    devices = resolve_device_count(config)

    spine_breakout = resolve_breakout(
        spine.port_speed, spine.breakout_mode, config.breakout_options, spine.port_count
    )
    leaf_breakout = resolve_breakout(
        leaf.downlink_speed, leaf.breakout_mode, config.breakout_options, leaf.port_count
    )
    check_parallel_links(config, cfg)
    parallel = get_parallel_links_per_spine(config, cfg)

    rail_only = devices.spines == 0
    total_links = devices.spines * devices.leafs * parallel
    peer_links = 0
    if rail_only:
        peers = min(cfg.rail_only_peer_links, max(0, devices.leafs - 1))
        # Each leaf-leaf link is shared by two leaves
        peer_links = devices.leafs * peers // 2
        link_speed = leaf.downlink_speed
    else:
        leaf_uplink = leaf.port_speed or spine_breakout.effective_speed
        link_speed = negotiate_link_speed(spine_breakout.effective_speed, leaf_uplink)

    plan = LinkPlan(
        devices=devices,
        rail_only=rail_only,
        parallel_links_per_spine=parallel,
        total_links=total_links,
        optics_needed=total_links * 2,
        link_speed=link_speed,
        spine_breakout=spine_breakout,
        leaf_breakout=leaf_breakout,
        peer_links=peer_links,
    )
    observer.record(
        "links",
        {
            "rail_only": rail_only,
            "parallel_links_per_spine": parallel,
            "total_links": total_links,
            "peer_links": peer_links,
            "optics_needed": plan.optics_needed,
            "link_speed": link_speed.value,
            "spine_breakout_factor": spine_breakout.factor,
            "leaf_breakout_factor": leaf_breakout.factor,
        },
    )
    return plan
