"""Breakout resolution and link speed negotiation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from fabricmetrics.errors import ConfigurationError
from fabricmetrics.types import BreakoutOption, PortSpeed, parse_breakout_label


@dataclass(frozen=True)
class BreakoutResolution:
    """Outcome of applying a breakout mode to a group of ports.

    Attributes:
        factor: Logical ports per physical port.
        effective_port_count: ``port_count * factor``.
        effective_speed: Speed of each logical port.
    """

    factor: int
    effective_port_count: int
    effective_speed: PortSpeed

    @property
    def is_breakout(self) -> bool:
        return self.factor > 1


def find_breakout_option(
    port_speed: PortSpeed,
    breakout_mode: str,
    breakout_options: Mapping[PortSpeed, Sequence[BreakoutOption]],
) -> BreakoutOption:
    """Return the option named ``breakout_mode`` offered for ``port_speed``.

    Raises:
        ConfigurationError: If the speed has no breakout table or the mode is
            not listed for it.
    """
    options = breakout_options.get(port_speed)
    if options is None:
        raise ConfigurationError(
            f"No breakout options defined for port speed {port_speed.value}"
        )
    for option in options:
        if option.type == breakout_mode:
            return option
    offered = ", ".join(o.type for o in options) or "none"
    raise ConfigurationError(
        f"Breakout mode '{breakout_mode}' is not available for "
        f"{port_speed.value} ports (offered: {offered})"
    )


def _lane_speed(port_speed: PortSpeed, option: BreakoutOption) -> PortSpeed:
    parsed = parse_breakout_label(option.type)
    if parsed is not None:
        return parsed[1]
    if option.factor == 1:
        return port_speed
    derived = PortSpeed.from_gbps(port_speed.gbps / option.factor)
    if derived is None:
        raise ConfigurationError(
            f"Cannot derive lane speed for breakout '{option.type}' "
            f"(factor {option.factor}) on {port_speed.value} ports"
        )
    return derived


def resolve_breakout(
    port_speed: PortSpeed,
    breakout_mode: str,
    breakout_options: Mapping[PortSpeed, Sequence[BreakoutOption]],
    port_count: int = 1,
) -> BreakoutResolution:
    """Resolve a breakout mode into its factor and per-port speed.

    The lane speed comes from the mode label (``"4x200G"`` -> 200G). Labels
    without a ``<N>x<speed>`` shape fall back to the port speed for factor 1,
    or to the speed whose bandwidth is ``port_speed / factor``.

    Args:
        port_speed: Physical port speed.
        breakout_mode: Mode label to look up.
        breakout_options: Breakout table of the configuration.
        port_count: Physical ports the mode is applied to.

    Returns:
        BreakoutResolution for the group of ports.

    Raises:
        ConfigurationError: Unknown speed entry, unknown mode, or a lane speed
            that isn't a recognized speed.
    """
    option = find_breakout_option(port_speed, breakout_mode, breakout_options)
    return BreakoutResolution(
        factor=int(option.factor),
        effective_port_count=int(port_count) * int(option.factor),
        effective_speed=_lane_speed(port_speed, option),
    )


def negotiate_link_speed(first: PortSpeed, second: PortSpeed) -> PortSpeed:
    """Return the speed two link ends agree on: the slower of the two."""
    return first if first.gbps <= second.gbps else second
