"""Enumerations and lookup tables shared by the model and the calculators."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from fabricmetrics.errors import ConfigurationError

_BREAKOUT_LABEL = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+(?:\.\d+)?[GgTt])\s*$")


class PortSpeed(str, Enum):
    """Recognized port and link speed labels.

    The value is the label as it appears in topology documents ("400G").
    """

    G10 = "10G"
    G25 = "25G"
    G40 = "40G"
    G50 = "50G"
    G100 = "100G"
    G200 = "200G"
    G400 = "400G"
    G800 = "800G"
    T1_6 = "1.6T"

    @property
    def gbps(self) -> float:
        """Bandwidth of one port at this speed in Gbps."""
        number, unit = float(self.value[:-1]), self.value[-1]
        return number * 1000.0 if unit == "T" else number

    @classmethod
    def from_string(cls, value: Union[str, "PortSpeed"]) -> "PortSpeed":
        """Parse a speed label such as ``"400G"`` or ``"1.6t"``.

        Args:
            value: Label (case-insensitive) or an existing member.

        Returns:
            The matching member.

        Raises:
            ConfigurationError: If the label is not a recognized speed.
        """
        if isinstance(value, cls):
            return value
        label = str(value).strip().upper()
        for member in cls:
            if member.value.upper() == label:
                return member
        valid = ", ".join(m.value for m in cls)
        raise ConfigurationError(
            f"Unrecognized port speed '{value}'. Valid values are: {valid}"
        )

    @classmethod
    def from_gbps(cls, gbps: float) -> Optional["PortSpeed"]:
        """Return the member whose bandwidth equals ``gbps``, if any."""
        for member in cls:
            if abs(member.gbps - gbps) < 1e-9:
                return member
        return None

    def __str__(self) -> str:
        return self.value


class ParallelLinksMode(str, Enum):
    """How the number of parallel uplinks per spine is chosen."""

    AUTO = "auto"  # fill the uplink budget evenly across spines
    MANUAL = "manual"  # use the configured count verbatim

    @classmethod
    def from_string(cls, value: Union[str, "ParallelLinksMode"]) -> "ParallelLinksMode":
        """Parse a mode name case-insensitively.

        Raises:
            ConfigurationError: If the string doesn't match any member.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ConfigurationError(
                f"Invalid parallel links mode '{value}'. Valid values are: {valid}"
            ) from None


@dataclass(frozen=True)
class BreakoutOption:
    """One selectable breakout mode for a port speed.

    Attributes:
        type: Mode label, e.g. ``"4x200G"``.
        factor: Logical ports produced per physical port (>= 1).
    """

    type: str
    factor: int

    def __post_init__(self) -> None:
        if int(self.factor) < 1:
            raise ConfigurationError(
                f"Breakout option '{self.type}' has factor {self.factor}; must be >= 1"
            )


BreakoutTable = Dict[PortSpeed, Tuple[BreakoutOption, ...]]


def parse_breakout_label(label: str) -> Optional[Tuple[int, PortSpeed]]:
    """Split a ``<N>x<speed>`` label into ``(N, lane speed)``.

    Returns ``None`` when the label doesn't follow that pattern or names an
    unrecognized lane speed.
    """
    match = _BREAKOUT_LABEL.match(label or "")
    if not match:
        return None
    try:
        lane = PortSpeed.from_string(match.group(2))
    except ConfigurationError:
        return None
    return int(match.group(1)), lane


def _options(*labels: str) -> Tuple[BreakoutOption, ...]:
    out = []
    for label in labels:
        parsed = parse_breakout_label(label)
        if parsed is None:
            raise ValueError(f"Malformed breakout label: {label}")
        out.append(BreakoutOption(type=label, factor=parsed[0]))
    return tuple(out)


#: Breakout modes offered by common optics for each port speed.
STANDARD_BREAKOUT_OPTIONS: BreakoutTable = {
    PortSpeed.G10: _options("1x10G"),
    PortSpeed.G25: _options("1x25G"),
    PortSpeed.G40: _options("1x40G", "4x10G"),
    PortSpeed.G50: _options("1x50G", "2x25G"),
    PortSpeed.G100: _options("1x100G", "2x50G", "4x25G"),
    PortSpeed.G200: _options("1x200G", "2x100G", "4x50G"),
    PortSpeed.G400: _options("1x400G", "2x200G", "4x100G", "8x50G"),
    PortSpeed.G800: _options("1x800G", "2x400G", "4x200G", "8x100G"),
    PortSpeed.T1_6: _options("1x1.6T", "2x800G", "4x400G", "8x200G"),
}
