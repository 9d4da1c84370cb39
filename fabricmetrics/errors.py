"""Exception types raised by the metrics engine.

Both concrete errors derive from ``ValueError`` so callers that already guard
configuration parsing with ``except ValueError`` keep working.
"""

from __future__ import annotations


class FabricMetricsError(ValueError):
    """Base class for errors raised while evaluating a topology."""


class ConfigurationError(FabricMetricsError):
    """The topology configuration is invalid or references unknown entries.

    Raised for unknown speed labels, breakout modes missing from the breakout
    table, missing optics prices, and malformed topology documents.
    """


class PortOverflowError(FabricMetricsError):
    """Requested parallel links do not fit in the leaf uplink port budget.

    Attributes:
        requested: Uplink ports per leaf the configuration asks for.
        available: Uplink ports per leaf left after the downlink reservation.
        overflow: ``requested - available`` (always positive).
    """

    def __init__(self, requested: int, available: int) -> None:
        self.requested = int(requested)
        self.available = int(available)
        self.overflow = self.requested - self.available
        super().__init__(
            f"Parallel links require {self.requested} uplink ports per leaf, "
            f"but only {self.available} are available "
            f"({self.overflow} over budget)"
        )
