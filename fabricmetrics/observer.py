"""Observer hooks for watching intermediate engine values.

The calculators are side-effect free. Callers who want to see the numbers
behind a result (port budgets, negotiated link speed, capacities) pass an
observer; the engine calls ``record`` once per calculation step.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Protocol

from fabricmetrics.logging import get_logger


class MetricsObserver(Protocol):
    def record(self, step: str, values: Mapping[str, Any]) -> None:
        """Receive the intermediate values of one calculation step."""
        ...


class NullObserver:
    """Discards everything. Default for all engine entry points."""

    def record(self, step: str, values: Mapping[str, Any]) -> None:
        return None


class LoggingObserver:
    """Forwards step values to a logger, DEBUG level by default."""

    def __init__(
        self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG
    ) -> None:
        self.logger = logger or get_logger(__name__)
        self.level = level

    def record(self, step: str, values: Mapping[str, Any]) -> None:
        if not self.logger.isEnabledFor(self.level):
            return
        rendered = " ".join(f"{k}={v}" for k, v in values.items())
        self.logger.log(self.level, "%s: %s", step, rendered)


class RecordingObserver:
    """Keeps every recorded step in order; handy in tests and notebooks."""

    def __init__(self) -> None:
        self.steps: list[tuple[str, dict[str, Any]]] = []

    def record(self, step: str, values: Mapping[str, Any]) -> None:
        self.steps.append((step, dict(values)))

    def values_for(self, step: str) -> dict[str, Any]:
        """Return the values of the last record for ``step``.

        Raises:
            KeyError: If ``step`` was never recorded.
        """
        for name, values in reversed(self.steps):
            if name == step:
                return values
        raise KeyError(step)


NULL_OBSERVER = NullObserver()
