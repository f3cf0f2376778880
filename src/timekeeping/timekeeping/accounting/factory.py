from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .strategies.base import DeviationStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.undertime_strategy import UndertimeStrategy


class DeviationKind(str, Enum):
    LATE = "late"
    UNDERTIME = "undertime"


@dataclass
class DeviationStrategyFactory:
    """Factory Pattern: choose the strategy for a kind of schedule deviation."""

    def for_kind(self, kind: DeviationKind) -> DeviationStrategy:
        if DeviationKind(kind) == DeviationKind.LATE:
            return LateStrategy()
        return UndertimeStrategy()

    def for_late(self) -> DeviationStrategy:
        return self.for_kind(DeviationKind.LATE)

    def for_undertime(self) -> DeviationStrategy:
        return self.for_kind(DeviationKind.UNDERTIME)
