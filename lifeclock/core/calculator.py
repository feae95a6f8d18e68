"""Lived/remaining lifespan statistics."""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..validation.input_validator import (
    Clock,
    ErrorSink,
    InputValidator,
    LifeInterval,
    elapsed_ms,
)
from .fields import FieldValues


@dataclass(frozen=True, slots=True)
class LifeStats:
    """Statistics for a lifespan at one instant."""
    lived_ms: int
    remaining_ms: int
    percentage_lived: float
    total_life_ms: int

    @property
    def progress_text(self) -> str:
        return f"{format_percentage(self.percentage_lived)}% Complete"


def round_half_up(value: float, places: int = 2) -> float:
    """Round to ``places`` decimals, halves going up."""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def format_percentage(percentage: float) -> str:
    """Shortest text for a percentage: 100.0 -> '100', 42.5 -> '42.5'."""
    return f"{percentage:.2f}".rstrip('0').rstrip('.')


def compute_stats(interval: LifeInterval, now: datetime) -> LifeStats:
    """
    Compute LifeStats for a validated interval at ``now``.

    ``lived_ms`` is only floored at zero, so once ``now`` passes the death
    date it exceeds ``total_life_ms`` while the percentage stays at 100.
    """
    lived = max(0, elapsed_ms(interval.birth, now))
    remaining = max(0, elapsed_ms(now, interval.death))
    total = interval.total_ms

    percentage = (lived / total) * 100
    percentage = min(100.0, max(0.0, percentage))

    return LifeStats(
        lived_ms=lived,
        remaining_ms=remaining,
        percentage_lived=round_half_up(percentage, 2),
        total_life_ms=total,
    )


class LifeCalculator:
    """Validates inputs and computes lifespan statistics."""

    def __init__(
        self,
        error_sink: Optional[ErrorSink] = None,
        clock: Optional[Clock] = None,
    ):
        self.clock = clock or datetime.now
        self.validator = InputValidator(error_sink=error_sink, clock=self.clock)

    def calculate(
        self,
        bday: Any, bmonth: Any, byear: Any,
        dday: Any, dmonth: Any, dyear: Any,
    ) -> Optional[LifeStats]:
        """
        Validate the inputs and compute statistics.

        Returns:
            LifeStats, or None if the inputs were rejected
        """
        interval = self.validate_interval(bday, bmonth, byear, dday, dmonth, dyear)
        if interval is None:
            return None
        return compute_stats(interval, self.clock())

    def validate_interval(
        self,
        bday: Any, bmonth: Any, byear: Any,
        dday: Any, dmonth: Any, dyear: Any,
    ) -> Optional[LifeInterval]:
        outcome = self.validator.validate(bday, bmonth, byear, dday, dmonth, dyear)
        return outcome.interval

    def calculate_fields(self, fields: FieldValues) -> Optional[LifeStats]:
        return self.calculate(*fields.as_tuple())


def calc_life(
    bday: Any, bmonth: Any, byear: Any,
    dday: Any, dmonth: Any, dyear: Any,
    error_sink: Optional[ErrorSink] = None,
    clock: Optional[Clock] = None,
) -> Optional[LifeStats]:
    """Compute LifeStats for the six date fields, or None if they are invalid."""
    calculator = LifeCalculator(error_sink=error_sink, clock=clock)
    return calculator.calculate(bday, bmonth, byear, dday, dmonth, dyear)
