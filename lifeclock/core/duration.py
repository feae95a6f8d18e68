"""
Millisecond to years/months/days/hours/minutes/seconds breakdown.

The breakdown uses fixed ratios (365-day years, 30-day months) and is not
calendar-accurate. ``days`` is taken from the full day count modulo 30
rather than from what is left after removing whole years and months, so
it can disagree with ``months``; existing displays depend on this output.
"""

from dataclasses import dataclass
from typing import Dict

from ..validation.lifespan_rules import DAYS_PER_YEAR, DAYS_PER_MONTH, MS_PER_SECOND


@dataclass(frozen=True, slots=True)
class DurationBreakdown:
    """Approximate decomposition of a duration."""
    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def as_dict(self) -> Dict[str, int]:
        """Values keyed by the short unit names used for display."""
        return {
            'years': self.years,
            'months': self.months,
            'days': self.days,
            'hr': self.hours,
            'min': self.minutes,
            'sec': self.seconds,
        }


def format_duration(ms: int) -> DurationBreakdown:
    """
    Convert a millisecond count into a DurationBreakdown.

    Args:
        ms: Duration in milliseconds; negative values count as zero

    Returns:
        DurationBreakdown with every field non-negative
    """
    ms = max(0, int(ms))

    total_seconds = ms // MS_PER_SECOND
    total_minutes = total_seconds // 60
    total_hours = total_minutes // 60
    total_days = total_hours // 24

    years = total_days // DAYS_PER_YEAR
    months = (total_days % DAYS_PER_YEAR) // DAYS_PER_MONTH
    days = total_days % DAYS_PER_MONTH

    return DurationBreakdown(
        years=max(0, years),
        months=max(0, months),
        days=max(0, days),
        hours=max(0, total_hours % 24),
        minutes=max(0, total_minutes % 60),
        seconds=max(0, total_seconds % 60),
    )
