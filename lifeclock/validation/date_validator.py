"""
Date validation for user-entered day/month/year triples.

Provides structural range checks and calendar checks that reject dates
such as 30 February, which a lenient calendar would roll over into March.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from .lifespan_rules import (
    MIN_DAY,
    MAX_DAY,
    MIN_MONTH,
    MAX_MONTH,
    MIN_YEAR,
    MAX_YEAR,
)


@dataclass(frozen=True, slots=True)
class DateTriple:
    """A validated calendar date as entered by the user."""
    day: int
    month: int
    year: int

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def to_datetime(self) -> datetime:
        """Local midnight at the start of this day."""
        return datetime(self.year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.day:02d}/{self.month:02d}/{self.year:04d}"


def _is_positive_int(value: Any) -> bool:
    # bool is an int subclass; True must not pass as day 1
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def is_valid_date(day: Any, month: Any, year: Any) -> bool:
    """
    Check that (day, month, year) names a real calendar date in range.

    Args:
        day: Day of the month (1-31)
        month: Month (1-12)
        year: Full year (1900-2500)

    Returns:
        True if the date exists and every part is within range
    """
    if not all(_is_positive_int(part) for part in (day, month, year)):
        return False

    if not MIN_DAY <= day <= MAX_DAY:
        return False
    if not MIN_MONTH <= month <= MAX_MONTH:
        return False
    if not MIN_YEAR <= year <= MAX_YEAR:
        return False

    try:
        built = date(year, month, day)
    except ValueError:
        return False

    return (built.year, built.month, built.day) == (year, month, day)


class DateValidator:
    """Validates single dates entered as separate day/month/year fields."""

    def is_valid(self, day: Any, month: Any, year: Any) -> bool:
        return is_valid_date(day, month, year)

    def parse_triple(self, day: Any, month: Any, year: Any) -> Optional[DateTriple]:
        """
        Build a DateTriple from raw parts.

        Returns:
            DateTriple, or None if the parts do not form a valid date
        """
        if not is_valid_date(day, month, year):
            return None
        return DateTriple(day=day, month=month, year=year)
