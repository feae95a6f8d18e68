"""
Lifespan rules and constants for validation.

These constants define the accepted input ranges and the minimum
lifespan used when validating a birth/death pair.
"""

from enum import Enum


# Calendar limits for user-entered dates
MIN_DAY = 1
MAX_DAY = 31
MIN_MONTH = 1
MAX_MONTH = 12
MIN_YEAR = 1900
MAX_YEAR = 2500

# Fixed-ratio time units (milliseconds)
MS_PER_SECOND = 1000
MS_PER_DAY = 24 * 60 * 60 * MS_PER_SECOND
ONE_YEAR_MS = 365 * MS_PER_DAY  # Minimum lifespan, leap days ignored

# Approximate calendar used by the duration breakdown
DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30


class InputField(Enum):
    """Input fields that can carry an error annotation."""
    BIRTH_DAY = "bday"
    BIRTH_MONTH = "bmonth"
    BIRTH_YEAR = "byear"
    DEATH_DAY = "dday"
    DEATH_MONTH = "dmonth"
    DEATH_YEAR = "dyear"

    @property
    def is_day_or_month(self) -> bool:
        return self in (
            InputField.BIRTH_DAY,
            InputField.BIRTH_MONTH,
            InputField.DEATH_DAY,
            InputField.DEATH_MONTH,
        )


ALL_FIELDS = tuple(InputField)

# Error messages raised against fields
INVALID_BIRTH_DATE = "Invalid birth date"
INVALID_DEATH_DATE = "Invalid death date"
BIRTH_IN_FUTURE = "Birth date cannot be in the future"
DEATH_BEFORE_BIRTH = "Death date must be after birth date"
LIFESPAN_TOO_SHORT = "Life span must be at least 1 year"
