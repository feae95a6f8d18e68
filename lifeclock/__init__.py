"""LifeClock - time lived and time remaining between a birth date and a death date."""

__version__ = "0.1.0"

from .validation import is_valid_date, validate_inputs, DateTriple, LifeInterval
from .core import (
    DurationBreakdown,
    FieldValues,
    LifeStats,
    calc_life,
    format_duration,
)
from .config import LifeClockConfig, default_config
from .exceptions import LifeClockError, ComputationError

__all__ = [
    'is_valid_date',
    'validate_inputs',
    'DateTriple',
    'LifeInterval',
    'DurationBreakdown',
    'FieldValues',
    'LifeStats',
    'calc_life',
    'format_duration',
    'LifeClockConfig',
    'default_config',
    'LifeClockError',
    'ComputationError',
]
