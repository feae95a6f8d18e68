"""Lifespan calculation: raw fields, statistics and duration breakdown."""

from .fields import FieldValues, parse_field, format_field_on_blur
from .duration import DurationBreakdown, format_duration
from .calculator import (
    LifeCalculator,
    LifeStats,
    calc_life,
    compute_stats,
    format_percentage,
    round_half_up,
)

__all__ = [
    'FieldValues',
    'parse_field',
    'format_field_on_blur',
    'DurationBreakdown',
    'format_duration',
    'LifeCalculator',
    'LifeStats',
    'calc_life',
    'compute_stats',
    'format_percentage',
    'round_half_up',
]
