"""
Validation module for lifespan inputs.

Provides single-date validation and cross-field checks for a birth/death
pair.
"""

from .lifespan_rules import (
    MIN_YEAR,
    MAX_YEAR,
    ONE_YEAR_MS,
    InputField,
    ALL_FIELDS,
)

from .date_validator import (
    DateValidator,
    DateTriple,
    is_valid_date,
)

from .input_validator import (
    InputValidator,
    ErrorSink,
    LifeInterval,
    ValidationIssue,
    ValidationOutcome,
    elapsed_ms,
    validate_inputs,
)


__all__ = [
    # Constants
    'MIN_YEAR',
    'MAX_YEAR',
    'ONE_YEAR_MS',
    'InputField',
    'ALL_FIELDS',

    # Date validation
    'DateValidator',
    'DateTriple',
    'is_valid_date',

    # Pair validation
    'InputValidator',
    'ErrorSink',
    'LifeInterval',
    'ValidationIssue',
    'ValidationOutcome',
    'elapsed_ms',
    'validate_inputs',
]
