"""
Cross-field validation of a birth/death date pair.

Runs the date validator over both dates, then applies the lifespan rules
against the current instant. Failures are reported as field-scoped
annotations, never raised.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, List, Optional, Protocol

from .date_validator import DateValidator, DateTriple
from .lifespan_rules import (
    ONE_YEAR_MS,
    InputField,
    INVALID_BIRTH_DATE,
    INVALID_DEATH_DATE,
    BIRTH_IN_FUTURE,
    DEATH_BEFORE_BIRTH,
    LIFESPAN_TOO_SHORT,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_ONE_MS = timedelta(milliseconds=1)


def elapsed_ms(start: datetime, end: datetime) -> int:
    """Whole milliseconds from start to end (negative if end is earlier)."""
    return (end - start) // _ONE_MS


class ErrorSink(Protocol):
    """Anything that can display and clear field-scoped error text."""

    def clear_all(self) -> None:
        ...

    def raise_error(self, input_field: InputField, message: str) -> None:
        ...


@dataclass(frozen=True, slots=True)
class LifeInterval:
    """A birth/death pair that passed validation."""
    birth: datetime
    death: datetime

    @classmethod
    def from_triples(cls, birth: DateTriple, death: DateTriple) -> 'LifeInterval':
        return cls(birth=birth.to_datetime(), death=death.to_datetime())

    @property
    def total_ms(self) -> int:
        return elapsed_ms(self.birth, self.death)


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single problem found with the inputs."""
    field: InputField
    message: str


@dataclass(slots=True)
class ValidationOutcome:
    """Result of validating a birth/death pair."""
    issues: List[ValidationIssue] = field(default_factory=list)
    interval: Optional[LifeInterval] = None

    @property
    def is_valid(self) -> bool:
        return not self.issues

    def __bool__(self) -> bool:
        return self.is_valid

    def messages_for(self, input_field: InputField) -> List[str]:
        return [issue.message for issue in self.issues if issue.field is input_field]


class InputValidator:
    """Validates the six date fields and reports problems per field."""

    def __init__(
        self,
        error_sink: Optional[ErrorSink] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the input validator.

        Args:
            error_sink: Receives field annotations (none are shown if omitted)
            clock: Returns the current local time; defaults to datetime.now
        """
        self.error_sink = error_sink
        self.clock = clock or datetime.now
        self.date_validator = DateValidator()

    def _report(self, outcome: ValidationOutcome, input_field: InputField, message: str) -> None:
        outcome.issues.append(ValidationIssue(input_field, message))
        if self.error_sink is not None:
            self.error_sink.raise_error(input_field, message)

    def validate(
        self,
        bday: Any, bmonth: Any, byear: Any,
        dday: Any, dmonth: Any, dyear: Any,
    ) -> ValidationOutcome:
        """
        Validate a birth/death pair.

        Previously displayed annotations are cleared first. The three
        cross-field rules are only checked once both dates are valid on
        their own, and each of them is reported independently.

        Returns:
            ValidationOutcome; truthy when the inputs are acceptable
        """
        if self.error_sink is not None:
            self.error_sink.clear_all()

        outcome = ValidationOutcome()

        birth = self.date_validator.parse_triple(bday, bmonth, byear)
        if birth is None:
            self._report(outcome, InputField.BIRTH_DAY, INVALID_BIRTH_DATE)

        death = self.date_validator.parse_triple(dday, dmonth, dyear)
        if death is None:
            self._report(outcome, InputField.DEATH_DAY, INVALID_DEATH_DATE)

        if birth is None or death is None:
            return outcome

        interval = LifeInterval.from_triples(birth, death)
        now = self.clock()

        if interval.birth > now:
            self._report(outcome, InputField.BIRTH_YEAR, BIRTH_IN_FUTURE)

        if interval.death <= interval.birth:
            self._report(outcome, InputField.DEATH_YEAR, DEATH_BEFORE_BIRTH)

        if interval.total_ms < ONE_YEAR_MS:
            self._report(outcome, InputField.DEATH_YEAR, LIFESPAN_TOO_SHORT)

        if outcome.is_valid:
            outcome.interval = interval
        else:
            logger.debug("Rejected %s - %s: %s", birth, death,
                         [issue.message for issue in outcome.issues])

        return outcome


def validate_inputs(
    bday: Any, bmonth: Any, byear: Any,
    dday: Any, dmonth: Any, dyear: Any,
    error_sink: Optional[ErrorSink] = None,
    clock: Optional[Clock] = None,
) -> bool:
    """Return True if the birth/death fields form an acceptable lifespan."""
    validator = InputValidator(error_sink=error_sink, clock=clock)
    return validator.validate(bday, bmonth, byear, dday, dmonth, dyear).is_valid
