"""Raw date field values as read from an input form."""

import math
import re
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from ..validation.lifespan_rules import InputField

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def parse_field(value: Any) -> Optional[int]:
    """
    Read an integer the way a form field is read.

    Leading whitespace is skipped and the leading run of digits is used, so
    "07" gives 7 and "12abc" gives 12. Blank or non-numeric text gives None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


class FieldValues(BaseModel):
    """The six birth/death inputs."""

    model_config = ConfigDict(frozen=True)

    bday: Optional[int] = None
    bmonth: Optional[int] = None
    byear: Optional[int] = None
    dday: Optional[int] = None
    dmonth: Optional[int] = None
    dyear: Optional[int] = None

    @field_validator('bday', 'bmonth', 'byear', 'dday', 'dmonth', 'dyear', mode='before')
    @classmethod
    def _parse(cls, value: Any) -> Optional[int]:
        return parse_field(value)

    @classmethod
    def from_mapping(cls, raw: Dict[Any, Any]) -> 'FieldValues':
        """Build from a mapping keyed by field id or InputField."""
        values = {}
        for key, value in raw.items():
            name = key.value if isinstance(key, InputField) else str(key)
            values[name] = value
        return cls(**values)

    def as_tuple(self) -> Tuple[Optional[int], ...]:
        return (self.bday, self.bmonth, self.byear, self.dday, self.dmonth, self.dyear)

    def all_present(self) -> bool:
        """True if every field holds a non-zero number."""
        return all(self.as_tuple())


def format_field_on_blur(input_field: InputField, value: str) -> str:
    """
    Zero-pad day and month entries below 10 ("7" -> "07").

    Other fields and non-numeric text are returned unchanged.
    """
    number = parse_field(value)
    if number is None:
        return value
    if input_field.is_day_or_month and 0 <= number < 10:
        return '0' + str(number)
    return value
