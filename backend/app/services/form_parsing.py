"""
Parsing of untrusted form fields into task attributes.
"""
import re
from datetime import datetime, timezone
from typing import Optional

from app.models.task import EisenhowerQuadrant
from app.models.task_record import MAX_INTEGER

DATE_FORMAT = "%Y-%m-%d"
_DIGITS = re.compile(r"\d+")


class InvalidFormField(ValueError):
    """A required form field is missing or malformed."""


class NotANumber(InvalidFormField):
    """A numeric form field does not hold a number."""


def _is_number(text: str) -> bool:
    return _DIGITS.fullmatch(text) is not None


def parse_date(text: Optional[str]) -> datetime:
    """
    Parse a yyyy-MM-dd due date into midnight UTC.

    Raises:
        InvalidFormField: missing or unparsable date
    """
    if text is None or not text.strip():
        raise InvalidFormField("date is required (yyyy-MM-dd)")
    try:
        parsed = datetime.strptime(text.strip(), DATE_FORMAT)
    except ValueError:
        raise InvalidFormField(f"Invalid date '{text}', expected yyyy-MM-dd") from None
    return parsed.replace(tzinfo=timezone.utc)


def parse_importance(text: Optional[str]) -> int:
    """
    Parse the importance field into a category number.

    A single non-digit character (e.g. an unchecked radio placeholder) falls
    back to the lowest-priority quadrant. The range itself is checked by Task.

    Raises:
        NotANumber: anything else that is not all digits
    """
    if text is None:
        raise NotANumber("importance is required")
    text = text.strip()
    if _is_number(text):
        return int(text)
    if len(text) == 1:
        return int(EisenhowerQuadrant.ELIMINATE)
    raise NotANumber(f"importance '{text}' is not a number")


def parse_task_id(text: str) -> int:
    """
    Raises:
        NotANumber: the id is not all digits
    """
    text = text.strip()
    if not _is_number(text):
        raise NotANumber(f"id '{text}' is not a number")
    return int(text)


def parse_duration(text: Optional[str], default: int) -> int:
    """
    Duration in minutes; absent or blank means `default`.

    Raises:
        NotANumber: not all digits, or too large to store
    """
    if text is None or not text.strip():
        return default
    text = text.strip()
    if not _is_number(text):
        raise NotANumber(f"duration '{text}' is not a number")
    duration = int(text)
    if duration > MAX_INTEGER:
        raise NotANumber(f"duration '{text}' is out of range")
    return duration
