"""
Primitive input checks and request-record construction.

Nothing here raises for bad client input: ``validate_body`` returns either
the request record or an ``Invalid`` carrying the message to send back.
"""
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from pydantic import BaseModel

# Ids are stored in 32-bit INTEGER columns.
_ID_MIN = -(2**31)
_ID_MAX = 2**31 - 1
_ID_RE = re.compile(r"[+-]?\d+")

RecordT = TypeVar("RecordT", bound=BaseModel)


@dataclass(frozen=True)
class Invalid:
    error: str


def is_valid_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def is_valid_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is not a number here.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def is_valid_id(value: Any) -> bool:
    """A finite, integral number that fits an id column."""
    if not is_valid_number(value):
        return False
    if isinstance(value, float) and not value.is_integer():
        return False
    return _ID_MIN <= value <= _ID_MAX


def parse_id(raw: str | None) -> int | None:
    """
    Parse a path or query segment into an id.

    Only whole decimal integers are accepted, so ``"12abc"`` and ``"1.5"``
    are rejected rather than truncated.
    """
    if raw is None or not _ID_RE.fullmatch(raw.strip()) or len(raw) > 20:
        return None
    value = int(raw)
    return value if is_valid_id(value) else None


_CHECK_MESSAGES: dict[Callable[[Any], bool], str] = {
    is_valid_string: "{} must be included and be a string",
    is_valid_number: "{} must be included and be a number",
    is_valid_id: "{} must be included and be a number",
}


def _label(field: str) -> str:
    return field[:1].upper() + field[1:]


def validate_body(
    body: dict | None,
    record_type: type[RecordT],
    **checks: Callable[[Any], bool],
) -> RecordT | Invalid:
    """
    Check each named field of *body* in order and build *record_type*.

    Returns ``Invalid`` for a missing body or for the first field whose
    check fails.  Field names are the JSON keys (e.g. ``postId``).
    """
    if body is None:
        return Invalid("A JSON body must be included")

    values = {}
    for field, check in checks.items():
        value = body.get(field)
        if not check(value):
            return Invalid(_CHECK_MESSAGES[check].format(_label(field)))
        values[field] = value
    return record_type(**values)
