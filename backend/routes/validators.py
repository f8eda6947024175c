"""Field checks shared by the request models.

They run as pydantic ``mode='before'`` validators so they see the raw JSON
value: a numeric string is not a number and a number is not a string.
"""

import math

from backend.core.errors import REQUIRED_FIELDS_MESSAGE


def require_present(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(REQUIRED_FIELDS_MESSAGE)
    return value


def require_string(value, message: str) -> str:
    require_present(value)
    if not isinstance(value, str):
        raise ValueError(message)
    return value


def require_non_negative_number(value, message: str, negative_message: str) -> float:
    if value is None:
        raise ValueError(REQUIRED_FIELDS_MESSAGE)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(message)
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    if not finite:
        raise ValueError(message)
    if value < 0:
        raise ValueError(negative_message)
    return value
