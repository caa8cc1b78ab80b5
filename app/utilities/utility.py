"""
Numeric helpers shared by the analytics and chart modules.
"""
import math
from typing import Any


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce a JSON value to float, using `default` for missing or unparsable values."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return int(math.floor(value + 0.5))


def format_number(value: float) -> str:
    """Render a number the way a browser prints it: no trailing `.0` on whole values."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
