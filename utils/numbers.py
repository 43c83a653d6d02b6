"""
Numeric Parsing Helpers

Defensive conversions for numbers arriving as JSON values, form strings,
or spreadsheet cells.
"""

import math


def to_number(value):
    """
    Parse a numeric-looking value into a finite float.

    Accepts ints, floats and numeric strings ("5.43", " 12 ").
    Returns None for blanks, booleans, non-numeric text, NaN and infinity.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        result = float(value)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_float(value, default=0.0, min_val=None, max_val=None):
    """Safely parse a float value with optional bounds."""
    result = to_number(value)
    if result is None:
        return default
    if min_val is not None:
        result = max(min_val, result)
    if max_val is not None:
        result = min(max_val, result)
    return result

