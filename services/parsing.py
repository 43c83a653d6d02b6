"""
Parsing Service

Fraction display and free-text amount parsing for recipe rows.

Bar measurements are shown in eighths of a unit. Typed text is stored
verbatim while the user is editing and only reformatted on commit (blur).
"""

import math
import re

from constants import DEFAULT_UNIT, FRACTION_DENOMINATOR
from utils.numbers import to_number

_PARTIAL_DECIMAL = re.compile(r'^(\d*)\.$')
_DECIMAL = re.compile(r'^(\d+(\.\d*)?|\.\d+)$')
_MIXED = re.compile(r'^(\d+)\s+(\d+)\s*/\s*(\d+)$')
_FRACTION = re.compile(r'^(\d+)\s*/\s*(\d+)$')
# Leading number of text like "2oz" or "1 1/"
_LEADING_NUMBER = re.compile(r'^(\d+(\.\d*)?|\.\d+)')


def round_to_eighth(value):
    """Round to the nearest 1/8."""
    return round(value * FRACTION_DENOMINATOR) / FRACTION_DENOMINATOR


def decimal_to_fraction(value):
    """
    Convert a decimal amount to its eighths display string.

    1.375 -> "1 3/8", 0.5 -> "1/2", 2 -> "2", 0 -> "".
    """
    if value is None:
        return ''
    rounded = round_to_eighth(value)
    if rounded <= 0:
        return ''

    whole = int(rounded)
    numerator = int(round((rounded - whole) * FRACTION_DENOMINATOR))
    if numerator == 0:
        return str(whole)

    divisor = math.gcd(numerator, FRACTION_DENOMINATOR)
    fraction = f"{numerator // divisor}/{FRACTION_DENOMINATOR // divisor}"
    if whole == 0:
        return fraction
    return f"{whole} {fraction}"


def parse_fraction_input(text):
    """
    Parse typed amount text into a decimal rounded to the nearest 1/8.

    Accepted forms, in order: a partial decimal still being typed ("1."),
    a plain decimal ("1.5"), a mixed number ("1 1/2"), a bare fraction
    ("3/8"), then the number text starts with ("2oz" -> 2). Anything else
    parses as 0; callers keep the raw text.
    """
    if text is None:
        return 0
    trimmed = str(text).strip()
    if not trimmed:
        return 0

    partial = _PARTIAL_DECIMAL.match(trimmed)
    if partial:
        if not partial.group(1):
            return 0
        return round_to_eighth(float(partial.group(1)))

    if _DECIMAL.match(trimmed):
        return round_to_eighth(float(trimmed))

    mixed = _MIXED.match(trimmed)
    if mixed:
        whole, num, den = (int(g) for g in mixed.groups())
        if den != 0:
            return round_to_eighth(whole + num / den)

    fraction = _FRACTION.match(trimmed)
    if fraction:
        num, den = (int(g) for g in fraction.groups())
        if den != 0:
            return round_to_eighth(num / den)

    leading = _LEADING_NUMBER.match(trimmed)
    if leading:
        return round_to_eighth(float(leading.group(1)))

    return 0


def fraction_to_decimal(fraction):
    """Convert a stored {whole, numerator, denominator} dict to a decimal."""
    if not fraction:
        return 0.0
    whole = to_number(fraction.get('whole')) or 0.0
    numerator = to_number(fraction.get('numerator')) or 0.0
    denominator = to_number(fraction.get('denominator')) or 1.0
    return whole + numerator / denominator


def normalize_amount(amount):
    """
    Build a canonical Amount dict from a stored or client-sent amount.

    The value falls back to the legacy fraction dict when missing, and is
    never negative. An existing display string is kept verbatim, including
    an empty one (nothing entered yet).
    """
    amount = amount or {}
    value = to_number(amount.get('value'))
    if value is None:
        value = fraction_to_decimal(amount.get('fraction'))
    value = max(0.0, value)

    display = amount.get('fractionDisplay')
    if display is None:
        display = amount.get('display')
    if display is None:
        display = decimal_to_fraction(value) if value else ''

    return {
        'unit': amount.get('unit') or DEFAULT_UNIT,
        'value': value,
        'fractionDisplay': str(display),
    }


def apply_amount_input(amount, text):
    """Live keystroke: update the value but keep the typed buffer as-is."""
    current = normalize_amount(amount)
    current['value'] = parse_fraction_input(text)
    current['fractionDisplay'] = '' if text is None else str(text)
    return current


def commit_amount_input(amount, text):
    """Blur: store the rounded value and reformat the display."""
    current = normalize_amount(amount)
    value = parse_fraction_input(text)
    current['value'] = value
    current['fractionDisplay'] = decimal_to_fraction(value)
    return current
