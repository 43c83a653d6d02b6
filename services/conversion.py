"""
Unit Conversion Service

Converts recipe amounts into ounces, milliliters and grams, and resolves
the inventory key a recipe row points at.
"""

from constants import (
    ML_PER_OZ, OZ_PER_ML, GRAMS_PER_OZ, OZ_PER_UNIT, UNIT_MAPPINGS,
    DEFAULT_UNIT, DILUENT_NAMES,
)
from utils.numbers import to_number


def standardize_unit(unit):
    """Map a unit alias ("ounces", "TBSP") to its canonical spelling."""
    if not unit:
        return DEFAULT_UNIT
    return UNIT_MAPPINGS.get(str(unit).strip().lower(), unit)


def convert(value, from_unit):
    """
    Convert an amount to {toOz, toMl, toGram}.

    ml and g amounts assume water density for the opposite measure, so
    30 ml reports 30 g and 30 g reports 30 ml. Unknown units are treated as
    ounces.
    """
    value = to_number(value) or 0.0

    if from_unit == 'ml':
        return {
            'toOz': value * OZ_PER_ML,
            'toMl': value,
            'toGram': value,
        }
    if from_unit == 'g':
        return {
            'toOz': value / GRAMS_PER_OZ,
            'toMl': value,
            'toGram': value,
        }

    ounces = value * OZ_PER_UNIT.get(from_unit, 1)
    return {
        'toOz': ounces,
        'toMl': ounces * ML_PER_OZ,
        'toGram': ounces * GRAMS_PER_OZ,
    }


def parse_inventory_key(row):
    """
    Resolve (sheet_key, row_id, inventory_key) for a recipe row.

    Accepts "sheet:row" composite keys on the row or its ingredient,
    a separate sheetKey/rowId pair, or a single opaque external id.
    """
    ingredient = row.get('ingredient') or {}
    inventory_key = row.get('inventoryKey') or ingredient.get('inventoryKey') or ''

    if inventory_key:
        if ':' in inventory_key:
            sheet_key, row_id = inventory_key.split(':', 1)
            return sheet_key, row_id, inventory_key
        return None, None, inventory_key

    sheet_key = ingredient.get('sheetKey')
    row_id = ingredient.get('rowId')
    if sheet_key and row_id:
        return sheet_key, str(row_id), f"{sheet_key}:{row_id}"
    return None, None, None


def is_diluent(name):
    """True for the water row that absorbs batch rounding."""
    return (name or '').strip().upper() in DILUENT_NAMES
