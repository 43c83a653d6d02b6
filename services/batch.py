"""
Batch Scaling Service

Projects a costed recipe onto a production batch size.
"""

from constants import ML_PER_OZ
from services.conversion import is_diluent
from services.parsing import decimal_to_fraction, round_to_eighth
from utils.numbers import to_number


def _row_id(item, index):
    return item.get('tempId') or item.get('_id') or f"row-{index}"


def _batch_row(item, index, scaled_ml):
    scaled_oz = round_to_eighth(scaled_ml / ML_PER_OZ)
    return {
        'id': _row_id(item, index),
        'name': (item.get('ingredient') or {}).get('name') or 'Ingredient',
        'scaledOz': scaled_oz,
        'ozDisplay': decimal_to_fraction(scaled_oz),
        'scaledMl': scaled_ml,
        'originalOz': (item.get('conversions') or {}).get('toOz') or 0,
    }


def build_batch_rows(items, batch):
    """
    Scale hydrated recipe items to a batch target of ``{size, unit}``.

    Each ingredient is scaled and rounded to whole milliliters; its ounce
    figure is then derived from that rounded ml so both columns agree.
    If the recipe contains water (H2O/H20/WATER), the first such row is not
    scaled: it receives whatever ml is left after the other rows, so the
    batch adds up to the target.

    A zero recipe volume or zero target yields zeroed rows.
    """
    batch = batch or {}
    target_size = to_number(batch.get('size')) or 0.0
    target_unit = batch.get('unit')
    ounces = [(item.get('conversions') or {}).get('toOz') or 0 for item in items]
    total_oz = sum(ounces)

    if not total_oz or not target_size:
        return [_batch_row(item, index, 0) for index, item in enumerate(items)]

    if target_unit == 'ml':
        factor = target_size / (total_oz * ML_PER_OZ)
        target_total_ml = target_size
    else:
        factor = target_size / total_oz
        target_total_ml = target_size * ML_PER_OZ

    diluent_index = next(
        (index for index, item in enumerate(items)
         if is_diluent((item.get('ingredient') or {}).get('name'))),
        None,
    )

    scaled = {}
    for index, oz in enumerate(ounces):
        if index != diluent_index:
            scaled[index] = round(oz * ML_PER_OZ * factor)

    if diluent_index is not None:
        remaining = round(target_total_ml - sum(scaled.values()))
        scaled[diluent_index] = max(0, remaining)

    return [_batch_row(item, index, scaled[index]) for index, item in enumerate(items)]


def summarize_batch(rows):
    """Batch totals for display; ml is always a whole number."""
    total_oz = sum(row['scaledOz'] for row in rows)
    return {
        'oz': total_oz,
        'ozDisplay': decimal_to_fraction(total_oz),
        'ml': round(sum(row['scaledMl'] for row in rows)),
    }
