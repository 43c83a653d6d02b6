"""
Cost Calculation Service

Functions for pricing recipe rows from inventory records and totalling
a recipe.
"""

import logging

from services.conversion import convert, parse_inventory_key
from services.parsing import normalize_amount
from utils.numbers import to_number

logger = logging.getLogger(__name__)

# Rows or recipes costing more than this are logged for review
HIGH_COST_WARNING = 50.0


def _parse_price(fields, key):
    """Price field as a non-negative float, or None."""
    price = to_number(fields.get(key))
    if price is None or price < 0:
        return None
    return price


def empty_pricing():
    return {
        'currency': 'USD',
        'perUnit': None,
        'perOz': None,
        'perGram': None,
        'perMl': None,
    }


def derive_pricing(price_fields):
    """
    Build a pricing snapshot from an inventory record's raw price fields.

    Inventory sheets price stock three ways: spirits and pre-mix carry
    ``ounceCost``, dry stock carries ``gramCost`` and other goods carry
    ``mlCost``. All three collapse into ``perOz`` in that order. When
    ``ounceCost`` is set, ``perGram`` and ``perMl`` are cleared so a row is
    never costed twice.

    Note: the dry stock ``gramCost`` column is computed as $/oz, not $/gram.
    It is kept under its original name so stored costs do not change.
    """
    fields = price_fields or {}
    unit_cost = _parse_price(fields, 'unitCost')
    ounce_cost = _parse_price(fields, 'ounceCost')
    gram_cost = _parse_price(fields, 'gramCost')
    ml_cost = _parse_price(fields, 'mlCost')

    per_oz = next((p for p in (ounce_cost, gram_cost, ml_cost) if p is not None), None)

    pricing = empty_pricing()
    pricing['perUnit'] = unit_cost
    pricing['perOz'] = per_oz
    pricing['perGram'] = None if ounce_cost is not None else gram_cost
    pricing['perMl'] = None if ounce_cost is not None else ml_cost
    return pricing


def coerce_pricing(pricing):
    """Re-read a cached pricing snapshot, dropping invalid prices."""
    pricing = pricing or {}
    snapshot = empty_pricing()
    snapshot['currency'] = pricing.get('currency') or 'USD'
    for key in ('perUnit', 'perOz', 'perGram', 'perMl'):
        snapshot[key] = _parse_price(pricing, key)
    return snapshot


def effective_volume_price(pricing):
    """The per-volume price used for display: perOz, then perGram, then perMl."""
    for key in ('perOz', 'perGram', 'perMl'):
        if pricing.get(key) is not None:
            return pricing[key]
    return None


def compute_extended_cost(pricing, conversions, amount_value):
    """Cost of one row using the first available price basis."""
    if pricing.get('perOz') is not None:
        return conversions['toOz'] * pricing['perOz']
    if pricing.get('perGram') is not None:
        return conversions['toGram'] * pricing['perGram']
    if pricing.get('perUnit') is not None:
        return amount_value * pricing['perUnit']
    return 0.0


def hydrate_row(row, inventory_index, warn_above=HIGH_COST_WARNING):
    """
    Materialize a recipe row: amount, pricing, conversions and extended cost.

    ``inventory_index`` maps inventory keys to records shaped like
    ``{key, name, priceFields}``. A row whose key is missing from the index
    keeps the pricing it already carries, so it still shows its last known
    cost. The input row is not modified.
    """
    if not isinstance(row, dict):
        raise TypeError(f"Recipe row must be a mapping, got {type(row).__name__}")

    sheet_key, row_id, inventory_key = parse_inventory_key(row)
    source = inventory_index.get(inventory_key) if inventory_key else None

    ingredient = dict(row.get('ingredient') or {})
    if sheet_key and row_id:
        ingredient['sheetKey'] = sheet_key
        ingredient['rowId'] = row_id

    if source is not None:
        pricing = derive_pricing(source.get('priceFields'))
        if not ingredient.get('name'):
            ingredient['name'] = source.get('name') or ''
    else:
        if inventory_key and inventory_index:
            logger.warning(
                f"Ingredient {inventory_key} ({ingredient.get('name') or 'unnamed'}) "
                f"not found in inventory; using cached pricing"
            )
        pricing = coerce_pricing(row.get('pricing'))

    amount = normalize_amount(row.get('amount'))
    conversions = convert(amount['value'], amount['unit'])
    extended_cost = compute_extended_cost(pricing, conversions, amount['value'])

    if warn_above is not None and extended_cost > warn_above:
        logger.warning(
            f"High cost for {ingredient.get('name') or inventory_key}: "
            f"{amount['value']} {amount['unit']} -> ${extended_cost:.2f}"
        )

    item = dict(row)
    item['inventoryKey'] = inventory_key
    item['ingredient'] = ingredient
    item['amount'] = amount
    item['pricing'] = pricing
    item['conversions'] = conversions
    item['extendedCost'] = extended_cost
    return item


def calculate_totals(items):
    """Recipe volume (oz, 3 places) and cost per drink (2 places)."""
    volume_oz = sum((item.get('conversions') or {}).get('toOz') or 0 for item in items)
    cost_each = sum(item.get('extendedCost') or 0 for item in items)
    return {
        'volumeOz': round(volume_oz, 3),
        'costEach': round(cost_each, 2),
    }


def hydrate_items(items, inventory_index, warn_above=HIGH_COST_WARNING):
    """Hydrate every row and total the result."""
    hydrated = [hydrate_row(row, inventory_index, warn_above) for row in items]
    totals = calculate_totals(hydrated)
    if warn_above is not None and totals['costEach'] > warn_above:
        logger.warning(
            f"High recipe cost: ${totals['costEach']:.2f} for "
            f"{totals['volumeOz']} oz across {len(hydrated)} items"
        )
    return hydrated, totals
