"""
Recipe Document Service

Validates recipe payloads from the recipe builder and turns them into
the stored document shape: sanitized fields, hydrated items, totals.
"""

from constants import (
    BATCH_UNITS, VALID_RECIPE_TYPES, DEFAULT_RECIPE_TYPE, DEFAULT_BACKGROUND_COLOR,
    METADATA_TEXT_FIELDS, METADATA_NUMBER_FIELDS, CLIENT_ONLY_ITEM_FIELDS,
    MAX_LENGTHS,
)
from services.conversion import parse_inventory_key, standardize_unit
from services.cost import hydrate_row, calculate_totals, HIGH_COST_WARNING
from utils.numbers import to_number
from utils.sanitizer import (
    sanitize_text, sanitize_recipe_title, sanitize_notes, sanitize_hex_color,
)


class RecipeValidationError(ValueError):
    """Raised when a recipe payload cannot be stored."""
    pass


def sanitize_batch(batch):
    batch = batch or {}
    return {
        'size': max(0.0, to_number(batch.get('size')) or 0.0),
        'unit': batch.get('unit') if batch.get('unit') in BATCH_UNITS else BATCH_UNITS[0],
        'yieldCount': to_number(batch.get('yieldCount')) or 0.0,
    }


def sanitize_metadata(metadata):
    metadata = metadata or {}
    cleaned = {field: to_number(metadata.get(field)) for field in METADATA_NUMBER_FIELDS}
    for field in METADATA_TEXT_FIELDS:
        cleaned[field] = sanitize_text(metadata.get(field) or '', max_length=MAX_LENGTHS['metadata_text'])
    return cleaned


def collect_inventory_keys(items):
    """Inventory keys referenced by a list of rows, without duplicates."""
    keys = []
    for row in items or []:
        if not isinstance(row, dict):
            continue
        _, _, key = parse_inventory_key(row)
        if key and key not in keys:
            keys.append(key)
    return keys


def serialize_item(item, index):
    """Stored form of a hydrated row: client-only fields dropped, numbers rounded."""
    stored = {k: v for k, v in item.items() if k not in CLIENT_ONLY_ITEM_FIELDS}
    order = item.get('order')
    stored['order'] = order if isinstance(order, int) and not isinstance(order, bool) else index
    stored['conversions'] = {
        'toOz': round(item['conversions']['toOz'], 4),
        'toMl': round(item['conversions']['toMl'], 2),
        'toGram': round(item['conversions']['toGram'], 2),
    }
    stored['extendedCost'] = round(item['extendedCost'], 4)
    stored['notes'] = sanitize_notes(item.get('notes') or '', max_length=MAX_LENGTHS['notes'])
    return stored


def prepare_rows(items):
    """Copy incoming rows with their unit spelled canonically."""
    if not isinstance(items, list):
        return []
    rows = []
    for row in items:
        if not isinstance(row, dict):
            raise RecipeValidationError('Recipe items must be objects')
        row = dict(row)
        amount = dict(row.get('amount') or {})
        amount['unit'] = standardize_unit(amount.get('unit'))
        row['amount'] = amount
        rows.append(row)
    return rows


def normalize_recipe_payload(payload, inventory_index, warn_above=HIGH_COST_WARNING):
    """
    Build a storable recipe document from a recipe builder payload.

    Raises:
        RecipeValidationError: if the title is missing or items are malformed
    """
    payload = payload or {}
    title = sanitize_recipe_title(payload.get('title'), max_length=MAX_LENGTHS['recipe_title'])
    if not title:
        raise RecipeValidationError('Recipe title is required')

    recipe_type = payload.get('type')
    if recipe_type not in VALID_RECIPE_TYPES:
        recipe_type = DEFAULT_RECIPE_TYPE

    item_number = to_number(payload.get('itemNumber'))

    items = [hydrate_row(row, inventory_index, warn_above) for row in prepare_rows(payload.get('items'))]
    totals = calculate_totals(items)

    return {
        'title': title,
        'type': recipe_type,
        'itemNumber': int(item_number) if item_number is not None else None,
        'notes': sanitize_notes(payload.get('notes'), max_length=MAX_LENGTHS['notes']),
        'batchNotes': sanitize_notes(payload.get('batchNotes'), max_length=MAX_LENGTHS['notes']),
        'backgroundColor': sanitize_hex_color(payload.get('backgroundColor'), DEFAULT_BACKGROUND_COLOR),
        'metadata': sanitize_metadata(payload.get('metadata')),
        'batch': sanitize_batch(payload.get('batch')),
        'items': [serialize_item(item, index) for index, item in enumerate(items)],
        'totals': totals,
    }
