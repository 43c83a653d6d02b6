"""
Inventory Service

Reads priced ingredients out of inventory sheets and exposes them as
inventory records: ``{key, sheetKey, rowId, name, priceFields}``.

Two sources share one interface (``search`` and ``fetch_by_keys``):
LocalInventory reads this app's database, RemoteInventory calls an
external inventory API over HTTP.
"""

import logging

import requests

from constants import (
    DEFAULT_INGREDIENT_SHEETS, FORMULA_TYPES, PRICE_FIELDS, SHEET_LABELS,
    MIN_SEARCH_LIMIT, MAX_SEARCH_LIMIT,
)
from models import InventorySheet
from utils.numbers import to_number

logger = logging.getLogger(__name__)


class InventoryLookupError(Exception):
    """Raised when the inventory source cannot be queried."""
    pass


def clamp_limit(limit, default=20):
    value = to_number(limit)
    if value is None or value == 0:
        value = default
    return int(max(MIN_SEARCH_LIMIT, min(value, MAX_SEARCH_LIMIT)))


def label_for_sheet(sheet_key):
    return SHEET_LABELS.get(sheet_key, sheet_key or 'Inventory')


# ============================================
# FORMULA COLUMNS
# ============================================

def _evaluate_formula(formula, values):
    """Evaluate one formula definition; None when inputs are unusable."""
    kind = formula.get('type')
    if not isinstance(kind, str) or kind not in FORMULA_TYPES:
        logger.warning(f"Unknown formula type {kind!r}")
        return None

    if kind == 'ratio':
        numerator = to_number(values.get(formula.get('numerator')))
        denominator = to_number(values.get(formula.get('denominator')))
        if numerator is None or not denominator:
            return None
        return numerator / denominator

    if kind == 'unitPerConvertedVolume':
        numerator = to_number(values.get(formula.get('numerator')))
        volume = to_number(values.get(formula.get('volumeKey')))
        factor = to_number(formula.get('conversionFactor'))
        if numerator is None or not volume or volume <= 0 or not factor or factor <= 0:
            return None
        return numerator / (volume / factor)

    if kind == 'unitPerSizeUnit':
        numerator = to_number(values.get(formula.get('numerator')))
        size = to_number(values.get(formula.get('sizeKey')))
        if numerator is None or size is None or size <= 0:
            return None
        unit = str(values.get(formula.get('unitKey')) or '').lower()
        if unit == 'g':
            ounces = size / (to_number(formula.get('gramFactor')) or 28.3495)
        elif unit == 'ml':
            ounces = size / (to_number(formula.get('milliliterFactor')) or 29.5735)
        else:
            ounces = size
        return numerator / ounces

    if kind == 'multiplier':
        source = to_number(values.get(formula.get('sourceKey')))
        factor = to_number(formula.get('factor'))
        if source is None or factor is None:
            return None
        return source * factor

    return None


def apply_formulas(columns, values):
    """
    Return a copy of ``values`` with every formula column computed.

    Columns are evaluated in order, so a formula may read a column
    computed earlier in the list (wine glassCost reads ounceCost).
    """
    computed = dict(values or {})
    for column in columns or []:
        formula = column.get('formula')
        if column.get('type') != 'formula' or not formula:
            continue
        result = _evaluate_formula(formula, computed)
        if result is not None:
            precision = column.get('precision')
            result = round(result, precision if isinstance(precision, int) else 2)
        computed[column['key']] = result
    return computed


# ============================================
# RECORDS
# ============================================

def make_record(sheet_key, row_id, values):
    """Inventory record for one row, or None when the row has no name."""
    name = values.get('name') or values.get('item') or ''
    if not name:
        return None
    return {
        'key': f"{sheet_key}:{row_id}",
        'sheetKey': sheet_key,
        'rowId': str(row_id),
        'name': name,
        'sheetLabel': label_for_sheet(sheet_key),
        'priceFields': {field: values.get(field) for field in PRICE_FIELDS if field in values},
        'values': values,
    }


def build_inventory_index(records):
    """Key -> record map handed to the row hydrator."""
    return {record['key']: record for record in records if record}


class LocalInventory:
    """Inventory records served from the InventorySheet tables."""

    def __init__(self, sheet_keys=None, app=None):
        self.sheet_keys = list(sheet_keys or DEFAULT_INGREDIENT_SHEETS)
        # Set when searches run on resolver timer threads
        self.app = app

    def _sheets(self):
        sheets = InventorySheet.query.filter(InventorySheet.sheet_key.in_(self.sheet_keys)).all()
        return sorted(sheets, key=lambda sheet: self.sheet_keys.index(sheet.sheet_key))

    def _records(self):
        for sheet in self._sheets():
            for row in sheet.rows:
                if row.is_deleted:
                    continue
                record = make_record(sheet.sheet_key, row.id, apply_formulas(sheet.columns, row.values))
                if record:
                    yield record

    def search(self, query, limit=20):
        """Rows whose name contains ``query`` (case-insensitive)."""
        if self.app is not None:
            with self.app.app_context():
                return self._search(query, limit)
        return self._search(query, limit)

    def _search(self, query, limit):
        query = (query or '').strip().lower()
        if not query:
            return []
        limit = clamp_limit(limit)
        results = []
        for record in self._records():
            if query in record['name'].lower():
                results.append(record)
                if len(results) >= limit:
                    break
        return results

    def fetch_by_keys(self, keys):
        """Records for the requested keys, in request order; unknown keys skipped."""
        wanted = [key for key in keys if key]
        if not wanted:
            return []
        found = {record['key']: record for record in self._records() if record['key'] in wanted}
        return [found[key] for key in wanted if key in found]


class RemoteInventory:
    """Inventory records fetched from an external inventory API."""

    def __init__(self, base_url, timeout=5, session=None, sheet_keys=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.sheet_keys = list(sheet_keys or [])

    def _get(self, params):
        if self.sheet_keys:
            params['sheetKeys'] = ','.join(self.sheet_keys)
        url = f"{self.base_url}/recipes/ingredients/search"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            raise InventoryLookupError(f"Inventory request failed: {e}") from e
        items = payload.get('items', []) if isinstance(payload, dict) else None
        if not isinstance(items, list):
            raise InventoryLookupError(f"Unexpected inventory response from {url}")
        return [self._to_record(item) for item in items if isinstance(item, dict)]

    @staticmethod
    def _to_record(item):
        values = item.get('values') or item.get('priceFields') or {}
        key = item.get('key') or item.get('id')
        sheet_key = item.get('sheetKey')
        if not key and sheet_key and item.get('rowId'):
            key = f"{sheet_key}:{item['rowId']}"
        return {
            'key': key,
            'sheetKey': sheet_key,
            'rowId': str(item.get('rowId') or ''),
            'name': item.get('name') or values.get('name') or '',
            'sheetLabel': label_for_sheet(sheet_key),
            'priceFields': {field: values.get(field) for field in PRICE_FIELDS if field in values},
            'values': values,
        }

    def search(self, query, limit=20):
        query = (query or '').strip()
        if not query:
            return []
        return self._get({'query': query, 'limit': clamp_limit(limit)})

    def fetch_by_keys(self, keys):
        wanted = [key for key in keys if key]
        if not wanted:
            return []
        return self._get({'ids': ','.join(wanted)})
