"""
Inventory Constants

Default inventory sheet layouts, price field names, and the ingredient
names that receive special handling during batch scaling.
"""

from .units import ML_PER_OZ

# Price columns read from an inventory row (raw field -> meaning)
PRICE_FIELDS = ('unitCost', 'ounceCost', 'gramCost', 'mlCost')

# Sheets searched for recipe ingredients when none are requested
DEFAULT_INGREDIENT_SHEETS = ('spirits', 'dryStock', 'preMix')

# Diluent ingredient names (compared uppercase)
DILUENT_NAMES = {'H2O', 'H20', 'WATER'}

SHEET_LABELS = {
    'spirits': 'Spirits',
    'dryStock': 'Dry Stock',
    'preMix': 'Pre-Mix',
    'cocktails': 'Cocktails',
    'mocktails': 'Mocktails',
    'wine': 'Wine',
    'beer': 'Beer',
}

# Supported formula column types
FORMULA_TYPES = {'ratio', 'unitPerConvertedVolume', 'unitPerSizeUnit', 'multiplier'}

# Seed layout for the priced ingredient sheets
DEFAULT_SHEETS = [
    {
        'sheetKey': 'spirits',
        'name': 'Spirits',
        'columns': [
            {'key': 'name', 'label': 'Name', 'type': 'text', 'required': True},
            {'key': 'spirit', 'label': 'Spirit', 'type': 'text'},
            {'key': 'distributor', 'label': 'Distributor', 'type': 'text'},
            {'key': 'sizeOz', 'label': 'Size', 'type': 'number'},
            {'key': 'unitCost', 'label': '$ / Unit', 'type': 'currency', 'precision': 2},
            {
                'key': 'ounceCost',
                'label': '$ / oz',
                'type': 'formula',
                'precision': 2,
                # sizeOz is entered in ml despite the key name
                'formula': {
                    'type': 'unitPerConvertedVolume',
                    'numerator': 'unitCost',
                    'volumeKey': 'sizeOz',
                    'conversionFactor': ML_PER_OZ,
                },
            },
            {'key': 'itemNumber', 'label': 'Item#', 'type': 'number', 'precision': 0},
        ],
    },
    {
        'sheetKey': 'dryStock',
        'name': 'Dry Stock',
        'columns': [
            {'key': 'name', 'label': 'Name', 'type': 'text', 'required': True},
            {'key': 'type', 'label': 'Type', 'type': 'text'},
            {'key': 'distributor', 'label': 'Distributor', 'type': 'text'},
            {'key': 'sizeG', 'label': 'Size', 'type': 'number', 'precision': 2},
            {'key': 'sizeUnit', 'label': 'ml / g', 'type': 'text'},
            {'key': 'unitCost', 'label': '$ / Unit', 'type': 'currency', 'precision': 2},
            {
                # Holds $/oz, not $/gram
                'key': 'gramCost',
                'label': '$ / oz',
                'type': 'formula',
                'precision': 2,
                'formula': {
                    'type': 'unitPerSizeUnit',
                    'numerator': 'unitCost',
                    'sizeKey': 'sizeG',
                    'unitKey': 'sizeUnit',
                    'gramFactor': 28.3495,
                    'milliliterFactor': ML_PER_OZ,
                },
            },
            {'key': 'itemNumber', 'label': 'Item#', 'type': 'number', 'precision': 0},
        ],
    },
    {
        'sheetKey': 'preMix',
        'name': 'Pre-Mix',
        'columns': [
            {'key': 'name', 'label': 'Name', 'type': 'text', 'required': True},
            {'key': 'type', 'label': 'Type', 'type': 'text'},
            {'key': 'cocktail', 'label': 'Cocktail', 'type': 'text'},
            {'key': 'ounceCost', 'label': '$ / oz', 'type': 'currency', 'precision': 2},
            {'key': 'itemNumber', 'label': 'Item#', 'type': 'number', 'precision': 0},
        ],
    },
    {
        'sheetKey': 'wine',
        'name': 'Wine',
        'columns': [
            {'key': 'name', 'label': 'Name', 'type': 'text', 'required': True},
            {'key': 'style', 'label': 'Style', 'type': 'text'},
            {'key': 'sizeMl', 'label': 'Size', 'type': 'number', 'precision': 0},
            {'key': 'unitCost', 'label': '$ / Unit', 'type': 'currency', 'precision': 2},
            {
                'key': 'ounceCost',
                'label': '$ / oz',
                'type': 'formula',
                'precision': 2,
                'formula': {
                    'type': 'unitPerConvertedVolume',
                    'numerator': 'unitCost',
                    'volumeKey': 'sizeMl',
                    'conversionFactor': ML_PER_OZ,
                },
            },
            {
                'key': 'glassCost',
                'label': '$ / Glass',
                'type': 'formula',
                'precision': 2,
                'formula': {'type': 'multiplier', 'sourceKey': 'ounceCost', 'factor': 5},
            },
            {'key': 'itemNumber', 'label': 'Item#', 'type': 'number', 'precision': 0},
        ],
    },
    {
        'sheetKey': 'beer',
        'name': 'Beer',
        'columns': [
            {'key': 'name', 'label': 'Name', 'type': 'text', 'required': True},
            {'key': 'type', 'label': 'Type', 'type': 'text'},
            {'key': 'packCost', 'label': '$/Pack', 'type': 'currency', 'precision': 2},
            {'key': 'numUnits', 'label': '#Units', 'type': 'number', 'precision': 0},
            {
                'key': 'unitCost',
                'label': '$/Unit',
                'type': 'formula',
                'precision': 2,
                'formula': {'type': 'ratio', 'numerator': 'packCost', 'denominator': 'numUnits'},
            },
            {'key': 'itemNumber', 'label': 'Item#', 'type': 'number', 'precision': 0},
        ],
    },
]
