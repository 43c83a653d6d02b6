"""
Unit Constants and Conversion Tables

Contains the fixed conversion factors between supported bar measurement
units, plus the unit aliases accepted from recipe payloads.
"""

# Volume/weight factors relative to one fluid ounce
ML_PER_OZ = 29.5735
OZ_PER_ML = 1 / ML_PER_OZ
# Used for every non-water ingredient; not a density model
GRAMS_PER_OZ = 28.3495231
OZ_PER_TSP = 0.166667
OZ_PER_TBSP = 0.50000116165
OZ_PER_CUP = 8.11538430287086

# Ounces per one unit of each supported measurement
OZ_PER_UNIT = {
    'oz': 1,
    'tsp': OZ_PER_TSP,
    'Tbsp': OZ_PER_TBSP,
    'Cup': OZ_PER_CUP,
}

DEFAULT_UNIT = 'oz'

# Unit aliases (lowercase input -> canonical unit)
UNIT_MAPPINGS = {
    'oz': 'oz', 'ounce': 'oz', 'ounces': 'oz',
    'ml': 'ml', 'milliliter': 'ml', 'milliliters': 'ml',
    'g': 'g', 'gram': 'g', 'grams': 'g',
    'tsp': 'tsp', 'teaspoon': 'tsp', 'teaspoons': 'tsp',
    'tbsp': 'Tbsp', 'tablespoon': 'Tbsp', 'tablespoons': 'Tbsp',
    'cup': 'Cup', 'cups': 'Cup',
}

# Batch targets are only measured in these units
BATCH_UNITS = ('oz', 'ml')

# Amounts are displayed in eighths of a unit
FRACTION_DENOMINATOR = 8
