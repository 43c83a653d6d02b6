"""
Constants Package

Unit tables, inventory layouts, and validation whitelists shared by the
services and routes.
"""

from .units import (
    ML_PER_OZ,
    OZ_PER_ML,
    GRAMS_PER_OZ,
    OZ_PER_TSP,
    OZ_PER_TBSP,
    OZ_PER_CUP,
    OZ_PER_UNIT,
    DEFAULT_UNIT,
    UNIT_MAPPINGS,
    BATCH_UNITS,
    FRACTION_DENOMINATOR,
)

from .inventory import (
    PRICE_FIELDS,
    DEFAULT_INGREDIENT_SHEETS,
    DILUENT_NAMES,
    SHEET_LABELS,
    FORMULA_TYPES,
    DEFAULT_SHEETS,
)

from .validation import (
    VALID_RECIPE_TYPES,
    DEFAULT_RECIPE_TYPE,
    DEFAULT_BACKGROUND_COLOR,
    HEX_COLOR_PATTERN,
    METADATA_TEXT_FIELDS,
    METADATA_NUMBER_FIELDS,
    CLIENT_ONLY_ITEM_FIELDS,
    MIN_SEARCH_LIMIT,
    MAX_SEARCH_LIMIT,
    MAX_LENGTHS,
)
