"""
Services Package

Costing, conversion, batch scaling and inventory lookup for the recipe
builder.
"""

from .parsing import (
    round_to_eighth,
    decimal_to_fraction,
    parse_fraction_input,
    fraction_to_decimal,
    normalize_amount,
    apply_amount_input,
    commit_amount_input,
)

from .conversion import (
    convert,
    standardize_unit,
    parse_inventory_key,
    is_diluent,
)

from .cost import (
    derive_pricing,
    effective_volume_price,
    compute_extended_cost,
    hydrate_row,
    hydrate_items,
    calculate_totals,
)

from .batch import (
    build_batch_rows,
    summarize_batch,
)

from .inventory import (
    InventoryLookupError,
    LocalInventory,
    RemoteInventory,
    apply_formulas,
    build_inventory_index,
)

from .resolver import IngredientResolver

from .recipes import (
    RecipeValidationError,
    normalize_recipe_payload,
    collect_inventory_keys,
)

__all__ = [
    # Parsing
    'round_to_eighth',
    'decimal_to_fraction',
    'parse_fraction_input',
    'fraction_to_decimal',
    'normalize_amount',
    'apply_amount_input',
    'commit_amount_input',
    # Conversion
    'convert',
    'standardize_unit',
    'parse_inventory_key',
    'is_diluent',
    # Cost
    'derive_pricing',
    'effective_volume_price',
    'compute_extended_cost',
    'hydrate_row',
    'hydrate_items',
    'calculate_totals',
    # Batch
    'build_batch_rows',
    'summarize_batch',
    # Inventory
    'InventoryLookupError',
    'LocalInventory',
    'RemoteInventory',
    'apply_formulas',
    'build_inventory_index',
    'IngredientResolver',
    # Recipes
    'RecipeValidationError',
    'normalize_recipe_payload',
    'collect_inventory_keys',
]
