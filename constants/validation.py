"""
Validation Constants

Contains whitelist values for validating recipe payloads and inventory
edits before they are stored.
"""

# Valid recipe types
VALID_RECIPE_TYPES = {'cocktail', 'mocktail', 'premix'}
DEFAULT_RECIPE_TYPE = 'cocktail'

DEFAULT_BACKGROUND_COLOR = '#e5e5e5'

# Hex colors like #fff or #a1b2c3
HEX_COLOR_PATTERN = r'^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$'

# Free-text metadata fields kept on a recipe
METADATA_TEXT_FIELDS = ('style', 'glassware', 'ice', 'garnish', 'type', 'cocktail')
METADATA_NUMBER_FIELDS = ('priceSet', 'priceMin')

# Fields sent by the recipe builder that are never stored
CLIENT_ONLY_ITEM_FIELDS = {'tempId', '_id'}

# Search result bounds
MIN_SEARCH_LIMIT = 1
MAX_SEARCH_LIMIT = 100

# Maximum field lengths for security
MAX_LENGTHS = {
    'recipe_title': 200,
    'notes': 5000,
    'metadata_text': 200,
    'inventory_text': 200,
    'search_query': 100,
}
