# Utility modules for the recipe costing app
from .numbers import to_number, safe_float
from .sanitizer import (
    sanitize_text, sanitize_recipe_title, sanitize_notes, sanitize_hex_color
)
