"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .inventory import InventorySheet, InventoryRow
from .recipe import Recipe

__all__ = [
    'db',
    'InventorySheet',
    'InventoryRow',
    'Recipe',
]
