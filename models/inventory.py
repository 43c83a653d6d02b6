"""
Inventory Models

Contains the InventorySheet and InventoryRow models that hold the priced
ingredients recipes are costed from.
"""

from datetime import datetime

from .base import db


class InventorySheet(db.Model):
    """
    A category of priced stock (spirits, dry stock, pre-mix...).

    ``columns`` is a list of column definitions; formula columns carry a
    ``formula`` dict evaluated when rows are read.
    """
    id = db.Column(db.Integer, primary_key=True)
    sheet_key = db.Column(db.String(50), unique=True, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(255), default='')
    columns = db.Column(db.JSON, default=list)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    rows = db.relationship('InventoryRow', backref='sheet', lazy=True,
                           cascade='all, delete-orphan', order_by='InventoryRow.order')


class InventoryRow(db.Model):
    """One priced item; ``values`` maps column keys to raw cell values."""
    id = db.Column(db.Integer, primary_key=True)
    sheet_id = db.Column(db.Integer, db.ForeignKey('inventory_sheet.id', ondelete='CASCADE'), nullable=False, index=True)
    order = db.Column(db.Integer, default=0)
    values = db.Column(db.JSON, default=dict)
    # Soft delete keeps recipe references resolvable in history
    is_deleted = db.Column(db.Boolean, default=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def inventory_key(self):
        return f"{self.sheet.sheet_key}:{self.id}"
