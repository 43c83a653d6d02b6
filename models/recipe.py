"""
Recipe Model

Stores a costed recipe document: hydrated items, totals, and the batch
settings used for production.
"""

from datetime import datetime

from .base import db


class Recipe(db.Model):
    """Drink recipe with its hydrated item list and cached totals."""
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    type = db.Column(db.String(20), default='cocktail', index=True)
    item_number = db.Column(db.Integer, nullable=True, index=True)  # Links to the menu item
    notes = db.Column(db.Text, default='')
    batch_notes = db.Column(db.Text, default='')
    background_color = db.Column(db.String(7), default='#e5e5e5')
    metadata_ = db.Column('metadata', db.JSON, default=dict)
    items = db.Column(db.JSON, default=list)

    # Totals as of the last save
    volume_oz = db.Column(db.Float, default=0.0)
    cost_each = db.Column(db.Float, default=0.0)

    batch_size = db.Column(db.Float, default=0.0)
    batch_unit = db.Column(db.String(2), default='oz')
    batch_yield_count = db.Column(db.Float, default=0.0)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def apply_document(self, document):
        """Copy a normalized recipe document onto this row."""
        self.title = document['title']
        self.type = document['type']
        self.item_number = document['itemNumber']
        self.notes = document['notes']
        self.batch_notes = document['batchNotes']
        self.background_color = document['backgroundColor']
        self.metadata_ = document['metadata']
        self.items = document['items']
        self.volume_oz = document['totals']['volumeOz']
        self.cost_each = document['totals']['costEach']
        self.batch_size = document['batch']['size']
        self.batch_unit = document['batch']['unit']
        self.batch_yield_count = document['batch']['yieldCount']

    def to_document(self):
        return {
            'id': self.id,
            'title': self.title,
            'type': self.type,
            'itemNumber': self.item_number,
            'notes': self.notes or '',
            'batchNotes': self.batch_notes or '',
            'backgroundColor': self.background_color,
            'metadata': self.metadata_ or {},
            'items': self.items or [],
            'totals': {'volumeOz': self.volume_oz or 0.0, 'costEach': self.cost_each or 0.0},
            'batch': {
                'size': self.batch_size or 0.0,
                'unit': self.batch_unit or 'oz',
                'yieldCount': self.batch_yield_count or 0.0,
            },
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
