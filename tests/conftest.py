import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from app import create_app, init_db
from models import db, InventorySheet, InventoryRow


@pytest.fixture
def app():
    app = create_app('testing')
    init_db(app)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def stocked(app):
    """Seeded sheets with a spirit, a dry stock syrup, a pre-mix and water."""
    with app.app_context():
        sheets = {sheet.sheet_key: sheet for sheet in InventorySheet.query.all()}
        rows = {
            'gin': InventoryRow(sheet_id=sheets['spirits'].id, order=0,
                                values={'name': 'London Dry Gin', 'unitCost': 22.18, 'sizeOz': 750}),
            'syrup': InventoryRow(sheet_id=sheets['dryStock'].id, order=0,
                                  values={'name': 'Simple Syrup', 'unitCost': '8.00', 'sizeG': 1000, 'sizeUnit': 'ml'}),
            'sour': InventoryRow(sheet_id=sheets['preMix'].id, order=0,
                                 values={'name': 'Lime Sour', 'ounceCost': 0.40}),
            'water': InventoryRow(sheet_id=sheets['dryStock'].id, order=1,
                                  values={'name': 'H2O', 'unitCost': 0}),
        }
        db.session.add_all(rows.values())
        db.session.commit()
        return {name: row.inventory_key for name, row in rows.items()}
