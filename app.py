import logging

from flask import Flask, Blueprint, jsonify, request, current_app
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import get_config
from constants import DEFAULT_INGREDIENT_SHEETS, DEFAULT_SHEETS, MAX_LENGTHS
from models import db, InventorySheet, InventoryRow, Recipe
from services import (
    IngredientResolver, InventoryLookupError, LocalInventory, RemoteInventory, RecipeValidationError,
    apply_amount_input, apply_formulas, build_batch_rows, build_inventory_index,
    collect_inventory_keys, commit_amount_input, hydrate_items,
    normalize_recipe_payload, standardize_unit, summarize_batch,
)
from services.recipes import prepare_rows, sanitize_batch
from utils import safe_float, sanitize_text

logger = logging.getLogger(__name__)

migrate = Migrate()
api = Blueprint('api', __name__, url_prefix='/api')


# ============================================
# INVENTORY LOOKUP
# ============================================

def get_inventory_source(sheet_keys=None):
    """Remote inventory API when configured, local sheets otherwise."""
    base_url = current_app.config.get('INVENTORY_API_URL')
    if base_url:
        return RemoteInventory(base_url, timeout=current_app.config['INVENTORY_API_TIMEOUT'],
                               sheet_keys=sheet_keys)
    return LocalInventory(sheet_keys)


def load_inventory_index(items):
    """
    Index of the inventory records referenced by ``items``.

    An unreachable inventory yields an empty index; rows then keep
    their cached pricing.
    """
    keys = collect_inventory_keys(items)
    if not keys:
        return {}
    sheet_keys = sorted({key.split(':', 1)[0] for key in keys if ':' in key})
    try:
        records = get_inventory_source(sheet_keys or None).fetch_by_keys(keys)
    except InventoryLookupError as e:
        logger.error(f"Could not load inventory for {len(keys)} keys: {e}")
        return {}
    return build_inventory_index(records)


def create_resolver(app, on_results=None, sheet_keys=None):
    """Ingredient resolver using this app's inventory source and search settings."""
    if app.config.get('INVENTORY_API_URL'):
        source = RemoteInventory(app.config['INVENTORY_API_URL'],
                                 timeout=app.config['INVENTORY_API_TIMEOUT'], sheet_keys=sheet_keys)
    else:
        source = LocalInventory(sheet_keys, app=app)
    return IngredientResolver(source, debounce_seconds=app.config['SEARCH_DEBOUNCE_SECONDS'],
                              limit=app.config['SEARCH_LIMIT'], on_results=on_results)


def parse_sheet_keys(raw):
    if not raw:
        return list(DEFAULT_INGREDIENT_SHEETS)
    return [key.strip() for key in raw.split(',') if key.strip()]


# ============================================
# ROUTES - RECIPES
# ============================================

@api.route('/recipes')
def recipes_list():
    query = Recipe.query
    recipe_type = request.args.get('type')
    if recipe_type:
        query = query.filter_by(type=recipe_type)
    item_number = request.args.get('itemNumber')
    if item_number is not None:
        number = safe_float(item_number, default=None)
        if number is not None:
            query = query.filter_by(item_number=int(number))
    recipes = query.order_by(Recipe.updated_at.desc()).all()
    # Stored totals; opening a recipe re-costs it
    return jsonify({'recipes': [recipe.to_document() for recipe in recipes]})


@api.route('/recipes/<int:id>')
def recipe_view(id):
    recipe = db.get_or_404(Recipe, id)
    document = recipe.to_document()
    items, totals = hydrate_items(document['items'], load_inventory_index(document['items']),
                                  current_app.config['HIGH_COST_WARNING'])
    document['items'] = items
    document['totals'] = totals
    return jsonify(document)


@api.route('/recipes', methods=['POST'])
def recipe_add():
    payload = request.get_json(silent=True) or {}
    document = normalize_recipe_payload(payload, load_inventory_index(payload.get('items')),
                                        current_app.config['HIGH_COST_WARNING'])
    recipe = Recipe()
    recipe.apply_document(document)
    db.session.add(recipe)
    db.session.commit()
    logger.info(f"Created recipe {recipe.id} \"{recipe.title}\" (${recipe.cost_each:.2f} each)")
    return jsonify(recipe.to_document()), 201


@api.route('/recipes/<int:id>', methods=['PUT'])
def recipe_edit(id):
    recipe = db.get_or_404(Recipe, id)
    payload = request.get_json(silent=True) or {}
    document = normalize_recipe_payload(payload, load_inventory_index(payload.get('items')),
                                        current_app.config['HIGH_COST_WARNING'])
    recipe.apply_document(document)
    db.session.commit()
    logger.info(f"Updated recipe {recipe.id} \"{recipe.title}\" (${recipe.cost_each:.2f} each)")
    return jsonify(recipe.to_document())


@api.route('/recipes/<int:id>', methods=['DELETE'])
def recipe_delete(id):
    recipe = db.get_or_404(Recipe, id)
    db.session.delete(recipe)
    db.session.commit()
    logger.info(f"Deleted recipe {id}")
    return jsonify({'deleted': id})


@api.route('/recipes/preview', methods=['POST'])
def recipe_preview():
    """Cost an unsaved recipe and scale it to its batch target."""
    payload = request.get_json(silent=True) or {}
    rows = prepare_rows(payload.get('items'))
    items, totals = hydrate_items(rows, load_inventory_index(rows),
                                  current_app.config['HIGH_COST_WARNING'])
    batch = sanitize_batch(payload.get('batch'))
    batch_rows = build_batch_rows(items, batch)
    return jsonify({
        'items': items,
        'totals': totals,
        'batch': batch,
        'batchRows': batch_rows,
        'batchTotals': summarize_batch(batch_rows),
    })


@api.route('/recipes/<int:id>/batch')
def recipe_batch(id):
    recipe = db.get_or_404(Recipe, id)
    document = recipe.to_document()
    batch = dict(document['batch'])
    if 'size' in request.args:
        batch['size'] = request.args['size']
    if 'unit' in request.args:
        batch['unit'] = request.args['unit']
    batch = sanitize_batch(batch)

    items, totals = hydrate_items(document['items'], load_inventory_index(document['items']),
                                  current_app.config['HIGH_COST_WARNING'])
    batch_rows = build_batch_rows(items, batch)
    return jsonify({
        'id': recipe.id,
        'title': recipe.title,
        'totals': totals,
        'batch': batch,
        'batchRows': batch_rows,
        'batchTotals': summarize_batch(batch_rows),
    })


@api.route('/recipes/ingredients/search')
def ingredient_search():
    sheet_keys = parse_sheet_keys(request.args.get('sheetKeys'))
    query = (request.args.get('query') or '').strip()[:MAX_LENGTHS['search_query']]
    ids = [key.strip() for key in (request.args.get('ids') or '').split(',') if key.strip()]

    if not query and not ids:
        return jsonify({'items': []})

    source = get_inventory_source(sheet_keys)
    try:
        if ids:
            items = source.fetch_by_keys(ids)
        else:
            items = source.search(query, request.args.get('limit', current_app.config['SEARCH_LIMIT']))
    except InventoryLookupError as e:
        logger.error(f"Ingredient search failed: {e}")
        return jsonify({'error': 'Inventory service unavailable', 'items': []}), 502
    return jsonify({'items': items})


# ============================================
# ROUTES - AMOUNTS
# ============================================

@api.route('/amounts/parse', methods=['POST'])
def amount_parse():
    """Typed amount text -> amount; ``commit`` marks the blur event."""
    payload = request.get_json(silent=True) or {}
    amount = {'unit': standardize_unit(payload.get('unit'))}
    text = payload.get('text')
    if payload.get('commit'):
        return jsonify(commit_amount_input(amount, text))
    return jsonify(apply_amount_input(amount, text))


# ============================================
# ROUTES - INVENTORY
# ============================================

def _editable_columns(sheet):
    return {column['key']: column for column in sheet.columns or [] if column.get('type') != 'formula'}


def _clean_values(sheet, values):
    """Keep known, non-formula columns; text is sanitized."""
    columns = _editable_columns(sheet)
    cleaned = {}
    for key, value in (values or {}).items():
        if key not in columns:
            continue
        if isinstance(value, str):
            value = sanitize_text(value, max_length=MAX_LENGTHS['inventory_text'])
        cleaned[key] = value
    return cleaned


def _row_payload(sheet, row):
    return {
        'id': row.id,
        'key': f"{sheet.sheet_key}:{row.id}",
        'order': row.order,
        'values': apply_formulas(sheet.columns, row.values),
        'updatedAt': row.updated_at.isoformat() if row.updated_at else None,
    }


def _get_sheet(sheet_key):
    return InventorySheet.query.filter_by(sheet_key=sheet_key).first_or_404()


def _get_row(sheet, row_id):
    return InventoryRow.query.filter_by(id=row_id, sheet_id=sheet.id, is_deleted=False).first_or_404()


@api.route('/inventory/<sheet_key>')
def inventory_sheet(sheet_key):
    sheet = _get_sheet(sheet_key)
    return jsonify({
        'sheetKey': sheet.sheet_key,
        'name': sheet.name,
        'description': sheet.description or '',
        'columns': sheet.columns or [],
        'rows': [_row_payload(sheet, row) for row in sheet.rows if not row.is_deleted],
    })


@api.route('/inventory/<sheet_key>/rows', methods=['POST'])
def inventory_row_add(sheet_key):
    sheet = _get_sheet(sheet_key)
    payload = request.get_json(silent=True) or {}
    values = _clean_values(sheet, payload.get('values'))

    missing = [column['key'] for column in _editable_columns(sheet).values()
               if column.get('required') and not values.get(column['key'])]
    if missing:
        return jsonify({'error': f"Missing required fields: {', '.join(missing)}"}), 400

    row = InventoryRow(sheet_id=sheet.id, order=len(sheet.rows), values=values)
    db.session.add(row)
    db.session.commit()
    logger.info(f"Added inventory row {sheet.sheet_key}:{row.id}")
    return jsonify(_row_payload(sheet, row)), 201


@api.route('/inventory/<sheet_key>/rows/<int:row_id>', methods=['PUT'])
def inventory_row_edit(sheet_key, row_id):
    sheet = _get_sheet(sheet_key)
    row = _get_row(sheet, row_id)
    payload = request.get_json(silent=True) or {}
    # Reassign so the JSON column is flagged dirty
    row.values = {**(row.values or {}), **_clean_values(sheet, payload.get('values'))}
    db.session.commit()
    return jsonify(_row_payload(sheet, row))


@api.route('/inventory/<sheet_key>/rows/<int:row_id>', methods=['DELETE'])
def inventory_row_delete(sheet_key, row_id):
    sheet = _get_sheet(sheet_key)
    row = _get_row(sheet, row_id)
    row.is_deleted = True
    db.session.commit()
    logger.info(f"Deleted inventory row {sheet.sheet_key}:{row.id}")
    return jsonify({'deleted': f"{sheet.sheet_key}:{row.id}"})


# ============================================
# ERROR HANDLERS
# ============================================

def handle_validation_error(error):
    return jsonify({'error': str(error)}), 400


def handle_http_error(error):
    return jsonify({'error': error.description}), error.code


# ============================================
# APP FACTORY / DATABASE
# ============================================

def create_app(env=None):
    app = Flask(__name__)
    app.config.from_object(get_config(env))

    logging.basicConfig(level=app.config['LOG_LEVEL'])

    db.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(api)
    app.register_error_handler(RecipeValidationError, handle_validation_error)
    app.register_error_handler(HTTPException, handle_http_error)
    return app


def init_db(app):
    """Create tables and seed the default ingredient sheets."""
    with app.app_context():
        db.create_all()
        existing = {sheet.sheet_key for sheet in InventorySheet.query.all()}
        for layout in DEFAULT_SHEETS:
            if layout['sheetKey'] in existing:
                continue
            db.session.add(InventorySheet(
                sheet_key=layout['sheetKey'],
                name=layout['name'],
                columns=layout['columns'],
            ))
            logger.info(f"Seeded inventory sheet {layout['sheetKey']}")
        db.session.commit()


if __name__ == '__main__':
    app = create_app()
    init_db(app)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=True, host='0.0.0.0', port=5000, use_reloader=False)
