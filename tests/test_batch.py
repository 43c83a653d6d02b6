from services.batch import build_batch_rows, summarize_batch
from services.conversion import convert


def _item(name, oz, **fields):
    return {'ingredient': {'name': name}, 'conversions': convert(oz, 'oz'), **fields}


def test_water_absorbs_rounding_in_ml_batch():
    items = [_item('Gin', 3), _item('Lemon', 1), _item('H2O', 1)]

    rows = build_batch_rows(items, {'size': 1000, 'unit': 'ml'})

    assert [row['scaledMl'] for row in rows] == [600, 200, 200]
    assert sum(row['scaledMl'] for row in rows) == 1000
    assert rows[0]['scaledOz'] == 20.25
    assert rows[0]['ozDisplay'] == '20 1/4'
    assert rows[0]['originalOz'] == 3


def test_water_row_takes_remainder_in_oz_batch():
    items = [_item('Gin', 1), _item('water', 1)]

    rows = build_batch_rows(items, {'size': 8, 'unit': 'oz'})

    assert rows[0]['scaledMl'] == 118
    assert rows[1]['scaledMl'] == 119


def test_only_first_diluent_is_adjusted():
    items = [_item('H2O', 1), _item('Gin', 2), _item('WATER', 1)]

    rows = build_batch_rows(items, {'size': 8, 'unit': 'oz'})

    assert rows[1]['scaledMl'] == round(2 * 29.5735 * 2)
    assert rows[2]['scaledMl'] == round(1 * 29.5735 * 2)
    assert rows[0]['scaledMl'] == round(8 * 29.5735 - rows[1]['scaledMl'] - rows[2]['scaledMl'])


def test_diluent_never_negative():
    items = [_item('Gin', 4), _item('H2O', 0)]

    rows = build_batch_rows(items, {'size': 8, 'unit': 'oz'})

    assert rows[1]['scaledMl'] == 0


def test_even_split_without_diluent():
    items = [_item('Gin', 2), _item('Tonic', 2)]

    rows = build_batch_rows(items, {'size': 8, 'unit': 'oz'})

    assert [row['scaledMl'] for row in rows] == [118, 118]
    assert [row['scaledOz'] for row in rows] == [4.0, 4.0]
    assert [row['ozDisplay'] for row in rows] == ['4', '4']


def test_zero_target_or_volume_yields_zero_rows():
    items = [_item('Gin', 2)]
    for rows in (build_batch_rows(items, {'size': 0, 'unit': 'oz'}),
                 build_batch_rows([_item('Gin', 0)], {'size': 750, 'unit': 'ml'}),
                 build_batch_rows(items, None)):
        assert rows[0]['scaledMl'] == 0
        assert rows[0]['scaledOz'] == 0
        assert rows[0]['ozDisplay'] == ''

    assert build_batch_rows([], {'size': 750, 'unit': 'ml'}) == []


def test_unnamed_ingredient_label():
    rows = build_batch_rows([{'conversions': convert(1, 'oz')}], {'size': 2, 'unit': 'oz'})
    assert rows[0]['name'] == 'Ingredient'


def test_summarize_batch():
    items = [_item('Gin', 3), _item('Lemon', 1), _item('H2O', 1)]
    rows = build_batch_rows(items, {'size': 1000, 'unit': 'ml'})

    summary = summarize_batch(rows)

    assert summary['ml'] == 1000
    assert summary['oz'] == sum(row['scaledOz'] for row in rows)
    assert summary['ozDisplay'] == '33 3/4'


def test_summarize_empty_batch():
    assert summarize_batch([]) == {'oz': 0, 'ozDisplay': '', 'ml': 0}


def test_row_ids_are_unique_for_repeated_ingredients():
    items = [
        _item('Gin', 1, inventoryKey='spirits:1', tempId='tmp-a'),
        _item('Gin', 1, inventoryKey='spirits:1', _id='64f0c2aa'),
        _item('Gin', 1, inventoryKey='spirits:1'),
    ]

    rows = build_batch_rows(items, {'size': 6, 'unit': 'oz'})

    assert [row['id'] for row in rows] == ['tmp-a', '64f0c2aa', 'row-2']
