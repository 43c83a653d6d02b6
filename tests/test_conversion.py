import pytest

from constants import ML_PER_OZ, GRAMS_PER_OZ, OZ_PER_TBSP
from services.conversion import convert, standardize_unit, parse_inventory_key, is_diluent


def test_standardize_unit_aliases():
    assert standardize_unit('ounces') == 'oz'
    assert standardize_unit('TBSP') == 'Tbsp'
    assert standardize_unit('cups') == 'Cup'
    assert standardize_unit(None) == 'oz'
    assert standardize_unit('') == 'oz'
    assert standardize_unit('dash') == 'dash'


def test_convert_ounces():
    conversions = convert(2, 'oz')
    assert conversions['toOz'] == 2
    assert conversions['toMl'] == pytest.approx(2 * ML_PER_OZ)
    assert conversions['toGram'] == pytest.approx(2 * GRAMS_PER_OZ)


def test_convert_ml_uses_water_density():
    conversions = convert(30, 'ml')
    assert conversions['toOz'] == pytest.approx(30 / ML_PER_OZ)
    assert conversions['toMl'] == 30
    assert conversions['toGram'] == 30


def test_convert_grams_uses_water_density():
    conversions = convert(56.699, 'g')
    assert conversions['toOz'] == pytest.approx(2.0, abs=1e-4)
    assert conversions['toMl'] == 56.699
    assert conversions['toGram'] == 56.699


def test_convert_spoons_and_cups():
    assert convert(1, 'Tbsp')['toOz'] == pytest.approx(OZ_PER_TBSP)
    assert convert(6, 'tsp')['toOz'] == pytest.approx(1.0, abs=1e-5)
    assert convert(1, 'Cup')['toOz'] == pytest.approx(8.11538430287086)


def test_convert_unknown_unit_is_ounces():
    assert convert(1.5, 'dash')['toOz'] == 1.5


def test_convert_garbage_value_is_zero():
    assert convert(None, 'oz') == {'toOz': 0.0, 'toMl': 0.0, 'toGram': 0.0}
    assert convert('abc', 'ml')['toOz'] == 0.0


def test_parse_inventory_key_composite():
    assert parse_inventory_key({'inventoryKey': 'spirits:12'}) == ('spirits', '12', 'spirits:12')
    row = {'ingredient': {'inventoryKey': 'preMix:3'}}
    assert parse_inventory_key(row) == ('preMix', '3', 'preMix:3')


def test_parse_inventory_key_from_sheet_and_row():
    row = {'ingredient': {'sheetKey': 'dryStock', 'rowId': 7}}
    assert parse_inventory_key(row) == ('dryStock', '7', 'dryStock:7')


def test_parse_inventory_key_opaque_and_missing():
    assert parse_inventory_key({'inventoryKey': '64f0c2aa'}) == (None, None, '64f0c2aa')
    assert parse_inventory_key({'ingredient': {'name': 'Lemon'}}) == (None, None, None)


def test_is_diluent():
    assert is_diluent('H2O')
    assert is_diluent(' water ')
    assert is_diluent('h20')
    assert not is_diluent('Tonic Water')
    assert not is_diluent(None)
