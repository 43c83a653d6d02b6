from services.parsing import (
    round_to_eighth, decimal_to_fraction, parse_fraction_input,
    fraction_to_decimal, normalize_amount, apply_amount_input, commit_amount_input,
)


def test_decimal_to_fraction_formats():
    assert decimal_to_fraction(0) == ''
    assert decimal_to_fraction(0.5) == '1/2'
    assert decimal_to_fraction(0.75) == '3/4'
    assert decimal_to_fraction(1.375) == '1 3/8'
    assert decimal_to_fraction(2) == '2'
    assert decimal_to_fraction(2.25) == '2 1/4'


def test_decimal_to_fraction_rounds_to_eighths():
    assert decimal_to_fraction(1.0625) == '1'
    assert decimal_to_fraction(0.04) == ''
    assert decimal_to_fraction(0.13) == '1/8'
    assert decimal_to_fraction(1.99) == '2'


def test_parse_plain_and_partial_decimals():
    assert parse_fraction_input('1.5') == 1.5
    assert parse_fraction_input('1.') == 1.0
    assert parse_fraction_input('.') == 0
    assert parse_fraction_input('.25') == 0.25
    assert parse_fraction_input('0.3') == 0.25


def test_parse_fractions_and_mixed_numbers():
    assert parse_fraction_input('3/8') == 0.375
    assert parse_fraction_input('1 1/2') == 1.5
    assert parse_fraction_input('  2 3/4 ') == 2.75
    assert parse_fraction_input('1/3') == 0.375


def test_parse_garbage_is_zero():
    assert parse_fraction_input('') == 0
    assert parse_fraction_input(None) == 0
    assert parse_fraction_input('abc') == 0
    assert parse_fraction_input('/2') == 0
    assert parse_fraction_input('-2') == 0


def test_fraction_round_trip_within_a_sixteenth():
    for step in range(0, 1000):
        value = step / 10
        parsed = parse_fraction_input(decimal_to_fraction(value))
        assert abs(parsed - round_to_eighth(value)) <= 1 / 16


def test_fraction_to_decimal_legacy_dict():
    assert fraction_to_decimal({'whole': 1, 'numerator': 1, 'denominator': 4}) == 1.25
    assert fraction_to_decimal({'whole': 2, 'numerator': 0, 'denominator': 0}) == 2
    assert fraction_to_decimal(None) == 0.0


def test_normalize_amount_defaults():
    amount = normalize_amount({})
    assert amount == {'unit': 'oz', 'value': 0.0, 'fractionDisplay': ''}

    amount = normalize_amount({'unit': 'ml', 'value': '30'})
    assert amount['value'] == 30.0
    assert amount['fractionDisplay'] == '30'

    amount = normalize_amount({'value': -3})
    assert amount['value'] == 0.0


def test_normalize_amount_keeps_empty_display():
    amount = normalize_amount({'value': 1.5, 'fractionDisplay': ''})
    assert amount['fractionDisplay'] == ''
    assert amount['value'] == 1.5


def test_normalize_amount_from_legacy_fraction():
    amount = normalize_amount({'fraction': {'whole': 1, 'numerator': 3, 'denominator': 4}})
    assert amount['value'] == 1.75
    assert amount['fractionDisplay'] == '1 3/4'


def test_live_input_keeps_buffer_verbatim():
    amount = apply_amount_input({'unit': 'oz'}, '1.')
    assert amount['fractionDisplay'] == '1.'
    assert amount['value'] == 1.0

    amount = apply_amount_input({'unit': 'oz'}, '1 1/')
    assert amount['fractionDisplay'] == '1 1/'
    assert amount['value'] == 1.0


def test_commit_input_reformats():
    amount = commit_amount_input({'unit': 'oz'}, '1.3')
    assert amount['value'] == 1.25
    assert amount['fractionDisplay'] == '1 1/4'

    amount = commit_amount_input({'unit': 'oz'}, 'splash')
    assert amount['value'] == 0
    assert amount['fractionDisplay'] == ''


def test_parse_reads_leading_number():
    assert parse_fraction_input('2oz') == 2.0
    assert parse_fraction_input('1.5 oz') == 1.5
    assert parse_fraction_input('1 1/') == 1.0
    assert parse_fraction_input('1/0') == 1.0
    assert parse_fraction_input('oz 2') == 0
