import pytest

from mininip.errors import CoercionError
from mininip.ini.model import ValueEntry
from mininip.ini.parser import IniParser
from mininip.ini.values import (
    TypedValue,
    ValueType,
    coerce,
    lookup,
    preferred,
    try_coerce,
)


def bare(raw: str) -> ValueEntry:
    return ValueEntry(raw)


def test_integer_is_not_a_boolean():
    assert coerce(bare('42'), ValueType.INTEGER) == TypedValue(ValueType.INTEGER, 42)
    with pytest.raises(CoercionError):
        coerce(bare('42'), ValueType.BOOLEAN)


@pytest.mark.parametrize('raw', ['y', 'yes', 'true', 'on'])
def test_true_words(raw):
    assert coerce(bare(raw), ValueType.BOOLEAN).value is True


@pytest.mark.parametrize('raw', ['n', 'no', 'false', 'off'])
def test_false_words(raw):
    assert coerce(bare(raw), ValueType.BOOLEAN).value is False


@pytest.mark.parametrize('raw', ['maybe', 'True', 'YES', '1', '0', ''])
def test_not_booleans(raw):
    assert try_coerce(bare(raw), ValueType.BOOLEAN) is None


@pytest.mark.parametrize('raw, expected', [
    ('0', 0),
    ('5432', 5432),
    ('0x1F', 31),
    ('0o17', 15),
    ('0B101', 5),
    ('18446744073709551615', (1 << 64) - 1),
])
def test_integers(raw, expected):
    assert coerce(bare(raw), ValueType.INTEGER).value == expected


@pytest.mark.parametrize('raw', [
    '18446744073709551616', '-1', '+1', '1_000', '12a', '0x', '0o8', '1.0', '',
])
def test_not_integers(raw):
    assert try_coerce(bare(raw), ValueType.INTEGER) is None


@pytest.mark.parametrize('raw, expected', [
    ('3.14', 3.14),
    ('-2.5e3', -2500.0),
    ('+.5', 0.5),
    ('1.', 1.0),
    ('42', 42.0),
    ('1E-2', 0.01),
])
def test_floats(raw, expected):
    assert coerce(bare(raw), ValueType.FLOAT).value == pytest.approx(expected)


@pytest.mark.parametrize('raw', ['1.2.3', 'inf', 'nan', '1e400', '1_0.0', '.', 'e3', '1e'])
def test_not_floats(raw):
    assert try_coerce(bare(raw), ValueType.FLOAT) is None


def test_string_needs_quotes():
    quoted = ValueEntry(r'"a\tb \x00263a"', '"')
    assert coerce(quoted, ValueType.STRING).value == 'a\tb ☺'
    assert try_coerce(bare('ab'), ValueType.STRING) is None


def test_string_with_bad_escape_built_by_hand():
    assert try_coerce(ValueEntry(r'"\q"', '"'), ValueType.STRING) is None


def test_raw_is_always_available():
    assert coerce(ValueEntry("'x'", "'"), ValueType.RAW).value == "'x'"
    assert coerce(bare('anything at all'), ValueType.RAW).value == 'anything at all'


@pytest.mark.parametrize('entry, expected', [
    (bare('yes'), TypedValue(ValueType.BOOLEAN, True)),
    (bare('42'), TypedValue(ValueType.INTEGER, 42)),
    (bare('1.5'), TypedValue(ValueType.FLOAT, 1.5)),
    (ValueEntry('"42"', '"'), TypedValue(ValueType.STRING, '42')),
    (bare('localhost'), TypedValue(ValueType.RAW, 'localhost')),
])
def test_preferred_follows_precedence(entry, expected):
    assert preferred(entry) == expected


def test_typed_value_str():
    assert str(TypedValue(ValueType.BOOLEAN, False)) == 'false'
    assert str(TypedValue(ValueType.INTEGER, 7)) == '7'


def test_lookup_scenario():
    doc = IniParser.readstream('[db]\nhost=localhost\nport=5432\n')
    before = doc.copy()

    assert lookup(doc, 'db', 'port') == TypedValue(ValueType.INTEGER, 5432)
    assert lookup(doc, 'db', 'host') == TypedValue(ValueType.RAW, 'localhost')
    assert lookup(doc, 'db', 'host') == lookup(doc, 'db', 'host')
    with pytest.raises(CoercionError):
        lookup(doc, 'db', 'host', ValueType.STRING)
    with pytest.raises(KeyError):
        lookup(doc, 'db', 'user')
    with pytest.raises(KeyError):
        lookup(doc, 'cache', 'host')
    assert doc == before


def test_lookup_global_section():
    doc = IniParser.readstream('author=Ada\n')
    assert lookup(doc, None, 'author') == TypedValue(ValueType.RAW, 'Ada')
