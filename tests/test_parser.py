import pytest

from mininip.errors import (
    ErrorKind,
    HandleError,
    IniIOError,
    IniRuntimeError,
    ParseError,
)
from mininip.ini.model import IniDocument, ValueEntry
from mininip.ini.parser import IniParser, decode


def test_empty_text_gives_only_the_global_section():
    doc = IniParser.readstream('')
    assert list(doc) == [None]
    assert len(doc.header) == 0


def test_keys_before_any_header_go_to_the_global_section():
    doc = IniParser.readstream('author=Ada\n')
    assert doc.header['author'] == ValueEntry('Ada')
    assert doc['']['author'].raw == 'Ada'


def test_sections_keep_order_of_first_appearance():
    with pytest.warns(UserWarning):
        doc = IniParser.readstream('[b]\nx=1\n[a]\ny=2\n[b]\nz=3\n')
    assert list(doc) == [None, 'b', 'a']
    assert list(doc['b']) == ['x', 'z']


def test_last_assignment_wins():
    doc = IniParser.readstream('[s]\nkey=1\nother=0\nkey=2\n')
    assert len(doc['s']) == 2
    assert list(doc['s']) == ['key', 'other']
    assert doc['s']['key'].raw == '2'


def test_quoted_values_are_flagged():
    doc = IniParser.readstream('a = "hi"\nb = hi\n')
    assert doc.header['a'] == ValueEntry('"hi"', '"')
    assert not doc.header['b'].quoted


def test_parse_error_carries_its_location():
    with pytest.raises(ParseError) as excinfo:
        IniParser.readstream('[db]\nhost\n')
    err = excinfo.value
    assert err.kind == ErrorKind.PARSE
    assert err.line == 2
    assert str(err).startswith('line 2, column 5')


def test_failed_feed_keeps_former_content():
    parser = IniParser()
    parser.feed('a=1\n')
    with pytest.raises(ParseError):
        parser.feed('b=2\n[bad\n')
    doc = parser.data()
    assert 'b' not in doc.header
    assert doc.header['a'].raw == '1'


def test_feed_accumulates_into_one_document():
    parser = IniParser()
    parser.feed('[s]\na=1\n')
    with pytest.warns(UserWarning):
        parser.feed('[s]\na=2\nb=3\n')
    doc = parser.data()
    assert list(doc['s'].items()) == [('a', ValueEntry('2')), ('b', ValueEntry('3'))]


def test_parser_is_spent_once_data_is_taken():
    parser = IniParser()
    parser.data()
    assert parser.spent
    with pytest.raises(HandleError):
        parser.feed('a=1')
    with pytest.raises(HandleError):
        parser.data()


def test_read_file(tmp_path):
    path = tmp_path / 'good.ini'
    path.write_bytes('[db]\r\nhost = localhost\r\nname = "caf\\x0000e9"\r\n'.encode())
    doc = IniParser(str(path)).read()
    assert doc['db']['host'].raw == 'localhost'


def test_read_missing_file(tmp_path):
    with pytest.raises(IniIOError) as excinfo:
        IniParser(str(tmp_path / 'missing.ini')).read()
    assert excinfo.value.kind == ErrorKind.IO
    assert 'missing.ini' in str(excinfo.value)


def test_decode():
    assert decode(b'\xef\xbb\xbfa=1') == 'a=1'
    assert decode('a=é'.encode('latin-1'), 'latin-1') == 'a=é'
    # not utf-8: some guess is made, never an exception.
    assert isinstance(decode(b'a=\xff\xfe\xfd'), str)


def test_copy_is_equal_but_independent():
    doc = IniParser.readstream('x=1\n[s]\ny=2\n')
    dup = doc.copy()
    assert dup == doc
    dup['s']['y'] = '3'
    assert dup != doc
    assert doc['s']['y'].raw == '2'


def test_global_section_cannot_be_removed():
    doc = IniDocument()
    doc.setdefault('s')
    doc.remove('s')
    assert list(doc) == [None]
    with pytest.raises(IniRuntimeError):
        doc.remove('')
