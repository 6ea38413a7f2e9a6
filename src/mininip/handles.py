# -*- encoding: utf-8 -*-
# @File   : handles.py
# @Time   : 2024/10/15 20:47:33
# @Author : Kariko Lin

"""The handle boundary.

Everything handed out here has exactly one owner, the caller,
who releases it when done (in reverse order of acquisition).
Operations that consume a handle (`get_parser_data`,
`create_tree_from_data`, `get_data_from_tree`) *move* it:
the source handle is invalid afterwards and must not be used, nor
released.

The `parse_*`, `create_tree_from_data`, `get_data_from_tree` and
`get_entry` functions never raise. Their failures come back as an
`Error` value (the `parse_*` ones), or as `None` where a handle was
expected, in which case the caller's own handles are left untouched.
That includes being passed a moved or released handle: `parse_file_into`
reports it as a runtime `Error`, the others as `None`.
Everything else raises `HandleError` on misuse: calling `get()`,
`take()`, `release()` or a `destroy_*` function on a moved or released
handle, releasing one twice, or `get_parser_data` on a spent parser.

    ```python
    parser = new_parser()
    data = get_parser_data(parser)          # parser is moved
    err = parse_file_into(data, 'good.ini')
    if err:
        print(err); err.release()
    tree = create_tree_from_data(data)      # data is moved
    ...
    data = get_data_from_tree(tree)         # tree is moved
    entry = get_entry(data, None, 'author')
    entry.release(); data.release()
    ```
"""

import logging

from .abstract import Owned
from .errors import CoercionError, Error, IniError
from .ini.model import IniDocument, ValueEntry
from .ini.parser import IniParser, decode, read_file
from .ini.tree import SectionIterator, Tree
from .ini.values import TypedValue, ValueType, coerce, preferred


class ParserHandle(Owned):
    def __init__(self, parser: IniParser) -> None:
        self._parser: IniParser | None = parser

    def get(self) -> IniParser:
        self._check()
        assert self._parser is not None
        return self._parser

    def _on_release(self) -> None:
        self._parser = None

    def __repr__(self) -> str:
        return f'<ParserHandle ({self._state.value})>'


class DataHandle(Owned):
    def __init__(self, data: IniDocument) -> None:
        self._data: IniDocument | None = data

    def get(self) -> IniDocument:
        """Borrow the document, valid as long as this handle is."""
        self._check()
        assert self._data is not None
        return self._data

    def take(self) -> IniDocument:
        """Move the document out, this handle is invalid afterwards."""
        ret = self.get()
        self._move()
        self._data = None
        return ret

    def _on_release(self) -> None:
        self._data = None

    def __repr__(self) -> str:
        return f'<DataHandle {self._data!r} ({self._state.value})>'


class TreeHandle(Owned):
    def __init__(self, tree: Tree) -> None:
        self._tree: Tree | None = tree

    def get(self) -> Tree:
        self._check()
        assert self._tree is not None
        return self._tree

    def sections(self) -> SectionIterator:
        return self.get().sections()

    def _on_release(self) -> None:
        # drops the wrapped document along with the view.
        self._tree = None

    def __repr__(self) -> str:
        return f'<TreeHandle ({self._state.value})>'


class Entry(Owned):
    """Result of `get_entry()`: the raw entry and its typed value."""

    def __init__(self, entry: ValueEntry, value: TypedValue) -> None:
        self._entry = entry
        self._value = value

    @property
    def entry(self) -> ValueEntry:
        self._check()
        return self._entry

    @property
    def value(self) -> TypedValue:
        self._check()
        return self._value

    @property
    def value_type(self) -> ValueType:
        return self.value.type

    def __repr__(self) -> str:
        return f'<Entry {self._value} ({self._state.value})>'


def new_parser(
    filename: str | None = None, encoding: str | None = None
) -> ParserHandle:
    return ParserHandle(IniParser(filename, encoding))


def destroy_parser(parser: ParserHandle) -> None:
    """Only needed when the parser never got turned into data."""
    parser.release()


def get_parser_data(parser: ParserHandle) -> DataHandle:
    """Consume `parser`, returning whatever it parsed so far."""
    data = parser.get().data()
    parser._move()
    parser._parser = None
    return DataHandle(data)


def destroy_parser_data(data: DataHandle) -> None:
    data.release()


def parse_string(text: str) -> tuple[Error, DataHandle | None]:
    try:
        return Error.none(), DataHandle(IniParser.readstream(text))
    except IniError as e:
        logging.debug('Parsing failed: %s', e)
        return Error.from_exception(e), None


def parse_bytes(
    raw: bytes, encoding: str | None = None
) -> tuple[Error, DataHandle | None]:
    try:
        return Error.none(), DataHandle(IniParser(None, encoding).feed_bytes(raw))
    except IniError as e:
        logging.debug('Parsing failed: %s', e)
        return Error.from_exception(e), None


def parse_file(
    path: str, encoding: str | None = None
) -> tuple[Error, DataHandle | None]:
    """Read and parse `path` into a new document."""
    try:
        return Error.none(), DataHandle(IniParser(path, encoding).read())
    except IniError as e:
        logging.debug('Parsing "%s" failed: %s', path, e)
        return Error.from_exception(e), None


def parse_file_into(
    data: DataHandle, path: str, encoding: str | None = None
) -> Error:
    """Parse `path` into an existing document.

    All or nothing: on error the document keeps its former content.
    """
    try:
        IniParser.readstream(decode(read_file(path), encoding), data.get())
    except IniError as e:
        logging.debug('Parsing "%s" failed: %s', path, e)
        return Error.from_exception(e)
    return Error.none()


def destroy_error(err: Error) -> None:
    err.release()


def create_tree_from_data(data: DataHandle) -> TreeHandle | None:
    """Move `data` into a tree view.

    On failure `None` is returned and `data` stays valid.
    """
    try:
        tree = Tree(data.get())
    except IniError as e:
        logging.debug('Unable to build a tree view: %s', e)
        return None
    data._move()
    data._data = None
    return TreeHandle(tree)


def get_data_from_tree(tree: TreeHandle) -> DataHandle | None:
    """Move the document back out of `tree`.

    On failure `None` is returned and `tree` stays valid.
    """
    try:
        data = tree.get().into_data()
    except IniError as e:
        logging.debug('Unable to take data from the tree view: %s', e)
        return None
    tree._move()
    tree._tree = None
    return DataHandle(data)


def destroy_tree(tree: TreeHandle) -> None:
    tree.release()


def get_entry(
    data: DataHandle | TreeHandle,
    section: str | None,
    key: str,
    value_type: ValueType | None = None
) -> Entry | None:
    """Look `key` up in `section` (global one if `None` or empty).

    Gives the preferred typed value, or `value_type` if given.
    Any failure, be it a missing section, a missing key or an
    impossible coercion, gives `None`. See `ini.values.lookup()`
    to tell those apart.
    """
    try:
        doc = data.get() if isinstance(data, DataHandle) else data.get().data
        entry = doc.entry(section, key)
        value = preferred(entry) if value_type is None else coerce(entry, value_type)
    except (IniError, KeyError, CoercionError):
        return None
    return Entry(entry, value)


def destroy_entry(entry: Entry) -> None:
    entry.release()
