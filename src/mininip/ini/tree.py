# -*- encoding: utf-8 -*-
# @File   : tree.py
# @Time   : 2024/10/14 23:02:16
# @Author : Kariko Lin

"""Read oriented view over an `IniDocument`.

    ```python
    tree = Tree(IniParser.readstream(text))
    for section in tree.sections():      # borrowed
        for key in section.keys():       # borrowed as well
            print(section.name, key.key, key.value())
    data = tree.into_data()              # tree is spent now
    ```

Every iterator offers two ways to advance:

- `next_borrowed()` (or plain iteration): a view which is only valid
  until the next advance, or until the iterator is closed.
  Touching a stale view raises `BorrowError`.
- `next_owned()`: an independent copy, valid whatever happens to the
  iterator afterwards. Release it when done (`with` works too).

Past the end, both keep returning `None`.
"""

from collections.abc import Mapping
from typing import Callable, Iterator, TypeVar

from ..abstract import Cursor, IteratorState, Owned
from ..errors import BorrowError, HandleError
from .model import IniDocument, IniSection, ValueEntry
from .values import TypedValue, ValueType, coerce, preferred

T = TypeVar('T')

Guard = Callable[[], None]


def _no_guard() -> None:
    pass


class _Borrowed:
    """Ties a view to the iterator position it was yielded at."""

    def __init__(self, issuer: '_Cursor', stamp: int) -> None:
        self._issuer = issuer
        self._stamp = stamp

    def _check(self) -> None:
        self._issuer._check_borrow(self._stamp)

    @property
    def valid(self) -> bool:
        try:
            self._check()
        except (BorrowError, HandleError):
            return False
        return True


class _Cursor(Cursor[T]):
    """Bookkeeping shared by the section and key iterators."""

    def __init__(self, size: int, guard: Guard) -> None:
        self._size = size
        self._guard = guard
        self._pos = -1
        self._stamp = 0
        self._state = IteratorState.CREATED
        self._closed = False

    @property
    def state(self) -> IteratorState:
        return self._state

    def _advance(self) -> int | None:
        """Step forward, returning the new position or `None` at the end."""
        if self._closed:
            raise HandleError(f'{self} has been closed')
        if self._state == IteratorState.EXHAUSTED:
            # stays exhausted, even once its source is gone.
            self._stamp += 1
            return None
        self._guard()
        # whatever was borrowed so far is stale now.
        self._stamp += 1
        if self._pos + 1 >= self._size:
            self._pos = self._size
            self._state = IteratorState.EXHAUSTED
            return None
        self._pos += 1
        self._state = IteratorState.ADVANCING
        return self._pos

    def _check_borrow(self, stamp: int) -> None:
        if self._closed or stamp != self._stamp:
            raise BorrowError('borrowed view used after its iterator moved on')
        self._guard()

    def close(self) -> None:
        self._closed = True


class KeyView(_Borrowed):
    """Borrowed key, see module doc."""

    def __init__(
        self, key: str, entry: ValueEntry, issuer: 'KeyIterator', stamp: int
    ) -> None:
        super().__init__(issuer, stamp)
        self._key = key
        self._entry = entry

    @property
    def key(self) -> str:
        self._check()
        return self._key

    @property
    def entry(self) -> ValueEntry:
        self._check()
        return self._entry

    def value(self, value_type: ValueType | None = None) -> TypedValue:
        """Preferred typed value, or `value_type` (may raise `CoercionError`)."""
        self._check()
        if value_type is None:
            return preferred(self._entry)
        return coerce(self._entry, value_type)

    def to_owned(self) -> 'OwnedKey':
        self._check()
        return OwnedKey(self._key, self._entry)

    def __repr__(self) -> str:
        return f'<KeyView {self._key}>'


class OwnedKey(Owned):
    def __init__(self, key: str, entry: ValueEntry) -> None:
        self._key = key
        self._entry = entry

    @property
    def key(self) -> str:
        self._check()
        return self._key

    @property
    def entry(self) -> ValueEntry:
        self._check()
        return self._entry

    def value(self, value_type: ValueType | None = None) -> TypedValue:
        self._check()
        if value_type is None:
            return preferred(self._entry)
        return coerce(self._entry, value_type)

    def __repr__(self) -> str:
        return f'<OwnedKey {self._key} ({self._state.value})>'


class KeyIterator(_Cursor[KeyView]):
    """Keys of one section, in declaration order."""

    def __init__(
        self, pairs: Mapping[str, ValueEntry], guard: Guard = _no_guard
    ) -> None:
        # keys are frozen while the document is wrapped, no copy of entries.
        self._keys = list(pairs)
        self._pairs = pairs
        super().__init__(len(self._keys), guard)

    def _current(self) -> tuple[str, ValueEntry] | None:
        if (pos := self._advance()) is None:
            return None
        key = self._keys[pos]
        return key, self._pairs[key]

    def next_borrowed(self) -> KeyView | None:
        if (cur := self._current()) is None:
            return None
        return KeyView(*cur, issuer=self, stamp=self._stamp)

    def next_owned(self) -> OwnedKey | None:
        if (cur := self._current()) is None:
            return None
        return OwnedKey(*cur)

    def __str__(self) -> str:
        return f'KeyIterator({self._pos + 1}/{self._size}, {self._state.value})'


class SectionView(_Borrowed):
    """Borrowed section, see module doc.

    Key iterators taken from it die along with it.
    """

    def __init__(
        self, section: IniSection, issuer: 'SectionIterator', stamp: int
    ) -> None:
        super().__init__(issuer, stamp)
        self._section = section

    @property
    def name(self) -> str | None:
        self._check()
        return self._section.name

    def keys(self) -> KeyIterator:
        self._check()
        return KeyIterator(self._section, self._check)

    def __getitem__(self, key: str) -> ValueEntry:
        self._check()
        return self._section[key]

    def __contains__(self, key: object) -> bool:
        self._check()
        return key in self._section

    def __len__(self) -> int:
        self._check()
        return len(self._section)

    def to_owned(self) -> 'OwnedSection':
        self._check()
        return OwnedSection(self._section.name, self._section.to_dict())

    def __repr__(self) -> str:
        return f'<SectionView {self._section}>'


class OwnedSection(Owned):
    def __init__(self, name: str | None, pairs: dict[str, ValueEntry]) -> None:
        self._name = name
        self._pairs = pairs

    @property
    def name(self) -> str | None:
        self._check()
        return self._name

    def keys(self) -> KeyIterator:
        self._check()
        return KeyIterator(self._pairs, self._check)

    def __getitem__(self, key: str) -> ValueEntry:
        self._check()
        return self._pairs[key]

    def __contains__(self, key: object) -> bool:
        self._check()
        return key in self._pairs

    def __len__(self) -> int:
        self._check()
        return len(self._pairs)

    def _on_release(self) -> None:
        self._pairs = {}

    def __repr__(self) -> str:
        return f'<OwnedSection {self._name} ({self._state.value})>'


class SectionIterator(_Cursor[SectionView]):
    """Sections of a tree, global one first."""

    def __init__(self, tree: 'Tree') -> None:
        self._tree = tree
        self._names = list(tree.data)
        super().__init__(len(self._names), tree._check)

    def _current(self) -> IniSection | None:
        if (pos := self._advance()) is None:
            return None
        return self._tree.data[self._names[pos]]

    def next_borrowed(self) -> SectionView | None:
        if (sect := self._current()) is None:
            return None
        return SectionView(sect, self, self._stamp)

    def next_owned(self) -> OwnedSection | None:
        if (sect := self._current()) is None:
            return None
        return OwnedSection(sect.name, sect.to_dict())

    def __str__(self) -> str:
        return f'SectionIterator({self._pos + 1}/{self._size}, {self._state.value})'


class Tree:
    """Wraps a document for iteration, keeping it read only meanwhile.

    A document may be wrapped by only one tree at a time.
    """

    def __init__(self, data: IniDocument) -> None:
        data._acquire(self)
        self._data: IniDocument | None = data

    @classmethod
    def from_data(cls, data: IniDocument) -> 'Tree':
        return cls(data)

    @property
    def valid(self) -> bool:
        return self._data is not None

    def _check(self) -> None:
        if self._data is None:
            raise HandleError('tree view has been turned back into data')

    @property
    def data(self) -> IniDocument:
        """Borrow the wrapped document."""
        self._check()
        assert self._data is not None
        return self._data

    def sections(self) -> SectionIterator:
        return SectionIterator(self)

    def __iter__(self) -> Iterator[SectionView]:
        return self.sections()

    def into_data(self) -> IniDocument:
        """Give the document back. The tree is spent afterwards."""
        data = self.data
        data._release(self)
        self._data = None
        return data

    def __repr__(self) -> str:
        return f'<Tree {self._data!r}>'
