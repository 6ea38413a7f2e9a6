# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""In-memory INI document.

Only raw texts are kept here. Any typed interpretation is done
on demand, see `ini.values`.
"""

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Iterator

from ..errors import DocumentLockedError, IniRuntimeError


@dataclass(frozen=True)
class ValueEntry:
    """The trimmed source text of a value, quotes included if any."""
    raw: str
    quote: str | None = None

    @property
    def quoted(self) -> bool:
        return self.quote is not None

    @property
    def inner(self) -> str:
        """Text between the quotes, escapes NOT resolved."""
        return self.raw[1:-1] if self.quoted else self.raw


class IniSection(MutableMapping[str, ValueEntry]):
    """Ordered `key: ValueEntry` pairs of a single section.

    Re-assigning a key keeps its first position (last write wins).
    Mutations are refused while the owning document is wrapped
    by a tree view.
    """

    def __init__(self, name: str | None, owner: 'IniDocument') -> None:
        self._name = name
        self._owner = owner
        self._data: dict[str, ValueEntry] = {}

    @property
    def name(self) -> str | None:
        """`None` for the global section."""
        return self._name

    def __getitem__(self, key: str) -> ValueEntry:
        return self._data[key]

    def __setitem__(self, key: str, value: ValueEntry | str) -> None:
        self._owner._check_writable()
        if isinstance(value, str):
            value = ValueEntry(value)
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        self._owner._check_writable()
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return '[]' if self._name is None else f'[{self._name}]'

    def __repr__(self) -> str:
        return '%s { .cnt = %d }' % (self, len(self._data))

    def to_dict(self) -> dict[str, ValueEntry]:
        return self._data.copy()


class IniDocument(Mapping[str | None, IniSection]):
    """A whole INI file.

    Sections are kept in order of first appearance, and the global
    section (`None`, see `self.header`) always comes first.
    """

    def __init__(self) -> None:
        self.__sections: dict[str | None, IniSection] = {
            None: IniSection(None, self)
        }
        self.__lock: object | None = None

    @property
    def header(self) -> IniSection:
        """Pairs declared before any section header."""
        return self.__sections[None]

    @property
    def locked(self) -> bool:
        return self.__lock is not None

    def _check_writable(self) -> None:
        if self.__lock is not None:
            raise DocumentLockedError(
                'document is read only while a tree view wraps it')

    def _acquire(self, owner: object) -> None:
        if self.__lock is not None:
            raise IniRuntimeError('document is already wrapped by a tree view')
        self.__lock = owner

    def _release(self, owner: object) -> None:
        if self.__lock is not owner:
            raise IniRuntimeError('tree view does not hold this document')
        self.__lock = None

    def __getitem__(self, key: str | None) -> IniSection:
        return self.__sections[key or None]

    def __contains__(self, key: object) -> bool:
        return (key or None) in self.__sections

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[str | None]:
        return iter(self.__sections)

    def __eq__(self, other: object) -> bool:
        """Same sections, keys and raw values, in the same order."""
        if not isinstance(other, IniDocument):
            return NotImplemented
        return self._snapshot() == other._snapshot()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return 'IniDocument { .sections = %d }' % len(self)

    def _snapshot(self) -> list[tuple[str | None, list[tuple[str, ValueEntry]]]]:
        return [(k, list(v.items())) for k, v in self.__sections.items()]

    def setdefault(self, section: str | None) -> IniSection:
        """Get `section`, adding an empty one at the end if missing."""
        section = section or None
        if section not in self.__sections:
            self._check_writable()
            self.__sections[section] = IniSection(section, self)
        return self.__sections[section]

    def remove(self, section: str) -> None:
        if not section:
            raise IniRuntimeError('the global section cannot be removed')
        self._check_writable()
        del self.__sections[section]

    def entry(self, section: str | None, key: str) -> ValueEntry:
        """Raises `KeyError` if either the section or the key is missing."""
        return self[section][key]

    def update(self, another: 'IniDocument') -> None:
        """Merge `another` into self: sections reopen, keys get overridden."""
        self._check_writable()
        for name, sect in another.items():
            self.setdefault(name).update(sect)

    def copy(self) -> 'IniDocument':
        ret = IniDocument()
        ret.update(self)
        return ret
