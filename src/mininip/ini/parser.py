# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : Kariko Lin

"""INI parsing.

A parse is all or nothing: tokens are applied to a staged copy,
which only gets committed once the whole text went through.
On error a `ParseError` is raised and nothing is kept.
"""

import logging
from warnings import warn

import chardet

from ..abstract import FileHandler
from ..errors import HandleError, IniIOError, IniRuntimeError, ParseError
from .lexer import Assignment, EndOfInput, LexError, SectionHeader, tokenize
from .model import IniDocument, IniSection, ValueEntry


def read_file(path: str) -> bytes:
    """The whole content of `path`, or `IniIOError`. No partial reads."""
    try:
        with open(path, 'rb') as fp:
            return fp.read()
    except OSError as e:
        raise IniIOError(path, e) from e


def decode(raw: bytes, encoding: str | None = None) -> str:
    """Decode with `encoding`, or UTF-8 (BOM aware) by default.

    When that fails, let `chardet` guess. An encoding name Python does
    not know raises `IniRuntimeError`.
    """
    try:
        return raw.decode(encoding or 'utf-8-sig')
    except LookupError as e:
        raise IniRuntimeError(f'unknown encoding "{encoding}"') from e
    except UnicodeDecodeError:
        pass

    codec = chardet.detect(raw)
    if codec['encoding'] is None or codec['confidence'] < 0.8:
        logging.warning(
            'Unable to decode INI text as %s, and chardet is unsure. '
            'Falling back to latin-1.', encoding or 'utf-8')
        return raw.decode('latin-1')
    logging.warning(
        'Unable to decode INI text as %s, guessed %s (confidence %.2f).',
        encoding or 'utf-8', codec['encoding'], codec['confidence'])
    try:
        return raw.decode(codec['encoding'])
    except (UnicodeDecodeError, LookupError):
        return raw.decode('latin-1')


class IniParser(FileHandler[IniDocument]):
    """Accumulates parsed texts into one `IniDocument`.

    Call `self.data()` to take the document away, after which the
    parser is spent and refuses further use.
    """

    def __init__(
        self, filename: str | None = None, encoding: str | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._data: IniDocument | None = IniDocument()

    def _document(self) -> IniDocument:
        if self._data is None:
            raise HandleError('parser data has already been taken')
        return self._data

    @staticmethod
    def readstream(text: str, ins: IniDocument | None = None) -> IniDocument:
        """Parse decoded `text` into `ins` (or a new document).

        `ins` is left untouched when a `ParseError` is raised.
        """
        staged = IniDocument() if ins is None else ins.copy()
        this_sect: IniSection = staged.header
        for token in tokenize(text):
            match token:
                case SectionHeader(name=name):
                    if name in staged:
                        warn(f'Section [{name}] is declared again, '
                             'its keys are appended to the former one.')
                    this_sect = staged.setdefault(name)
                    logging.debug('Entering section [%s].', name)
                case Assignment(key=key, raw=raw, quote=quote, line=line):
                    if key in this_sect:
                        logging.warning(
                            'Line %d: "%s" in %s overrides "%s" with "%s".',
                            line, key, this_sect, this_sect[key].raw, raw)
                    this_sect[key] = ValueEntry(raw, quote)
                case LexError(message=message, line=line, column=column):
                    raise ParseError(message, line, column)
                case EndOfInput():
                    break
        if ins is None:
            return staged
        ins.update(staged)
        return ins

    def feed(self, text: str) -> IniDocument:
        return self.readstream(text, self._document())

    def feed_bytes(self, raw: bytes) -> IniDocument:
        return self.feed(decode(raw, self._codec))

    def read(self) -> IniDocument:
        """Read the file given on construction into the parser document."""
        if self._fn is None:
            raise IniIOError('<none>', FileNotFoundError('no file name given'))
        return self.feed_bytes(read_file(self._fn))

    def data(self) -> IniDocument:
        """Take the parsed document away. The parser is spent afterwards."""
        ret = self._document()
        self._data = None
        return ret

    @property
    def spent(self) -> bool:
        return self._data is None

    def __str__(self) -> str:
        return 'INI parser: ' + super().__str__() + f' ({self._codec})'
