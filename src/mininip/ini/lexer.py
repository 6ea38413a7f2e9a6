# -*- encoding: utf-8 -*-
# @File   : lexer.py
# @Time   : 2024/10/12 22:31:07
# @Author : Kariko Lin

"""Line based INI tokenizer.

Supports the following forms:

    ```ini
    ; comment, and
    # comment too.
    key = bare value  ; inline comment
    [section-name]
    key2 = "quoted \\x00263a value"  # inline comment
    key3 =
    ```

Blank and comment lines never produce any token.
"""

from re import compile as regex
from typing import Iterator, NamedTuple

from .escape import InvalidEscape, unescape

COMMENT_MARKERS = (';', '#')
QUOTES = ('"', "'")
IDENTIFIER = regex(r'[A-Za-z0-9_.~-]+')


class SectionHeader(NamedTuple):
    name: str
    line: int
    column: int


class Assignment(NamedTuple):
    key: str
    raw: str
    quote: str | None
    line: int
    column: int


class LexError(NamedTuple):
    message: str
    line: int
    column: int


class EndOfInput(NamedTuple):
    line: int


Token = SectionHeader | Assignment | LexError | EndOfInput


class _LexFault(Exception):
    def __init__(self, message: str, column: int) -> None:
        super().__init__(message)
        self.message = message
        self.column = column


def is_identifier(name: str) -> bool:
    return IDENTIFIER.fullmatch(name) is not None


def _lines(text: str) -> Iterator[tuple[int, str]]:
    if text.startswith('\ufeff'):
        text = text[1:]
    for lineno, line in enumerate(text.split('\n'), 1):
        if line.endswith('\r'):
            line = line[:-1]
        yield lineno, line


def _expect_end(line: str, pos: int, after: str) -> None:
    """Only blanks or a comment may follow `pos`."""
    rest = line[pos:]
    tail = rest.lstrip()
    if tail and tail[0] not in COMMENT_MARKERS:
        raise _LexFault(
            f'unexpected {tail[0]!r} after {after}',
            pos + len(rest) - len(tail) + 1)


def _lex_header(line: str, start: int, lineno: int) -> SectionHeader:
    close = line.find(']', start)
    if close < 0:
        raise _LexFault(
            "expected ']' to close the section header",
            len(line.rstrip()) + 1)
    name = line[start + 1:close].strip()
    if not name:
        raise _LexFault('empty section name', start + 2)
    if not is_identifier(name):
        raise _LexFault(
            f'invalid section name "{name}"',
            line.index(name, start + 1) + 1)
    _expect_end(line, close + 1, 'the section header')
    return SectionHeader(name, lineno, start + 1)


def _lex_quoted(line: str, pos: int) -> str:
    quote = line[pos]
    i = pos + 1
    while i < len(line):
        if line[i] == '\\':
            i += 2
            continue
        if line[i] == quote:
            break
        i += 1
    else:
        raise _LexFault(f'unterminated quote {quote}', pos + 1)

    try:
        unescape(line[pos + 1:i])
    except InvalidEscape as e:
        raise _LexFault(str(e), pos + 2 + e.offset) from e
    _expect_end(line, i + 1, 'the closing quote')
    return line[pos:i + 1]


def _lex_bare(line: str, pos: int) -> str:
    end = len(line)
    i = pos
    while i < len(line):
        c = line[i]
        if c == '\\':
            if i + 1 >= len(line):
                raise _LexFault('unfinished escape sequence', i + 1)
            i += 2
            continue
        # '#' only counts as a comment when it opens a word.
        if c == ';' or (c == '#' and (i == pos or line[i - 1].isspace())):
            end = i
            break
        i += 1
    return line[pos:end].rstrip()


def _lex_assignment(line: str, start: int, lineno: int) -> Assignment:
    equal = line.find('=', start)
    if equal < 0:
        raise _LexFault("expected '=' after the key", len(line.rstrip()) + 1)
    key = line[start:equal].strip()
    if not key:
        raise _LexFault("expected a key before '='", equal + 1)
    if not is_identifier(key):
        raise _LexFault(f'invalid key "{key}"', start + 1)

    rest = line[equal + 1:]
    pos = equal + 1 + len(rest) - len(rest.lstrip())
    if pos < len(line) and line[pos] in QUOTES:
        return Assignment(key, _lex_quoted(line, pos), line[pos], lineno, start + 1)
    return Assignment(key, _lex_bare(line, pos), None, lineno, start + 1)


def _lex_line(line: str, lineno: int) -> Token | None:
    stripped = line.strip()
    if not stripped or stripped[0] in COMMENT_MARKERS:
        return None
    start = len(line) - len(line.lstrip())
    if stripped[0] == '[':
        return _lex_header(line, start, lineno)
    return _lex_assignment(line, start, lineno)


def tokenize(text: str) -> Iterator[Token]:
    """Lazily tokenize `text`.

    Stops right after the first `LexError`; otherwise the last
    token is always an `EndOfInput`.
    """
    lineno = 0
    for lineno, line in _lines(text):
        try:
            token = _lex_line(line, lineno)
        except _LexFault as e:
            yield LexError(e.message, lineno, e.column)
            return
        if token is not None:
            yield token
    yield EndOfInput(lineno)
