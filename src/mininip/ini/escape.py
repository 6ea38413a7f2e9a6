# -*- encoding: utf-8 -*-
# @File   : escape.py
# @Time   : 2024/10/12 22:05:51
# @Author : Kariko Lin

"""Escape sequences allowed in quoted values.

    \\a \\b \\t \\r \\n \\0 \\\\ \\' \\" \\; \\: \\= \\#
    \\xHHHHHH   (exactly 6 hex digits, a unicode scalar value: no surrogates)
"""

from typing import Iterator, NamedTuple

SIMPLE_ESCAPES = {
    'a': '\x07',
    'b': '\x08',
    't': '\t',
    'r': '\r',
    'n': '\n',
    '0': '\0',
    '\\': '\\',
    "'": "'",
    '"': '"',
    ';': ';',
    ':': ':',
    '=': '=',
    '#': '#',
}
HEX_DIGITS = 6


class InvalidEscape(ValueError):
    """`offset` is where the bad sequence starts, relative to the text."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message)
        self.offset = offset


class _Piece(NamedTuple):
    offset: int
    text: str
    escaped: bool


def _pieces(content: str) -> Iterator[_Piece]:
    i = 0
    while i < len(content):
        if content[i] != '\\':
            yield _Piece(i, content[i], False)
            i += 1
            continue
        if i + 1 >= len(content):
            raise InvalidEscape('unfinished escape sequence', i)
        if content[i + 1] == 'x':
            seq = content[i:i + 2 + HEX_DIGITS]
            yield _Piece(i, seq, True)
            i += len(seq)
        else:
            yield _Piece(i, content[i:i + 2], True)
            i += 2


def unescape(content: str) -> str:
    """Resolve every escape sequence in `content`.

    Raises `InvalidEscape` on an unknown, unfinished or
    out-of-range sequence.
    """
    ret: list[str] = []
    for piece in _pieces(content):
        if not piece.escaped:
            ret.append(piece.text)
            continue
        code = piece.text[1:]
        if code in SIMPLE_ESCAPES:
            ret.append(SIMPLE_ESCAPES[code])
            continue
        if not code.startswith('x'):
            raise InvalidEscape(f'invalid escape sequence {piece.text}', piece.offset)
        digits = code[1:]
        if len(digits) != HEX_DIGITS or any(
            c not in '0123456789abcdefABCDEF' for c in digits
        ):
            raise InvalidEscape(
                f'expected {HEX_DIGITS} hex digits in {piece.text}', piece.offset)
        point = int(digits, 16)
        if point > 0x10FFFF or 0xD800 <= point <= 0xDFFF:
            raise InvalidEscape(f'{piece.text} is not a unicode code point', piece.offset)
        ret.append(chr(point))
    return ''.join(ret)
