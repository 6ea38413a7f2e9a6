# -*- encoding: utf-8 -*-
# @File   : values.py
# @Time   : 2024/10/13 15:12:40
# @Author : Kariko Lin

"""Lazy coercion of raw values.

Nothing in here touches a document. Every function is pure, so
asking twice for the same key always gives the same answer.
"""

from dataclasses import dataclass
from enum import IntEnum
from math import isfinite
from re import compile as regex

from ..errors import CoercionError
from .escape import InvalidEscape, unescape
from .model import IniDocument, ValueEntry

U64_MAX = (1 << 64) - 1

TRUE_WORDS = frozenset(('y', 'yes', 'true', 'on'))
FALSE_WORDS = frozenset(('n', 'no', 'false', 'off'))

_INTEGER = regex(r'(?:0[xX](?P<hex>[0-9a-fA-F]+)|0[oO](?P<oct>[0-7]+)'
                 r'|0[bB](?P<bin>[01]+)|(?P<dec>[0-9]+))')
_FLOAT = regex(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')


class ValueType(IntEnum):
    RAW = 0
    STRING = 1
    INTEGER = 2
    FLOAT = 3
    BOOLEAN = 4


# strongest first.
PRECEDENCE = (
    ValueType.BOOLEAN,
    ValueType.INTEGER,
    ValueType.FLOAT,
    ValueType.STRING,
    ValueType.RAW,
)


@dataclass(frozen=True)
class TypedValue:
    type: ValueType
    value: str | int | float | bool

    def __str__(self) -> str:
        if self.type == ValueType.BOOLEAN:
            return 'true' if self.value else 'false'
        return str(self.value)


def _to_boolean(raw: str) -> bool:
    if raw in TRUE_WORDS:
        return True
    if raw in FALSE_WORDS:
        return False
    raise CoercionError(f'"{raw}" is not a boolean')


def _to_integer(raw: str) -> int:
    match = _INTEGER.fullmatch(raw)
    if match is None:
        raise CoercionError(f'"{raw}" is not an unsigned integer')
    for group, base in (('hex', 16), ('oct', 8), ('bin', 2), ('dec', 10)):
        if (digits := match.group(group)) is not None:
            ret = int(digits, base)
            break
    if ret > U64_MAX:
        raise CoercionError(f'"{raw}" does not fit in 64 bits')
    return ret


def _to_float(raw: str) -> float:
    if _FLOAT.fullmatch(raw) is None:
        raise CoercionError(f'"{raw}" is not a float')
    ret = float(raw)
    if not isfinite(ret):
        raise CoercionError(f'"{raw}" is out of float range')
    return ret


def _to_string(entry: ValueEntry) -> str:
    if not entry.quoted:
        raise CoercionError(f'{entry.raw} is not quoted')
    try:
        return unescape(entry.inner)
    except InvalidEscape as e:
        # entries built by hand may skip the lexer checks.
        raise CoercionError(str(e)) from e


def coerce(entry: ValueEntry, target: ValueType) -> TypedValue:
    """Interpret `entry` as `target`, or raise `CoercionError`.

    Never falls back to `ValueType.RAW` unless asked to.
    """
    match target:
        case ValueType.RAW:
            return TypedValue(target, entry.raw)
        case ValueType.STRING:
            return TypedValue(target, _to_string(entry))
        case ValueType.INTEGER:
            return TypedValue(target, _to_integer(entry.raw))
        case ValueType.FLOAT:
            return TypedValue(target, _to_float(entry.raw))
        case ValueType.BOOLEAN:
            return TypedValue(target, _to_boolean(entry.raw))
    raise CoercionError(f'unknown value type {target!r}')


def try_coerce(entry: ValueEntry, target: ValueType) -> TypedValue | None:
    try:
        return coerce(entry, target)
    except CoercionError:
        return None


def preferred(entry: ValueEntry) -> TypedValue:
    """The strongest type `entry` can be coerced to, see `PRECEDENCE`."""
    for target in PRECEDENCE:
        if (ret := try_coerce(entry, target)) is not None:
            return ret
    # RAW never fails.
    raise AssertionError('unreachable')


def lookup(
    document: IniDocument,
    section: str | None,
    key: str,
    value_type: ValueType | None = None
) -> TypedValue:
    """Find `key` in `section` (global one if `None` or empty).

    Unlike `handles.get_entry()`, this tells failures apart:
    `KeyError` for a missing section or key, `CoercionError`
    when `value_type` is not applicable.
    """
    entry = document.entry(section, key)
    if value_type is None:
        return preferred(entry)
    return coerce(entry, value_type)
