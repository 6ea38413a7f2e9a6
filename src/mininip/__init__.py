# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2023/11/14 20:01:52
# @Author : Chloride

"""MinIniP, a minimalist INI parser."""

from .errors import Error, ErrorKind, IniError, ParseError
from .ini import (
    IniDocument,
    IniParser,
    IniSection,
    Tree,
    TypedValue,
    ValueEntry,
    ValueType,
    lookup
)

__all__ = [
    'Error', 'ErrorKind', 'IniError', 'ParseError',
    'IniDocument', 'IniParser', 'IniSection', 'Tree',
    'TypedValue', 'ValueEntry', 'ValueType', 'lookup'
]
