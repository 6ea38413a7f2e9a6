# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:18:03
# @Author : Kariko Lin

from .model import IniDocument, IniSection, ValueEntry
from .parser import IniParser, decode, read_file
from .tree import (
    KeyIterator,
    KeyView,
    OwnedKey,
    OwnedSection,
    SectionIterator,
    SectionView,
    Tree
)
from .values import TypedValue, ValueType, coerce, lookup, preferred, try_coerce
