# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/12 21:40:18
# @Author : Kariko Lin

"""Error taxonomy.

The engine raises `IniError` subclasses wherever a fault is found.
Only the handle layer (`mininip.handles`) turns them into `Error` values,
so callers on that side of the boundary can inspect and release
them uniformly.
"""

from dataclasses import dataclass
from enum import IntEnum


class ErrorKind(IntEnum):
    NONE = 0
    PARSE = 1
    IO = 2
    RUNTIME = 3


class IniError(Exception):
    kind = ErrorKind.RUNTIME


class ParseError(IniError):
    """Malformed INI text. Always carries where it went wrong."""
    kind = ErrorKind.PARSE

    def __init__(self, message: str, line: int, column: int) -> None:
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f'line {line}, column {column}: {message}')


class IniIOError(IniError):
    kind = ErrorKind.IO

    def __init__(self, path: str, reason: OSError) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f'unable to read "{path}": {reason.strerror or reason}')


class IniRuntimeError(IniError):
    kind = ErrorKind.RUNTIME


class HandleError(IniRuntimeError):
    """A handle was used after being moved or released."""


class BorrowError(IniRuntimeError):
    """A borrowed view outlived the iterator position it was taken from."""


class DocumentLockedError(IniRuntimeError):
    """Mutation of a document while a tree view still wraps it."""


class CoercionError(ValueError):
    """A raw value is not representable as the requested type."""


@dataclass
class Error:
    kind: ErrorKind = ErrorKind.NONE
    message: str | None = None

    @classmethod
    def none(cls) -> 'Error':
        return cls()

    @classmethod
    def from_exception(cls, exc: IniError) -> 'Error':
        return cls(exc.kind, str(exc) or exc.__class__.__name__)

    def __bool__(self) -> bool:
        """`True` when this is an actual error."""
        return self.kind != ErrorKind.NONE

    def release(self) -> None:
        # idempotent, whatever the kind. The kind survives, the message
        # does not.
        self.message = None

    def __str__(self) -> str:
        if self.kind == ErrorKind.NONE:
            return 'no error'
        if self.message is None:
            return f'{self.kind.name.lower()} error (released)'
        return f'{self.kind.name.lower()}: {self.message}'
