# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from enum import Enum
from typing import Generic, TypeVar

from .errors import HandleError

T = TypeVar('T')


class HandleState(str, Enum):
    OWNED = 'owned'
    MOVED = 'moved'
    RELEASED = 'released'


class Owned:
    """Something with exactly one owner, who must `release()` it.

    Once moved or released, any further use raises `HandleError`.
    """
    _state = HandleState.OWNED

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def valid(self) -> bool:
        return self._state == HandleState.OWNED

    def _check(self) -> None:
        if self._state != HandleState.OWNED:
            raise HandleError(f'{type(self).__name__} has been {self._state.value}')

    def _move(self) -> None:
        self._check()
        self._state = HandleState.MOVED

    def _on_release(self) -> None:
        pass

    def release(self) -> None:
        self._check()
        self._on_release()
        self._state = HandleState.RELEASED

    def __enter__(self):
        return self

    def __exit__(self, *_) -> None:
        # moved out inside the block: nothing left to release.
        if self._state == HandleState.OWNED:
            self.release()


class IteratorState(str, Enum):
    CREATED = 'created'
    ADVANCING = 'advancing'
    EXHAUSTED = 'exhausted'


class Cursor(Generic[T], metaclass=ABCMeta):
    """Forward-only, single pass cursor.

    Unlike a stream, a cursor is *never* seekable: once advanced,
    previous positions are gone for good.
    """

    @property
    def seekable(self) -> bool:
        return False

    @property
    @abstractmethod
    def state(self) -> IteratorState:
        raise NotImplementedError

    @abstractmethod
    def next_borrowed(self) -> T | None:
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    def __iter__(self) -> 'Cursor[T]':
        return self

    def __next__(self) -> T:
        item = self.next_borrowed()
        if item is None:
            raise StopIteration
        return item

    def __enter__(self) -> 'Cursor[T]':
        return self

    def __exit__(self, *_) -> None:
        self.close()

    @abstractmethod
    def __str__(self) -> str:
        raise NotImplementedError


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str | None) -> None:
        self._fn = filename

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    def __str__(self) -> str:
        return str(self._fn)
