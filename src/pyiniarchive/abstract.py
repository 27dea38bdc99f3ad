# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/10/12 21:33:48
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike, fspath
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from .ini.model import IniEntry, IniSection

T = TypeVar('T')


class IniFactory(metaclass=ABCMeta):
    """Creates the sections and entries an archive is built of.

    Subclass it to have the parser produce your own `IniSection` or
    `IniEntry` subclasses (e.g. ones tracking their persistence).
    """
    @abstractmethod
    def new_section(self, name: str) -> 'IniSection':
        raise NotImplementedError

    @abstractmethod
    def new_entry(self, name: str) -> 'IniEntry':
        raise NotImplementedError


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str | PathLike[str]) -> None:
        self._fn = fspath(filename)

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
