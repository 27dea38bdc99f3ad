# -*- encoding: utf-8 -*-
# @File   : params.py
# @Time   : 2024/10/14 10:31:40
# @Author : Kariko Lin

"""Read-only, typed access to application parameters kept in INI files.

```python
params = ParameterStore.get_instance('plugin.ini')
timeout = params.get_int('Network', 'timeout', 30)
```

A missing section, entry or value always gives back the default.
So does a value which doesn't parse, unless the store is *strict*,
in which case `ParameterValueError` is raised.
"""

import logging
import re
from collections.abc import Callable, Iterable
from os import PathLike, fspath
from threading import Lock
from typing import TypeVar

from .abstract import IniFactory
from .config import resolve_parameter_file
from .ini.errors import IniError
from .ini.model import IniArchive, IniEntry
from .ini.parser import IniParser

V = TypeVar('V')

# plain ASCII literals only: no `_` separators, no other digits.
_INT = re.compile(r'[+-]?[0-9]+')
_DOUBLE = re.compile(
    r'[+-]?(NaN|Infinity|([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?)')

_BOOLEANS = {'true': True, 'TRUE': True, 'false': False, 'FALSE': False}


class ParameterValueError(IniError, ValueError):
    """A parameter exists, but isn't of the requested type."""
    pass


def _to_int(value: str) -> int:
    if _INT.fullmatch(value) is None:
        raise ValueError(f'not an integer literal: {value!r}')
    ret = int(value)
    if not -2**31 <= ret < 2**31:
        raise ValueError(f'out of 32-bit range: {value}')
    return ret


def _to_double(value: str) -> float:
    if _DOUBLE.fullmatch(value) is None:
        raise ValueError(f'not a number literal: {value!r}')
    return float(value)


def _to_bool(value: str) -> bool:
    if value not in _BOOLEANS:
        raise ValueError(f'not a boolean literal: {value!r}')
    return _BOOLEANS[value]


def _to_char(value: str) -> str:
    if not value:
        raise ValueError('empty string has no first char')
    return value[0]


class ParameterStore:
    def __init__(
        self, archive: IniArchive | None, *, strict: bool = False
    ) -> None:
        self._archive = archive
        self._strict = strict

    @classmethod
    def from_file(
        cls,
        filename: str | PathLike[str],
        *,
        encoding: str | None = None,
        comment_delimiters: str | None = None,
        factory: IniFactory | None = None,
        strict: bool = False
    ) -> 'ParameterStore':
        """Load `filename`. If it doesn't exist (or can't be opened),
        the store is left unloaded and answers every lookup with the
        default."""
        parser = IniParser(
            filename, encoding,
            factory=factory, comment_delimiters=comment_delimiters)
        try:
            archive = parser.read()
        except OSError as e:
            logging.error(f'parameter file not loaded: {e}')
            archive = None
        return cls(archive, strict=strict)

    @classmethod
    def get_instance(
        cls,
        filename: str | PathLike[str],
        cache: 'ParameterCache | None' = None,
        **kwargs
    ) -> 'ParameterStore':
        """The shared store of `filename`, loaded on first request.

        `kwargs` go to `from_file()`, thus only matter for the
        request that actually loads the file.
        """
        if cache is None:
            cache = default_cache
        return cache.get(filename, lambda fn: cls.from_file(fn, **kwargs))

    @classmethod
    def get_default_instance(
        cls, cache: 'ParameterCache | None' = None, **kwargs
    ) -> 'ParameterStore':
        """See `config.resolve_parameter_file()`."""
        return cls.get_instance(resolve_parameter_file(), cache, **kwargs)

    @property
    def archive(self) -> IniArchive | None:
        return self._archive

    @property
    def strict(self) -> bool:
        return self._strict

    def is_loaded(self) -> bool:
        return self._archive is not None

    def _entry(self, section: str, name: str) -> IniEntry | None:
        if self._archive is None:
            return None
        if (sect := self._archive.get_section(section)) is None:
            return None
        return sect.get_entry(name)

    def get_values(self, section: str, name: str) -> tuple[str, ...]:
        """All values of the parameter, empty if there's none."""
        entry = self._entry(section, name)
        return () if entry is None else entry.values()

    def get_value_array(self, section: str, name: str) -> list[str] | None:
        entry = self._entry(section, name)
        return None if entry is None else entry.value_array()

    def _first(self, section: str, name: str) -> str | None:
        values = self.get_values(section, name)
        return values[0] if values else None

    def _convert(
        self,
        section: str,
        name: str,
        default: V,
        converter: Callable[[str], V],
        typename: str
    ) -> V:
        if (value := self._first(section, name)) is None:
            return default
        try:
            return converter(value)
        except ValueError as e:
            msg = f'[{section}] {name} = "{value}" is not a valid {typename}'
            if self._strict:
                raise ParameterValueError(msg) from e
            logging.warning(f'{msg}, using default: {default!r}')
            return default

    def get_string(self, section: str, name: str, default: str) -> str:
        """First value of the parameter, as is."""
        value = self._first(section, name)
        return default if value is None else value

    def get_int(self, section: str, name: str, default: int) -> int:
        return self._convert(section, name, default, _to_int, 'int')

    def get_double(self, section: str, name: str, default: float) -> float:
        return self._convert(section, name, default, _to_double, 'double')

    def get_char(self, section: str, name: str, default: str) -> str:
        return self._convert(section, name, default, _to_char, 'char')

    def get_boolean(self, section: str, name: str, default: bool) -> bool:
        """Only `true`, `TRUE`, `false` and `FALSE` are understood."""
        return self._convert(section, name, default, _to_bool, 'boolean')

    @staticmethod
    def concatenate(
        values: Iterable[str],
        separator: str | None = None,
        default: str | None = None
    ) -> str | None:
        """Join `values` with `separator`; `default` if that gives
        an empty string."""
        ret = (separator or '').join(values)
        return ret if ret else default


class ParameterCache:
    """Stores of already loaded parameter files, keyed by path.

    For any path, at most one thread loads the file at a time; the
    others wait and get the very same store. A store is kept only
    if the loading succeeded, so a file appearing later gets its
    chance.
    """
    def __init__(self) -> None:
        self._lock = Lock()
        self._instances: dict[str, ParameterStore] = {}
        self._flights: dict[str, Lock] = {}

    def get(
        self,
        filename: str | PathLike[str],
        loader: Callable[[str], ParameterStore]
    ) -> ParameterStore:
        key = fspath(filename)
        with self._lock:
            if (ret := self._instances.get(key)) is not None:
                return ret
            flight = self._flights.setdefault(key, Lock())

        with flight:
            with self._lock:
                if (ret := self._instances.get(key)) is not None:
                    return ret
            try:
                ret = loader(key)
                with self._lock:
                    if ret.is_loaded():
                        # first one wins.
                        ret = self._instances.setdefault(key, ret)
            finally:
                with self._lock:
                    if self._flights.get(key) is flight:
                        del self._flights[key]
        return ret

    def clear(self) -> None:
        with self._lock:
            self._instances.clear()

    def __contains__(self, filename: object) -> bool:
        if not isinstance(filename, (str, PathLike)):
            return False
        with self._lock:
            return fspath(filename) in self._instances

    def __len__(self) -> int:
        with self._lock:
            return len(self._instances)


# created on import, tests may `clear()` it.
default_cache = ParameterCache()
