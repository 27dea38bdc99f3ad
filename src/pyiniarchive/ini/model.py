# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/12 22:05:31
# @Author : Kariko Lin

"""
Basically INI structure, with multi-valued entries.

```ini
flag_without_value
key = val  ; lines before any header live in the null section.

[section]
entries = val1, "val,2", val3
entries = val4  # appended to `entries` above while reading.
```
"""

from bisect import insort
from collections.abc import Iterator, Mapping, Sequence
from os import PathLike
from typing import TextIO, overload

from ..abstract import IniFactory
from .consts import COMMENT_DELIMITERS, NULL_SECTION_NAME
from .errors import DuplicateEntryError


class IniEntry(Sequence[str]):
    """A name bound to zero or more *ordered* values.

    Values may repeat. Iterating the entry itself walks its values.
    """
    def __init__(self, name: str) -> None:
        self.__name = name
        self.__values: list[str] = []

    @property
    def name(self) -> str:
        return self.__name

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[str]: ...

    def __getitem__(self, index: int | slice) -> str | Sequence[str]:
        return self.__values[index]

    def __len__(self) -> int:
        return len(self.__values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values())

    def __repr__(self) -> str:
        return f'{self.__name} = {self.__values!r}'

    def add_value(self, value: str) -> None:
        self.__values.append(value)

    def remove_value(self, value: str) -> None:
        """Remove the first value equal to `value`, if any."""
        if value in self.__values:
            self.__values.remove(value)

    def remove_all_values(self) -> None:
        self.__values.clear()

    def values(self) -> tuple[str, ...]:
        """Snapshot of current values, safe to walk more than once."""
        return tuple(self.__values)

    def value_array(self) -> list[str]:
        return list(self.__values)


class IniSection(Mapping[str, IniEntry]):
    """Named group of entries, each name appears only once.

    Callers shouldn't rely on entry order.
    """
    def __init__(self, name: str) -> None:
        self.__name = name
        self.__entries: dict[str, IniEntry] = {}

    @property
    def name(self) -> str:
        return self.__name

    @property
    def is_null_section(self) -> bool:
        return self.__name == NULL_SECTION_NAME

    def __getitem__(self, key: str) -> IniEntry:
        return self.__entries[key]

    def __len__(self) -> int:
        return len(self.__entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__entries)

    # containers compare by identity, not by content.
    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __str__(self) -> str:
        return '<null section>' if self.is_null_section else f'[{self.__name}]'

    def __repr__(self) -> str:
        return '%s { .cnt = %d }' % (self, len(self.__entries))

    def add_entry(self, entry: IniEntry) -> None:
        if entry.name in self.__entries:
            raise DuplicateEntryError(entry.name)
        self.__entries[entry.name] = entry

    def has_entry(self, name: str) -> bool:
        return name in self.__entries

    def get_entry(self, name: str) -> IniEntry | None:
        return self.__entries.get(name)

    def remove_entry(self, name: str) -> bool:
        return self.__entries.pop(name, None) is not None

    def entries(self) -> Iterator[IniEntry]:
        return iter(list(self.__entries.values()))


class IniDefaultFactory(IniFactory):
    def new_section(self, name: str) -> IniSection:
        return IniSection(name)

    def new_entry(self, name: str) -> IniEntry:
        return IniEntry(name)


class IniArchive(Mapping[str, IniSection]):
    """INI document, i.e. all sections read from (or to be written to)
    one file.

    With `alphabetical=True`, sections iterate (and get printed)
    in lexicographic order of their names; otherwise in the order
    they were first added.
    """
    def __init__(
        self,
        factory: IniFactory | None = None,
        alphabetical: bool = False
    ) -> None:
        self.__sections: dict[str, IniSection] = {}
        # only maintained in alphabetical mode.
        self.__sorted: list[str] | None = [] if alphabetical else None
        self.__factory = IniDefaultFactory() if factory is None else factory
        self.__comments = COMMENT_DELIMITERS

    @property
    def factory(self) -> IniFactory:
        return self.__factory

    @property
    def alphabetical(self) -> bool:
        return self.__sorted is not None

    @property
    def comment_delimiters(self) -> str:
        return self.__comments

    def set_comment_delimiters(self, delimiters: str) -> str:
        """Replace the characters that start a comment, default `#;`.

        Returns the old ones.
        """
        old, self.__comments = self.__comments, delimiters
        return old

    def __getitem__(self, key: str) -> IniSection:
        return self.__sections[key]

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[str]:
        return iter(
            list(self.__sections) if self.__sorted is None
            else list(self.__sorted))

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        return 'IniArchive { .sections = %d, .alphabetical = %s }' % (
            len(self), self.alphabetical)

    def has_section(self, section: str | IniSection | None) -> bool:
        if isinstance(section, IniSection):
            section = section.name
        return section is not None and section in self.__sections

    def get_section(self, name: str | None) -> IniSection | None:
        return None if name is None else self.__sections.get(name)

    def sections(self) -> Iterator[IniSection]:
        return (self.__sections[i] for i in self)

    def add_section(self, section: IniSection) -> bool:
        """Register `section`. `False` if its name is already taken."""
        if self.has_section(section):
            return False
        self.__sections[section.name] = section
        if self.__sorted is not None:
            insort(self.__sorted, section.name)
        return True

    def new_section(self, name: str) -> IniSection:
        """Create a section with the archive factory and add it,
        or return the existing one of that name."""
        if (section := self.__sections.get(name)) is not None:
            return section
        section = self.__factory.new_section(name)
        self.add_section(section)
        return section

    def remove_section(self, section: str | IniSection) -> bool:
        name = section.name if isinstance(section, IniSection) else section
        if name not in self.__sections:
            return False
        del self.__sections[name]
        if self.__sorted is not None:
            self.__sorted.remove(name)
        return True

    def clear(self) -> None:
        self.__sections.clear()
        if self.__sorted is not None:
            self.__sorted.clear()

    def read(self, buf: TextIO) -> 'IniArchive':
        """Merge the decoded text stream `buf` into this archive."""
        from .parser import IniParser
        return IniParser.readstream(buf, self)

    def read_from_file(
        self,
        filename: str | PathLike[str],
        encoding: str | None = None
    ) -> 'IniArchive':
        """May raise `FileNotFoundError`."""
        from .parser import IniParser
        return IniParser(filename, encoding).read(self)

    def print(self, out: TextIO) -> None:
        from .parser import IniParser
        IniParser.printstream(self, out)

    def write_to_file(
        self,
        filename: str | PathLike[str],
        encoding: str | None = None
    ) -> None:
        from .parser import IniParser
        IniParser(filename, encoding).write(self)
