# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/12 21:52:03
# @Author : Kariko Lin


class IniError(Exception):
    """Base of every structural error met while building an archive."""
    pass


class DuplicateSectionError(IniError):
    def __init__(self, name: str) -> None:
        super().__init__(f"section '{name}' already exists")
        self.name = name


class DuplicateEntryError(IniError):
    def __init__(self, name: str) -> None:
        super().__init__(f"entry '{name}' already exists")
        self.name = name


class MalformedHeaderError(IniError):
    """`[section]` declaration without a usable name."""
    pass


class MalformedEntryError(IniError):
    """Unterminated quote, or a value span which ends before it starts."""
    pass
