# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:30:02
# @Author : Kariko Lin

import logging

from .abstract import IniFactory
from .ini import (
    NULL_SECTION_NAME,
    IniArchive,
    IniDefaultFactory,
    IniEntry,
    IniError,
    IniParser,
    IniSection,
    DuplicateEntryError,
    DuplicateSectionError,
    MalformedEntryError,
    MalformedHeaderError
)
from .params import ParameterCache, ParameterStore, ParameterValueError

__all__ = [
    'IniArchive', 'IniSection', 'IniEntry', 'IniParser',
    'IniFactory', 'IniDefaultFactory', 'NULL_SECTION_NAME',
    'IniError', 'DuplicateEntryError', 'DuplicateSectionError',
    'MalformedEntryError', 'MalformedHeaderError',
    'ParameterStore', 'ParameterCache', 'ParameterValueError'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
