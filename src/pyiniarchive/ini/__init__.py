# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 21:31:20
# @Author : Kariko Lin

from .consts import COMMENT_DELIMITERS, NULL_SECTION_NAME
from .errors import (
    IniError,
    DuplicateEntryError,
    DuplicateSectionError,
    MalformedEntryError,
    MalformedHeaderError
)
from .model import IniEntry, IniSection, IniArchive, IniDefaultFactory
from .parser import IniParser
