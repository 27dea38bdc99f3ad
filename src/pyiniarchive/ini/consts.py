# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/12 21:40:17
# @Author : Kariko Lin

from enum import Enum

WHITESPACE = ' \t\r\n'
# trimmed from both ends of names and unquoted values.
DELIMITERS = '[],=\'"'
# `.properties`-like files may want '#' only.
COMMENT_DELIMITERS = '#;'

# a header name always stops before the first ']',
# so no `[...]` line can ever produce this one.
NULL_SECTION_NAME = ']null_section_name['


class ScanState(Enum):
    """States of the entry value scanner."""
    START = 0
    TOKEN = 1
    DOUBLE_QUOTED = 2
    SINGLE_QUOTED = 3
    COMMENT = 4


class CharClass(Enum):
    COMMENT = 'comment'
    QUOTE = 'quote'
    COMMA = 'comma'
    BLANK = 'blank'  # whitespace or a trimmed delimiter
    OTHER = 'other'
