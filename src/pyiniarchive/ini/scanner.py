# -*- encoding: utf-8 -*-
# @File   : scanner.py
# @Time   : 2024/10/13 15:22:46
# @Author : Kariko Lin

"""Line level recognition of the INI format.

Every function here works on one line with its newline already cut,
and knows nothing about archives. `IniParser` decides what to do
with the results (and with the errors).

The value part of an entry line (right hand side of the first `=`)
is consumed by `ValueScanner`, a plain finite state machine:

    state          | comment | quote     | comma | blank | other
    ---------------|---------|-----------|-------|-------|------
    START          | COMMENT | *_QUOTED  | START | START | TOKEN
    TOKEN          | COMMENT | TOKEN     | START | TOKEN | TOKEN
    DOUBLE_QUOTED  |            DOUBLE_QUOTED until `"`
    SINGLE_QUOTED  |            SINGLE_QUOTED until `'`
    COMMENT        | (rest of the line is dropped)
"""

from .consts import (
    COMMENT_DELIMITERS,
    DELIMITERS,
    WHITESPACE,
    CharClass,
    ScanState
)
from .errors import MalformedEntryError, MalformedHeaderError

_QUOTES = {'"': ScanState.DOUBLE_QUOTED, "'": ScanState.SINGLE_QUOTED}


def is_blank(line: str) -> bool:
    return not line.strip(WHITESPACE)


def is_comment(line: str, comments: str = COMMENT_DELIMITERS) -> bool:
    """If the first non-blank char is one of `comments`."""
    stripped = line.lstrip(WHITESPACE)
    return bool(stripped) and stripped[0] in comments


def is_section(line: str) -> bool:
    # not only column 0, `foo [bar]` declares `bar` as well.
    return '[' in line


def start_index(line: str, start: int) -> int:
    """Skip blanks and delimiters from `start` on."""
    while start < len(line) and line[start] in WHITESPACE + DELIMITERS:
        start += 1
    return start


def end_index(
    line: str, stop: int, comments: str = COMMENT_DELIMITERS
) -> int:
    """Exclusive end after dropping trailing blanks, delimiters and
    comment chars before `stop`."""
    strip = WHITESPACE + DELIMITERS + comments
    while stop > 0 and line[stop - 1] in strip:
        stop -= 1
    return stop


def parse_header(line: str, comments: str = COMMENT_DELIMITERS) -> str:
    """Get the name declared in `[name]`, anything around is ignored."""
    begin, end = line.find('['), line.find(']')
    if begin == -1 or end == -1:
        raise MalformedHeaderError(f'invalid section declaration: {line}')
    begin, end = start_index(line, begin), end_index(line, end, comments)
    if end <= begin:
        raise MalformedHeaderError(f'invalid section declaration: {line}')
    return line[begin:end]


class ValueScanner:
    """Splits the value part of an entry line.

    Feed the whole line and the index of its first `=`, then read
    `values`. One transition method per character class, each knows
    how to react in every state.
    """
    def __init__(self, comments: str = COMMENT_DELIMITERS) -> None:
        self._comments = comments
        self.reset('', 0)

    def reset(self, line: str, offset: int) -> None:
        self.line = line
        self.state = ScanState.START
        self.values: list[str] = []
        self._offset = offset
        self._start = offset
        self._saw_comment = False

    def classify(self, c: str) -> CharClass:
        if c in self._comments:
            return CharClass.COMMENT
        elif c in _QUOTES:
            return CharClass.QUOTE
        elif c == ',':
            return CharClass.COMMA
        elif c in WHITESPACE or c in DELIMITERS:
            return CharClass.BLANK
        return CharClass.OTHER

    def scan(self, line: str, offset: int) -> list[str]:
        self.reset(line, offset)
        for i in range(offset, len(line)):
            c = line[i]
            match self.classify(c):
                case CharClass.COMMENT:
                    self.on_comment(i)
                case CharClass.QUOTE:
                    self.on_quote(i, c)
                case CharClass.COMMA:
                    self.on_comma(i)
                case CharClass.BLANK:
                    self.on_blank(i)
                case CharClass.OTHER:
                    self.on_other(i)
            if self.state is ScanState.COMMENT:
                break
        self.finish()
        return self.values

    def on_comment(self, i: int) -> None:
        match self.state:
            case ScanState.START:
                self._enter_comment()
            case ScanState.TOKEN:
                self._emit_trimmed(i)
                self._enter_comment()
            # literal when quoted.

    def on_quote(self, i: int, c: str) -> None:
        match self.state:
            case ScanState.START:
                self.state = _QUOTES[c]
                self._start = i + 1
            case ScanState.DOUBLE_QUOTED | ScanState.SINGLE_QUOTED:
                if _QUOTES[c] is self.state:
                    self._emit_verbatim(i)
                    self.state = ScanState.START
            # a quote inside an unquoted token is kept as is.

    def on_comma(self, i: int) -> None:
        if self.state is ScanState.TOKEN:
            self._emit_trimmed(i)
            self.state = ScanState.START

    def on_blank(self, i: int) -> None:
        # skipped in START, part of the token (or quoted text) otherwise.
        pass

    def on_other(self, i: int) -> None:
        if self.state is ScanState.START:
            self._start = i
            self.state = ScanState.TOKEN

    def finish(self) -> None:
        match self.state:
            case ScanState.TOKEN:
                self._emit_trimmed(len(self.line))
            case ScanState.DOUBLE_QUOTED | ScanState.SINGLE_QUOTED:
                raise MalformedEntryError(
                    f'unterminated quote; line: {self.line}')
            case ScanState.START if not self.values and not self._saw_comment:
                # `key =` followed by nothing usable.
                raise MalformedEntryError(
                    f'error while reading entry; line: {self.line}')
        self.state = ScanState.START

    def _enter_comment(self) -> None:
        self._saw_comment = True
        self.state = ScanState.COMMENT

    def _emit_trimmed(self, stop: int) -> None:
        end = end_index(self.line, stop, self._comments)
        if end <= self._start:
            raise MalformedEntryError(
                f'error while reading entry; line: {self.line}')
        self.values.append(self.line[self._start:end])

    def _emit_verbatim(self, stop: int) -> None:
        if stop <= self._start:
            raise MalformedEntryError(
                f'empty quoted value; line: {self.line}')
        self.values.append(self.line[self._start:stop])


def parse_entry(
    line: str, comments: str = COMMENT_DELIMITERS
) -> tuple[str, list[str]] | None:
    """Split an entry line into its name and values.

    Returns `None` for a line without any usable name.
    May raise `MalformedEntryError`.
    """
    sep = -1
    for i, c in enumerate(line):
        if c == '=' or c in comments:
            # a comment ahead of `=` hides it.
            sep = i if c == '=' else -1
            stop = i
            break
    else:
        stop = len(line)

    begin, end = start_index(line, 0), end_index(line, stop, comments)
    if end <= begin:
        return None
    name = line[begin:end]
    if sep == -1:
        return name, []
    return name, ValueScanner(comments).scan(line, sep + 1)
