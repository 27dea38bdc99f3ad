# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/13 16:48:09
# @Author : Kariko Lin

"""Reading is *resilient*: a bad line (or a bad section declaration)
gets logged and skipped, the rest of the file is still loaded.
Only a missing file is fatal, and a stream failing halfway stops
the reading but keeps what was read so far.

Writing is canonical. Comments, blank lines and the layout of the source
are never restored.
"""

import logging
from io import StringIO
from os import PathLike
from typing import TextIO
from warnings import warn

import chardet

from ..abstract import FileHandler, IniFactory
from .consts import DELIMITERS, NULL_SECTION_NAME, WHITESPACE
from .errors import (
    DuplicateSectionError,
    MalformedEntryError,
    MalformedHeaderError
)
from .model import IniArchive, IniSection
from .scanner import (
    is_blank,
    is_comment,
    is_section,
    parse_entry,
    parse_header
)


class IniParser(FileHandler[IniArchive]):
    def __init__(
        self,
        filename: str | PathLike[str],
        encoding: str | None = None,
        *,
        factory: IniFactory | None = None,
        alphabetical: bool = False,
        comment_delimiters: str | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._factory = factory
        self._alphabetical = alphabetical
        self._comments = comment_delimiters

    def new_archive(self) -> IniArchive:
        ret = IniArchive(self._factory, self._alphabetical)
        if self._comments is not None:
            ret.set_comment_delimiters(self._comments)
        return ret

    @staticmethod
    def readstream(buf: TextIO, ins: IniArchive | None = None) -> IniArchive:
        """Read a decoded text stream into `ins` (or a new archive).

        The stream is left open, it's up to the caller.
        """
        if ins is None:
            ins = IniArchive()
        comments = ins.comment_delimiters
        this_sect: IniSection | None = None
        lineno = 0
        try:
            while i := buf.readline():
                lineno += 1
                i = i.rstrip('\r\n')
                if is_blank(i) or is_comment(i, comments):
                    continue

                if is_section(i):
                    try:
                        this_sect = ins.factory.new_section(
                            parse_header(i, comments))
                        IniParser._register(ins, this_sect)
                    except MalformedHeaderError as e:
                        logging.info(f'line {lineno}: {e}')
                    except DuplicateSectionError as e:
                        # keep it as the (unregistered) context,
                        # so its entries go away together with it.
                        logging.warning(
                            f'line {lineno}: {e}, section dropped.')
                    continue

                if this_sect is None:
                    this_sect = ins.new_section(NULL_SECTION_NAME)
                try:
                    IniParser._read_entry(ins.factory, this_sect, i, comments)
                except MalformedEntryError as e:
                    logging.warning(f'line {lineno}: {e}')
        except OSError as e:
            logging.error(f'reading aborted after line {lineno}: {e}')
        return ins

    @staticmethod
    def _register(ins: IniArchive, section: IniSection) -> None:
        if not ins.add_section(section):
            raise DuplicateSectionError(section.name)

    @staticmethod
    def _read_entry(
        factory: IniFactory, section: IniSection, line: str, comments: str
    ) -> None:
        if (parsed := parse_entry(line, comments)) is None:
            logging.debug(f'no entry name found in: {line}')
            return
        name, values = parsed
        entry = factory.new_entry(name)
        for v in values:
            entry.add_value(v)
        # a repeated entry appends its values to the first one.
        if (existing := section.get_entry(name)) is None:
            section.add_entry(entry)
        else:
            for v in entry.values():
                existing.add_value(v)

    def _decode(self, raw: bytes) -> str:
        try:
            return raw.decode(self._codec or 'utf-8')
        except UnicodeDecodeError:
            pass

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'latin-1'}
        # fallbacks
        try:
            return raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            return raw.decode('latin-1')

    def read(self, ins: IniArchive | None = None) -> IniArchive:
        """Read the file into `ins` (or a new archive).

        Raises `FileNotFoundError` if there's no such file.
        """
        if ins is None:
            ins = self.new_archive()
        elif self._comments is not None:
            ins.set_comment_delimiters(self._comments)
        with open(self._fn, 'rb') as fp:
            try:
                raw = fp.read()
            except OSError as e:
                logging.error(f'{self}: reading aborted: {e}')
                return ins
        return self.readstream(StringIO(self._decode(raw)), ins)

    @staticmethod
    def _check_lossless(text: str, forbidden: str, comments: str) -> None:
        strip = WHITESPACE + DELIMITERS
        if (
            text and text[0] not in strip
            and text[-1] not in strip + comments
            and not any(c in forbidden + comments + '\r\n' for c in text)
        ):
            return
        warn(f'"{text}" would not be read back as is.')

    @staticmethod
    def _output_section(section: IniSection, comments: str) -> str:
        ret = ''
        if not section.is_null_section:
            IniParser._check_lossless(section.name, ']', comments)
            ret += f'[{section.name}]\n'
        for entry in section.entries():
            IniParser._check_lossless(entry.name, '[=', comments)
            ret += entry.name
            if len(entry) > 0:
                for v in entry.values():
                    IniParser._check_lossless(v, '[,', comments)
                ret += '=' + ','.join(entry.values())
            ret += '\n'
        return ret

    @staticmethod
    def printstream(
        instance: IniArchive, fp: TextIO, *, blank_lines: int = 0
    ) -> None:
        """Print `instance` to a text stream, which is left open.

        The null section always comes first, since its entries have
        no header to go back to.
        """
        sections = sorted(
            instance.sections(), key=lambda x: not x.is_null_section)
        for idx, section in enumerate(sections):
            if idx > 0:
                fp.write('\n' * blank_lines)
            fp.write(IniParser._output_section(
                section, instance.comment_delimiters))

    def write(self, instance: IniArchive, *, blank_lines: int = 0) -> None:
        """Save to *one* INI file.

        Values that can't make it back unchanged (with commas,
        comment chars, surrounding blanks, ...) cause a `UserWarning`,
        but still get written.
        """
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            self.printstream(instance, fp, blank_lines=blank_lines)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f" ({self._codec})"
