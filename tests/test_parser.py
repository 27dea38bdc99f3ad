"""Tests for reading archives from text and printing them back."""

import logging
from io import StringIO

import pytest

from pyiniarchive import (
    IniArchive,
    IniEntry,
    IniParser,
    IniSection,
    NULL_SECTION_NAME,
)

from conftest import dump, parse, snapshot

WINDOWS_INI = """\
[386Enh]
woafont=dossapp.fon
EGA80WOA.FON=EGA80WOA.FON
FileSysChange=off
test_entry1 = val1, val2, val3
test_entry2 = val1
test_entry3

# this is a comment
; this is also a comment

[drivers]
waveSysChange=mmdrv.dll   ;this is a comment
timerysChange=timer.drv #this is a comment

[mci]       # comment

[FOO]  # this is a comment
foo1 = val1
foo1 = val2 # this is a comment
foo1 = val3
foo2 = val4
"""


def _build(*sections: tuple[str, dict[str, list[str]]]) -> IniArchive:
    archive = IniArchive()
    for name, entries in sections:
        section = IniSection(name)
        for key, values in entries.items():
            entry = IniEntry(key)
            for v in values:
                entry.add_value(v)
            section.add_entry(entry)
        archive.add_section(section)
    return archive


class FailingStream:
    """Yields some lines, then fails like a broken device."""

    def __init__(self, *lines: str) -> None:
        self._lines = list(lines)

    def readline(self) -> str:
        if not self._lines:
            raise OSError('device went away')
        return self._lines.pop(0)


class TestRead:
    def test_windows_ini(self) -> None:
        assert snapshot(parse(WINDOWS_INI)) == {
            '386Enh': {
                'woafont': ('dossapp.fon',),
                'EGA80WOA.FON': ('EGA80WOA.FON',),
                'FileSysChange': ('off',),
                'test_entry1': ('val1', 'val2', 'val3'),
                'test_entry2': ('val1',),
                'test_entry3': (),
            },
            'drivers': {
                'waveSysChange': ('mmdrv.dll',),
                'timerysChange': ('timer.drv',),
            },
            'mci': {},
            'FOO': {
                'foo1': ('val1', 'val2', 'val3'),
                'foo2': ('val4',),
            },
        }

    def test_duplicate_entries_merge(self) -> None:
        archive = parse('[s]\nk = a\nother = x\nk = b\n')
        assert archive.get_section('s').get_entry('k').values() == ('a', 'b')

    def test_headerless_lines(self) -> None:
        archive = parse('x = 1\n')
        assert list(archive) == [NULL_SECTION_NAME]
        assert snapshot(archive) == {NULL_SECTION_NAME: {'x': ('1',)}}

    def test_null_section_created_once(self) -> None:
        archive = parse('x = 1\ny = 2\nx = 3\n[s]\nz = 4\n')
        assert list(archive) == [NULL_SECTION_NAME, 's']
        assert snapshot(archive)[NULL_SECTION_NAME] == {
            'x': ('1', '3'), 'y': ('2',)}

    def test_quoting(self) -> None:
        archive = parse('[s]\nk = "a,b", c\n')
        assert archive.get_section('s').get_entry('k').values() == ('a,b', 'c')

    def test_comment_stripping(self) -> None:
        archive = parse('[s]\nk = v1 # trailing\n')
        assert archive.get_section('s').get_entry('k').values() == ('v1',)

    def test_header_after_leading_text(self) -> None:
        archive = parse('junk [mci] ; comment\nk = v\n')
        assert snapshot(archive) == {'mci': {'k': ('v',)}}

    def test_properties_style(self) -> None:
        archive = IniArchive()
        archive.set_comment_delimiters('#')
        archive.read(StringIO('# jdbc\nurl = jdbc:db;create=true\n'))
        assert snapshot(archive) == {
            NULL_SECTION_NAME: {'url': ('jdbc:db;create=true',)}}

    def test_crlf_lines(self) -> None:
        archive = parse('[s]\r\nk = v\r\n')
        assert snapshot(archive) == {'s': {'k': ('v',)}}


class TestReadRecovery:
    def test_duplicate_section_dropped(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            archive = parse('[s]\na = 1\n[s]\nb = 2\n[t]\nc = 3\n')
        assert snapshot(archive) == {'s': {'a': ('1',)}, 't': {'c': ('3',)}}
        assert "section 's' already exists" in caplog.text

    def test_malformed_header_keeps_context(self, caplog) -> None:
        with caplog.at_level(logging.INFO):
            archive = parse('[s]\na = 1\nbad [ header\nb = 2\n')
        assert snapshot(archive) == {'s': {'a': ('1',), 'b': ('2',)}}
        assert 'invalid section declaration' in caplog.text

    def test_malformed_first_header_falls_back_to_null_section(self) -> None:
        archive = parse('[]\nk = v\n')
        assert snapshot(archive) == {NULL_SECTION_NAME: {'k': ('v',)}}

    def test_malformed_entry_dropped(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            archive = parse('[s]\nk = "open\nok = 1\nempty =\n')
        assert snapshot(archive) == {'s': {'ok': ('1',)}}
        assert 'line 2: unterminated quote' in caplog.text
        assert 'line 4:' in caplog.text

    def test_stream_failure_keeps_partial_archive(self, caplog) -> None:
        with caplog.at_level(logging.ERROR):
            archive = IniArchive().read(FailingStream('[s]\n', 'k = v\n'))
        assert snapshot(archive) == {'s': {'k': ('v',)}}
        assert 'device went away' in caplog.text

    def test_read_into_filled_archive(self, caplog) -> None:
        archive = parse('[s]\na = 1\n')
        with caplog.at_level(logging.WARNING):
            archive.read(StringIO('[s]\nb = 2\n[t]\nc = 3\n'))
        assert snapshot(archive) == {'s': {'a': ('1',)}, 't': {'c': ('3',)}}


class TestPrint:
    def test_canonical_form(self) -> None:
        archive = _build(
            ('s', {'k': ['a', 'b']}),
            ('t', {'flag': []}),
        )
        assert dump(archive) == '[s]\nk=a,b\n[t]\nflag\n'

    def test_null_section_has_no_header(self) -> None:
        archive = parse('x = 1\n[s]\ny = 2\n')
        assert dump(archive) == 'x=1\n[s]\ny=2\n'

    def test_null_section_printed_first(self) -> None:
        archive = parse('x = 1\n[A]\ny = 2\n', alphabetical=True)
        assert list(archive) == ['A', NULL_SECTION_NAME]
        assert dump(archive) == 'x=1\n[A]\ny=2\n'

    def test_alphabetical_print(self) -> None:
        archive = parse('[z]\n[a]\n[m]\n', alphabetical=True)
        assert dump(archive) == '[a]\n[m]\n[z]\n'

    def test_blank_lines_between_sections(self) -> None:
        buf = StringIO()
        IniParser.printstream(parse('[a]\nk=v\n[b]\n'), buf, blank_lines=1)
        assert buf.getvalue() == '[a]\nk=v\n\n[b]\n'

    def test_lossy_value_warns(self) -> None:
        archive = _build(('s', {'k': ['a,b']}))
        with pytest.warns(UserWarning, match='would not be read back'):
            text = dump(archive)
        assert text == '[s]\nk=a,b\n'

    def test_plain_values_do_not_warn(self, recwarn) -> None:
        dump(_build(('s', {'k': ['a b', 'x=y']})))
        assert len(recwarn) == 0


class TestRoundTrip:
    def test_built_archive_survives(self) -> None:
        archive = _build(
            ('general', {'name': ['demo'], 'flag': [], 'list': ['1', '2', '1']}),
            ('paths', {'root': ['/opt/demo'], 'tmp': ['/tmp']}),
            ('empty', {}),
        )
        assert snapshot(parse(dump(archive))) == snapshot(archive)

    def test_null_section_survives(self) -> None:
        archive = parse('x = 1\n[b]\n[a]\ny = 2\n', alphabetical=True)
        again = parse(dump(archive), alphabetical=True)
        assert snapshot(again) == snapshot(archive)

    def test_idempotent(self) -> None:
        first = dump(parse(WINDOWS_INI))
        second = dump(parse(first))
        assert first == second
        assert snapshot(parse(second)) == snapshot(parse(WINDOWS_INI))


class TestFiles:
    def test_write_then_read(self, tmp_path) -> None:
        path = tmp_path / 'out.ini'
        archive = parse(WINDOWS_INI)
        archive.write_to_file(path)
        assert snapshot(IniArchive().read_from_file(path)) == snapshot(archive)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            IniArchive().read_from_file(tmp_path / 'nope.ini')

    def test_explicit_encoding(self, tmp_path) -> None:
        path = tmp_path / 'latin.ini'
        path.write_bytes('[café]\nk = crème\n'.encode('latin-1'))
        archive = IniParser(path, 'latin-1').read()
        assert snapshot(archive) == {'café': {'k': ('crème',)}}

    def test_undecodable_file_still_read(self, tmp_path) -> None:
        path = tmp_path / 'guess.ini'
        path.write_bytes(b'[s]\nk = \xe9t\xe9\n[t]\n')
        archive = IniArchive().read_from_file(path)
        assert list(archive) == ['s', 't']
        assert archive.get_section('s').has_entry('k')

    def test_parser_options(self, tmp_path) -> None:
        path = tmp_path / 'opts.ini'
        path.write_text('[b]\nk = a;b\n[a]\n', encoding='utf-8')
        archive = IniParser(
            path, alphabetical=True, comment_delimiters='#').read()
        assert list(archive) == ['a', 'b']
        assert archive.get_section('b').get_entry('k').values() == ('a;b',)

    def test_str(self, tmp_path) -> None:
        assert str(IniParser(tmp_path / 'x.ini', 'utf-8')).endswith(
            'x.ini (utf-8)')
