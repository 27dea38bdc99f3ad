"""Shared fixtures and helpers for pyiniarchive tests."""

from io import StringIO

import pytest

from pyiniarchive import IniArchive
from pyiniarchive.params import ParameterCache, default_cache


def parse(text: str, **kwargs) -> IniArchive:
    """Archive read from `text`; `kwargs` go to `IniArchive()`."""
    return IniArchive(**kwargs).read(StringIO(text))


def dump(archive: IniArchive) -> str:
    buf = StringIO()
    archive.print(buf)
    return buf.getvalue()


def snapshot(archive: IniArchive) -> dict[str, dict[str, tuple[str, ...]]]:
    """Sections, entries and values, without caring for entry order."""
    return {
        s.name: {e.name: e.values() for e in s.entries()}
        for s in archive.sections()
    }


@pytest.fixture(autouse=True)
def _clear_default_cache():
    default_cache.clear()
    yield
    default_cache.clear()


@pytest.fixture()
def cache() -> ParameterCache:
    return ParameterCache()


@pytest.fixture()
def sample_ini(tmp_path):
    path = tmp_path / 'sample.ini'
    path.write_text(
        "; sample parameters\n"
        "version = 3\n"
        "\n"
        "[Network]\n"
        "host = example.org\n"
        "port = 8080  # default port\n"
        "ratio = 0.75\n"
        "retries = many\n"
        "secure = TRUE\n"
        "verbose = True\n"
        "mode = fast, safe\n"
        "mode = careful\n"
        "keepalive\n"
        "\n"
        "[Paths]\n"
        "root = \"C:\\data, old\"\n",
        encoding='utf-8')
    return path
