import os

import pytest

from core.errors import GlobExpansionError, ValidationError
from core.models import Pattern
from core.paths import check_glob_syntax, split_pattern, validate_file_name


def test_split_pattern_directory_with_trailing_separator():
    assert split_pattern("/tmp/dataA/") == ("/tmp/dataA", "")


def test_split_pattern_directory_and_glob():
    assert split_pattern("/tmp/dataA/*.csv") == ("/tmp/dataA", "*.csv")


def test_split_pattern_without_directory():
    assert split_pattern("*.csv") == (os.curdir, "*.csv")


def test_pattern_expansion_for_bare_directory():
    p = Pattern(raw="/tmp/dataA/")
    assert p.expansion == os.path.join("/tmp/dataA", "*")


def test_pattern_expansion_keeps_glob():
    assert Pattern(raw="/tmp/dataA/*.csv").expansion == "/tmp/dataA/*.csv"


def test_pattern_narrowed_to_file_name():
    p = Pattern(raw="/tmp/dataA/*.csv").narrowed_to("x.csv")
    assert p.raw == os.path.join("/tmp/dataA", "x.csv")
    assert p.name_filter == "*.csv"

    bare = Pattern(raw="/tmp/dataA/").narrowed_to("x.csv")
    assert bare.name_filter is None


@pytest.mark.parametrize("pattern", ["*.csv", "data[0-9].txt", "[!a]*", "[]]x", "plain"])
def test_check_glob_syntax_accepts_valid(pattern):
    check_glob_syntax(pattern)


@pytest.mark.parametrize("pattern", ["data[0-9.txt", "[z-a]", "x["])
def test_check_glob_syntax_rejects_malformed(pattern):
    with pytest.raises(GlobExpansionError):
        check_glob_syntax(pattern)


@pytest.mark.skipif(os.sep != "/", reason="backslash is a separator on Windows")
def test_check_glob_syntax_rejects_trailing_escape():
    with pytest.raises(GlobExpansionError):
        check_glob_syntax("abc\\")


def test_validate_file_name_keeps_name_verbatim():
    assert validate_file_name(" x.csv") == " x.csv"
    assert validate_file_name("x.csv") == "x.csv"


@pytest.mark.parametrize("name", ["", "   ", "../x.csv", "a/b.csv", "..", "."])
def test_validate_file_name_rejects(name):
    with pytest.raises(ValidationError):
        validate_file_name(name)
