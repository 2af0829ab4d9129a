import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
from lark.exceptions import UnexpectedInput

from rxcheck.rx_ast import RegexLiteral
from rxcheck.rx_literal import parse_literal, parse_pattern_argument


def test_parse_literal_with_flags():
    assert parse_literal("/a+/gi") == RegexLiteral(source="a+", flags="gi")


def test_parse_literal_without_flags():
    assert parse_literal(r"/\d+/") == RegexLiteral(source=r"\d+", flags="")


def test_parse_literal_escaped_slash():
    assert parse_literal(r"/a\/b/g") == RegexLiteral(source="a/b", flags="g")


def test_parse_literal_keeps_other_escapes():
    assert parse_literal(r"/\\\/\./").source == r"\\/\."


def test_parse_literal_slash_inside_class():
    assert parse_literal("/[/]x/g") == RegexLiteral(source="[/]x", flags="g")


def test_parse_literal_keeps_repeated_flags():
    # duplicates are collapsed at compile time, not here
    assert parse_literal("/a/gig").flags == "gig"


@pytest.mark.parametrize(
    "text", ["/abc", "abc", "//", "/[abc/g", "/usr/bin", "/a/gzq"]
)
def test_parse_literal_rejects_malformed(text):
    with pytest.raises(UnexpectedInput):
        parse_literal(text)


def test_parse_pattern_argument_bare():
    assert parse_pattern_argument("a+", "g") == RegexLiteral(source="a+", flags="g")


def test_parse_pattern_argument_literal_flags_win():
    assert parse_pattern_argument("/a/i", "g") == RegexLiteral(source="a", flags="i")
    assert parse_pattern_argument("/a/", "g") == RegexLiteral(source="a", flags="")


def test_parse_pattern_argument_falls_back_to_bare():
    assert parse_pattern_argument("/unclosed", "g") == RegexLiteral(
        source="/unclosed", flags="g"
    )
    assert parse_pattern_argument("", "g") == RegexLiteral(source="", flags="g")


def test_parse_pattern_argument_keeps_paths_verbatim():
    assert parse_pattern_argument("/usr/bin", "g") == RegexLiteral(
        source="/usr/bin", flags="g"
    )
    assert parse_pattern_argument("/a/b/", "i") == RegexLiteral(
        source="/a/b/", flags="i"
    )
