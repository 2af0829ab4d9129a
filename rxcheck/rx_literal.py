"""
Regex literal parser: reads `/pattern/flags` notation with a Lark grammar.

Bare patterns (anything that is not a well-formed literal) are passed through
unchanged by `parse_pattern_argument`, so slashes stay optional.
"""

import logging
import re
from pathlib import Path

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedInput

from rxcheck.rx_ast import RegexLiteral

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "rx_literal.lark"
with open(GRAMMAR_PATH, "r", encoding="utf-8") as f:
    LITERAL_GRAMMAR = f.read()

literal_parser = Lark(LITERAL_GRAMMAR, start="start", parser="lalr")

RE_ESCAPE_PAIR = re.compile(r"\\(.)", re.DOTALL)


def _unescape_slashes(body: str) -> str:
    # only `\/` is rewritten; other escape pairs are left for the compiler
    return RE_ESCAPE_PAIR.sub(
        lambda m: "/" if m.group(1) == "/" else m.group(0), body
    )


@v_args(inline=True)
class LiteralTransformer(Transformer):
    """Converts the literal parse tree into a RegexLiteral."""

    def start(self, body, flags=None):
        return RegexLiteral(source=body, flags=flags or "")

    def body(self, token):
        return _unescape_slashes(str(token))

    def flags(self, token):
        return str(token)


def parse_literal(text: str) -> RegexLiteral:
    """Parse `/pattern/flags`; raises lark's UnexpectedInput when malformed."""
    tree = literal_parser.parse(text)
    return LiteralTransformer().transform(tree)


def parse_pattern_argument(text: str, default_flags: str = "") -> RegexLiteral:
    """
    Interpret a user-supplied pattern.

    A well-formed `/pattern/flags` literal, whose suffix holds only accepted
    flag letters, supplies its own flags (an empty suffix means no flags).
    Anything else, such as `/usr/bin`, is taken verbatim as the pattern with
    `default_flags`.
    """
    if text.startswith("/"):
        try:
            return parse_literal(text)
        except UnexpectedInput as e:
            logger.debug("Not a regex literal, using it verbatim: %s", e)
    return RegexLiteral(source=text, flags=default_flags)
