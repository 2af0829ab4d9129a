"""
Match renderer for the regex checker.

Runs a CompiledMatcher over input text, turns the ordered, non-overlapping
spans into Literal/Highlighted fragments, and renders those fragments to
escaped `<mark>` markup, plain text or ANSI. `evaluate` is the single entry
point used on every change of pattern, flags or text.
"""

import logging
from html import escape
from typing import Iterable, List, Optional, Sequence

from rxcheck.rx_ast import (
    AwaitingInput,
    Empty,
    Fragment,
    Highlighted,
    InvalidPattern,
    Literal,
    Matched,
    MatchSpan,
    NoMatch,
    PatternSpec,
    RenderResult,
)
from rxcheck.rx_compiler import CompileError, CompiledMatcher, compile_pattern

logger = logging.getLogger(__name__)

MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"

ANSI_HIGHLIGHT = "\x1b[7m"
ANSI_RESET = "\x1b[0m"


def escape_html(text: str) -> str:
    """Escape & < > " ' to their entity forms."""
    return escape(text, quote=False).replace('"', "&quot;").replace("'", "&#39;")


def make_badge(spec: PatternSpec) -> Optional[str]:
    """Return `/source/flags` when any flags were applied, otherwise None."""
    if not spec.flags:
        return None
    return f"/{spec.source}/{spec.flag_string}"


def build_fragments(text: str, spans: Sequence[MatchSpan]) -> tuple[Fragment, ...]:
    """
    Walk the text once, emitting unmatched text and matched spans in order.

    Spans must be sorted by start and non-overlapping, which is what
    CompiledMatcher.iter_matches produces.
    """
    fragments: List[Fragment] = []
    last = 0
    for span in spans:
        if span.start > last:
            fragments.append(Literal(text[last : span.start]))
        fragments.append(Highlighted(text[span.start : span.end]))
        last = span.end
    if last < len(text):
        fragments.append(Literal(text[last:]))
    return tuple(fragments)


def render_markup(fragments: Iterable[Fragment]) -> str:
    parts = []
    for frag in fragments:
        if isinstance(frag, Highlighted):
            parts.append(MARK_OPEN + escape_html(frag.text) + MARK_CLOSE)
        else:
            parts.append(escape_html(frag.text))
    return "".join(parts)


def render_plain(fragments: Iterable[Fragment]) -> str:
    return "".join(frag.text for frag in fragments)


def render_ansi(fragments: Iterable[Fragment]) -> str:
    parts = []
    for frag in fragments:
        if isinstance(frag, Highlighted):
            parts.append(ANSI_HIGHLIGHT + frag.text + ANSI_RESET)
        else:
            parts.append(frag.text)
    return "".join(parts)


def render(matcher: CompiledMatcher, text: str) -> RenderResult:
    """Run an already compiled matcher over `text`."""
    if not text:
        return AwaitingInput(pattern=matcher.spec)

    spans = matcher.find_all(text)
    badge = make_badge(matcher.spec)
    if not spans:
        return NoMatch(badge=badge)

    fragments = build_fragments(text, spans)
    logger.debug("%r: %d matches over %d chars", matcher, len(spans), len(text))
    return Matched(
        count=len(spans),
        markup=render_markup(fragments),
        spans=spans,
        fragments=fragments,
        badge=badge,
    )


def evaluate(pattern: str, flags: str, text: str) -> RenderResult:
    """
    Evaluate one (pattern, flags, text) triple from scratch.

    Nothing is compiled when both pattern and text are empty; a compile failure
    is reported as InvalidPattern without looking at the text.
    """
    pattern = pattern or ""
    text = text or ""
    if not pattern and not text:
        return Empty()

    compiled = compile_pattern(pattern, flags or "")
    if isinstance(compiled, CompileError):
        return InvalidPattern(message=compiled.message)
    return render(compiled, text)
