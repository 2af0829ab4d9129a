"""Status line text for each evaluation outcome."""

from rxcheck.rx_ast import (
    AwaitingInput,
    Empty,
    InvalidPattern,
    Matched,
    NoMatch,
    RenderResult,
)
from rxcheck.rx_renderer import escape_html

WAITING_TEXT = "Waiting for input…"
ENTER_INPUT_TEXT = "Enter input text to test the pattern."


def summary_text(result: RenderResult) -> str:
    """Plain-text status line."""
    if isinstance(result, Empty):
        return WAITING_TEXT
    if isinstance(result, AwaitingInput):
        return ENTER_INPUT_TEXT
    if isinstance(result, InvalidPattern):
        return f"Invalid pattern: {result.message}"
    if isinstance(result, NoMatch):
        return "No match" + (f" {result.badge}" if result.badge else "")
    if isinstance(result, Matched):
        return result.label + (f" {result.badge}" if result.badge else "")
    raise TypeError(f"Unknown render result: {result!r}")


def _badge_markup(badge):
    if not badge:
        return ""
    return f' <span class="badge">{escape_html(badge)}</span>'


def summary_markup(result: RenderResult) -> str:
    """Status line as markup; every user-supplied string is escaped."""
    if isinstance(result, (Empty, AwaitingInput)):
        return escape_html(summary_text(result))
    if isinstance(result, InvalidPattern):
        return '<span class="bad">Invalid pattern:</span> ' + escape_html(
            result.message
        )
    if isinstance(result, NoMatch):
        return '<span class="bad">No match</span>' + _badge_markup(result.badge)
    if isinstance(result, Matched):
        return f'<span class="good">{result.label}</span>' + _badge_markup(
            result.badge
        )
    raise TypeError(f"Unknown render result: {result!r}")
