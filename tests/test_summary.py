import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from rxcheck.rx_ast import Empty, InvalidPattern, NoMatch, RenderResult
from rxcheck.rx_renderer import evaluate
from rxcheck.rx_summary import (
    ENTER_INPUT_TEXT,
    WAITING_TEXT,
    summary_markup,
    summary_text,
)


def test_summary_text_states():
    assert summary_text(Empty()) == WAITING_TEXT
    assert summary_text(evaluate("a", "g", "")) == ENTER_INPUT_TEXT
    assert summary_text(InvalidPattern("bad thing")) == "Invalid pattern: bad thing"
    assert summary_text(NoMatch()) == "No match"
    assert summary_text(NoMatch(badge="/z/g")) == "No match /z/g"
    assert summary_text(evaluate("a", "", "aa")) == "1 match"
    assert summary_text(evaluate("a", "g", "aa")) == "2 matches /a/g"


def test_summary_markup_escapes_user_text():
    markup = summary_markup(InvalidPattern("<oops>"))
    assert markup == '<span class="bad">Invalid pattern:</span> &lt;oops&gt;'
    markup = summary_markup(evaluate("<b>", "g", "no tags"))
    assert markup == (
        '<span class="bad">No match</span> <span class="badge">/&lt;b&gt;/g</span>'
    )


def test_summary_markup_matched():
    markup = summary_markup(evaluate("a", "", "a"))
    assert markup == '<span class="good">1 match</span>'


def test_summary_rejects_unknown_result():
    with pytest.raises(TypeError):
        summary_text(RenderResult())
    with pytest.raises(TypeError):
        summary_markup(RenderResult())
