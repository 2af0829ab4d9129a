import argparse
import json
import time
from pathlib import Path
from typing import List

from rxcheck.rx_ast import Highlighted, Matched, MatchSpan, NoMatch, RenderResult
from rxcheck.rx_renderer import (
    MARK_CLOSE,
    MARK_OPEN,
    build_fragments,
    escape_html,
    render_markup,
)
from rxcheck.rx_summary import summary_markup


def load_spans(json_path: Path, text: str) -> List[MatchSpan]:
    """Read JSON-lines matches written by regex_check.py --json."""
    spans: List[MatchSpan] = []
    seen = set()
    with json_path.open(encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            m = json.loads(line)
            start = m["offset"]
            end = start + m["length"]
            if (start, end) in seen:
                continue
            seen.add((start, end))
            spans.append(MatchSpan(start=start, end=end, text=text[start:end]))
    # keep the first of any overlapping spans
    spans.sort(key=lambda s: (s.start, -s.length))
    result: List[MatchSpan] = []
    last_end = -1
    for span in spans:
        if span.start >= last_end:
            result.append(span)
            last_end = span.end
    return result


def line_markup(fragments):
    # a highlight crossing a newline is closed and reopened around it so that
    # every <mark> stays inside a single line span
    parts = []
    for frag in fragments:
        if isinstance(frag, Highlighted):
            parts.append(
                "\n".join(
                    MARK_OPEN + escape_html(piece) + MARK_CLOSE
                    for piece in frag.text.split("\n")
                )
            )
        else:
            parts.append(escape_html(frag.text))
    return "".join(parts)


def split_lines(markup):
    lines = [ln + "\n" for ln in markup.split("\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


def generate_html(result: RenderResult, show_line_numbers=True):
    # only matched results get a preview
    if not isinstance(result, Matched):
        preview = ""
    elif show_line_numbers:
        preview = line_markup(result.fragments)
    else:
        preview = result.markup
    lines = split_lines(preview)
    if show_line_numbers:
        body = "".join(
            f"<span class='line'><span class='lineno'>{i:4}</span> {ln}</span>"
            for i, ln in enumerate(lines, start=1)
        )
    else:
        body = preview
    status = summary_markup(result)
    return f"""
<!DOCTYPE html>
<html lang=\"en\">
<head>
    <meta charset=\"UTF-8\">
    <title>Regex Checker</title>
    <style>
        body {{ font-family: sans-serif; background: #121212; color: #e0e0e0; padding: 0.75rem; margin: 0; }}
        .result {{ margin-top: 0.75rem; padding: 0.5rem; border: 1px solid #444; border-radius: 4px; }}
        .bad {{ color: #f14c4c; }}
        .good {{ color: #28ea1e; }}
        .badge {{ background: #3a3d41; color: #fff; padding: 0 6px; border-radius: 10px; margin-left: 6px; }}
        .line {{ display: block; }}
        .lineno {{ display: inline-block; width: 3em; text-align: right; margin-right: 1em; color: #888; }}
        pre {{ font-family: monospace; white-space: pre-wrap; word-break: break-word; line-height: 1.4; margin-top: 0.5rem; padding: 0.5rem; background: rgba(128,128,128,0.15); border-radius: 4px; }}
        mark {{ background: #c5e47866; border-bottom: 2px solid #c5e478; color: inherit; }}
    </style>
</head>
<body>
<div id=\"status\" class=\"result\">{status}</div>
<pre id=\"preview\">{body}</pre>
</body>
</html>
"""


def main():
    parser = argparse.ArgumentParser(
        description="Highlight matches in a text file based on JSON matches from regex_check.py."
    )
    parser.add_argument("text_file", type=Path, help="Path to the input text file")
    parser.add_argument(
        "json_file",
        type=Path,
        help="Path to the JSON-lines file written by regex_check.py --json",
    )
    parser.add_argument(
        "output_file", type=Path, help="Path to save the output HTML file"
    )
    parser.add_argument(
        "--no-line-numbers",
        action="store_true",
        help="Disable line numbers in the HTML",
    )
    args = parser.parse_args()

    text = args.text_file.read_text(encoding="utf-8")
    spans = load_spans(args.json_file, text)

    t0 = time.time()
    fragments = build_fragments(text, spans)
    if spans:
        result = Matched(
            count=len(spans),
            markup=render_markup(fragments),
            spans=tuple(spans),
            fragments=fragments,
        )
    else:
        result = NoMatch()
    t1 = time.time()

    print(f"Rendering: {t1-t0:.3f}s, Total matches: {len(spans)}")
    html = generate_html(result, show_line_numbers=not args.no_line_numbers)
    args.output_file.write_text(html, encoding="utf-8")
    print(f"HTML file with highlights saved to: {args.output_file}")


if __name__ == "__main__":
    main()
