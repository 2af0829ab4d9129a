#!/usr/bin/env python3

import argparse
import json
import logging
import sys
from pathlib import Path

from highlighter import generate_html
from rxcheck.rx_ast import (
    AwaitingInput,
    Empty,
    Highlighted,
    InvalidPattern,
    Matched,
    NoMatch,
)
from rxcheck.rx_literal import parse_pattern_argument
from rxcheck.rx_renderer import render_ansi
from rxcheck.rx_session import DEFAULT_FLAGS, TesterSession
from rxcheck.rx_summary import summary_text

__version__ = "0.1.0"

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_INVALID = 2

INTERACTIVE_HELP = """Commands:
  :p PATTERN   set the pattern (/pattern/flags literals accepted)
  :f FLAGS     set the flags (any of gimsuyd)
  :t TEXT      set the input text
  :a TEXT      append a line to the input text
  :show        show the current result
  :q           quit
"""

logger = logging.getLogger("regex_check")


def exit_code(result):
    if isinstance(result, InvalidPattern):
        return EXIT_INVALID
    if isinstance(result, NoMatch):
        return EXIT_NO_MATCH
    return EXIT_OK


def match_records(result):
    """One JSON-ready dict per match."""
    if not isinstance(result, Matched):
        return []
    records = []
    for span in result.spans:
        record = {"offset": span.start, "length": span.length, "match": span.text}
        if span.groups:
            record["groups"] = [
                {
                    "index": g.index,
                    "name": g.name,
                    "offset": g.start,
                    "length": None if g.start is None else g.end - g.start,
                    "match": g.text,
                }
                for g in span.groups
            ]
        records.append(record)
    return records


def format_result(result, color=True):
    lines = [summary_text(result)]
    if isinstance(result, Matched):
        if color:
            lines.append(render_ansi(result.fragments))
        else:
            lines.append(
                "".join(
                    f"[{frag.text}]" if isinstance(frag, Highlighted) else frag.text
                    for frag in result.fragments
                )
            )
    return "\n".join(lines)


def run_interactive(session, stdin, stdout, color=True):
    stdout.write(INTERACTIVE_HELP)

    def _show(result):
        stdout.write(format_result(result, color=color) + "\n")

    unsubscribe = session.subscribe(_show)
    try:
        _show(session.result)
        for raw in stdin:
            line = raw.rstrip("\n")
            cmd, _, arg = line.partition(" ")
            if cmd == ":q":
                break
            if cmd == ":p":
                literal = parse_pattern_argument(arg, session.flags)
                session.update(pattern=literal.source, flags=literal.flags)
            elif cmd == ":f":
                session.set_flags(arg)
            elif cmd == ":t":
                session.set_text(arg)
            elif cmd == ":a":
                session.set_text(session.text + ("\n" if session.text else "") + arg)
            elif cmd == ":show":
                _show(session.result)
            else:
                stdout.write(INTERACTIVE_HELP)
    finally:
        unsubscribe()
    return exit_code(session.result)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Test a regular expression against input text and highlight the matches."
    )
    parser.add_argument(
        "pattern", nargs="?", help="Pattern, bare or as a /pattern/flags literal"
    )
    parser.add_argument(
        "text_file", nargs="?", help="Path to input text file (default: stdin)"
    )
    parser.add_argument(
        "--flags",
        default=DEFAULT_FLAGS,
        help=f"Flags to apply to a bare pattern, any of gimsuyd (default: {DEFAULT_FLAGS})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit one JSON object per match instead of highlighted text",
    )
    parser.add_argument(
        "--pretty-print",
        action="store_true",
        help="With --json, emit all matches in a single pretty-printed JSON array",
    )
    parser.add_argument(
        "--html", type=Path, default=None, help="Also write an HTML report to this file"
    )
    parser.add_argument(
        "--no-color", action="store_true", help="Mark matches with [brackets] instead of ANSI"
    )
    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Read :p/:f/:t commands from stdin and re-evaluate on every change",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write output to this file (UTF-8, LF line endings). If omitted, output goes to stdout.",
    )

    args = parser.parse_args(argv)

    if args.version:
        print(f"regex_check: {__version__}")
        return EXIT_OK

    logging.basicConfig(
        level=getattr(logging, args.log_level), format="[%(levelname)s] %(message)s"
    )

    literal = parse_pattern_argument(args.pattern or "", args.flags)
    logger.info("Pattern %r with flags %r", literal.source, literal.flags)

    if args.interactive:
        session = TesterSession(pattern=literal.source, flags=literal.flags)
        return run_interactive(session, sys.stdin, sys.stdout, color=not args.no_color)

    if args.pattern is None:
        parser.error("the following arguments are required: pattern")

    if args.text_file:
        try:
            with open(args.text_file, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            parser.error(f"cannot read {args.text_file}: {e}")
    else:
        text = sys.stdin.read()

    session = TesterSession(pattern=literal.source, flags=literal.flags, text=text)
    result = session.result
    if isinstance(result, (Empty, AwaitingInput)):
        logger.info("Nothing to evaluate")

    if args.html:
        args.html.write_text(generate_html(result), encoding="utf-8")
        logger.info("HTML report written to %s", args.html)

    output_stream = None
    if args.output:
        output_stream = open(args.output, "w", encoding="utf-8", newline="\n")
    else:
        output_stream = sys.stdout

    try:
        if args.json:
            records = match_records(result)
            if args.pretty_print:
                json.dump(records, output_stream, indent=2)
                output_stream.write("\n")
            else:
                for item in records:
                    output_stream.write(json.dumps(item))
                    output_stream.write("\n")
            if isinstance(result, InvalidPattern):
                sys.stderr.write(summary_text(result) + "\n")
        else:
            color = not args.no_color and output_stream.isatty()
            output_stream.write(format_result(result, color=color) + "\n")
    finally:
        if args.output and output_stream is not sys.stdout:
            output_stream.close()

    return exit_code(result)


if __name__ == "__main__":
    sys.exit(main())
