"""
Pattern compiler for the regex checker.

Turns a raw pattern string and a raw flag string into a CompiledMatcher, or a
CompileError carrying the `re` diagnostic verbatim. Flags outside the accepted
alphabet are dropped before compilation; `g`, `y` and `d` are handled by the
matcher itself since `re` has no equivalent compile flags.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Union

from rxcheck.rx_ast import ALLOWED_FLAGS, GroupSpan, MatchSpan, PatternSpec

logger = logging.getLogger(__name__)

# Flag characters that map onto `re` compile flags
RE_FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": re.UNICODE,
}


@dataclass(frozen=True)
class CompileError:
    """Represents a failed compilation; message is the native diagnostic."""

    message: str


def sanitize_flags(raw_flags: str) -> tuple[str, ...]:
    """
    Keep only accepted flag characters, in first-seen order, without repeats.

    Never fails; unknown characters are silently dropped.
    """
    kept: List[str] = []
    for ch in raw_flags or "":
        if ch in ALLOWED_FLAGS and ch not in kept:
            kept.append(ch)
    return tuple(kept)


class CompiledMatcher:
    """
    Owns the compiled form of a PatternSpec and enumerates its matches.

    Instances are built fresh for every evaluation and never cached.
    """

    def __init__(self, spec: PatternSpec, regex: "re.Pattern[str]"):
        self.spec = spec
        self._regex = regex

    @property
    def is_global(self) -> bool:
        return self.spec.has_flag("g")

    @property
    def is_sticky(self) -> bool:
        return self.spec.has_flag("y")

    @property
    def has_indices(self) -> bool:
        return self.spec.has_flag("d")

    def iter_matches(self, text: str) -> Iterator[MatchSpan]:
        """
        Yield matches left to right.

        Each search resumes at the end of the previous match, one position
        further when that match was empty, so the loop makes at most
        len(text) + 1 attempts for a pattern that only matches empty strings.
        Without `g` at most one match is produced.
        """
        pos = 0
        text_len = len(text)
        while pos <= text_len:
            if self.is_sticky:
                m = self._regex.match(text, pos)
            else:
                m = self._regex.search(text, pos)
            if m is None:
                return
            yield self._to_span(m)
            if not self.is_global:
                return
            pos = m.end() if m.end() > m.start() else m.end() + 1

    def find_all(self, text: str) -> tuple[MatchSpan, ...]:
        return tuple(self.iter_matches(text))

    def _to_span(self, m: "re.Match[str]") -> MatchSpan:
        groups: tuple[GroupSpan, ...] = ()
        if self.has_indices and self._regex.groups:
            names = {idx: name for name, idx in self._regex.groupindex.items()}
            collected = []
            for idx in range(1, self._regex.groups + 1):
                start, end = m.span(idx)
                if start < 0:
                    collected.append(GroupSpan(idx, names.get(idx), None, None, None))
                else:
                    collected.append(
                        GroupSpan(idx, names.get(idx), start, end, m.group(idx))
                    )
            groups = tuple(collected)
        return MatchSpan(start=m.start(), end=m.end(), text=m.group(0), groups=groups)

    def __repr__(self) -> str:
        return f"CompiledMatcher(/{self.spec.source}/{self.spec.flag_string})"


CompileResult = Union[CompiledMatcher, CompileError]


def compile_pattern(source: str, raw_flags: str = "") -> CompileResult:
    """
    Compile `source` under the sanitized `raw_flags`.

    Returns a CompiledMatcher on success or a CompileError whose message is the
    `re` module's own wording. Never raises for a bad pattern.
    """
    spec = PatternSpec(source=source or "", flags=sanitize_flags(raw_flags))
    re_flags = 0
    for flag in spec.flags:
        re_flags |= RE_FLAG_MAP.get(flag, 0)
    try:
        regex = re.compile(spec.source, re_flags)
    except (re.error, ValueError, OverflowError, RecursionError) as e:
        logger.debug("Pattern %r failed to compile: %s", spec.source, e)
        return CompileError(message=str(e))
    return CompiledMatcher(spec, regex)
