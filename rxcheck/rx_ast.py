from dataclasses import dataclass, field
from typing import Optional, Union

# === Pattern Inputs ===

# Accepted flag characters, in canonical display order.
ALLOWED_FLAGS = "gimsuyd"


@dataclass(frozen=True)
class PatternSpec:
    """Represents a pattern source together with its sanitized flags."""

    source: str
    flags: tuple[str, ...] = field(default_factory=tuple)

    @property
    def flag_string(self) -> str:
        return "".join(self.flags)

    def has_flag(self, flag: str) -> bool:
        return flag in self.flags


@dataclass(frozen=True)
class RegexLiteral:
    """Represents a `/pattern/flags` literal as typed by the user."""

    source: str
    flags: str = ""


# === Match Data ===


@dataclass(frozen=True)
class GroupSpan:
    """Represents the span of one capture group (only recorded with `d`)."""

    index: int
    name: Optional[str]
    start: Optional[int]
    end: Optional[int]
    text: Optional[str]


@dataclass(frozen=True)
class MatchSpan:
    """Represents a single match over the input text, [start, end)."""

    start: int
    end: int
    text: str
    groups: tuple[GroupSpan, ...] = field(default_factory=tuple)

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


# === Fragments ===


@dataclass(frozen=True)
class Literal:
    """Unmatched text between highlights."""

    text: str


@dataclass(frozen=True)
class Highlighted:
    """Matched text, rendered inside a highlight marker."""

    text: str


Fragment = Union[Literal, Highlighted]


# === Render Results ===


class RenderResult:
    """Base class for all evaluation outcomes."""


@dataclass(frozen=True)
class Empty(RenderResult):
    """No pattern and no text: nothing to do."""


@dataclass(frozen=True)
class AwaitingInput(RenderResult):
    """A pattern compiled but there is no text to test it against."""

    pattern: PatternSpec


@dataclass(frozen=True)
class InvalidPattern(RenderResult):
    """The pattern did not compile; message is the compiler diagnostic."""

    message: str


@dataclass(frozen=True)
class NoMatch(RenderResult):
    """The pattern compiled but found nothing in the text."""

    badge: Optional[str] = None


@dataclass(frozen=True)
class Matched(RenderResult):
    """One or more matches, with fragments and the annotated markup."""

    count: int
    markup: str
    spans: tuple[MatchSpan, ...] = field(default_factory=tuple)
    fragments: tuple[Fragment, ...] = field(default_factory=tuple)
    badge: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.count} match" + ("" if self.count == 1 else "es")
