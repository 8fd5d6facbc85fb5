"""
Directive set model

Defines the resolved, immutable configuration a single code block is
processed with, and the vocabulary of directive tokens recognized in info
strings, class lists and attribute fields.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import FrozenSet, List, NamedTuple, Optional, Set


class LineNumbering(Enum):
    """
    Line numbering mode

    START_AT pairs with DirectiveSet.start; ON is the same as START_AT(1).
    """
    OFF = "off"
    ON = "on"
    START_AT = "start_at"


class LineRange(NamedTuple):
    """
    Inclusive range of display numbers, kept as written

    Never expanded into its members; membership is a bounds check.
    """
    first: int
    last: int

    def contains(self, number: int) -> bool:
        return self.first <= number <= self.last


@dataclass(frozen=True)
class DirectiveSet:
    """
    Resolved directives for one code block

    Attributes:
        numbering: Line numbering mode
        start: First display number (only meaningful when numbering is on)
        highlighted: Ranges of display numbers to tag as highlighted
        trim_blank_lines: Drop a blank first/last line
        keep_outer_blank_line: Keep a blank first/last line (wins over trim)

    Example:
        For meta "{2,4-5} showLineNumbers=10":
        DirectiveSet(
            numbering=LineNumbering.START_AT,
            start=10,
            highlighted=frozenset({LineRange(2, 2), LineRange(4, 5)}),
        )
    """
    numbering: LineNumbering = LineNumbering.OFF
    start: int = 1
    highlighted: FrozenSet[LineRange] = field(default_factory=frozenset)
    trim_blank_lines: bool = False
    keep_outer_blank_line: bool = False

    @property
    def show_line_numbers(self) -> bool:
        return self.numbering is not LineNumbering.OFF

    @property
    def is_noop(self) -> bool:
        """Nothing to annotate: the block is left exactly as highlighted"""
        return (
            not self.show_line_numbers
            and not self.highlighted
            and not self.trim_blank_lines
            and not self.keep_outer_blank_line
        )

    @property
    def drops_outer_blank_lines(self) -> bool:
        """Unified boundary policy: trim requested and keep not requested"""
        return self.trim_blank_lines and not self.keep_outer_blank_line

    def display_number(self, sequence: int) -> int:
        """Map a 1-based emitted-line index to the number shown to the user"""
        if self.numbering is LineNumbering.START_AT:
            return self.start - 1 + sequence
        return sequence

    def highlighted_is(self, sequence: int) -> bool:
        number = self.display_number(sequence)
        return any(lines.contains(number) for lines in self.highlighted)


# Canonical directive keys (lowercase, hyphens removed)
SHOW_LINE_NUMBERS = 'showlinenumbers'
NO_LINE_NUMBERS = 'nolinenumbers'
TRIM_BLANK_LINES = 'trimblanklines'
KEEP_OUTER_BLANK_LINE = 'keepouterblankline'

DIRECTIVE_KEYS: Set[str] = {
    SHOW_LINE_NUMBERS,
    NO_LINE_NUMBERS,
    TRIM_BLANK_LINES,
    KEEP_OUTER_BLANK_LINE,
}

# Attribute-like fields on the code element
START_NUMBERING_ATTRIBUTE = 'data-start-numbering'
HIGHLIGHT_LINES_ATTRIBUTE = 'data-highlight-lines'

DIRECTIVE_ATTRIBUTES: Set[str] = {
    START_NUMBERING_ATTRIBUTE,
    HIGHLIGHT_LINES_ATTRIBUTE,
}

LANGUAGE_PREFIX = 'language-'


def directiveKey_normalize(token: str) -> str:
    """
    Canonical form of a directive token key

    Example:
        >>> directiveKey_normalize("Show-Line-Numbers")
        'showlinenumbers'
    """
    return token.strip().lower().replace('-', '')


@dataclass
class DirectiveToken:
    """
    A single directive found in one source

    Attributes:
        key: Canonical directive key (e.g., "showlinenumbers")
        value: Text after "=" if any (e.g., "5" for "showLineNumbers=5")
    """
    key: str
    value: Optional[str] = None


@dataclass
class ExtractedDirectives:
    """
    Result of scanning one directive source (info string or class list)

    Attributes:
        tokens: Directive tokens in source order
        ranges: Text inside the first {...} group, None if there was none
        remaining: Class tokens that are not directives (class sources only)

    Example:
        Input classes: ["language-python", "showLineNumbers", "trim-blank-lines"]
        Result: ExtractedDirectives(
            tokens=[DirectiveToken("showlinenumbers"), DirectiveToken("trimblanklines")],
            ranges=None,
            remaining=["language-python"]
        )
    """
    tokens: List[DirectiveToken] = field(default_factory=list)
    ranges: Optional[str] = None
    remaining: List[str] = field(default_factory=list)

    def has(self, key: str) -> bool:
        return any(token.key == key for token in self.tokens)

    def values(self, key: str) -> List[str]:
        return [token.value for token in self.tokens if token.key == key and token.value]
