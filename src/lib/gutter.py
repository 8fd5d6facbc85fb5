"""
Line segmentation ("gutter") for a flat code element child list

Scans the prepared children for line breaks, groups everything between two
breaks into a LogicalLine, applies the outer blank-line policy and wraps
each retained line in a Line Container:

    <span class="code-line numbered-code-line" data-line-number="1">...</span>

Output contract: containers are interleaved with the break text tokens
that ended them, so the concatenated text of the output equals the input
(minus any dropped outer blank line together with its break). The final
line of a block never carries a break token.

The scan is linear with no backtracking:
1. For each text child, find every break; the current line is
   children[lineStart:index] plus any pending remainder plus the pre-break
   slice of this text.
2. After the last child, flush children[lineStart:] plus the remainder.
3. Wrap: drop a blank first/last line if the policy asks for it, number
   and tag the rest.
"""

import re
from typing import List, Sequence

from ..models.directives import DirectiveSet
from ..models.gutter import (
    LogicalLine,
    CODE_LINE,
    NUMBERED_CODE_LINE,
    HIGHLIGHTED_CODE_LINE,
    INSERTED,
    DELETED,
    LINE_CONTAINER_TAG,
    LINE_NUMBER_ATTRIBUTE,
)
from ..models.tree import Element, Node, Text
from .log import LOG


LINE_BREAKS = re.compile(r'\r?\n|\r')
CLASS_PART_SEPARATORS = re.compile(r'[-_\s]+')


def classMarker_matches(classes: Sequence[str], markers: Sequence[str]) -> bool:
    """
    True if any class has a hyphen/underscore separated part equal to a marker

    Example:
        >>> classMarker_matches(["hljs-addition"], ["addition", "gi"])
        True
        >>> classMarker_matches(["origin"], ["gi"])
        False
    """
    for name in classes:
        if not isinstance(name, str):
            continue
        parts = CLASS_PART_SEPARATORS.split(name)
        if any(marker in parts for marker in markers):
            return True
    return False


class Gutter:
    """
    Line segmenter for one code block

    Handles:
    - Line breaks inside text children (\\n, \\r\\n, \\r)
    - Lines spanning several styled leaves between text children
    - Outer blank-line dropping under the trim policy
    - Numbering with a start offset and highlight membership
    - Diff-state inference from a line's first token
    """

    def __init__(
        self,
        directives: DirectiveSet,
        insertedMarkers: Sequence[str] = ("addition", "gi"),
        deletedMarkers: Sequence[str] = ("deletion", "gd"),
    ):
        """
        Initialize gutter with the resolved directives

        Args:
            directives: DirectiveSet for this block
            insertedMarkers: Class parts flagging an inserted diff line
            deletedMarkers: Class parts flagging a deleted diff line

        Attributes:
            sequence: Number of Line Containers emitted so far
        """
        self.directives = directives
        self.insertedMarkers = tuple(insertedMarkers)
        self.deletedMarkers = tuple(deletedMarkers)
        self.sequence = 0

    def lines_collect(self, children: List[Node]) -> List[LogicalLine]:
        """
        Group a flat child list into logical lines

        Args:
            children: Flattened, split and normalized children

        Returns:
            LogicalLines in order. A trailing break does not open an
            extra empty line: "a\\nb\\n" yields two lines.

        Example:
            For children [span.k["const"], " a=1;\\nconst b=2;"]:
            [LogicalLine([span.k["const"], " a=1;"], eol="\\n"),
             LogicalLine(["const b=2;"], eol=None)]
        """
        lines: List[LogicalLine] = []
        lineStart = 0
        remainder = ''

        for index, child in enumerate(children):
            if not isinstance(child, Text):
                continue

            textStart = 0
            for found in LINE_BREAKS.finditer(child.value):
                line = list(children[lineStart:index])

                if remainder:
                    line.insert(0, Text(remainder))
                    remainder = ''

                if found.start() > textStart:
                    line.append(Text(child.value[textStart:found.start()]))

                lines.append(LogicalLine(children=line, eol=found.group(0)))
                lineStart = index + 1
                textStart = found.end()

            if lineStart == index + 1:
                remainder = child.value[textStart:]

        line = list(children[lineStart:])
        if remainder:
            line.insert(0, Text(remainder))
        if line:
            lines.append(LogicalLine(children=line, eol=None))

        LOG(f"Collected {len(lines)} logical lines from {len(children)} children", level=3)
        return lines

    def line_isDropped(self, lines: List[LogicalLine], position: int) -> bool:
        """Only the first or last line may go, and only if blank under trim"""
        if not self.directives.drops_outer_blank_lines:
            return False
        if position not in (0, len(lines) - 1):
            return False
        return lines[position].blank_is()

    def line_wrap(self, line: LogicalLine) -> Element:
        """
        Wrap a retained logical line in a Line Container

        Increments the sequence counter; highlight membership is tested on
        the display number, not on the sequence index.
        """
        self.sequence += 1
        directives = self.directives

        classes = [CODE_LINE]
        if directives.show_line_numbers:
            classes.append(NUMBERED_CODE_LINE)
        if directives.highlighted_is(self.sequence):
            classes.append(HIGHLIGHTED_CODE_LINE)

        match line.children:
            case [Element(classes=first), *_]:
                if classMarker_matches(first, self.insertedMarkers):
                    classes.append(INSERTED)
                if classMarker_matches(first, self.deletedMarkers):
                    classes.append(DELETED)

        properties = {}
        if directives.show_line_numbers:
            properties[LINE_NUMBER_ATTRIBUTE] = directives.display_number(self.sequence)

        return Element(
            tag=LINE_CONTAINER_TAG,
            classes=classes,
            children=line.children,
            properties=properties,
        )

    def lines_wrap(self, lines: List[LogicalLine]) -> List[Node]:
        """Apply the blank-line policy and emit containers with their breaks"""
        replacement: List[Node] = []

        for position, line in enumerate(lines):
            if self.line_isDropped(lines, position):
                LOG(f"Dropping blank outer line at position {position}", level=2)
                continue

            replacement.append(self.line_wrap(line))
            if line.eol is not None:
                replacement.append(Text(line.eol))

        return replacement

    def run(self, children: List[Node]) -> List[Node]:
        """
        Segment children into Line Containers

        Args:
            children: Prepared child list of the code element

        Returns:
            Replacement child list (containers interleaved with break tokens)
        """
        self.sequence = 0
        return self.lines_wrap(self.lines_collect(children))
