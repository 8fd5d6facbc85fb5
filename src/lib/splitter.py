"""
Split styled leaves that span several physical lines

Block comments and multi-line strings often arrive as one token holding
embedded breaks. The gutter only finds breaks inside direct text children,
so each such leaf is replaced by one leaf per line with the breaks pulled
out as plain text tokens.

Example:
    Input:  [span.cm["/* a\\n b */"]]
    Output: [span.cm["/* a"], "\\n", span.cm[" b */"]]
"""

import re
from typing import List

from ..models.tree import Element, Node, Text


LINE_BREAK = re.compile(r'\r?\n|\r')
LINE_BREAK_SPLIT = re.compile(r'(\r?\n|\r)')


def leaf_split(leaf: Element) -> List[Node]:
    """
    Split one leaf at its line breaks

    Empty segments (e.g., between consecutive breaks) produce no leaf, so a
    blank line stays a bare break token.
    """
    value = leaf.children[0].value
    pieces: List[Node] = []

    for index, segment in enumerate(LINE_BREAK_SPLIT.split(value)):
        if index % 2:
            pieces.append(Text(segment))
        elif segment:
            pieces.append(Element(
                tag=leaf.tag,
                classes=list(leaf.classes),
                children=[Text(segment)],
                properties=dict(leaf.properties),
            ))

    return pieces


def leaves_split(children: List[Node]) -> List[Node]:
    """Replace every multi-line leaf in a flat child list by per-line leaves"""
    result: List[Node] = []

    for child in children:
        match child:
            case Element(children=[Text(value=value)]) if LINE_BREAK.search(value):
                result.extend(leaf_split(child))
            case _:
                result.append(child)

    return result
