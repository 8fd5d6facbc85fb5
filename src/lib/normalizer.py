"""
Hoist leading line breaks out of the first leaf

Some tokenizers glue the block's leading blank line onto the first styled
token (e.g., span.meta["\\n\\"use strict\\""]). The gutter only scans direct
text children, so those breaks are moved into a standalone text token.
"""

import re
from typing import List

from ..models.tree import Element, Node, Text


LEADING_BREAKS = re.compile(r'^(?:\r?\n|\r)+')


def leadingBreaks_hoist(children: List[Node]) -> List[Node]:
    """
    Move leading breaks of the first child leaf into a text token before it

    Only children[0] is inspected. The leaf is dropped if nothing but
    breaks remains in it.

    Example:
        Input:  [span.meta["\\n\\"use strict\\""], ";"]
        Output: ["\\n", span.meta["\\"use strict\\""], ";"]
    """
    match children:
        case [Element(children=[Text(value=value)]) as first, *rest]:
            found = LEADING_BREAKS.match(value)
            if not found:
                return children
            breaks = found.group(0)
            first.children = [Text(value[len(breaks):])]
            if first.children[0].value:
                return [Text(breaks), first, *rest]
            return [Text(breaks), *rest]
        case _:
            return children
