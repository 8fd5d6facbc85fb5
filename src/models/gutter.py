"""
Gutter-specific data models

Type-safe structures passed between the line scan and the line wrap.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set

from .tree import Node, Text


# Class tags drawn on a Line Container, in emission order
CODE_LINE = 'code-line'
NUMBERED_CODE_LINE = 'numbered-code-line'
HIGHLIGHTED_CODE_LINE = 'highlighted-code-line'
INSERTED = 'inserted'
DELETED = 'deleted'

LINE_CONTAINER_TAG = 'span'
LINE_NUMBER_ATTRIBUTE = 'data-line-number'

LINE_CONTAINER_CLASSES: Set[str] = {
    CODE_LINE,
    NUMBERED_CODE_LINE,
    HIGHLIGHTED_CODE_LINE,
    INSERTED,
    DELETED,
}


@dataclass
class LogicalLine:
    """
    Content between two consecutive line breaks

    Produced by Gutter.lines_collect() for every break found in the scan,
    plus one for the trailing content after the last break (if any).

    Attributes:
        children: Nodes on this line, break characters excluded
        eol: The break token text that ended this line ("\\n", "\\r\\n",
             "\\r"), or None for the final line of the block

    Example:
        For children [Element(span "const"), Text(" a=1;\\nb")]:
        LogicalLine(children=[Element(span "const"), Text(" a=1;")], eol="\\n")
        LogicalLine(children=[Text("b")], eol=None)
    """
    children: List[Node] = field(default_factory=list)
    eol: Optional[str] = None

    def blank_is(self) -> bool:
        """Zero children, or a single whitespace-only text run"""
        match self.children:
            case []:
                return True
            case [Text(value=value)]:
                return not value.strip()
            case _:
                return False
