"""
Tree node models

The small tree shape shared with the highlighter (producer) and the
serializer (consumer). A code block is an Element whose children are styled
leaves, plain text runs and the occasional comment.

Example:
    Element(
        tag="code",
        classes=["language-python"],
        children=[
            Element(tag="span", classes=["k"], children=[Text("def")]),
            Text(" main():\\n"),
        ],
    )
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union


@dataclass
class Text:
    """Literal text run"""
    value: str


@dataclass
class Comment:
    """Markup comment, passed through untouched"""
    value: str = ""


@dataclass
class Element:
    """
    Styled element

    Attributes:
        tag: Element tag name (e.g., "pre", "code", "span")
        classes: Ordered style class list
        children: Child nodes
        properties: Attribute-like fields (e.g., {"data-highlight-lines": "2"})
        meta: Info string following the language tag of a fenced block
    """
    tag: str
    classes: List[str] = field(default_factory=list)
    children: List['Node'] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)
    meta: Optional[str] = None


Node = Union[Text, Element, Comment]


def leaf_is(node: Node) -> bool:
    """True for an element holding exactly one non-element child"""
    match node:
        case Element(children=[Text() | Comment()]):
            return True
        case _:
            return False


def text_content(nodes: Union[Node, Iterable[Node]]) -> str:
    """
    Concatenate the text of a node (or node list) in document order

    Comments contribute nothing, matching what a serializer renders as text.
    """
    if isinstance(nodes, (Text, Element, Comment)):
        nodes = [nodes]

    parts = []
    for node in nodes:
        match node:
            case Text(value=value):
                parts.append(value)
            case Element(children=children):
                parts.append(text_content(children))
            case Comment():
                pass
    return ''.join(parts)
