"""
Flatten nested highlighter output into one level of styled leaves

Highlighters nest spans (e.g., a "title" span holding a "function" span);
the gutter scan only looks at direct children, so nested elements are
collapsed and each surviving leaf inherits its ancestors' classes.

Example:
    Input:  [span.a[span.b["x"], " "]]
    Output: [span.a.b["x"], " "]
"""

from typing import List, Optional

from ..models.tree import Comment, Element, Node, Text


def flattening_isNeeded(children: List[Node]) -> bool:
    """True if some element child starts with a nested element"""
    for child in children:
        match child:
            case Element(children=[Element(), *_]):
                return True
    return False


def tree_flatten(children: List[Node], classes: Optional[List[str]] = None) -> List[Node]:
    """
    Recursively flatten a child list, threading the ancestor class list

    Args:
        children: Nodes to flatten
        classes: Classes accumulated from enclosing elements

    Returns:
        Flat list of Text, Comment and leaf Element nodes. Leaves are the
        original element objects with the accumulated classes prepended.
    """
    classes = classes or []
    flat: List[Node] = []

    for child in children:
        match child:
            case Element(children=[Text() | Comment()]):
                child.classes = classes + child.classes
                flat.append(child)
            case Element():
                flat.extend(tree_flatten(child.children, classes + child.classes))
            case _:
                flat.append(child)

    return flat
