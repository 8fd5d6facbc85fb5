"""
Pygments adapter producing code element trees

Stands in for the external highlighter: it tokenizes source text with
Pygments and builds the pre > code tree the transform consumes, one span
per styled token with Pygments' short CSS class names (e.g., "k", "cm").

Plain text and whitespace tokens become Text nodes, so line breaks between
tokens are visible to the gutter scan. Multi-line tokens such as block
comments are emitted whole, as real highlighters do.
"""

from typing import Any, Dict, List, Optional

from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.lexer import Lexer
from pygments.token import Text as TextToken, STANDARD_TYPES
from pygments.util import ClassNotFound

from ..models.directives import LANGUAGE_PREFIX
from ..models.tree import Element, Node, Text


def tokenClass_get(ttype: Any) -> str:
    """
    Short CSS class for a token type, walking up to the nearest known parent

    Example:
        Keyword.Constant -> "kc", Comment.Multiline -> "cm"
    """
    while ttype not in STANDARD_TYPES:
        ttype = ttype.parent
    return STANDARD_TYPES[ttype]


def lexer_get(language: Optional[str]) -> Lexer:
    """Resolve a Pygments lexer, falling back to plain text"""
    if not language:
        return TextLexer(stripnl=False)
    try:
        return get_lexer_by_name(language, stripnl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False)


def tokens_toNodes(source: str, language: Optional[str] = None) -> List[Node]:
    """
    Tokenize source into a flat list of spans and text runs

    Adjacent text runs are merged. Pygments always ends the stream with a
    newline, mirroring a fenced block's trailing break.
    """
    nodes: List[Node] = []

    for ttype, value in lexer_get(language).get_tokens(source):
        if not value:
            continue
        cssclass = tokenClass_get(ttype)
        if ttype in TextToken or not cssclass:
            if nodes and isinstance(nodes[-1], Text):
                nodes[-1].value += value
            else:
                nodes.append(Text(value))
        else:
            nodes.append(Element(tag='span', classes=[cssclass], children=[Text(value)]))

    return nodes


def codeblock_highlight(
    source: str,
    language: Optional[str] = None,
    meta: Optional[str] = None,
    classes: Optional[List[str]] = None,
    properties: Optional[Dict[str, Any]] = None,
) -> Element:
    """
    Highlight source and wrap it as a pre > code block

    Args:
        source: Code text
        language: Pygments lexer alias; unknown names fall back to plain text
        meta: Info string to attach to the code element
        classes: Extra class tokens for the code element (after language-*)
        properties: Attribute fields for the code element

    Returns:
        pre Element whose only child is the code Element

    Example:
        >>> pre = codeblock_highlight("x = 1\\n", "python", meta="{1}")
        >>> pre.children[0].classes
        ['language-python']
    """
    codeClasses = [f"{LANGUAGE_PREFIX}{language}"] if language else []
    codeClasses += classes or []

    code = Element(
        tag='code',
        classes=codeClasses,
        children=tokens_toNodes(source, language),
        properties=dict(properties or {}),
        meta=meta,
    )
    return Element(tag='pre', children=[code])
