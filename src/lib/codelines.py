"""
Code block transform: directives in, line containers out

Entry point of the engine. For one code block:

1. Resolve the code element (a pre whose first child is code, or code itself)
2. Resolve directives from meta, classes, attributes and settings
3. Stop here if the directives are a no-op (tree left untouched)
4. Otherwise run the stage pipeline over a BlockState:
   tree_flatten -> leaves_split -> leadingBreaks_hoist -> lines_wrap

Input-shape mismatches are absorbed: the node is returned unchanged.

Example:
    pre = codeblock_highlight("a = 1\\nb = 2\\n", "python", meta="{2} showLineNumbers")
    CodeLines().transform(pre)
    # pre > code now holds:
    #   span.code-line.numbered-code-line[data-line-number=1], "\\n",
    #   span.code-line.numbered-code-line.highlighted-code-line[data-line-number=2], "\\n"
"""

from typing import Optional

from ..config import appsettings, AppSettings
from ..models.state import BlockState, pipeline
from ..models.tree import Element, Node
from .directives import DirectiveParser
from .flattener import flattening_isNeeded, tree_flatten as children_flatten
from .splitter import leaves_split as children_split
from .normalizer import leadingBreaks_hoist as children_hoist
from .gutter import Gutter
from .log import LOG, state_connectToLogger


def tree_flatten(inputstate: BlockState) -> BlockState:
    """Stage: collapse nested leaves when some element starts with an element"""
    state = inputstate.copy()
    if flattening_isNeeded(state.children):
        LOG("Flattening nested code tree", level=2)
        state.children = children_flatten(state.children)
    return state


def leaves_split(inputstate: BlockState) -> BlockState:
    """Stage: split leaves spanning several lines"""
    state = inputstate.copy()
    if state.splitLeaves:
        state.children = children_split(state.children)
    return state


def leadingBreaks_hoist(inputstate: BlockState) -> BlockState:
    """Stage: hoist leading breaks out of the first leaf"""
    state = inputstate.copy()
    state.children = children_hoist(state.children)
    return state


def lines_wrap(inputstate: BlockState) -> BlockState:
    """Stage: segment into Line Containers"""
    state = inputstate.copy()
    gutter = Gutter(
        state.directives,
        insertedMarkers=state.insertedMarkers,
        deletedMarkers=state.deletedMarkers,
    )
    state.children = gutter.run(state.children)
    state.lineCount = gutter.sequence
    LOG(f"Wrapped {state.lineCount} code lines", level=1)
    return state


def codeElement_resolve(node: Node) -> Element:
    """
    Find the code element to annotate

    Args:
        node: A pre element whose first child is a code element, or a code
              element itself

    Returns:
        The code element

    Raises:
        ValueError: If the node does not have the expected shape
    """
    match node:
        case Element(tag='code'):
            return node
        case Element(tag='pre', children=[Element(tag='code') as code, *_]):
            return code
        case Element(tag=tag):
            raise ValueError(f"Expected <pre><code> or <code>, got <{tag}>")
        case _:
            raise ValueError(f"Expected an element, got {type(node).__name__}")


class CodeLines:
    """
    Line annotation transform for code blocks

    Holds the caller-level settings (immutable) and applies them to each
    code block passed to transform(). No state is kept between calls.
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        """
        Initialize transform with caller defaults

        Args:
            settings: Frozen AppSettings; the module singleton when omitted
        """
        self.settings = settings or appsettings

    def state_create(self, code: Element, parser: DirectiveParser) -> BlockState:
        """Build the initial BlockState for one code element"""
        return BlockState(
            children=list(code.children),
            directives=parser.parse(),
            verbosity=self.settings.verbosity,
            splitLeaves=self.settings.split_multiline_leaves,
            insertedMarkers=tuple(self.settings.inserted_markers),
            deletedMarkers=tuple(self.settings.deleted_markers),
        )

    def transform(self, node: Node) -> Node:
        """
        Annotate one code block in place

        Args:
            node: pre > code block, or a code element

        Returns:
            The same node, with the code element's children replaced by
            Line Containers unless the directives are a no-op or the node
            has an unexpected shape
        """
        state_connectToLogger(BlockState(verbosity=self.settings.verbosity))

        try:
            code = codeElement_resolve(node)
        except ValueError as error:
            LOG(f"Skipping block: {error}", level=2)
            return node

        parser = DirectiveParser.fromElement(
            code, defaults=self.settings.defaults_asDirectiveTokens()
        )
        state = self.state_create(code, parser)
        state_connectToLogger(state)

        if state.directives.is_noop:
            LOG("No line directives, block left untouched", level=3)
            return node

        LOG(f"Directives resolved: {state.directives}", level=2)
        parser.markers_strip(code)

        final = pipeline(
            state,
            tree_flatten,
            leaves_split,
            leadingBreaks_hoist,
            lines_wrap,
        )
        code.children = final.children
        return node


def transform(node: Node, settings: Optional[AppSettings] = None) -> Node:
    """Annotate one code block with a one-off CodeLines transform"""
    return CodeLines(settings).transform(node)
