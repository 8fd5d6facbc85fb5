"""
Block state model and pipeline helper

Defines BlockState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from typing import List, Type, TypeVar, Callable
from dataclasses import dataclass, field

from .directives import DirectiveSet
from .tree import Node


BS = TypeVar("BS", bound="BlockState")


@dataclass
class BlockState:
    """
    Central state container for one code block (state bus pattern).

    This dataclass carries the block's child sequence through the functional
    pipeline, each stage returning a new state with rebuilt children.

    Pipeline stages and their state changes:
        - tree_flatten: children flattened to one level
        - leaves_split: multi-line leaves split into per-line leaves
        - leadingBreaks_hoist: leading breaks moved out of the first leaf
        - lines_wrap: children replaced by Line Containers, lineCount set

    Attributes:
        children: Current child sequence of the code element
        directives: Resolved directives for this block
        verbosity: Logging verbosity level (0 = silent)
        splitLeaves: Whether the multi-line leaf splitter runs
        insertedMarkers: Class markers flagging an inserted (diff) line
        deletedMarkers: Class markers flagging a deleted (diff) line
        lineCount: Number of Line Containers emitted
    """

    children: List[Node] = field(default_factory=list)
    directives: DirectiveSet = field(default_factory=DirectiveSet)
    verbosity: int = field(default=0)
    splitLeaves: bool = field(default=True)
    insertedMarkers: tuple = field(default=())
    deletedMarkers: tuple = field(default=())
    lineCount: int = field(default=0)

    def copy(self: BS) -> BS:
        """
        Creates a shallow copy of the BlockState instance.

        Returns:
            A new BlockState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: BlockState, *stages: Callable[[BlockState], BlockState]
) -> BlockState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (BlockState) -> BlockState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting BlockState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final BlockState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            tree_flatten,
            leaves_split,
            leadingBreaks_hoist,
            lines_wrap
        )

    This is equivalent to:
        lines_wrap(leadingBreaks_hoist(leaves_split(tree_flatten(initial_state))))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
