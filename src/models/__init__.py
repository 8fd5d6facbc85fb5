"""
Models package for codegutter

Contains data structures and type definitions for the line annotation pipeline.
"""

from .state import BlockState, pipeline
from .directives import DirectiveSet, LineNumbering, LineRange
from .gutter import LogicalLine
from .tree import Text, Element, Comment, Node, text_content

__all__ = [
    "BlockState",
    "pipeline",
    "DirectiveSet",
    "LineNumbering",
    "LineRange",
    "LogicalLine",
    "Text",
    "Element",
    "Comment",
    "Node",
    "text_content",
]
