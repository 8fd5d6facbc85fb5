"""
codegutter - Line numbering and highlighting for highlighted code trees

Splits syntax-highlighted code blocks into addressable line containers.
"""

__version__ = "1.0.0"

from .directives import DirectiveParser
from .gutter import Gutter
from .codelines import CodeLines, transform
from .log import LOG, state_connectToLogger

__all__ = [
    "DirectiveParser",
    "Gutter",
    "CodeLines",
    "transform",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
