"""
codegutter - Line numbering and highlighting for highlighted code trees

Post-processes a syntax-highlighted code block into numbered, highlightable
line containers driven by directives in the info string or block markup.
"""

__version__ = "1.0.0"

from .lib import DirectiveParser, Gutter, CodeLines, transform, LOG, state_connectToLogger
from .config import appsettings, AppSettings

__all__ = [
    "DirectiveParser",
    "Gutter",
    "CodeLines",
    "transform",
    "LOG",
    "state_connectToLogger",
    "appsettings",
    "AppSettings",
    "__version__",
]
