"""
Loguru logging gated by the verbosity of the block being transformed

CodeLines.transform connects its BlockState once; every stage can then call
LOG() without passing the state along.

    state_connectToLogger(state)
    LOG("Wrapped 12 lines", level=2)
"""

from loguru import logger
from typing import Optional
from contextvars import ContextVar
import sys

from ..models.state import BlockState

# Block currently being transformed
_block_state: ContextVar[Optional[BlockState]] = ContextVar('block_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: BlockState) -> None:
    """Make state's verbosity govern LOG() calls in the current context"""
    _block_state.set(state)


def LOG(message: str, level: int = 1) -> None:
    """
    Log message if the connected block's verbosity is at least level.

    Verbosity 0 (the default setting) keeps a transform silent; 2 and
    above add per-stage and per-line detail.
    """
    state = _block_state.get()

    if state is not None and state.verbosity >= level:
        logger.opt(depth=1).debug(message)
