"""
Centralized logging using Loguru with context-aware verbosity.

The compiler stages never take a verbosity argument. Instead the CLI binds
its ProgramState to the current context once, and every LOG() call below
that point checks the bound state's verbosity before emitting.

Levels:
    1 = normal progress (default)
    2 = verbose (-v): file paths, token and variable counts
    3 = trace (-vv): per-construct dispatch inside lexer, parser, generator

Usage:
    from lolmark.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Reading source...", level=1)
    LOG("Entering paragraph at line 4", level=3)

Library callers that never connect a state get no output.
"""

import sys
from contextvars import ContextVar
from typing import Any, Optional

from loguru import logger

_program_state: ContextVar[Optional[Any]] = ContextVar('lolmark_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan>:<cyan>{function: <20}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Bind a ProgramState (anything with a `verbosity` attribute) to the
    current logging context.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when nothing is connected"""
    state = _program_state.get()
    return getattr(state, 'verbosity', 0) if state is not None else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=trace)
        **kwargs: Additional loguru format arguments
    """
    if verbosity_get() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
