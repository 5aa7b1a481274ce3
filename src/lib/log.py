"""
Verbosity-gated logging through loguru

Every parse call binds its RenderState to a context variable; LOG() reads
the verbosity from whatever state is bound in the current context, so lib
functions never take a state argument just to log. Worker threads and
asyncio tasks each see the state of their own parse.

    token = state_connectToLogger(state)
    LOG("Rendering Markdown body...", level=1)      # stage milestones
    LOG("Fence at line 3: 'render compiled jsx'", level=2)
    LOG("Code block lang='jsx' options={...}", level=3)
    state_disconnectFromLogger(token)

With no bound state (or verbosity 0) LOG() is silent.
"""

from loguru import logger
from typing import Any, Optional, TextIO
from contextvars import ContextVar, Token
import sys

_render_state: ContextVar[Optional[Any]] = ContextVar('render_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{name}:{function}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)


def logger_configure(sink: TextIO = sys.stderr, level: str = "DEBUG") -> int:
    """
    Replace loguru's handlers with a single compact one

    Args:
        sink: Stream receiving formatted records
        level: Minimum loguru level for the sink

    Returns:
        Handler id, usable with logger.remove()
    """
    logger.remove()
    return logger.add(sink, format=logger_format, level=level)


def state_connectToLogger(state: Any) -> Token:
    """
    Bind a RenderState to the current context.

    Args:
        state: Object with a verbosity attribute (normally a RenderState)

    Returns:
        Token for state_disconnectFromLogger()
    """
    return _render_state.set(state)


def state_disconnectFromLogger(token: Token) -> None:
    """Restore whatever state was bound before the matching connect"""
    _render_state.reset(token)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit a debug record when the bound state's verbosity reaches level.

    Args:
        message: Text to log
        level: Required verbosity (1=milestones, 2=details, 3=traces)
        **kwargs: Passed to loguru for message formatting
    """
    state = _render_state.get()
    verbosity = getattr(state, 'verbosity', 0) if state is not None else 0

    if verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)


logger_configure()
