"""
Scoping of the destination logger.

A logger bound to the current execution context receives every event
translated in that context. Threads and asyncio tasks get their own binding
since it is held in a ``contextvars.ContextVar``::

    from sqltracelog import bind_logger

    with bind_logger(logging.getLogger("orders.db")):
        await conn.fetch("SELECT 1")

Without a binding, events go to the process-wide default logger, named by
``SQLTRACELOG_LOGGER`` (the root logger when unset).
"""

import contextlib
import contextvars
import logging
from typing import Iterator
from typing import Optional

from .settings import config


_LOGGER_CONTEXTVAR: contextvars.ContextVar[Optional[logging.Logger]] = contextvars.ContextVar(
    "sqltracelog_logger", default=None
)

_default_logger = logging.getLogger(config.logger_name or None)


def default_logger() -> logging.Logger:
    """Return the process-wide default destination logger."""
    return _default_logger


def from_context(ctx: Optional[contextvars.Context] = None) -> logging.Logger:
    """Return the logger bound in ``ctx``, or in the current context when ``ctx`` is None.

    Falls back to :func:`default_logger`.
    """
    if ctx is None:
        logger = _LOGGER_CONTEXTVAR.get()
    else:
        logger = ctx.get(_LOGGER_CONTEXTVAR)

    if logger is None:
        return _default_logger
    return logger


def with_context(logger: logging.Logger, ctx: Optional[contextvars.Context] = None) -> contextvars.Context:
    """Return a copy of ``ctx`` (or of the current context) with ``logger`` bound.

    The given context is left untouched. Run code in the returned one with
    ``Context.run``.
    """
    if ctx is None:
        ctx = contextvars.copy_context()
    else:
        ctx = ctx.copy()
    ctx.run(_LOGGER_CONTEXTVAR.set, logger)
    return ctx


@contextlib.contextmanager
def bind_logger(logger: logging.Logger) -> Iterator[logging.Logger]:
    """Bind ``logger`` in the current context for the duration of the block."""
    token = _LOGGER_CONTEXTVAR.set(logger)
    try:
        yield logger
    finally:
        _LOGGER_CONTEXTVAR.reset(token)
