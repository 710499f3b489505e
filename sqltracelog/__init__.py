"""
Structured logging of database driver trace events.

``TraceLogger`` plugs into a driver's instrumentation hook and turns each
trace event into a ``logging`` record: the driver severity becomes a log
level, attribute keys are normalized, query arguments are dereferenced and SQL
text is stripped of comments. A ``-- name: <operation>`` annotation is reported
as its own attribute::

    import logging

    from sqltracelog import SeverityLevel
    from sqltracelog import TraceLogger
    from sqltracelog import bind_logger

    tracer = TraceLogger()
    with bind_logger(logging.getLogger("orders.db")):
        tracer.log(SeverityLevel.INFO, "Query", {"sql": "-- name: list_orders\nSELECT * FROM orders"})
"""

from .attributes import normalize_attributes
from .attributes import normalize_key
from .context import bind_logger
from .context import default_logger
from .context import from_context
from .context import with_context
from .settings import config
from .severity import SeverityLevel
from .severity import map_severity
from .sql import NAME_RE
from .sql import sanitize
from .sql import trim_query
from .translator import NormalizedRecord
from .translator import TraceEvent
from .translator import TraceLogger
from .version import __version__


__all__ = [
    "config",
    "bind_logger",
    "default_logger",
    "from_context",
    "with_context",
    "SeverityLevel",
    "map_severity",
    "NAME_RE",
    "sanitize",
    "trim_query",
    "normalize_attributes",
    "normalize_key",
    "NormalizedRecord",
    "TraceEvent",
    "TraceLogger",
    "__version__",
]
