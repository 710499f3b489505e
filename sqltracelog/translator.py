import contextvars
import logging
import time
from typing import Any
from typing import Callable
from typing import Dict
from typing import Mapping
from typing import Optional
from typing import Tuple

import attr

from .attributes import SQL_KEY
from .attributes import normalize_attributes
from .context import from_context as _from_context
from .settings import config
from .settings._config import validate_depth
from .settings._config import validate_depths
from .settings._config import validate_group
from .severity import map_severity
from .sql import sanitize


@attr.s(frozen=True, slots=True)
class TraceEvent(object):
    """One instrumentation callback of a database driver."""

    name = attr.ib(type=str)
    severity = attr.ib(type=Any)
    attributes = attr.ib(type=Mapping[str, Any], factory=dict)


@attr.s(frozen=True, slots=True)
class NormalizedRecord(object):
    level = attr.ib(type=int)
    message = attr.ib(type=str)
    group = attr.ib(type=str)
    attributes = attr.ib(type=Tuple[Tuple[str, Any], ...], converter=tuple)
    timestamp = attr.ib(type=float, factory=time.time)

    def as_dict(self):
        # type: () -> Dict[str, Any]
        return dict(self.attributes)


class TraceLogger(object):
    """Driver trace hook forwarding events to ``logging``.

    Pass an instance to the driver's instrumentation hook and let it call
    :meth:`log` for every traced action::

        tracer = TraceLogger()
        tracer.log(SeverityLevel.INFO, "Query", {"sql": "SELECT 1", "args": []})

    The record is emitted on the logger bound with
    :func:`sqltracelog.bind_logger` or :func:`sqltracelog.with_context`, or
    on the default logger. ``from_context`` replaces that lookup.

    All attributes of an event are grouped under one ``LogRecord`` attribute
    (``query`` by default), so a formatter can render them with ``%(query)s``.
    """

    def __init__(
        self,
        from_context: Optional[Callable[[Optional[contextvars.Context]], logging.Logger]] = None,
        group: Optional[str] = None,
        operation_key: Optional[str] = None,
        severity_key: Optional[str] = None,
        sort_keys: Optional[bool] = None,
        caller_depths: Optional[Mapping[str, int]] = None,
        default_caller_depth: Optional[int] = None,
    ) -> None:
        self.from_context = from_context
        self.group = config.group if group is None else group
        validate_group(self.group)
        self.operation_key = config.operation_key if operation_key is None else operation_key
        self.severity_key = config.severity_key if severity_key is None else severity_key
        self.sort_keys = config.sort_keys if sort_keys is None else sort_keys
        self.caller_depths = dict(config.caller_depths if caller_depths is None else caller_depths)
        validate_depths(self.caller_depths)
        if default_caller_depth is None:
            default_caller_depth = config.default_caller_depth
        validate_depth(default_caller_depth)
        self.default_caller_depth = default_caller_depth

    def __repr__(self):
        return "{}(group={!r}, operation_key={!r})".format(self.__class__.__name__, self.group, self.operation_key)

    def log(
        self,
        severity: Any,
        message: str,
        data: Optional[Mapping[str, Any]] = None,
        ctx: Optional[contextvars.Context] = None,
    ) -> None:
        """Translate and emit one driver trace event."""
        event = TraceEvent(name=message, severity=severity, attributes=data or {})
        self.dispatch(self.translate(event), ctx=ctx, stacklevel=self.caller_depth(message) + 1)

    def handle(self, event: TraceEvent, ctx: Optional[contextvars.Context] = None) -> None:
        """Translate and emit an already built :class:`TraceEvent`."""
        self.dispatch(self.translate(event), ctx=ctx, stacklevel=self.caller_depth(event.name) + 1)

    def translate(self, event: TraceEvent) -> NormalizedRecord:
        level, extra = map_severity(event.severity, self.severity_key)

        attrs = []
        if extra is not None:
            attrs.append(extra)

        for key, value in normalize_attributes(event.attributes, sort_keys=self.sort_keys):
            if key == SQL_KEY and isinstance(value, str):
                value, operation_name = sanitize(value)
                if operation_name is not None:
                    attrs.append((self.operation_key, operation_name))
            attrs.append((key, value))

        return NormalizedRecord(level=level, message=event.name, group=self.group, attributes=attrs)

    def dispatch(
        self,
        record: NormalizedRecord,
        ctx: Optional[contextvars.Context] = None,
        stacklevel: int = 1,
    ) -> None:
        """Emit ``record`` on the resolved logger.

        ``stacklevel`` counts frames from the caller of this method, like
        ``logging.Logger.log`` does, and only affects the reported source location.
        """
        logger = self.logger(ctx)
        logger.log(
            record.level,
            record.message,
            extra={record.group: record.as_dict()},
            stacklevel=stacklevel + 1,
        )

    def logger(self, ctx: Optional[contextvars.Context] = None) -> logging.Logger:
        if self.from_context is not None:
            return self.from_context(ctx)
        return _from_context(ctx)

    def caller_depth(self, name: str) -> int:
        """Frames between the driver code that triggered ``name`` and :meth:`log`."""
        return self.caller_depths.get(name, self.default_caller_depth)
