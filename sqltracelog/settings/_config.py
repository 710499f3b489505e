import logging
import typing as t

from envier import Env


# Attribute names a ``LogRecord`` already carries. ``Logger.makeRecord`` refuses
# an ``extra`` key that overwrites any of them.
RESERVED_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None)).keys() | {"message", "asctime"}
)

DEFAULT_CALLER_DEPTHS = {
    "Query": 6,
    "BatchQuery": 5,
    "BatchClose": 5,
}


def parse_caller_depths(value: t.Union[str, None]) -> t.Dict[str, int]:
    """Parse ``"Query:6,BatchQuery:5"`` into an event name to depth mapping.

    Entries missing the ``:`` separator are ignored.
    """
    if not isinstance(value, str):
        return {}

    depths = {}
    for fragment in value.split(","):
        name, sep, depth = fragment.strip().partition(":")
        if not sep or not name:
            continue
        depths[name.strip()] = int(depth)
    return depths


def validate_group(value: str) -> None:
    if not value:
        raise ValueError("value must not be empty")
    if value in RESERVED_RECORD_ATTRS:
        raise ValueError("value must not be a reserved LogRecord attribute, got %r" % value)


def validate_depth(value: int) -> None:
    if value < 1:
        raise ValueError("caller depth must be positive, got %d" % value)


def validate_depths(value: t.Dict[str, int]) -> None:
    for name, depth in value.items():
        if depth < 1:
            raise ValueError("caller depth for %s must be positive, got %d" % (name, depth))


class TraceLogConfig(Env):
    __prefix__ = "sqltracelog"

    group = Env.var(
        str,
        "group",
        default="query",
        validator=validate_group,
        help="Label of the attribute group attached to every emitted log record",
    )
    operation_key = Env.var(
        str,
        "operation_key",
        default="sql_operation",
        help="Attribute key of the operation name extracted from a ``-- name:`` annotation",
    )
    severity_key = Env.var(
        str,
        "severity_key",
        default="trace_log_level",
        help="Attribute key carrying the raw value of an unrecognized severity",
    )
    logger_name = Env.var(
        str,
        "logger",
        default="",
        help="Name of the default destination logger. The root logger is used when empty",
    )
    sort_keys = Env.var(bool, "sort_keys", default=True)
    caller_depths = Env.var(
        dict,
        "caller_depths",
        parser=parse_caller_depths,
        validator=validate_depths,
        default=DEFAULT_CALLER_DEPTHS,
        help="Stack frames between the driver call site and the logger, per event name",
    )
    default_caller_depth = Env.var(int, "default_caller_depth", validator=validate_depth, default=3)
    logging_rate = Env.var(
        int,
        "logging_rate",
        default=60,
        help="Seconds between two identical internal log lines. 0 disables rate limiting",
    )


config = TraceLogConfig()
