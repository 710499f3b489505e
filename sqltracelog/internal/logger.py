"""
Logging utilities for internal use.
Usage:
    from sqltracelog.internal.logger import get_logger
    log = get_logger(__name__)

    log.debug("could not dereference %s argument", type(value).__name__)

Internal loggers live under the ``sqltracelog`` namespace and share a rate
limiting filter: a given call site logs at most once every
``SQLTRACELOG_LOGGING_RATE`` seconds (60 by default, 0 disables the limit),
unless the logger is set to DEBUG. The number of skipped records is reported
with the next record that gets through::

    DEBUG could not dereference ObjectProxy argument [3 skipped]

These loggers are for diagnostics of the translator itself. Translated trace
events never go through them.
"""

import collections
import logging
import time
from typing import DefaultDict
from typing import Tuple

from ..settings import config


def get_logger(name: str) -> logging.Logger:
    """
    Retrieve or create a ``Logger`` instance with consistent behavior for internal use.

    Configure all loggers with a rate limiter filter to prevent excessive logging.

    """
    logger = logging.getLogger(name)
    # addFilter will only add the filter if it is not already present
    logger.addFilter(log_filter)
    logger.propagate = True
    return logger


# Class used for keeping track of a log lines current time bucket and the number of log lines skipped
class LoggingBucket:
    def __init__(self, bucket: float, skipped: int):
        self.bucket = bucket
        self.skipped = skipped

    def __repr__(self):
        return f"LoggingBucket({self.bucket}, {self.skipped})"

    def is_sampled(self, record: logging.LogRecord, rate: float) -> bool:
        """
        Determine if the log line should be sampled based on the rate limit.
        """
        current = time.monotonic()
        if current - self.bucket >= rate:
            self.bucket = current
            record.skipped = self.skipped
            self.skipped = 0
            return True
        self.skipped += 1
        return False


_MINF = float("-inf")

_buckets: DefaultDict[Tuple[str, int], LoggingBucket] = collections.defaultdict(lambda: LoggingBucket(_MINF, 0))

_rate_limit = config.logging_rate


def log_filter(record: logging.LogRecord) -> bool:
    """
    Function used to determine if a log record should be outputted or not (True = output, False = skip).

    Records are rate limited per pathname and line number of the log call.
    """
    logger = logging.getLogger(record.name)
    if not _rate_limit or logger.getEffectiveLevel() == logging.DEBUG:
        return True
    return _buckets[(record.pathname, record.lineno)].is_sampled(record, _rate_limit)


class TraceLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        skipped = getattr(record, "skipped", 0)
        if skipped:
            skip_str = f" [{skipped} skipped]"
        else:
            skip_str = ""
        return f"{record.levelname} {super().format(record)}{skip_str}"


# setup the default formatter for all sqltracelog loggers
root_logger = logging.getLogger("sqltracelog")
_handler = logging.StreamHandler()
_handler.setFormatter(TraceLogFormatter())
root_logger.addHandler(_handler)
root_logger.propagate = True
