import enum
import logging
from typing import Any
from typing import Optional
from typing import Tuple

from .settings import config


class SeverityLevel(enum.IntEnum):
    """Severity of a driver trace event.

    Values follow the driver's trace levels: the higher the number, the more
    verbose the event.
    """

    TRACE = 6
    DEBUG = 5
    INFO = 4
    WARN = 3
    ERROR = 2
    NONE = 1


_LEVELS = {
    SeverityLevel.DEBUG: logging.DEBUG,
    SeverityLevel.INFO: logging.INFO,
    SeverityLevel.WARN: logging.WARNING,
    SeverityLevel.ERROR: logging.ERROR,
}


def map_severity(severity, severity_key=None):
    # type: (Any, Optional[str]) -> Tuple[int, Optional[Tuple[str, Any]]]
    """Map a driver severity to a ``logging`` level.

    Recognized severities map one to one and return no extra attribute.
    Any other integer ``s`` maps to ``logging.DEBUG - s`` (never below 1), so
    more verbose severities land further below DEBUG. Values that are not
    integers map to DEBUG. In both fallback cases the raw severity is returned
    as an extra ``(key, value)`` attribute.
    """
    # bool is an int subclass but never a driver severity
    if isinstance(severity, int) and not isinstance(severity, bool):
        level = _LEVELS.get(severity)
        if level is not None:
            return level, None
        level = max(logging.DEBUG - int(severity), 1)
    else:
        level = logging.DEBUG

    return level, (severity_key or config.severity_key, severity)
