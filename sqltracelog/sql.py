import re
from typing import Optional
from typing import Tuple


# A ``-- name: <operation>`` annotation line, as written by sqlc-style query files.
NAME_RE = re.compile(r"^\s*--\s*name:\s+(\w+)")

COMMENT_MARKER = "--"


def sanitize(query):
    # type: (str) -> Tuple[str, Optional[str]]
    """Strip comments from ``query`` and extract its operation name.

    The first ``-- name: <operation>`` line gives the operation name. Every
    comment is removed, whole line or trailing, and the remaining non-empty
    lines are stripped and joined with a single space::

        >>> sanitize("-- name: get_customer\\nSELECT * FROM customer -- by id")
        ('SELECT * FROM customer', 'get_customer')

    Sanitizing an already sanitized query returns it unchanged.
    """
    operation_name = None
    lines = []
    for line in query.splitlines():
        if operation_name is None:
            match = NAME_RE.match(line)
            if match:
                operation_name = match.group(1)
                continue

        line = line.split(COMMENT_MARKER, 1)[0].strip()
        if line:
            lines.append(line)

    return " ".join(lines), operation_name


def trim_query(query):
    # type: (str) -> str
    """Return ``query`` without its comments."""
    return sanitize(query)[0]
