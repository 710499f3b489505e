"""
Attribute normalization.

Trace event payloads are flat mappings with keys in whatever casing the driver
uses (``"SQLQuery"``, ``"batch size"``, ``"args"``). Keys are rewritten to a
lowercase underscore-separated form, and the query arguments are dereferenced
so proxies and weak references do not show up in log output.
"""

from collections.abc import Mapping
import re
from typing import Any
from typing import List
from typing import Tuple
import weakref

import wrapt

from .internal.logger import get_logger


log = get_logger(__name__)

SQL_KEY = "sql"
ARGS_KEY = "args"

_WHITESPACE_RE = re.compile(r"\s+")
# "SQLQuery" -> "SQL_Query"
_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
# "batchSize" -> "batch_Size", "v2Query" -> "v2_Query"
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")


def normalize_key(key):
    # type: (Any) -> str
    """Return the canonical form of an attribute key.

    >>> normalize_key("SQLQuery")
    'sql_query'
    >>> normalize_key("batch size")
    'batch_size'
    >>> normalize_key("already_snake")
    'already_snake'
    """
    if not isinstance(key, str):
        key = str(key)
    key = _WHITESPACE_RE.sub("_", key.strip())
    key = _ACRONYM_BOUNDARY_RE.sub(r"\1_\2", key)
    key = _CAMEL_BOUNDARY_RE.sub(r"\1_\2", key)
    return key.lower()


def unwrap(value):
    # type: (Any) -> Any
    """Dereference ``value`` once if it is an indirect reference.

    Live weak references resolve to their referent and ``wrapt`` proxies
    resolve to the object they wrap. Dead references, uninitialized proxies and
    plain values are returned unchanged. Attributes of other objects are never
    read, so their ``__getattr__`` hooks do not run.
    """
    if value is None:
        return value

    # isinstance() would look up __class__, which proxies forward to the wrapped object
    value_type = type(value)
    if issubclass(value_type, weakref.ref):
        referent = value()
        return value if referent is None else referent

    if not issubclass(value_type, wrapt.ObjectProxy):
        return value

    try:
        wrapped = value.__wrapped__
    except (AttributeError, ValueError, ReferenceError):
        # uninitialized proxies raise ValueError, weak function proxies to dead objects ReferenceError
        log.debug("could not dereference %s argument", value_type.__name__)
        return value

    if wrapped is None:
        return value
    return wrapped


def normalize_args(args):
    # type: (Any) -> Any
    if isinstance(args, (list, tuple)):
        values = [unwrap(value) for value in args]
        return tuple(values) if isinstance(args, tuple) else values
    if isinstance(args, Mapping):
        return {name: unwrap(value) for name, value in args.items()}
    return args


def normalize_attributes(raw, sort_keys=True):
    # type: (Mapping[Any, Any], bool) -> List[Tuple[str, Any]]
    """Rewrite keys of ``raw`` to their canonical form and dereference ``args``.

    Keys colliding after normalization are all kept, in order.
    """
    if not raw:
        return []

    items = [(normalize_key(key), value) for key, value in raw.items()]  # type: List[Tuple[str, Any]]
    if sort_keys:
        items = sorted(items, key=lambda item: item[0])

    attrs = []
    for key, value in items:
        if key == ARGS_KEY:
            value = normalize_args(value)
        attrs.append((key, value))
    return attrs