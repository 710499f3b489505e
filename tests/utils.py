import contextlib
import logging
import os
from typing import List  # noqa:F401
import unittest

from sqltracelog import config as trace_log_config


@contextlib.contextmanager
def override_env(env, replace_os_env=False):
    """
    Temporarily override ``os.environ`` with provided values::

        >>> with self.override_env(dict(SQLTRACELOG_GROUP="db")):
            # Your test
    """
    # Copy the full original environment
    original = dict(os.environ)

    # We allow callers to clear out the environment to prevent leaking variables into the test
    if replace_os_env:
        os.environ.clear()

    for k in list(os.environ.keys()):
        if k.startswith("SQLTRACELOG_"):
            del os.environ[k]

    # Update based on the passed in arguments
    os.environ.update(env)
    try:
        yield
    finally:
        # Full clear the environment out and reset back to the original
        os.environ.clear()
        os.environ.update(original)


@contextlib.contextmanager
def override_config(values):
    """
    Temporarily override the global configuration::

        >>> with self.override_config(dict(group="db")):
            # Your test
    """
    originals = dict((key, getattr(trace_log_config, key)) for key in values.keys())

    for key, value in values.items():
        setattr(trace_log_config, key, value)
    try:
        yield
    finally:
        for key, value in originals.items():
            setattr(trace_log_config, key, value)


class RecordingHandler(logging.Handler):
    """Handler keeping every record it receives."""

    def __init__(self):
        super(RecordingHandler, self).__init__(level=logging.NOTSET)
        self.records = []  # type: List[logging.LogRecord]

    def emit(self, record):
        self.records.append(record)


@contextlib.contextmanager
def recording_logger(name="tests.sqltracelog"):
    """Yield a logger accepting every level along with the handler recording its output."""
    logger = logging.getLogger(name)
    handler = RecordingHandler()
    original_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(1)
    try:
        yield logger, handler
    finally:
        logger.removeHandler(handler)
        logger.setLevel(original_level)


class BaseTestCase(unittest.TestCase):
    """
    BaseTestCase extends ``unittest.TestCase`` to provide some useful helpers

    Example::

        from tests.utils import BaseTestCase


        class MyTestCase(BaseTestCase):
            def test_case(self):
                with self.override_config(dict(group="db")):
                    pass
    """

    override_env = staticmethod(override_env)
    override_config = staticmethod(override_config)
    recording_logger = staticmethod(recording_logger)
