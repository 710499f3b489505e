import pytest

import sqltracelog.internal.logger
from tests.utils import recording_logger


@pytest.fixture(autouse=True)
def reset_internal_logger_buckets():
    sqltracelog.internal.logger._buckets.clear()
    yield
    sqltracelog.internal.logger._buckets.clear()


@pytest.fixture
def recorder():
    """A logger accepting every level and the list of records it handled."""
    with recording_logger() as (logger, handler):
        yield logger, handler.records


@pytest.fixture
def sink(recorder):
    """A logger bound in the current context for the duration of the test."""
    logger, records = recorder
    with sqltracelog.bind_logger(logger):
        yield records

