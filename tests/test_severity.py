import logging

from hypothesis import given
from hypothesis import strategies as st
import pytest

from sqltracelog.severity import SeverityLevel
from sqltracelog.severity import map_severity


@pytest.mark.parametrize(
    "severity, level",
    [
        (SeverityLevel.DEBUG, logging.DEBUG),
        (SeverityLevel.INFO, logging.INFO),
        (SeverityLevel.WARN, logging.WARNING),
        (SeverityLevel.ERROR, logging.ERROR),
        # plain integers with the same value are recognized too
        (5, logging.DEBUG),
        (2, logging.ERROR),
    ],
)
def test_known_severities(severity, level):
    assert map_severity(severity) == (level, None)


def test_trace_falls_below_debug():
    level, extra = map_severity(SeverityLevel.TRACE)

    assert level == logging.DEBUG - 6
    assert 0 < level < logging.DEBUG
    assert extra == ("trace_log_level", SeverityLevel.TRACE)


def test_unknown_severity_keeps_raw_value():
    level, extra = map_severity(7)

    assert level == logging.DEBUG - 7
    assert extra == ("trace_log_level", 7)


def test_unknown_severity_custom_key():
    _, extra = map_severity(SeverityLevel.NONE, "driver_level")

    assert extra == ("driver_level", SeverityLevel.NONE)


def test_unknown_severity_order_is_preserved():
    levels = [map_severity(s)[0] for s in (6, 7, 8)]

    assert levels == sorted(levels, reverse=True)


def test_level_is_never_notset():
    assert map_severity(100)[0] == 1
    assert map_severity(-100)[0] == logging.DEBUG + 100


@pytest.mark.parametrize("severity", ["warn", None, 1.5, True, object()])
def test_non_integer_severity(severity):
    level, extra = map_severity(severity)

    assert level == logging.DEBUG
    assert extra[1] is severity


@given(severity=st.one_of(st.integers(), st.text(), st.none(), st.floats(), st.booleans()))
def test_map_severity_is_total(severity):
    level, extra = map_severity(severity)

    assert isinstance(level, int)
    assert level > logging.NOTSET
    if extra is not None:
        assert extra[1] is severity
