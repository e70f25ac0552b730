"""
Tests for decorators.py - retry and logging wrappers.
"""

import logging

import pytest
import requests

from aeolus_map.decorators import with_logging, with_retry


def _no_wait_retry(max_attempts=3):
    return with_retry(max_attempts=max_attempts, min_wait=0, max_wait=0)


def test_retry_recovers_from_transient_error():
    """Test that a connection error is retried until it succeeds."""
    calls = []

    @_no_wait_retry()
    def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise requests.ConnectionError("reset")
        return "ok"

    assert flaky() == "ok"
    assert len(calls) == 3


def test_retry_reraises_after_last_attempt():
    """Test that the original exception surfaces once attempts run out."""
    calls = []

    @_no_wait_retry(max_attempts=2)
    def down():
        calls.append(1)
        raise requests.Timeout("slow")

    with pytest.raises(requests.Timeout, match="slow"):
        down()
    assert len(calls) == 2


def test_retry_skips_permanent_errors():
    """Test that non-transient errors are raised straight away."""
    calls = []

    @_no_wait_retry()
    def broken():
        calls.append(1)
        raise ValueError("bad payload")

    with pytest.raises(ValueError):
        broken()
    assert len(calls) == 1


def test_with_logging_preserves_result_and_name(caplog):
    @with_logging("aeolus_map.test")
    def add(a, b):
        return a + b

    with caplog.at_level(logging.DEBUG, logger="aeolus_map.test"):
        assert add(1, 2) == 3

    assert add.__name__ == "add"
    assert "Calling add" in caplog.text
    assert "Completed add" in caplog.text


def test_with_logging_logs_and_reraises(caplog):
    @with_logging("aeolus_map.test")
    def fail():
        raise RuntimeError("nope")

    with caplog.at_level(logging.WARNING, logger="aeolus_map.test"):
        with pytest.raises(RuntimeError, match="nope"):
            fail()

    assert "Error in fail: nope" in caplog.text
