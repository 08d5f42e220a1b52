# SPDX-License-Identifier: Apache-2.0
"""
Logging shim: level filtering, callback routing, stderr format.
"""

import logging
import subprocess
import sys
from pathlib import Path

import pytest

from kvcompat.cluster.cluster_base import NativeResultCode
from kvcompat.legacy.logging_shim import (
    LOGGER_NAME,
    VERBOSE,
    LogLevel,
    log,
    reset_logging,
    set_logging,
)
from tests.conftest import NAMESPACE, SET_NAME


@pytest.fixture
def captured():
    messages = []
    set_logging(LogLevel.DEBUG, lambda level, msg: messages.append((level, msg)))
    return messages


def test_callback_receives_level_and_message(captured):
    log(LogLevel.WARN, "disk almost full")
    assert captured == [(LogLevel.WARN, "disk almost full")]


def test_messages_below_threshold_are_dropped():
    messages = []
    set_logging(LogLevel.WARN, lambda level, msg: messages.append((level, msg)))

    log(LogLevel.INFO, "chatty")
    log(LogLevel.DEBUG, "chattier")
    log(LogLevel.ERROR, "bad")

    assert messages == [(LogLevel.ERROR, "bad")]


def test_verbose_level():
    messages = []
    set_logging(LogLevel.VERBOSE, lambda level, msg: messages.append(level))
    log(LogLevel.VERBOSE, "wire dump")
    assert messages == [LogLevel.VERBOSE]
    assert logging.getLevelName(VERBOSE) == "VERBOSE"


def test_package_loggers_flow_through_the_shim(captured):
    logging.getLogger("kvcompat.legacy.client").info("from a module")
    assert (LogLevel.INFO, "from a module") in captured


def test_failed_calls_are_logged_at_debug(captured, client, cluster):
    cluster.fail_next(NativeResultCode.KEY_BUSY)
    client.set_bin(NAMESPACE, SET_NAME, "k", "b", 1)
    assert any(level is LogLevel.DEBUG and "set failed" in msg for level, msg in captured)


def test_set_logging_replaces_previous_handler(captured):
    second = []
    set_logging(LogLevel.INFO, lambda level, msg: second.append(msg))
    log(LogLevel.INFO, "hello")

    assert second == ["hello"]
    assert captured == []
    assert len(logging.getLogger(LOGGER_NAME).handlers) == 1


def test_stderr_output_has_timestamp_and_thread(capsys):
    set_logging(LogLevel.INFO)
    log(LogLevel.INFO, "to stderr")
    err = capsys.readouterr().err
    assert "KVCOMPAT [" in err
    assert err.rstrip().endswith("to stderr")


def test_parse_level_names():
    assert LogLevel.parse("warning") is LogLevel.WARN
    assert LogLevel.parse(" debug ") is LogLevel.DEBUG
    with pytest.raises(ValueError):
        LogLevel.parse("loud")


def test_import_leaves_application_logging_alone():
    code = (
        "import logging, kvcompat\n"
        "logger = logging.getLogger('kvcompat')\n"
        "print(logger.propagate, len(logger.handlers), logger.level)\n"
    )
    out = subprocess.run(
        [sys.executable, "-c", code],
        cwd=str(Path(__file__).resolve().parents[2]),
        capture_output=True,
        text=True,
        check=True,
    ).stdout
    assert out.split() == ["True", "0", "0"]


def test_records_reach_application_handlers_until_configured(caplog, client, cluster):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    cluster.fail_next(NativeResultCode.KEY_BUSY)

    client.set_bin(NAMESPACE, SET_NAME, "k", "b", 1)

    (record,) = [r for r in caplog.records if "set failed" in r.getMessage()]
    assert record.operation == "set"
    assert record.namespace == NAMESPACE
    assert record.component == "legacy_client"


def test_reset_logging_hands_records_back():
    logger = logging.getLogger(LOGGER_NAME)
    set_logging(LogLevel.ERROR, lambda level, msg: None)
    assert logger.propagate is False

    reset_logging()

    assert logger.propagate is True
    assert logger.handlers == []
    assert logger.level == logging.NOTSET
