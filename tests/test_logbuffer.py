import logging
import re

import pytest

from ttmonitor.logbuffer import (
    MAX_LOG_MESSAGES,
    clear_log_messages,
    disable_stderr,
    enable_stderr,
    get_log_message_count,
    get_log_messages,
    get_recent_log_messages,
    init_logging_with_buffer,
)


@pytest.fixture
def log():
    init_logging_with_buffer(logging.DEBUG)
    disable_stderr()
    clear_log_messages()
    logger = logging.getLogger("ttmonitor.tests")
    logger.setLevel(logging.DEBUG)
    yield logger
    enable_stderr()


def test_log_buffer(log):
    log.info("Test message 1")
    log.warning("Test message 2")
    log.error("Test message 3")

    messages = get_log_messages()
    assert len(messages) >= 3
    assert any("Test message" in m.message for m in messages)
    assert [m.level for m in messages[-3:]] == ["INFO", "WARNING", "ERROR"]


def test_buffer_limit(log):
    for i in range(MAX_LOG_MESSAGES + 50):
        log.info("Message %d", i)

    assert get_log_message_count() == MAX_LOG_MESSAGES
    messages = get_log_messages()
    assert messages[0].message == "Message 50"
    assert messages[-1].message == f"Message {MAX_LOG_MESSAGES + 49}"


def test_recent_messages(log):
    log.info("Message A")
    log.info("Message B")
    log.info("Message C")

    recent = get_recent_log_messages(2)
    assert len(recent) == 2
    assert "Message B" in recent[0].message
    assert "Message C" in recent[1].message


def test_recent_more_than_available(log):
    log.info("only one")
    recent = get_recent_log_messages(10)
    assert [m.message for m in recent] == ["only one"]


def test_recent_zero_and_negative(log):
    log.info("x")
    assert get_recent_log_messages(0) == []
    with pytest.raises(ValueError):
        get_recent_log_messages(-1)


def test_clear(log):
    log.info("to be cleared")
    clear_log_messages()
    assert get_log_message_count() == 0
    assert get_log_messages() == []


def test_timestamp_format(log):
    log.info("stamped")
    stamp = get_log_messages()[-1].timestamp
    parts = stamp.split(":")
    assert [len(part) for part in parts] == [2, 2, 2]
    assert all(part.isdigit() for part in parts)
    hours, minutes, seconds = (int(part) for part in parts)
    assert 0 <= hours < 24
    assert 0 <= minutes < 60
    assert 0 <= seconds < 60


def test_stderr_toggle(log, capsys):
    log.info("silent line")
    assert "silent line" not in capsys.readouterr().err

    enable_stderr()
    log.info("loud line")
    err = capsys.readouterr().err
    assert re.search(r"\[\d{2}:\d{2}:\d{2}\] INFO - loud line", err)
    assert get_log_messages()[-1].message == "loud line"


def test_init_is_idempotent(log):
    init_logging_with_buffer(logging.ERROR)
    log.info("still captured")
    assert get_log_messages()[-1].message == "still captured"