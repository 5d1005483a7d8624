from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener setup, idempotent configuration, file output
with rotation, and that foreign handlers are left alone.
"""

import logging
import time
from logging.handlers import QueueListener
from pathlib import Path

import pytest

from docweave.infra.logging import (
    _CONFIGURED_FLAG_ATTR,
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
)


def _reset_root() -> None:
    root = logging.getLogger()

    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if isinstance(listener, QueueListener):
        listener.stop()
        setattr(root, _QUEUE_LISTENER_ATTR, None)

    for h in list(root.handlers):
        if getattr(h, _HANDLER_TAG_ATTR, False):
            root.removeHandler(h)
            h.close()

    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove our handlers and listener before and after each test."""
    _reset_root()
    yield
    _reset_root()


def _flush() -> None:
    listener = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR, None)
    if isinstance(listener, QueueListener):
        listener.stop()
        for handler in listener.handlers:
            handler.close()
        setattr(logging.getLogger(), _QUEUE_LISTENER_ATTR, None)


def test_configure_is_idempotent() -> None:
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    root = logging.getLogger()
    ours = [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]

    configure_logging(cfg)
    assert [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)] == ours
    assert len(ours) == 1


def test_force_reconfigures_level() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    configure_logging(LoggingConfig(level="DEBUG"), force=True)

    assert logging.getLogger().level == logging.DEBUG


def test_unknown_level_falls_back_to_info() -> None:
    configure_logging(LoggingConfig(level="chatty"))

    assert logging.getLogger().level == logging.INFO


def test_queue_listener_is_installed() -> None:
    configure_logging(LoggingConfig(level="INFO", console=True))

    root = logging.getLogger()
    assert isinstance(getattr(root, _QUEUE_LISTENER_ATTR), QueueListener)
    assert getattr(root, _CONFIGURED_FLAG_ATTR) is True


def test_log_file_receives_records(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "docweave.log"
    configure_logging(LoggingConfig(level="DEBUG", console=False, log_file=str(log_file)))

    logging.getLogger("docweave.test").debug("resolver ready")
    _flush()

    content = log_file.read_text(encoding="utf-8")
    assert "DEBUG    docweave.test: resolver ready" in content


def test_log_rotation(tmp_path: Path) -> None:
    log_file = tmp_path / "rotate.log"
    configure_logging(LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    ))

    logger = logging.getLogger("docweave.rotate")
    for _ in range(10):
        logger.debug("A long message that forces the file handler to roll over. " * 3)

    _flush()
    time.sleep(0.1)

    assert log_file.exists()
    assert (tmp_path / "rotate.log.1").exists()


def test_foreign_handlers_survive_reconfiguration() -> None:
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    try:
        configure_logging(LoggingConfig(level="INFO"))
        configure_logging(LoggingConfig(level="INFO"), force=True)

        assert foreign in root.handlers
    finally:
        root.removeHandler(foreign)
