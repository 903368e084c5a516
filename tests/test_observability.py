"""
Tests for logging configuration.
"""

import logging

import pytest

from lazyboot.core.observability.logging_config import TaggedFormatter, setup_logging, tag


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(level: int, msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("lazyboot.test", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestTaggedFormatter:
    def test_level_tags(self):
        fmt = TaggedFormatter("[%(tag)s] %(message)s")
        assert fmt.format(_record(logging.INFO, "hello")) == "[INFO] hello"
        assert fmt.format(_record(logging.WARNING, "careful")) == "[WARN] careful"
        assert fmt.format(_record(logging.ERROR, "broken")) == "[ERROR] broken"

    def test_explicit_tag(self):
        fmt = TaggedFormatter("[%(tag)s] %(message)s")
        assert fmt.format(_record(logging.INFO, "copied", **tag("BACKUP"))) == "[BACKUP] copied"


class TestSetupLogging:
    def test_console_level(self, restore_root):
        setup_logging(level="WARNING")
        assert restore_root.level == logging.WARNING
        assert len(restore_root.handlers) == 1

    def test_invalid_level_defaults_to_info(self, restore_root):
        setup_logging(level="LOUD")
        assert restore_root.level == logging.INFO

    def test_file_handler(self, restore_root, tmp_path):
        log_file = tmp_path / "lazyboot.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        assert restore_root.level == logging.DEBUG

        logging.getLogger("lazyboot.test").debug("into the file", extra=tag("CONFIG"))
        for handler in restore_root.handlers:
            handler.flush()
        content = log_file.read_text()
        assert "[CONFIG]" in content
        assert "into the file" in content
        for handler in restore_root.handlers:
            handler.close()

    def test_leaves_other_loggers_alone(self, restore_root):
        other = logging.getLogger("urllib3")
        other.setLevel(logging.NOTSET)
        setup_logging(level="INFO")
        assert other.level == logging.NOTSET
        assert other.getEffectiveLevel() == logging.INFO
