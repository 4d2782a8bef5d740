import logging

import pytest

from monocli.logger_manager import LoggerManager, SafeFileHandler


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    git_logger = logging.getLogger("git")
    handlers, level, git_level = list(root.handlers), root.level, git_logger.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    git_logger.setLevel(git_level)


def test_configures_root_logger(tmp_path):
    manager = LoggerManager("debug", "verbose", logs_dir=tmp_path)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, SafeFileHandler) for h in root.handlers)
    assert manager.log_file.name == "mono.log"


def test_unknown_level_falls_back_to_warning(tmp_path):
    manager = LoggerManager("LOUD", logs_dir=tmp_path)
    assert manager.level == logging.WARNING
    assert logging.getLogger().level == logging.WARNING


def test_git_logger_quiet_unless_debugging(tmp_path):
    LoggerManager("info", logs_dir=tmp_path)
    assert logging.getLogger("git").level == logging.WARNING
    LoggerManager("debug", logs_dir=tmp_path)
    assert logging.getLogger("git").level == logging.DEBUG


def test_second_setup_replaces_own_handlers_only(tmp_path):
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    LoggerManager("info", logs_dir=tmp_path)
    manager = LoggerManager("info", "detailed", logs_dir=tmp_path)
    assert foreign in root.handlers
    assert [h for h in root.handlers if getattr(h, "_monocli", False)] == manager.handlers


def test_unknown_format_uses_default():
    formatter = LoggerManager.formatter("fancy")
    assert formatter._fmt == "%(levelname)s: %(message)s"
