"""
core/logging.py 테스트
"""

import logging
from pathlib import Path
from logging.handlers import TimedRotatingFileHandler

import pytest

from core.constants import Paths
from core.logging import NOISY_LOGGERS, get_log_dir, setup_logging


@pytest.fixture
def restore_root_logger():
    """테스트 후 루트 로거 핸들러/레벨 복원"""
    root = logging.getLogger()
    saved_level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, TimedRotatingFileHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)


class TestGetLogDir:
    """get_log_dir 테스트"""

    def test_web(self) -> None:
        assert get_log_dir("web") == Paths.WEB_LOGS_DIR

    def test_cli(self) -> None:
        assert get_log_dir("cli") == Paths.CLI_LOGS_DIR

    def test_other(self) -> None:
        assert get_log_dir("something") == Paths.LOGS_DIR


class TestSetupLogging:
    """setup_logging 테스트"""

    def test_handlers_installed(self, temp_dir: Path, restore_root_logger) -> None:
        """콘솔 + 일별 파일 핸들러"""
        root = setup_logging("cli", log_dir=temp_dir)

        file_handlers = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(root.handlers) == 2
        assert len(file_handlers) == 1
        assert Path(file_handlers[0].baseFilename) == temp_dir / "cli.log"

    def test_idempotent(self, temp_dir: Path, restore_root_logger) -> None:
        """두 번 호출해도 핸들러 중복 없음"""
        setup_logging("cli", log_dir=temp_dir)
        root = setup_logging("cli", log_dir=temp_dir)

        assert len(root.handlers) == 2

    def test_writes_to_file(self, temp_dir: Path, restore_root_logger) -> None:
        setup_logging("cli", log_dir=temp_dir)
        logging.getLogger("tests.logging").info("hello ledger")

        for handler in logging.getLogger().handlers:
            handler.flush()

        content = (temp_dir / "cli.log").read_text(encoding="utf-8")
        assert "hello ledger" in content
        assert "| INFO     | tests.logging |" in content

    def test_noisy_loggers_quieted(self, temp_dir: Path, restore_root_logger) -> None:
        setup_logging("cli", log_dir=temp_dir)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
