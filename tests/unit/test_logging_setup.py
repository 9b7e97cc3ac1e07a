"""
Unit tests for logging configuration
"""
import logging
import os

import pytest

from eventvision.core.logging import ERROR_FORMAT, build_file_handler, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestErrorLog:
    @pytest.mark.unit
    def test_error_file_keeps_traceback(self, tmp_path):
        handler = build_file_handler(tmp_path / "api_errors.log", logging.ERROR, ERROR_FORMAT)
        logger = logging.getLogger("eventvision.tests.error_log")
        logger.addHandler(handler)
        logger.propagate = False
        try:
            try:
                raise ValueError("analysis call failed")
            except ValueError:
                logger.error("Blueprint generation failed", exc_info=True)
            logger.warning("not written")
        finally:
            logger.removeHandler(handler)
            logger.propagate = True
            handler.close()

        content = (tmp_path / "api_errors.log").read_text()
        assert "Blueprint generation failed" in content
        assert "Traceback (most recent call last)" in content
        assert "ValueError: analysis call failed" in content
        assert "not written" not in content


class TestSetupLogging:
    @pytest.mark.unit
    def test_production_adds_file_handlers(self, tmp_path, restore_root_logger):
        setup_logging(environment="production", log_dir=str(tmp_path / "logs"))

        handlers = restore_root_logger.handlers
        files = sorted(os.path.basename(h.baseFilename) for h in handlers if hasattr(h, "baseFilename"))
        assert files == ["api.log", "api_errors.log"]

    @pytest.mark.unit
    def test_development_logs_to_console_only(self, restore_root_logger):
        setup_logging(environment="development")

        assert not any(hasattr(h, "baseFilename") for h in restore_root_logger.handlers)
        assert logging.getLogger("google_genai").level == logging.WARNING
