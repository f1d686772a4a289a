"""Unit tests for logger utility."""

import logging
import shutil
import sys
import tempfile
from pathlib import Path
import pytest
from radiowave_sync.utils.logger import get_logger, setup_logger


def _cleanup(name):
    logger = logging.getLogger(name)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def logger_name(request):
    """Unique logger name, cleaned up after the test."""
    name = f"test_{request.node.name}"
    _cleanup(name)
    yield name
    _cleanup(name)


class TestLogger:
    """Test cases for logger utilities."""

    def test_setup_logger_console_only(self, logger_name):
        """Test console handlers split stdout and stderr."""
        logger = setup_logger(logger_name)

        streams = {h.stream for h in logger.handlers if isinstance(h, logging.StreamHandler)}
        assert sys.stdout in streams
        assert sys.stderr in streams
        assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        assert logger.level == logging.INFO

    def test_info_to_stdout_warning_to_stderr(self, logger_name, capsys):
        """Test routing of levels between streams."""
        _cleanup(logger_name)
        logger = get_logger(logger_name)
        logger.propagate = False

        try:
            # Handlers bind the streams at creation, so rebind to capsys
            for handler in logger.handlers:
                if handler.level == logging.INFO:
                    handler.setStream(sys.stdout)
                else:
                    handler.setStream(sys.stderr)

            logger.info("- Added track: Tennis Song")
            logger.warning("- Track not found: Nobody Nothing")

            captured = capsys.readouterr()
            assert "Added track" in captured.out
            assert "Added track" not in captured.err
            assert "Track not found" in captured.err
            assert "Track not found" not in captured.out
        finally:
            logger.propagate = True

    def test_setup_logger_with_file(self, logger_name):
        """Test file handler is added and written."""
        temp_dir = tempfile.mkdtemp()
        log_file = Path(temp_dir) / "nested" / "sync.log"

        try:
            logger = setup_logger(logger_name, str(log_file))

            assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
            assert log_file.parent.exists()

            logger.debug("Debug detail")
            for handler in logger.handlers:
                handler.flush()

            assert "Debug detail" in log_file.read_text(encoding='utf-8')
        finally:
            _cleanup(logger_name)
            shutil.rmtree(temp_dir, ignore_errors=True)

    def test_setup_logger_no_duplicate_handlers(self, logger_name):
        """Test that calling setup_logger twice doesn't create duplicate handlers."""
        logger1 = setup_logger(logger_name)
        handler_count = len(logger1.handlers)

        logger2 = setup_logger(logger_name)

        assert logger1 is logger2
        assert len(logger2.handlers) == handler_count

    def test_setup_logger_adds_file_to_existing_logger(self, logger_name, tmp_path):
        """Test a file handler can be added after console setup."""
        get_logger(logger_name)
        log_file = tmp_path / "late.log"

        logger = setup_logger(logger_name, str(log_file))

        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1

        setup_logger(logger_name, str(log_file))
        assert len([h for h in logger.handlers if isinstance(h, logging.FileHandler)]) == 1

    def test_get_logger_default_name(self):
        """Test the default project logger name."""
        logger = get_logger()

        assert logger.name == "radiowave_sync"
        assert len(logger.handlers) >= 1
