"""Tests for logger.py -- setup_logging() and JsonFormatter.

Covers:
- CLI mode logging (stderr handler)
- Quiet mode logging (file only)
- Debug level override
- Environment variable LOG_LEVEL handling
- JSON formatter output
- Third-party logger silencing

Strategy: Mock logging.basicConfig to verify setup_logging passes correct args,
since pytest's log capture plugin interferes with actual basicConfig calls.
"""

import json
import logging
import sys
from unittest.mock import patch

from claude_sync.logger import JsonFormatter, setup_logging

# ---------------------------------------------------------------------------
# setup_logging tests
# ---------------------------------------------------------------------------


class TestSetupLogging:
    """Tests for setup_logging()."""

    @patch("claude_sync.logger.logging.basicConfig")
    def test_cli_mode_logs_to_stderr(self, mock_basic):
        """CLI mode passes StreamHandler(stderr) to basicConfig."""
        setup_logging(mode="cli")

        mock_basic.assert_called_once()
        handlers = mock_basic.call_args[1]["handlers"]
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert handlers[0].stream is sys.stderr

    @patch("claude_sync.logger.logging.basicConfig")
    def test_quiet_mode_logs_to_file(self, mock_basic, tmp_path):
        """Quiet mode passes filename to basicConfig."""
        log_file = str(tmp_path / "sync.log")
        setup_logging(mode="quiet", log_file=log_file)

        kwargs = mock_basic.call_args[1]
        assert kwargs["filename"] == log_file
        assert "handlers" not in kwargs

    @patch("claude_sync.logger.logging.basicConfig")
    def test_quiet_mode_default_log_file(self, mock_basic):
        setup_logging(mode="quiet")
        assert mock_basic.call_args[1]["filename"] == "/tmp/claude-sync.log"

    @patch("claude_sync.logger.logging.basicConfig")
    def test_quiet_mode_log_file_env(self, mock_basic, monkeypatch, tmp_path):
        monkeypatch.setenv("LOG_FILE", str(tmp_path / "env.log"))
        setup_logging(mode="quiet")
        assert mock_basic.call_args[1]["filename"] == str(tmp_path / "env.log")

    @patch("claude_sync.logger.logging.basicConfig")
    def test_debug_overrides_level(self, mock_basic):
        setup_logging(mode="cli", debug=True)
        assert mock_basic.call_args[1]["level"] == logging.DEBUG

    @patch("claude_sync.logger.logging.basicConfig")
    def test_env_log_level_honored(self, mock_basic, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        setup_logging(mode="cli")
        assert mock_basic.call_args[1]["level"] == logging.ERROR

    @patch("claude_sync.logger.logging.basicConfig")
    def test_debug_beats_env(self, mock_basic, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        setup_logging(mode="cli", debug=True)
        assert mock_basic.call_args[1]["level"] == logging.DEBUG

    @patch("claude_sync.logger.logging.basicConfig")
    def test_config_level_used_when_env_unset(self, mock_basic):
        setup_logging(mode="quiet", level="debug")
        assert mock_basic.call_args[1]["level"] == logging.DEBUG

    @patch("claude_sync.logger.logging.basicConfig")
    def test_env_level_beats_config_level(self, mock_basic, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        setup_logging(mode="cli", level="DEBUG")
        assert mock_basic.call_args[1]["level"] == logging.ERROR

    @patch("claude_sync.logger.logging.basicConfig")
    def test_default_levels(self, mock_basic):
        setup_logging(mode="cli")
        assert mock_basic.call_args[1]["level"] == logging.INFO

        setup_logging(mode="quiet")
        assert mock_basic.call_args[1]["level"] == logging.WARNING

    @patch("claude_sync.logger.logging.basicConfig")
    def test_cli_mode_with_log_file(self, mock_basic, tmp_path):
        """CLI mode with log_file creates both stderr and file handlers."""
        setup_logging(mode="cli", log_file=str(tmp_path / "cli.log"))

        handlers = mock_basic.call_args[1]["handlers"]
        file_handlers = [
            h for h in handlers if isinstance(h, logging.FileHandler)
        ]
        assert len(handlers) == 2
        assert len(file_handlers) == 1
        for h in file_handlers:
            h.close()

    @patch("claude_sync.logger.logging.basicConfig")
    def test_json_format_uses_json_formatter(self, mock_basic):
        setup_logging(mode="cli", debug_format="json")

        handlers = mock_basic.call_args[1]["handlers"]
        assert all(isinstance(h.formatter, JsonFormatter) for h in handlers)

    @patch("claude_sync.logger.logging.basicConfig")
    def test_third_party_silenced(self, _mock_basic):
        setup_logging(mode="cli")
        assert logging.getLogger("charset_normalizer").level == logging.WARNING


# ---------------------------------------------------------------------------
# JsonFormatter tests
# ---------------------------------------------------------------------------


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, **kwargs) -> logging.LogRecord:
        defaults = dict(
            name="claude_sync.test",
            level=logging.INFO,
            pathname="test.py",
            lineno=1,
            msg="Reconciled %d fragments",
            args=(3,),
            exc_info=None,
        )
        defaults.update(kwargs)
        return logging.LogRecord(**defaults)

    def test_basic_output(self):
        formatter = JsonFormatter(datefmt="%Y-%m-%d %H:%M:%S")
        data = json.loads(formatter.format(self._record()))

        assert "ts" in data
        assert data["level"] == "INFO"
        assert data["logger"] == "claude_sync.test"
        assert data["msg"] == "Reconciled 3 fragments"

    def test_includes_exception(self):
        formatter = JsonFormatter()
        try:
            raise ValueError("boom")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(
            formatter.format(self._record(level=logging.ERROR, exc_info=exc_info))
        )

        assert "ValueError" in data["exc"]
        assert "boom" in data["exc"]

    def test_single_line_output(self):
        output = JsonFormatter().format(self._record(msg="line\nbreak", args=()))
        assert "\n" not in output
        assert json.loads(output)["msg"] == "line\nbreak"
