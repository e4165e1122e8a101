"""
Unit tests for webaudit/core/logging_config.py.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from webaudit.core.logging_config import (
    get_logger,
    log_file_for,
    reset_logging,
    setup_pipeline_logging,
)

WHEN = datetime(2026, 10, 19, 8, 0, 0)


class TestGetLogger:
    def test_package_module_kept_as_is(self):
        assert get_logger("webaudit.checks").name == "webaudit.checks"

    def test_foreign_name_nested_under_root(self):
        assert get_logger("scripts.adhoc").name == "webaudit.scripts.adhoc"


class TestLogFileFor:
    def test_name_and_directory(self):
        path = log_file_for("Logs", "audit_example.com", WHEN)
        assert path == Path("Logs") / "audit_example.com_20261019_080000.log"

    def test_unsafe_characters_collapsed(self):
        path = log_file_for("Logs", "audit_shop.example.com:8080/x", WHEN)
        assert path.name == "audit_shop.example.com_8080_x_20261019_080000.log"

    def test_empty_run_name(self):
        assert log_file_for("Logs", "::", WHEN).name == "audit_20261019_080000.log"


class TestSetupPipelineLogging:
    def test_stdout_and_file_handlers(self, tmp_path):
        root = setup_pipeline_logging(log_dir=tmp_path / "logs", run_name="audit_example.com")
        kinds = sorted(type(h).__name__ for h in root.handlers)
        assert kinds == ["FileHandler", "StreamHandler"]
        files = list((tmp_path / "logs").glob("audit_example.com_*.log"))
        assert len(files) == 1

    def test_console_only(self, tmp_path):
        root = setup_pipeline_logging(log_dir=None)
        assert [type(h).__name__ for h in root.handlers] == ["StreamHandler"]

    def test_second_call_does_not_stack_handlers(self, tmp_path):
        setup_pipeline_logging(log_dir=tmp_path)
        root = setup_pipeline_logging(log_dir=tmp_path)
        assert len(root.handlers) == 2

    def test_file_records_debug(self, tmp_path):
        setup_pipeline_logging(log_dir=tmp_path, run_name="run")
        get_logger("webaudit.checks").debug("SEO: title ok")
        reset_logging()
        (log_file,) = tmp_path.glob("run_*.log")
        assert "SEO: title ok" in log_file.read_text(encoding="utf-8")

    def test_transport_loggers_quietened(self, tmp_path):
        setup_pipeline_logging(log_dir=None)
        assert logging.getLogger("urllib3").level == logging.WARNING
        assert logging.getLogger("openai").level == logging.WARNING

    def test_reset_removes_handlers(self, tmp_path):
        setup_pipeline_logging(log_dir=tmp_path)
        reset_logging()
        assert logging.getLogger("webaudit").handlers == []
