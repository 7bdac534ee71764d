"""Unit tests for clinicflow logging configuration."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

import clinicflow
from clinicflow.config import ClinicConfig
from clinicflow.engine.batch import BatchEngine
from clinicflow.logging_config import LOGGER_NAME, JsonFormatter, _get_level, _get_logger


def non_null_handlers() -> list[logging.Handler]:
    return [h for h in _get_logger().handlers if not isinstance(h, logging.NullHandler)]


class TestSilentByDefault:
    def test_has_null_handler(self):
        logger = logging.getLogger(LOGGER_NAME)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_simulation_run_prints_nothing(self, capfd):
        BatchEngine(ClinicConfig(duration_minutes=60.0), seed=1).run()

        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestConsoleLogging:
    def test_engine_messages_reach_stderr(self, capfd):
        clinicflow.enable_console_logging(level="INFO")

        BatchEngine(ClinicConfig(duration_minutes=60.0), seed=1).run()

        captured = capfd.readouterr()
        assert "Batch run finished" in captured.err

    def test_level_is_applied(self):
        clinicflow.enable_console_logging(level="DEBUG")
        assert _get_logger().level == logging.DEBUG

    def test_custom_format(self, capfd):
        clinicflow.enable_console_logging(level="INFO", format="<%(levelname)s> %(message)s")
        logging.getLogger(f"{LOGGER_NAME}.engine").info("ready")

        assert "<INFO> ready" in capfd.readouterr().err

    def test_config_rejection_is_logged(self, capfd):
        clinicflow.enable_console_logging(level="ERROR")
        with pytest.raises(clinicflow.InvalidConfigurationError):
            ClinicConfig(num_nurses=0)

        assert "Rejected configuration" in capfd.readouterr().err


class TestFileLogging:
    def test_rotating_handler_settings(self, tmp_path):
        handler = clinicflow.enable_file_logging(tmp_path / "logs" / "run.log", max_bytes=2048, backup_count=2)

        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 2048
        assert handler.backupCount == 2
        assert (tmp_path / "logs").is_dir()

    def test_writes_records(self, tmp_path):
        log_file = tmp_path / "run.log"
        clinicflow.enable_file_logging(log_file, level="INFO")

        logging.getLogger(f"{LOGGER_NAME}.engine.batch").info("written to disk")
        for handler in _get_logger().handlers:
            handler.flush()

        assert "written to disk" in log_file.read_text()

    def test_json_file(self, tmp_path):
        log_file = tmp_path / "run.jsonl"
        clinicflow.enable_json_file_logging(log_file, level="INFO")

        logging.getLogger(f"{LOGGER_NAME}.analysis").info("one line")
        for handler in _get_logger().handlers:
            handler.flush()

        data = json.loads(log_file.read_text().strip())
        assert data["message"] == "one line"
        assert data["logger"] == f"{LOGGER_NAME}.analysis"


class TestJsonLogging:
    def test_emits_json_lines(self, capfd):
        clinicflow.enable_json_logging(level="INFO")
        logging.getLogger(f"{LOGGER_NAME}.test").warning("queue growing")

        data = json.loads(capfd.readouterr().err.strip())
        assert data["message"] == "queue growing"
        assert data["level"] == "WARNING"
        assert "timestamp" in data

    def test_patient_exits_carry_sim_time(self, capfd, deterministic_variates):
        clinicflow.enable_json_logging(level="DEBUG")
        # One joint arrival at t=5; the standard patient leaves at 5 + 13 + 48.
        BatchEngine(ClinicConfig(duration_minutes=6.0), variates=deterministic_variates(5.0)).run()

        records = [json.loads(line) for line in capfd.readouterr().err.splitlines()]
        exits = [r for r in records if "exited" in r["message"]]
        assert len(exits) == 2
        assert all(r["sim_time"] > 5.0 for r in exits)
        assert 66.0 in [r["sim_time"] for r in exits]

    def test_formatter_includes_sim_time_and_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys

            exc_info = sys.exc_info()

        record = logging.LogRecord(
            name="clinicflow.engine.realtime",
            level=logging.ERROR,
            pathname=__file__,
            lineno=1,
            msg="tick failed",
            args=(),
            exc_info=exc_info,
        )
        record.sim_time = 42.5

        data = json.loads(JsonFormatter().format(record))
        assert data["sim_time"] == 42.5
        assert "RuntimeError" in data["exception"]


class TestConfigureFromEnv:
    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("CF_LOGGING", "debug")
        monkeypatch.delenv("CF_LOG_FILE", raising=False)
        monkeypatch.delenv("CF_LOG_JSON", raising=False)

        clinicflow.configure_from_env()

        assert _get_logger().level == logging.DEBUG
        assert len(non_null_handlers()) == 1

    def test_file_from_env(self, monkeypatch, tmp_path):
        monkeypatch.delenv("CF_LOGGING", raising=False)
        monkeypatch.setenv("CF_LOG_FILE", str(tmp_path / "env.log"))
        monkeypatch.delenv("CF_LOG_JSON", raising=False)

        clinicflow.configure_from_env()

        handlers = non_null_handlers()
        assert len(handlers) == 1
        assert isinstance(handlers[0], RotatingFileHandler)
        assert _get_logger().level == logging.INFO

    def test_json_from_env(self, monkeypatch, capfd):
        monkeypatch.setenv("CF_LOGGING", "INFO")
        monkeypatch.delenv("CF_LOG_FILE", raising=False)
        monkeypatch.setenv("CF_LOG_JSON", "1")

        clinicflow.configure_from_env()
        logging.getLogger(f"{LOGGER_NAME}.test").info("from env")

        assert json.loads(capfd.readouterr().err.strip())["message"] == "from env"

    def test_nothing_set_adds_nothing(self, monkeypatch):
        for name in ("CF_LOGGING", "CF_LOG_FILE", "CF_LOG_JSON"):
            monkeypatch.delenv(name, raising=False)

        clinicflow.configure_from_env()

        assert non_null_handlers() == []


class TestLevels:
    def test_set_level(self):
        clinicflow.set_level("WARNING")
        assert _get_logger().level == logging.WARNING
        clinicflow.set_level(logging.ERROR)
        assert _get_logger().level == logging.ERROR

    def test_module_level_filters_independently(self, capfd):
        clinicflow.enable_console_logging(level="DEBUG")
        clinicflow.set_module_level("engine.realtime", "CRITICAL")

        logging.getLogger(f"{LOGGER_NAME}.engine.realtime").warning("hidden")
        logging.getLogger(f"{LOGGER_NAME}.engine.batch").debug("shown")

        err = capfd.readouterr().err
        assert "hidden" not in err
        assert "shown" in err
        logging.getLogger(f"{LOGGER_NAME}.engine.realtime").setLevel(logging.NOTSET)

    def test_get_level(self):
        assert _get_level("info") == logging.INFO
        assert _get_level(logging.DEBUG) == logging.DEBUG
        assert _get_level("NOPE") == logging.INFO


class TestDisableLogging:
    def test_silences_and_removes_handlers(self, capfd, tmp_path):
        clinicflow.enable_console_logging(level="DEBUG")
        clinicflow.enable_file_logging(tmp_path / "run.log")

        clinicflow.disable_logging()
        logging.getLogger(f"{LOGGER_NAME}.test").critical("should not appear")

        assert "should not appear" not in capfd.readouterr().err
        assert non_null_handlers() == []
