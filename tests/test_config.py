"""
Tests for configuration and logging setup
"""

import json
import logging

import pytest
from pydantic import ValidationError

from banking import config as config_module
from banking.config import BankConfig, get_config, reload_config
from banking.logging_config import (
    JSONFormatter, log_action, setup_logging, setup_logging_from_config
)


class TestBankConfig:

    def test_defaults(self, monkeypatch):
        for name in ("BANK_LOG_LEVEL", "BANK_LOG_FORMAT",
                     "BANK_ENABLE_AUDIT_LOGGING"):
            monkeypatch.delenv(name, raising=False)

        cfg = BankConfig()

        assert cfg.log_level == "INFO"
        assert cfg.log_format == "json"
        assert cfg.enable_audit_logging is True

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("BANK_LOG_LEVEL", "debug")
        monkeypatch.setenv("BANK_LOG_FORMAT", "TEXT")
        monkeypatch.setenv("BANK_ENABLE_AUDIT_LOGGING", "false")

        cfg = BankConfig()

        assert cfg.log_level == "DEBUG"
        assert cfg.log_format == "text"
        assert cfg.enable_audit_logging is False

    @pytest.mark.parametrize("field, value", [
        ("log_level", "LOUD"),
        ("log_format", "xml"),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            BankConfig(**{field: value})

    def test_reload_config(self, monkeypatch):
        original = get_config()
        monkeypatch.setenv("BANK_LOG_LEVEL", "warning")
        try:
            reloaded = reload_config()
            assert reloaded.log_level == "WARNING"
            assert get_config() is reloaded
        finally:
            config_module.config = original


class TestLogging:

    def test_json_formatter(self):
        record = logging.LogRecord("banking.bank", logging.INFO, __file__, 1, "Opened %s", ("x",), None)
        record.action = "open_account"

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "Opened x"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "banking.bank"
        assert entry["action"] == "open_account"
        assert "resource" not in entry

    def test_setup_logging(self):
        logger = setup_logging("warning", logger_name="banking.test_setup")

        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert not logger.propagate

        # Calling again replaces rather than stacks handlers
        setup_logging("info", logger_name="banking.test_setup", log_format="text")
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_setup_logging_from_config(self):
        logger = setup_logging_from_config(BankConfig(log_level="ERROR", log_format="text"))
        try:
            assert logger.name == "banking"
            assert logger.level == logging.ERROR
        finally:
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
            logger.propagate = True

    def test_log_action(self, caplog):
        logger = logging.getLogger("banking.test_action")

        with caplog.at_level(logging.INFO, logger="banking.test_action"):
            log_action(logger, "info", "credited", action="credit", resource="1",
                       extra={'amount': 5.0})

        record = caplog.records[-1]
        assert record.getMessage() == "credited"
        assert record.action == "credit"
        assert record.resource == "1"
        assert record.extra == {'amount': 5.0}
