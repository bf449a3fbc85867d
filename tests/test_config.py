"""
Tests for configuration and structured logging
"""

import json
import logging
import pytest

from pydantic import ValidationError

from exact_rational import config as config_module
from exact_rational.config import RationalConfig, configure, get_config, reload_config
from exact_rational.logging_config import JSONFormatter, get_logger, log_operation, setup_logging
from exact_rational.errors import ParseError
from exact_rational.rational import Rational, parse, rat


@pytest.fixture
def restore_config():
    """Put the global configuration back after a test changes it"""
    saved = config_module.config
    yield
    config_module.config = saved


class TestRationalConfig:
    """Test configuration values and the global instance"""

    def test_defaults(self, monkeypatch):
        """Test default configuration values"""
        monkeypatch.delenv("RATIONAL_DEFAULT_PRECISION", raising=False)
        settings = RationalConfig()
        assert settings.default_precision == 8
        assert settings.log_level == "WARNING"
        assert settings.log_format == "json"

    def test_environment(self, monkeypatch):
        """Test values read from RATIONAL_ environment variables"""
        monkeypatch.setenv("RATIONAL_DEFAULT_PRECISION", "20")
        monkeypatch.setenv("RATIONAL_LOG_LEVEL", "debug")
        settings = RationalConfig()
        assert settings.default_precision == 20
        assert settings.log_level == "DEBUG"

    def test_validation(self):
        """Test invalid settings are rejected"""
        with pytest.raises(ValidationError):
            RationalConfig(default_precision=-1)
        with pytest.raises(ValidationError):
            RationalConfig(log_level="LOUD")
        with pytest.raises(ValidationError):
            RationalConfig(log_format="xml")

    def test_configure_changes_default(self, restore_config):
        """Test configure changes the precision of new values"""
        configure(default_precision=20)
        assert get_config().default_precision == 20

        value = parse("1386929.37231066771348207123")
        assert value.precision == 20
        assert str(value) == "1386929.37231066771348207123"

    def test_configure_rejects_unknown_field(self, restore_config):
        """Test a misspelled override is refused and the configuration is kept"""
        before = get_config()
        with pytest.raises(ValueError, match="default_precison"):
            configure(default_precison=20)
        assert get_config() is before
        assert get_config().default_precision == before.default_precision

    def test_configure_rejects_invalid(self, restore_config):
        """Test an invalid override leaves the configuration in place"""
        before = get_config()
        with pytest.raises(ValidationError):
            configure(default_precision=-5)
        assert get_config() is before

    def test_precision_read_at_construction(self, restore_config):
        """Test values keep the precision configured when they were built"""
        configure(default_precision=2)
        early = parse("1/8")
        configure(default_precision=8)
        late = parse("1/8")
        assert early.precision == 2
        assert late.precision == 8
        assert str(early) == "0.12"
        assert str(late) == "0.125"
        assert early == late

    def test_explicit_config_object(self):
        """Test constructors take a config object"""
        settings = RationalConfig(default_precision=3)
        assert parse("1/8", config=settings).precision == 3
        assert rat(1, config=settings).precision == 3
        assert Rational.zero(config=settings).precision == 3
        # Explicit precision wins over config
        assert parse("1/8", precision=1, config=settings).precision == 1

    def test_reload_config(self, monkeypatch, restore_config):
        """Test reload_config rereads the environment"""
        monkeypatch.setenv("RATIONAL_DEFAULT_PRECISION", "4")
        assert reload_config().default_precision == 4
        assert parse("1").precision == 4


class TestLogging:
    """Test JSON logging"""

    def test_json_formatter(self):
        """Test JSON log records carry operation and operand"""
        record = logging.LogRecord("exact_rational.parser", logging.WARNING, __file__, 1,
                                   "Malformed numeral", (), None)
        record.operation = "parse"
        record.operand = "'1.2.3'"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "WARNING"
        assert entry["message"] == "Malformed numeral"
        assert entry["operation"] == "parse"
        assert entry["operand"] == "'1.2.3'"
        assert "extra" not in entry

    def test_setup_logging(self, restore_config):
        """Test setup_logging installs a single JSON handler"""
        configure(log_level="DEBUG")
        logger = setup_logging(logger_name="exact_rational.test_setup")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert not logger.propagate

        # A second call replaces rather than stacks handlers
        setup_logging(level="ERROR", logger_name="exact_rational.test_setup")
        assert len(logger.handlers) == 1
        assert logger.level == logging.ERROR

    def test_setup_text_logging(self, restore_config):
        """Test the text log format"""
        configure(log_format="text")
        logger = setup_logging(logger_name="exact_rational.test_text")
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_log_operation(self, caplog):
        """Test log_operation attaches operation, operand and extra fields"""
        logger = get_logger("exact_rational.test_operation")
        with caplog.at_level(logging.DEBUG, logger="exact_rational.test_operation"):
            log_operation(logger, "warning", "Failed to scan", operation="from_scalar",
                          operand="abc", extra={"column": "amount"})
        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.operation == "from_scalar"
        assert record.operand == "'abc'"
        assert record.extra == {"column": "amount"}

    def test_parse_failure_is_logged(self, caplog):
        """Test parse failures are logged"""
        with caplog.at_level(logging.DEBUG, logger="exact_rational"):
            with pytest.raises(ParseError):
                parse("1.2.3")
        assert any(getattr(r, "operation", None) == "parse" for r in caplog.records)
