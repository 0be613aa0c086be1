import json
import logging

from interview_scoring.utils.exceptions import ConfigurationError, ParsingError
from interview_scoring.utils.logging import (
    CorrelationIdFilter,
    HumanReadableFormatter,
    StructuredFormatter,
    get_correlation_id,
    set_correlation_id,
    setup_logging,
)


def _record(message="Scored resume", **extra):
    record = logging.LogRecord("scorer.resume", logging.INFO, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Log record formatting."""

    def test_structured_formatter_includes_extra_fields(self):
        set_correlation_id("abc-123")
        record = _record(ats_score=88)
        CorrelationIdFilter().filter(record)

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["message"] == "Scored resume"
        assert entry["correlation_id"] == "abc-123"
        assert entry["ats_score"] == 88
        assert "msg" not in entry

    def test_human_readable_formatter(self):
        record = _record(correlation_id="req-1")

        line = HumanReadableFormatter().format(record)

        assert "INFO" in line
        assert "[req-1] Scored resume" in line

    def test_correlation_id_round_trip(self):
        set_correlation_id("xyz")

        assert get_correlation_id() == "xyz"


class TestSetupLogging:
    """Handler configuration."""

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "scoring.log"
        setup_logging("INFO", log_file=str(log_file), enable_console=False, enable_file=True, structured=True)
        try:
            logging.getLogger("scorer.test").info("hello", extra={"scorer": "test"})
            for handler in logging.getLogger().handlers:
                handler.flush()

            entry = json.loads(log_file.read_text().splitlines()[-1])
            assert entry["message"] == "hello"
            assert entry["scorer"] == "test"
        finally:
            root = logging.getLogger()
            for handler in root.handlers[:]:
                handler.close()
                root.removeHandler(handler)


class TestExceptions:
    """Error taxonomy."""

    def test_error_code_in_message(self):
        error = ConfigurationError("bad band", config_key="interview.completion_bands")

        assert str(error) == "[CONFIG_ERROR] bad band"
        assert error.config_key == "interview.completion_bands"

    def test_parsing_error_details(self):
        error = ParsingError("unreadable", file_path="session.yaml", details={"line": 3})

        assert error.error_code == "PARSING_ERROR"
        assert error.details == {"line": 3}
