"""Tests for diagnostics accumulation and logger naming."""

from tibco_converter.diagnostics import (
    Diagnostic,
    DiagnosticCategory,
    DiagnosticsMixin,
)
from tibco_converter.logging_config import LOGGER_NAME, get_logger


class Collector(DiagnosticsMixin):
    def __init__(self, verbose=False):
        self.verbose = verbose
        self.clear_diagnostics()


class TestDiagnostic:
    """Tests for the diagnostic record."""

    def test_str(self):
        diagnostic = Diagnostic("Activity missing name/id", "activity", "MISSING_ACTIVITY_ID")
        assert str(diagnostic) == "[MISSING_ACTIVITY_ID] Activity missing name/id (activity)"

    def test_category(self):
        assert Diagnostic("m", "s", "XML_INVALID").category == DiagnosticCategory.STRUCTURAL
        assert Diagnostic("m", "s", "INVALID_XSD").category == DiagnosticCategory.FORMAT
        assert Diagnostic("m", "s", "ELEMENT_PARSE_ERROR").category == DiagnosticCategory.ELEMENT
        assert Diagnostic("m", "s", "NO_HTTP_ACTIVITIES").category == DiagnosticCategory.POLICY
        assert Diagnostic("m", "s", "SOMETHING_ELSE").category == DiagnosticCategory.INTERNAL


class TestDiagnosticsMixin:
    """Tests for per-call warning/error accumulation."""

    def setup_method(self):
        self.collector = Collector()

    def test_result_success(self):
        self.collector.add_warning("careful", "here", "CODE")
        result = self.collector.create_result({"ok": True})
        assert result.success
        assert len(result.warnings) == 1

    def test_errors_fail_result(self):
        self.collector.add_error("broken", "here", "CODE")
        result = self.collector.create_result({"ok": True})
        assert not result.success
        assert result.data == {"ok": True}

    def test_missing_data_fails_result(self):
        assert not self.collector.create_result(None).success

    def test_result_is_a_snapshot(self):
        result = self.collector.create_result("x")
        self.collector.add_error("later", "here", "CODE")
        assert result.errors == []

    def test_clear(self):
        self.collector.add_error("broken", "here", "CODE")
        self.collector.clear_diagnostics()
        assert self.collector.create_validation_result().valid

    def test_handle_error_terse(self):
        self.collector.handle_error(ValueError("bad value"), "parser", "PARSE_ERROR")
        error = self.collector.errors[0]
        assert error.message == "ValueError: bad value"
        assert error.stack is None

    def test_handle_error_verbose(self):
        collector = Collector(verbose=True)
        try:
            raise ValueError("bad value")
        except ValueError as e:
            collector.handle_error(e, "parser", "PARSE_ERROR")
        error = collector.errors[0]
        assert error.message == "bad value"
        assert "Traceback" in error.stack


class TestLogging:
    """Tests for logger naming."""

    def test_package_namespace(self):
        assert get_logger("tibco_converter.cli").name == "tibco_converter.cli"
        assert get_logger("scripts").name == f"{LOGGER_NAME}.scripts"
