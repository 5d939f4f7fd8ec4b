"""Tests for error handler."""

import logging
import pytest
from json_transcoder.error_handler import ErrorHandler
from json_transcoder.types import (
    Diagnostic,
    DiagnosticType,
    ErrorType,
    SourceLocation,
    StackDisciplineError,
    TranscoderError,
)


class TestErrorHandler:
    """Tests for ErrorHandler class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.error_handler = ErrorHandler()

    def test_report_collects_and_logs(self, caplog):
        """Test that diagnostics are kept and logged as warnings."""
        diagnostic = Diagnostic(DiagnosticType.MISSING_NAME, "Name missing")

        with caplog.at_level(logging.WARNING):
            self.error_handler.report(diagnostic)

        assert self.error_handler.diagnostics == [diagnostic]
        assert "Name missing" in caplog.text

    def test_reset(self):
        """Test that reset forgets collected diagnostics."""
        self.error_handler.report(Diagnostic(DiagnosticType.NULL_CONTEXT, "x"))
        self.error_handler.reset()

        assert self.error_handler.diagnostics == []

    def test_format_diagnostic_without_location(self):
        """Test formatting a diagnostic with no known position."""
        diagnostic = Diagnostic(DiagnosticType.NULL_CONTEXT, "Ignoring element a in null context")

        assert ErrorHandler.format_diagnostic(diagnostic) == "Ignoring element a in null context"

    def test_format_diagnostic_with_location(self):
        """Test that the file name, line and column are appended."""
        diagnostic = Diagnostic(
            DiagnosticType.UNKNOWN_INSTRUCTION,
            "Unknown JSON element: list",
            SourceLocation("file:///data/docs/input.xml", 12, 5)
        )

        assert ErrorHandler.format_diagnostic(diagnostic) == \
            "[input.xml] Unknown JSON element: list at line 12 column 5"

    def test_format_diagnostic_with_unknown_position(self):
        """Test that unknown line and column numbers are left out."""
        diagnostic = Diagnostic(
            DiagnosticType.PARSER_WARNING,
            "Warning",
            SourceLocation(None, -1, -1)
        )

        assert ErrorHandler.format_diagnostic(diagnostic) == "Warning"

    def test_validate_input_valid(self):
        """Test validation of non-empty input."""
        result = self.error_handler.validate_input("<root/>")

        assert result.is_valid
        assert len(result.errors) == 0

    @pytest.mark.parametrize("input_data", ["", "   \n", b""])
    def test_validate_input_empty(self, input_data):
        """Test validation of empty input."""
        result = self.error_handler.validate_input(input_data)

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.SYNTAX
        assert result.errors[0].message == "XML input is empty"

    def test_validate_output_path_new_file(self, temp_dir):
        """Test validation of a file that does not exist yet."""
        result = self.error_handler.validate_output_path(temp_dir / "sub" / "out.json")

        assert result.is_valid
        assert result.warnings == []

    def test_validate_output_path_existing_file(self, temp_dir):
        """Test that overwriting a file is only a warning."""
        path = temp_dir / "out.json"
        path.write_text("{}")

        result = self.error_handler.validate_output_path(path)

        assert result.is_valid
        assert "overwritten" in result.warnings[0]

    def test_validate_output_path_directory(self, temp_dir):
        """Test that a directory is not a valid output file."""
        result = self.error_handler.validate_output_path(temp_dir)

        assert not result.is_valid
        assert result.errors[0].type == ErrorType.PATH

    def test_validate_output_path_under_file(self, temp_dir):
        """Test that a path below a regular file is rejected."""
        blocker = temp_dir / "file.txt"
        blocker.write_text("x")

        result = self.error_handler.validate_output_path(blocker / "out.json")

        assert not result.is_valid
        assert "not a directory" in result.errors[0].message

    def test_validate_output_path_empty(self):
        """Test that an empty path is rejected."""
        result = self.error_handler.validate_output_path("")

        assert not result.is_valid

    def test_handle_stack_error(self):
        """Test handling of stack discipline errors."""
        response = self.error_handler.handle_processing_error(
            StackDisciplineError("Unbalanced element end")
        )

        assert not response.can_recover
        assert "nested" in response.suggested_action

    def test_handle_path_error(self):
        """Test that output path errors are recoverable."""
        response = self.error_handler.handle_processing_error(
            TranscoderError("Permission denied", ErrorType.PATH)
        )

        assert response.can_recover
        assert "permissions" in response.suggested_action.lower()

    @pytest.mark.parametrize("error_type", [
        ErrorType.SINK, ErrorType.SYNTAX, ErrorType.STYLESHEET, ErrorType.CONFIG
    ])
    def test_handle_fatal_errors(self, error_type):
        """Test that other errors cannot be recovered from."""
        response = self.error_handler.handle_processing_error(
            TranscoderError("Failure", error_type)
        )

        assert not response.can_recover
        assert response.suggested_action
