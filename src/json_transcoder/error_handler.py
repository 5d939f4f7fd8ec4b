"""Diagnostic reporting and error handling for the JSON Transcoder."""

import logging
import os
import pathlib
from typing import List, Optional, Union

from .types import (
    Diagnostic,
    DiagnosticHandlerInterface,
    ErrorResponse,
    ErrorType,
    TranscoderError,
    ValidationError,
    ValidationResult,
)


class ErrorHandler(DiagnosticHandlerInterface):
    """
    Collects the diagnostics of a conversion and reports them to the log.

    Also validates inputs and output locations, and suggests what to do
    about errors that abort a conversion.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for diagnostic reporting
        """
        self.logger = logger or logging.getLogger(__name__)
        self.diagnostics: List[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        """
        Record a diagnostic and log it as a warning.

        Args:
            diagnostic: The recoverable anomaly to report
        """
        self.diagnostics.append(diagnostic)
        self.logger.warning(self.format_diagnostic(diagnostic))

    @staticmethod
    def format_diagnostic(diagnostic: Diagnostic) -> str:
        """
        Format a diagnostic as ``[file] message at line L column C``.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Single-line message
        """
        location = diagnostic.location
        if location is None:
            return diagnostic.message

        message = diagnostic.message
        if location.system_id:
            sol = location.system_id.rfind('/')
            message = f"[{location.system_id[sol + 1:]}] {message}"
        if location.line is not None and location.line != -1:
            message += f" at line {location.line}"
        if location.column is not None and location.column != -1:
            message += f" column {location.column}"
        return message

    def reset(self) -> None:
        """Forget the diagnostics collected so far."""
        self.diagnostics = []

    def validate_input(self, input_data: Union[str, bytes]) -> ValidationResult:
        """
        Validate that there is a document to convert.

        Args:
            input_data: XML text or bytes

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not input_data or not input_data.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="XML input is empty",
                location="input"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    def validate_output_path(self, path: Union[str, pathlib.Path]) -> ValidationResult:
        """
        Validate an output file path for accessibility.

        Args:
            path: File the JSON is to be written to

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not str(path):
            errors.append(ValidationError(
                type=ErrorType.PATH,
                message="Output path cannot be empty",
                location="path"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            resolved_path = pathlib.Path(path).resolve()

            if resolved_path.is_dir():
                errors.append(ValidationError(
                    type=ErrorType.PATH,
                    message="Output path is a directory",
                    location="path"
                ))
            elif resolved_path.exists():
                if not os.access(resolved_path, os.W_OK):
                    errors.append(ValidationError(
                        type=ErrorType.PATH,
                        message="Output file is not writable",
                        location="path"
                    ))
                else:
                    warnings.append(f"Output file {resolved_path} will be overwritten")
            else:
                parent = next((p for p in resolved_path.parents if p.exists()), None)
                if parent is not None and not parent.is_dir():
                    errors.append(ValidationError(
                        type=ErrorType.PATH,
                        message=f"{parent} exists but is not a directory",
                        location="path"
                    ))

        except (OSError, ValueError) as e:
            errors.append(ValidationError(
                type=ErrorType.PATH,
                message=f"Invalid output path: {str(e)}",
                location="path"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    def handle_processing_error(self, error: TranscoderError) -> ErrorResponse:
        """
        Log an error that aborted a conversion and suggest a remedy.

        Args:
            error: TranscoderError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Conversion error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.STACK:
            return ErrorResponse(
                can_recover=False,
                suggested_action="The event source delivered unbalanced start/end events. "
                                 "Check that each document start is matched by one document end "
                                 "and that elements are properly nested."
            )
        elif error.error_type == ErrorType.SINK:
            return ErrorResponse(
                can_recover=False,
                suggested_action="The JSON sink rejected a write. Check instruction elements "
                                 "for properties written outside an object."
            )
        elif error.error_type == ErrorType.SYNTAX:
            return ErrorResponse(
                can_recover=False,
                suggested_action="The XML input is not well-formed. Fix the reported position and retry."
            )
        elif error.error_type == ErrorType.PATH:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Check file permissions and that the output directory is writable."
            )
        elif error.error_type == ErrorType.STYLESHEET:
            return ErrorResponse(
                can_recover=False,
                suggested_action="The XSLT stylesheet could not be compiled or applied."
            )
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry."
            )
