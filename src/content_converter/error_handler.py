"""Error handling implementation for the Content Converter."""

import logging
from typing import Optional
from .types import (
    ConversionError,
    ErrorResponse,
    ErrorType,
    ValidationError,
    ValidationResult,
)


class ErrorHandler:
    """
    Error handler for conversion runs.

    Validates raw input before it reaches a codec and turns conversion
    errors into user-facing responses. Conversions are single-pass, so no
    error is ever recoverable by retrying.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: bytes, format_name: str) -> ValidationResult:
        """
        Validate raw input bytes before parsing.

        Args:
            input_data: Bytes loaded from the source
            format_name: Declared format of the bytes

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not input_data.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"{format_name.upper()} input is empty",
                location="input"
            ))
        elif input_data[:1].isspace() or input_data[-1:].isspace():
            warnings.append("Input has surrounding whitespace that will not be reproduced in the output")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    def handle_conversion_error(self, error: ConversionError) -> ErrorResponse:
        """
        Handle conversion errors and suggest a corrective action.

        Args:
            error: ConversionError to handle

        Returns:
            ErrorResponse with the suggested action
        """
        self.logger.error(f"Conversion error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.SYNTAX:
            action = "Fix the malformed input at the reported position and run the conversion again."
        elif error.error_type == ErrorType.STRUCTURE:
            action = ("The document cannot be expressed in the target format. "
                      "Check that the tree follows the target format's conventions.")
        elif error.error_type == ErrorType.FORMAT:
            action = "Choose one of the available formats."
        elif error.error_type == ErrorType.FILESYSTEM:
            action = "Check that the input exists and the output location is writable."
        else:
            action = "Unknown error type. Please check logs."

        return ErrorResponse(can_recover=False, suggested_action=action)
