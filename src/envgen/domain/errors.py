"""
Custom exception hierarchy for envgen.

This module defines the exception hierarchy with:
- Consistent error codes for logs and machine-readable output
- Process exit code mappings for the CLI
- Detailed error messages for debugging

Exception Categories:
- Input Errors: TemplateNotFoundError
- Output Errors: WriteFailureError
- Configuration Errors: ConfigurationError

Usage:
    raise TemplateNotFoundError("Template file not found", details={"path": ".env.example"})
    raise WriteFailureError("Cannot write output file", details={"path": "/etc/app.env"})
"""

from typing import Any, Dict, Optional


class EnvGenError(Exception):
    """
    Base exception for all envgen errors.

    All custom exceptions inherit from this class, providing:
    - error_code: Machine-readable error identifier
    - exit_code: Process exit status the CLI returns for this error
    - details: Optional structured data for debugging

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code (e.g., "TEMPLATE_NOT_FOUND")
        exit_code: CLI exit status (default: 1)
        details: Optional dictionary with additional error context
    """

    error_code: str = "INTERNAL_ERROR"
    exit_code: int = 1

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
        exit_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code
        if exit_code:
            self.exit_code = exit_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured output."""
        result: Dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Input Errors
# =============================================================================


class TemplateNotFoundError(EnvGenError):
    """
    Raised when the template file cannot be read.

    Exit Code: 2

    Examples:
        - Path does not exist
        - Path is a directory
        - Permission denied
        - File is not valid in the configured encoding
    """

    error_code = "TEMPLATE_NOT_FOUND"
    exit_code = 2


# =============================================================================
# Output Errors
# =============================================================================


class WriteFailureError(EnvGenError):
    """
    Raised when the output file cannot be created or written.

    Exit Code: 3

    Examples:
        - Parent directory does not exist
        - Permission denied
        - Disk full
    """

    error_code = "WRITE_FAILURE"
    exit_code = 3


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(EnvGenError):
    """
    Raised when envgen's own configuration is invalid.

    Exit Code: 1

    Examples:
        - ENVGEN_APP__LOG_LEVEL set to an unknown level
        - ENVGEN_GENERATOR__QUOTE_VALUES not a boolean
    """

    error_code = "CONFIGURATION_ERROR"
