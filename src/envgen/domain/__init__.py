"""
Domain package for envgen.

This package contains the domain models, enums, type aliases
and exceptions shared by the parser, services and CLI.
"""

from .base_enums import LineKind
from .models import TemplateLine, ParsedLine, GenerationReport
from .types import EnvironmentSnapshot, ExportSet
from .errors import (
    EnvGenError,
    TemplateNotFoundError,
    WriteFailureError,
    ConfigurationError,
)

__all__ = [
    # Enums
    "LineKind",

    # Models
    "TemplateLine",
    "ParsedLine",
    "GenerationReport",

    # Types
    "EnvironmentSnapshot",
    "ExportSet",

    # Errors
    "EnvGenError",
    "TemplateNotFoundError",
    "WriteFailureError",
    "ConfigurationError",
]
