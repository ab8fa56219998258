"""
Configuration module for envgen.

This module defines all configuration classes using Pydantic BaseModel and BaseSettings.
Configuration is loaded from ENVGEN_-prefixed environment variables with nested delimiter "__".
No .env file is read: the working directory usually holds the file being generated.

Example:
    ENVGEN_APP__LOG_LEVEL=DEBUG
    ENVGEN_APP__LOG_FORMAT=json
    ENVGEN_GENERATOR__QUOTE_VALUES=false

Usage:
    from envgen.config import get_settings
    settings = get_settings()
    print(settings.generator.output_encoding)
"""

import codecs
from functools import lru_cache

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from envgen.config_constants import (
    DEFAULT_ENCODING,
    SETTINGS_ENV_PREFIX,
    LogFormat,
    LogLevel,
)
from envgen.domain.errors import ConfigurationError


# =============================================================================
# GENERATOR CONFIGURATION
# =============================================================================

class GeneratorConfig(BaseModel):
    """
    Settings for reading templates and writing the generated file.

    Used by TemplateExporter for every generate call.
    """

    # Encoding used to decode the template file
    # Templates are expected to be UTF-8; change only for legacy files
    template_encoding: str = DEFAULT_ENCODING

    # Encoding used when writing the generated file
    output_encoding: str = DEFAULT_ENCODING

    # If True, values with whitespace or special characters are double quoted
    # Disable only when the consumer reads raw KEY=VALUE lines without unquoting
    quote_values: bool = True

    @field_validator("template_encoding", "output_encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"unknown encoding: {value}")
        return value


# =============================================================================
# APPLICATION CONFIGURATION
# =============================================================================

class AppConfig(BaseModel):
    """
    General application settings.

    Controls logging verbosity and output format.
    """

    # Logging level: DEBUG, INFO, WARNING, ERROR
    # DEBUG: includes every skipped template line
    # INFO: one event per run
    # WARNING: quiet CLI runs (default)
    log_level: LogLevel = LogLevel.WARNING

    # console: one readable line per event
    # json: indented JSON per event
    log_format: LogFormat = LogFormat.CONSOLE


# =============================================================================
# ROOT SETTINGS (Environment Loading)
# =============================================================================

class Settings(BaseSettings):
    """
    Root settings class that loads all configuration from environment.

    Environment variables use the ENVGEN_ prefix and "__" as nested delimiter.
    Example: ENVGEN_APP__LOG_LEVEL sets settings.app.log_level

    No variable is required; every field has a default.
    """

    # Template reading and output writing
    generator: GeneratorConfig = GeneratorConfig()

    # Application-wide settings
    app: AppConfig = AppConfig()

    model_config = SettingsConfigDict(
        env_prefix=SETTINGS_ENV_PREFIX,  # Only ENVGEN_* variables configure the tool
        case_sensitive=False,            # ENV_VAR and env_var are equivalent
        env_nested_delimiter="__",       # Use __ for nested config (ENVGEN_APP__LOG_LEVEL)
        extra="ignore",                  # Unknown ENVGEN_* variables are not settings
    )


# =============================================================================
# SINGLETON ACCESSOR
# =============================================================================

@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance (singleton pattern).

    Settings are loaded once and cached for the lifetime of the process.

    Returns:
        Settings instance with all configuration loaded from environment

    Raises:
        ConfigurationError: If an ENVGEN_* variable holds an invalid value
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid envgen configuration",
            details={"errors": [error["msg"] for error in e.errors()]},
        ) from e
