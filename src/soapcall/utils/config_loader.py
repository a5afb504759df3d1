# soapcall/utils/config_loader.py
"""
SOAP Client Configuration Loader with Pydantic Validation

This module loads and validates client configuration from a YAML file using
Pydantic. Configuration is optional for library use (a SoapClient can be
built directly from an endpoint URL), but scripts and services usually keep
the endpoint, timeouts and logging settings in a file.

Key Design Decisions:
- Pydantic models mirror the exact structure of the YAML file
- Validation occurs at load time to fail fast if config is malformed
- Log levels support both string names ("DEBUG") and numeric values (10)
- File logging is optional; console logging is always enabled
"""

import logging
import os
from pathlib import Path
from typing import Any, Literal, cast

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
    model_validator,
)

# Set up a logger for this module
logger: logging.Logger = logging.getLogger(__name__)

# Environment variable that points at a config file when no path is given
CONFIG_ENV_VAR: str = 'SOAPCALL_CONFIG'

DEFAULT_CONFIG_FILENAME: str = 'soapcall.yaml'

# Valid logging level names recognized by Python's logging module
LogLevelName = Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class EndpointSection(BaseModel):
    """Schema for the 'endpoint' section: where SOAP requests are POSTed."""

    model_config = ConfigDict(extra='forbid')
    url: HttpUrl = Field(
        ...,
        description='Full URL of the SOAP control endpoint.',
    )


class ClientSection(BaseModel):
    """
    Schema for the 'client' section of the config file.

    Controls HTTP transport behavior: timeouts, TLS verification and retries.
    The client itself never retries; these values configure the transport.
    """

    model_config = ConfigDict(extra='forbid')
    request_timeout: tuple[float, float] = Field(
        default=(10.0, 30.0),
        description='HTTP timeouts in seconds: [connect_timeout, read_timeout].',
    )

    verify_ssl: bool = Field(
        default=True,
        description='Whether to verify TLS certificates.',
    )

    max_retries: int = Field(
        default=0,
        ge=0,
        description='Transport-level retries for failed connections and 502/503/504. '
        '0 sends exactly one request per action.',
    )

    retry_backoff_factor: float = Field(
        default=0.5,
        gt=0.0,
        description='urllib3 backoff factor between transport retries.',
    )

    @field_validator('request_timeout')
    @classmethod
    def validate_timeout_values(cls, v: tuple[float, float]) -> tuple[float, float]:
        """Validate that both timeouts are positive and connect does not exceed read."""
        connect_timeout: float
        read_timeout: float
        connect_timeout, read_timeout = v

        if connect_timeout <= 0:
            raise ValueError(f'Connect timeout must be positive, got {connect_timeout}')

        if read_timeout <= 0:
            raise ValueError(f'Read timeout must be positive, got {read_timeout}')

        if connect_timeout > read_timeout:
            raise ValueError(
                f'Connect timeout ({connect_timeout}s) should not exceed '
                f'read timeout ({read_timeout}s)'
            )

        return v


class LoggingSection(BaseModel):
    """
    Schema for the 'logging' section of the config file.

    Console logging is always enabled; file logging is enabled by giving a
    file_path.
    """

    model_config = ConfigDict(extra='forbid')
    console_level: LogLevelName | int = Field(
        default='INFO',
        description='Logging level for console output, as a name or an integer.',
    )

    file_path: Path | None = Field(
        default=None,
        description='Optional log file. If None, file logging is disabled.',
    )

    file_level: LogLevelName | int | None = Field(
        default=None,
        description='Logging level for file output. Only relevant with file_path.',
    )

    @field_validator('console_level', 'file_level')
    @classmethod
    def validate_log_level(
        cls, v: LogLevelName | int | None
    ) -> LogLevelName | int | None:
        """Accept level names as-is and numeric levels only if standard."""
        if v is None or isinstance(v, str):
            return v

        valid_levels: set[int] = {10, 20, 30, 40, 50}
        if v not in valid_levels:
            raise ValueError(
                f'Numeric log level must be one of {valid_levels}, got {v}'
            )
        return v

    @model_validator(mode='after')
    def validate_file_logging_consistency(self) -> 'LoggingSection':
        """
        Default file_level to DEBUG when only file_path is set, and reject a
        file_level without a file_path.
        """
        has_file_path: bool = self.file_path is not None
        has_file_level: bool = self.file_level is not None

        if has_file_path and not has_file_level:
            self.file_level = 'DEBUG'
            logger.warning(
                'file_path provided without file_level. Defaulting to DEBUG for file logging.'
            )

        if has_file_level and not has_file_path:
            raise ValueError(
                'file_level is specified but file_path is missing. '
                'Both must be provided to enable file logging.'
            )

        return self

    def get_console_level_int(self) -> int:
        """Return console_level as the integer used by the logging module."""
        if isinstance(self.console_level, int):
            return self.console_level
        return cast(int, getattr(logging, self.console_level))

    def get_file_level_int(self) -> int | None:
        """Return file_level as an integer, or None if file logging is disabled."""
        if self.file_level is None:
            return None
        if isinstance(self.file_level, int):
            return self.file_level
        return cast(int, getattr(logging, self.file_level))


class SoapCallConfig(BaseModel):
    """
    Root configuration model.

    Usage:
        config = load_config('soapcall.yaml')
        client = SoapClient.from_config(config)
    """

    model_config = ConfigDict(extra='forbid')
    endpoint: EndpointSection
    client: ClientSection = Field(default_factory=ClientSection)
    logging: LoggingSection = Field(default_factory=LoggingSection)


def _get_default_config_path() -> Path:
    """
    Resolve the config path used when none is passed explicitly.

    The SOAPCALL_CONFIG environment variable wins; otherwise soapcall.yaml in
    the current working directory.
    """
    env_path: str | None = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / DEFAULT_CONFIG_FILENAME


def load_config(config_path: Path | str | None = None) -> SoapCallConfig:
    """
    Load, parse, and validate a configuration file.

    Args:
        config_path: Optional explicit path to a config file. If None, uses
                     _get_default_config_path().

    Returns:
        A fully validated SoapCallConfig.

    Raises:
        FileNotFoundError: The config file does not exist.
        yaml.YAMLError: The file is not valid YAML.
        ValidationError: The YAML is valid but the configuration is not.
    """
    if config_path:
        path_obj: Path = Path(config_path)
    else:
        path_obj = _get_default_config_path()

    logger.debug('Resolving configuration from: %s', path_obj)

    if not path_obj.exists():
        error_msg: str = f'Configuration file not found at: {path_obj}'
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    try:
        with open(path_obj, encoding='utf-8') as f:
            raw_config: dict[str, Any] = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error('Failed to parse YAML config file: %s', e)
        raise

    try:
        config = SoapCallConfig.model_validate(raw_config)
        logger.debug('Configuration validated successfully.')
        return config
    except ValidationError as e:
        logger.error('Configuration validation failed: %s', e)
        raise
